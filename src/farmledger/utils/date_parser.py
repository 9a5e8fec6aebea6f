"""Date parsing for record dates typed on the command line."""

import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_DAY_WORDS: dict[str, int] = {"yesterday": -1, "today": 0, "tomorrow": 1}

# Start of the period, shifted by -1 (last), 0 (this) or +1 (next)
_PERIOD_STARTS: dict[str, Callable[[date, int], date]] = {
    "week": lambda d, n: d - timedelta(days=d.weekday()) + timedelta(weeks=n),
    "month": lambda d, n: d.replace(day=1) + relativedelta(months=n),
    "year": lambda d, n: d.replace(month=1, day=1) + relativedelta(years=n),
}
_PERIOD_SHIFTS = {"last": -1, "this": 0, "next": 1}

_DAYS_AGO = re.compile(r"^(\d+)\s+days?\s+ago$")


def parse_date(value: str | date, today: Optional[date] = None) -> date:
    """Parse a date typed by the user.

    Accepts ISO and free-form dates ("2025-01-15", "January 15, 2025"),
    the words today/yesterday/tomorrow, "N days ago", and
    "last/this/next week|month|year", which resolve to the first day of
    that period (weeks start on Monday). Date and datetime objects are
    returned as dates unchanged.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip().lower()
    if today is None:
        today = date.today()

    if text in _DAY_WORDS:
        return today + timedelta(days=_DAY_WORDS[text])

    match = _DAYS_AGO.match(text)
    if match:
        return today - timedelta(days=int(match.group(1)))

    shift, _, period = text.partition(" ")
    if shift in _PERIOD_SHIFTS and period in _PERIOD_STARTS:
        return _PERIOD_STARTS[period](today, _PERIOD_SHIFTS[shift])

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}") from e
