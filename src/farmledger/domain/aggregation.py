"""Pure aggregation functions over fetched record snapshots.

Nothing in this module performs I/O. Every function takes an in-memory
sequence of domain entities and returns new values; sums are order
independent, and "most recent" selection compares real dates.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from farmledger.domain.entities import (
    DEFAULT_CYCLE_MONTHS,
    AreaSummary,
    CoprasHarvest,
    CoprasRecord,
    CroppingTotals,
    FishpondCropping,
    NetIncomePolicy,
    PaymentStatus,
    RecordTotals,
    RentalRecord,
    RentalTransaction,
)

ZERO = Decimal("0")


def compute_totals(
    records: Iterable[CoprasRecord], policy: NetIncomePolicy = NetIncomePolicy()
) -> RecordTotals:
    """Sum sales and expenses; net is derived through the income policy."""
    sales = ZERO
    expenses = ZERO
    for record in records:
        sales += record.sales
        expenses += record.expenses
    return RecordTotals(sales=sales, expenses=expenses, net=policy.apply(sales - expenses))


def group_by_area(
    records: Iterable[CoprasRecord], policy: NetIncomePolicy = NetIncomePolicy()
) -> dict[int, AreaSummary]:
    """Fold records into per-area subtotals keyed by area ID.

    Keys keep the order in which each area is first seen. Records without
    an area are skipped.
    """
    grouped: dict[int, list[CoprasRecord]] = {}
    for record in records:
        if record.area_id is None:
            continue
        grouped.setdefault(record.area_id, []).append(record)

    summaries: dict[int, AreaSummary] = {}
    for area_id, area_records in grouped.items():
        totals = compute_totals(area_records, policy)
        name = next((r.area_name for r in area_records if r.area_name), "")
        summaries[area_id] = AreaSummary(
            area_id=area_id,
            area_name=name,
            sales=totals.sales,
            net=totals.net,
            count=len(area_records),
        )
    return summaries


def best_performer(summaries: Iterable[AreaSummary], metric: str = "sales") -> Optional[AreaSummary]:
    """Return the summary with the highest metric, or None when empty.

    Ties go to the summary encountered first.
    """
    if metric not in ("sales", "net"):
        raise ValueError(f"Unknown metric '{metric}'. Supported metrics: sales, net")
    return max(summaries, key=lambda s: getattr(s, metric), default=None)


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping to the last day of shorter months."""
    return start + relativedelta(months=months)


def project_next_date(last: date, months: int = DEFAULT_CYCLE_MONTHS) -> date:
    """Project the next expected date of a recurring cycle."""
    return add_months(last, months)


def latest_date_by_area(harvests: Iterable[CoprasHarvest]) -> dict[int, date]:
    """Return the most recent harvest date for each area."""
    latest: dict[int, date] = {}
    for harvest in harvests:
        current = latest.get(harvest.area_id)
        if current is None or harvest.harvest_date > current:
            latest[harvest.area_id] = harvest.harvest_date
    return latest


def project_next_harvests(
    harvests: Iterable[CoprasHarvest], months: int = DEFAULT_CYCLE_MONTHS
) -> dict[int, date]:
    """Project the next harvest date per area from its most recent harvest."""
    return {
        area_id: project_next_date(last, months)
        for area_id, last in latest_date_by_area(harvests).items()
    }


def days_since(start: date, today: Optional[date] = None) -> int:
    """Whole days elapsed since start, never negative."""
    if today is None:
        today = date.today()
    return max(0, (today - start).days)


def sale_total(kilos: Decimal, price_per_kilo: Decimal) -> Decimal:
    return kilos * price_per_kilo


def cropping_totals(cropping: FishpondCropping) -> CroppingTotals:
    """Sum a cropping's embedded expenses and sales."""
    expenses = sum((e.amount for e in cropping.expenses), ZERO)
    sales = sum((s.total for s in cropping.sales), ZERO)
    return CroppingTotals(expenses=expenses, sales=sales, net=sales - expenses)


def group_rental_transactions(rows: Iterable[RentalRecord]) -> dict[str, RentalTransaction]:
    """Group rental rows by transaction ID.

    Groups appear in the order their first row is seen. ``collected`` sums the
    paid rows; ``total_due`` sums every row that is not exempted.
    """
    grouped: dict[str, list[RentalRecord]] = defaultdict(list)
    for row in rows:
        grouped[row.transaction_id].append(row)

    return {
        transaction_id: _build_transaction(transaction_id, records)
        for transaction_id, records in grouped.items()
    }


def _build_transaction(transaction_id: str, records: Sequence[RentalRecord]) -> RentalTransaction:
    first = records[0]
    collected = sum(
        (r.tax_amount for r in records if r.status == PaymentStatus.PAID), ZERO
    )
    total_due = sum(
        (r.tax_amount for r in records if r.status != PaymentStatus.EXEMPTED), ZERO
    )
    return RentalTransaction(
        transaction_id=transaction_id,
        month=first.month,
        year=first.year,
        records=tuple(records),
        collected=collected,
        total_due=total_due,
    )
