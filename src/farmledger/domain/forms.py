"""Form controller for create/edit flows.

A form moves between ``closed``, ``open-create``, ``open-edit`` and
``submitting``. Only a successful submit or an explicit cancel closes it;
validation and store failures leave it open with an error message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, TypeVar

from farmledger.domain.errors import (
    ConflictError,
    DomainError,
    StoreError,
    ValidationError,
    STORE_FAILURE,
    required_fields_missing,
)
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date

T = TypeVar("T")


class FormState(str, Enum):
    """Form lifecycle states."""

    CLOSED = "closed"
    OPEN_CREATE = "open-create"
    OPEN_EDIT = "open-edit"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class FormPolicy:
    """Validation rules for one kind of form.

    Attributes:
        required: Fields that must be present and non-blank
        amounts: Fields parsed as non-negative Decimals (0 when left empty)
        dates: Fields parsed as dates
        integers: Fields parsed as integer IDs
    """

    required: tuple[str, ...] = ()
    amounts: tuple[str, ...] = ()
    dates: tuple[str, ...] = ()
    integers: tuple[str, ...] = ()

    def clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Validate fields and return typed values.

        Raises:
            ValidationError: If a required field is missing or a value is invalid
        """
        missing = [name for name in self.required if _is_blank(fields.get(name))]
        if missing:
            raise ValidationError(required_fields_missing(missing))

        cleaned: dict[str, Any] = {}
        for name, value in fields.items():
            if name in self.amounts:
                cleaned[name] = parse_amount("0" if _is_blank(value) else value, name)
            elif _is_blank(value):
                cleaned[name] = None
            elif name in self.dates:
                try:
                    cleaned[name] = parse_date(value)
                except ValueError as e:
                    raise ValidationError(f"Invalid {name.replace('_', ' ')}: {e}") from e
            elif name in self.integers:
                try:
                    cleaned[name] = int(value)
                except (TypeError, ValueError) as e:
                    raise ValidationError(f"Invalid {name.replace('_', ' ')}: {value!r}") from e
            elif isinstance(value, str):
                cleaned[name] = value.strip()
            else:
                cleaned[name] = value

        for name in self.amounts:
            cleaned.setdefault(name, parse_amount("0", name))
        return cleaned


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


COPRAS_RECORD_POLICY = FormPolicy(
    required=("date", "area_id", "farmer"),
    amounts=("sales", "expenses", "weight"),
    dates=("date",),
    integers=("area_id",),
)
EXPENSE_POLICY = FormPolicy(required=("name", "amount"), amounts=("amount",), dates=("date",))
SALE_POLICY = FormPolicy(
    required=("fish_type", "kilos", "price_per_kilo"),
    amounts=("kilos", "price_per_kilo"),
    dates=("date",),
)
ACTIVITY_LOG_POLICY = FormPolicy(required=("action",))
TENANT_POLICY = FormPolicy(required=("name", "tax_amount"), amounts=("tax_amount",))


class FormController:
    """Transient state of one create/edit form."""

    def __init__(self, policy: FormPolicy):
        """Initialize a closed form.

        Args:
            policy: Validation rules applied on submit
        """
        self.policy = policy
        self.state = FormState.CLOSED
        self.record_id: Optional[int] = None
        self.fields: dict[str, Any] = {}
        self.error: Optional[str] = None
        self._open_state = FormState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state in (FormState.OPEN_CREATE, FormState.OPEN_EDIT)

    def open_create(self, defaults: Optional[Mapping[str, Any]] = None) -> None:
        """Open an empty form for a new record."""
        self._require_closed()
        self._open(FormState.OPEN_CREATE, None, defaults or {})

    def open_edit(self, record_id: int, fields: Mapping[str, Any]) -> None:
        """Open the form pre-populated from an existing record."""
        self._require_closed()
        self._open(FormState.OPEN_EDIT, record_id, fields)

    def set_field(self, name: str, value: Any) -> None:
        self._require_open()
        self.fields[name] = value

    def update(self, **fields: Any) -> None:
        self._require_open()
        self.fields.update(fields)

    def submit(self, write: Callable[[Optional[int], dict[str, Any]], T]) -> T:
        """Validate and write the form.

        Args:
            write: Called with the record ID (None when creating) and the
                cleaned fields

        Returns:
            Whatever ``write`` returns

        Raises:
            ValidationError: If validation fails; the form stays open
            DomainError: If the write fails; the form stays open
        """
        self._require_open()
        try:
            cleaned = self.policy.clean(self.fields)
        except ValidationError as e:
            self.error = str(e)
            raise

        self.state = FormState.SUBMITTING
        try:
            result = write(self.record_id, cleaned)
        except StoreError:
            self.state = self._open_state
            self.error = STORE_FAILURE
            raise
        except DomainError as e:
            self.state = self._open_state
            self.error = str(e)
            raise

        self._reset()
        return result

    def cancel(self) -> None:
        """Discard in-progress edits without writing."""
        if self.state == FormState.SUBMITTING:
            raise ConflictError("Cannot cancel while submitting")
        self._reset()

    def _open(self, state: FormState, record_id: Optional[int], fields: Mapping[str, Any]) -> None:
        self.state = state
        self._open_state = state
        self.record_id = record_id
        self.fields = dict(fields)
        self.error = None

    def _reset(self) -> None:
        self.state = FormState.CLOSED
        self._open_state = FormState.CLOSED
        self.record_id = None
        self.fields = {}
        self.error = None

    def _require_open(self) -> None:
        if not self.is_open:
            raise ConflictError(f"Form is not open (state: {self.state.value})")

    def _require_closed(self) -> None:
        if self.state != FormState.CLOSED:
            raise ConflictError(f"Form is already open (state: {self.state.value})")
