"""Domain model entities for farmledger.

These are pure data classes representing business concepts, independent of
database schema. Rows fetched from the store are converted into these by
the mappers in ``farmledger.database.mappers``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

DEFAULT_CYCLE_MONTHS = 4


class PaymentStatus(str, Enum):
    """Payment status of a rental record."""

    UNPAID = "unpaid"
    PAID = "paid"
    EXEMPTED = "exempted"


@dataclass(frozen=True)
class Area:
    """Copra production area."""

    id: int
    area_name: str
    last_harvest_date: Optional[date]
    next_harvest_date: Optional[date]
    cycle_months: int
    created_at: datetime


@dataclass(frozen=True)
class CoprasHarvest:
    """A recorded harvest for an area."""

    id: int
    area_id: int
    harvest_date: date
    created_at: datetime


@dataclass(frozen=True)
class CoprasRecord:
    """Copra sale record, joined with its area name when available."""

    id: int
    date: date
    area_id: Optional[int]
    farmer: str
    sales: Decimal
    expenses: Decimal
    net_income: Decimal
    weight: Decimal
    price_per_kilo: Decimal
    created_at: datetime
    area_name: Optional[str] = None


@dataclass(frozen=True)
class Expense:
    """Expense line item embedded in a fishpond cropping."""

    name: str
    amount: Decimal
    date: date


@dataclass(frozen=True)
class Sale:
    """Sale line item embedded in a fishpond cropping."""

    fish_type: str
    kilos: Decimal
    price_per_kilo: Decimal
    total: Decimal
    date: date


@dataclass(frozen=True)
class FishpondCropping:
    """One fishpond production cycle."""

    id: int
    start_date: date
    expenses: tuple[Expense, ...]
    sales: tuple[Sale, ...]
    completed: bool
    completed_at: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class Tenant:
    """Rental tenant with a fixed periodic tax amount."""

    id: int
    name: str
    tax_amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class RentalRecord:
    """One tenant's row inside a rental transaction."""

    id: int
    tenant_name: str
    tax_amount: Decimal
    month: int
    year: int
    status: PaymentStatus
    transaction_id: str
    created_at: datetime


@dataclass(frozen=True)
class ActivityLog:
    """Free-text activity log entry."""

    id: int
    action: str
    created_at: datetime


@dataclass(frozen=True)
class NetIncomePolicy:
    """Business rule for splitting net income.

    ``split=2`` divides net income evenly between two owners.
    """

    split: int = 1

    def __post_init__(self):
        if self.split < 1:
            raise ValueError(f"Net income split must be at least 1, got {self.split}")

    def apply(self, net: Decimal) -> Decimal:
        if self.split == 1:
            return net
        return net / self.split


@dataclass(frozen=True)
class RecordTotals:
    """Running totals over a set of records."""

    sales: Decimal
    expenses: Decimal
    net: Decimal


@dataclass(frozen=True)
class AreaSummary:
    """Per-area subtotal of copra records."""

    area_id: int
    area_name: str
    sales: Decimal
    net: Decimal
    count: int


@dataclass(frozen=True)
class CroppingTotals:
    """Totals over a cropping's embedded expenses and sales."""

    expenses: Decimal
    sales: Decimal
    net: Decimal


@dataclass(frozen=True)
class RentalTransaction:
    """Rental rows grouped by transaction identifier."""

    transaction_id: str
    month: int
    year: int
    records: tuple[RentalRecord, ...] = field(default_factory=tuple)
    collected: Decimal = Decimal("0")
    total_due: Decimal = Decimal("0")


@dataclass(frozen=True)
class DashboardSummary:
    """Counts shown as badges on the dashboard."""

    areas: int
    copras_records: int
    ongoing_croppings: int
    completed_croppings: int
    tenants: int
    unpaid_rentals: int
    activity_logs: int
    copras_totals: RecordTotals


@dataclass(frozen=True)
class CoprasSummary:
    """Dashboard figures for the copras page."""

    totals: RecordTotals
    areas: tuple[AreaSummary, ...]
    best_sales_area: Optional[AreaSummary]
    best_net_area: Optional[AreaSummary]
