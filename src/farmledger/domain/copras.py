"""Copras record domain service."""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Sequence

from farmledger.database.base import Database
from farmledger.domain.aggregation import best_performer, compute_totals, group_by_area
from farmledger.domain.entities import CoprasRecord, CoprasSummary, NetIncomePolicy
from farmledger.domain.errors import NotFoundError, area_not_found, record_not_found
from farmledger.domain.forms import COPRAS_RECORD_POLICY

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def derive_net_income(sales: Decimal, expenses: Decimal) -> Decimal:
    """Net income stored on a record (before any split policy)."""
    return sales - expenses


def derive_price_per_kilo(sales: Decimal, weight: Decimal) -> Decimal:
    """Average price per kilo, 0 when no weight was recorded."""
    if weight <= 0:
        return Decimal("0")
    return (sales / weight).quantize(CENT, rounding=ROUND_HALF_UP)


class CoprasService:
    """Service for managing copras records."""

    def __init__(self, db: Database, policy: NetIncomePolicy = NetIncomePolicy()):
        """Initialize copras service.

        Args:
            db: Database instance
            policy: Net income split applied to summaries
        """
        self.db = db
        self.policy = policy

    def create_record(
        self,
        date: date,
        area_id: int,
        farmer: str,
        sales: Decimal = Decimal("0"),
        expenses: Decimal = Decimal("0"),
        weight: Decimal = Decimal("0"),
    ) -> int:
        """Create a copras record.

        Net income and price per kilo are derived from the inputs.

        Returns:
            Record ID

        Raises:
            ValidationError: If a required field is missing or an amount is invalid
            NotFoundError: If the area doesn't exist
        """
        fields = COPRAS_RECORD_POLICY.clean(
            {
                "date": date,
                "area_id": area_id,
                "farmer": farmer,
                "sales": sales,
                "expenses": expenses,
                "weight": weight,
            }
        )
        self._require_area(fields["area_id"])

        record_id = self.db.create_copras_record(
            date=fields["date"],
            area_id=fields["area_id"],
            farmer=fields["farmer"],
            sales=fields["sales"],
            expenses=fields["expenses"],
            net_income=derive_net_income(fields["sales"], fields["expenses"]),
            weight=fields["weight"],
            price_per_kilo=derive_price_per_kilo(fields["sales"], fields["weight"]),
        )
        logger.info("Created copras record %s for area %s", record_id, fields["area_id"])
        return record_id

    def update_record(self, record_id: int, **fields: Any) -> None:
        """Update a copras record.

        Only the provided fields change; derived figures are recomputed from
        the merged record.

        Raises:
            NotFoundError: If the record or area doesn't exist
            ValidationError: If a value is invalid
        """
        record = self.require_record(record_id)
        merged = {
            "date": record.date,
            "area_id": record.area_id,
            "farmer": record.farmer,
            "sales": record.sales,
            "expenses": record.expenses,
            "weight": record.weight,
        }
        merged.update({k: v for k, v in fields.items() if v is not None})
        cleaned = COPRAS_RECORD_POLICY.clean(merged)
        self._require_area(cleaned["area_id"])

        cleaned["net_income"] = derive_net_income(cleaned["sales"], cleaned["expenses"])
        cleaned["price_per_kilo"] = derive_price_per_kilo(cleaned["sales"], cleaned["weight"])
        self.db.update_copras_record(record_id, cleaned)
        logger.info("Updated copras record %s", record_id)

    def save_record(self, record_id: Optional[int], fields: dict[str, Any]) -> int:
        """Create or update a record from cleaned form fields. Returns record ID."""
        if record_id is None:
            return self.create_record(**fields)
        self.update_record(record_id, **fields)
        return record_id

    def delete_record(self, record_id: int) -> None:
        """Delete a copras record.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        self.db.delete_copras_record(record_id)
        logger.info("Deleted copras record %s", record_id)

    def get_record(self, record_id: int) -> Optional[CoprasRecord]:
        return self.db.get_copras_record(record_id)

    def require_record(self, record_id: int) -> CoprasRecord:
        record = self.db.get_copras_record(record_id)
        if record is None:
            raise NotFoundError(record_not_found("Copras record", record_id))
        return record

    def list_records(self, area_id: Optional[int] = None) -> list[CoprasRecord]:
        return self.db.list_copras_records(area_id=area_id)

    def summarize(self, records: Sequence[CoprasRecord]) -> CoprasSummary:
        """Build totals, per-area subtotals and best areas for a snapshot."""
        areas = tuple(group_by_area(records, self.policy).values())
        return CoprasSummary(
            totals=compute_totals(records, self.policy),
            areas=areas,
            best_sales_area=best_performer(areas, "sales"),
            best_net_area=best_performer(areas, "net"),
        )

    def _require_area(self, area_id: int) -> None:
        if self.db.get_area(area_id) is None:
            raise NotFoundError(area_not_found(area_id))
