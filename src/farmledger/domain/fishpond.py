"""Fishpond cropping domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from farmledger.database.base import Database
from farmledger.domain.aggregation import sale_total
from farmledger.domain.entities import Expense, FishpondCropping, Sale
from farmledger.domain.errors import (
    ConflictError,
    NotFoundError,
    cropping_completed,
    cropping_not_found,
)
from farmledger.domain.forms import EXPENSE_POLICY, SALE_POLICY

logger = logging.getLogger(__name__)


class FishpondService:
    """Service for managing fishpond croppings and their line items."""

    def __init__(self, db: Database):
        """Initialize fishpond service.

        Args:
            db: Database instance
        """
        self.db = db

    def start_cropping(self, start_date: Optional[date] = None) -> int:
        """Start a new cropping.

        Args:
            start_date: Stocking date (defaults to today)

        Returns:
            Cropping ID
        """
        if start_date is None:
            start_date = date.today()
        cropping_id = self.db.create_cropping(start_date)
        logger.info("Started cropping %s on %s", cropping_id, start_date)
        return cropping_id

    def get_cropping(self, cropping_id: int) -> Optional[FishpondCropping]:
        return self.db.get_cropping(cropping_id)

    def require_cropping(self, cropping_id: int) -> FishpondCropping:
        cropping = self.db.get_cropping(cropping_id)
        if cropping is None:
            raise NotFoundError(cropping_not_found(cropping_id))
        return cropping

    def list_croppings(self, completed: Optional[bool] = None) -> list[FishpondCropping]:
        return self.db.list_croppings(completed=completed)

    def add_expense(
        self,
        cropping_id: int,
        name: str,
        amount: Decimal | str,
        expense_date: Optional[date] = None,
    ) -> Expense:
        """Append an expense to an open cropping.

        Raises:
            ValidationError: If the name is missing or the amount is invalid
            NotFoundError: If the cropping doesn't exist
            ConflictError: If the cropping is completed
        """
        fields = EXPENSE_POLICY.clean({"name": name, "amount": amount, "date": expense_date})
        cropping = self._require_open(cropping_id)

        expense = Expense(
            name=fields["name"],
            amount=fields["amount"],
            date=fields["date"] or date.today(),
        )
        self.db.update_cropping_items(cropping_id, expenses=cropping.expenses + (expense,))
        logger.info("Added expense '%s' to cropping %s", expense.name, cropping_id)
        return expense

    def add_sale(
        self,
        cropping_id: int,
        fish_type: str,
        kilos: Decimal | str,
        price_per_kilo: Decimal | str,
        sale_date: Optional[date] = None,
    ) -> Sale:
        """Append a sale to an open cropping.

        The sale total is fixed as kilos x price per kilo when recorded.

        Raises:
            ValidationError: If a field is missing or a quantity is invalid
            NotFoundError: If the cropping doesn't exist
            ConflictError: If the cropping is completed
        """
        fields = SALE_POLICY.clean(
            {
                "fish_type": fish_type,
                "kilos": kilos,
                "price_per_kilo": price_per_kilo,
                "date": sale_date,
            }
        )
        cropping = self._require_open(cropping_id)

        sale = Sale(
            fish_type=fields["fish_type"],
            kilos=fields["kilos"],
            price_per_kilo=fields["price_per_kilo"],
            total=sale_total(fields["kilos"], fields["price_per_kilo"]),
            date=fields["date"] or date.today(),
        )
        self.db.update_cropping_items(cropping_id, sales=cropping.sales + (sale,))
        logger.info("Added sale of %s kg %s to cropping %s", sale.kilos, sale.fish_type, cropping_id)
        return sale

    def complete_cropping(self, cropping_id: int, completed_at: Optional[date] = None) -> None:
        """Mark a cropping as harvested. Completed croppings are read-only.

        Raises:
            NotFoundError: If the cropping doesn't exist
            ConflictError: If the cropping is already completed
        """
        self._require_open(cropping_id)
        if completed_at is None:
            completed_at = date.today()
        self.db.complete_cropping(cropping_id, completed_at)
        logger.info("Completed cropping %s on %s", cropping_id, completed_at)

    def delete_cropping(self, cropping_id: int) -> None:
        """Delete a cropping.

        Raises:
            NotFoundError: If the cropping doesn't exist
        """
        self.db.delete_cropping(cropping_id)
        logger.info("Deleted cropping %s", cropping_id)

    def _require_open(self, cropping_id: int) -> FishpondCropping:
        cropping = self.require_cropping(cropping_id)
        if cropping.completed:
            raise ConflictError(cropping_completed(cropping_id))
        return cropping
