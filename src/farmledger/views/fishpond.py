"""Fishpond croppings page."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from farmledger.database.base import Database
from farmledger.domain.aggregation import cropping_totals, days_since
from farmledger.domain.entities import CroppingTotals, Expense, FishpondCropping, Sale
from farmledger.domain.errors import ConflictError
from farmledger.domain.fishpond import FishpondService
from farmledger.domain.forms import EXPENSE_POLICY, SALE_POLICY, FormController
from farmledger.views.base import PageView


@dataclass(frozen=True)
class CroppingCard:
    """One cropping as shown on the page."""

    cropping: FishpondCropping
    totals: CroppingTotals
    day_count: int


class FishpondPage(PageView):
    """Card grid of croppings with add-expense and add-sale forms."""

    title = "Fishpond Croppings"

    def __init__(self, db: Database):
        super().__init__()
        self.service = FishpondService(db)
        self.expense_form = FormController(EXPENSE_POLICY)
        self.sale_form = FormController(SALE_POLICY)
        self.selected_cropping_id: Optional[int] = None
        self.croppings: list[FishpondCropping] = []

    def _fetch(self) -> None:
        self.croppings = self.service.list_croppings()

    def cards(self, today: Optional[date] = None) -> list[CroppingCard]:
        return [
            CroppingCard(
                cropping=c,
                totals=cropping_totals(c),
                day_count=days_since(c.start_date, today),
            )
            for c in self.croppings
        ]

    def start_cropping(self, start_date: Optional[date] = None) -> int:
        return self._mutate(lambda: self.service.start_cropping(start_date))

    def open_expense(self, cropping_id: int) -> None:
        self._select(cropping_id)
        self.expense_form.open_create()

    def submit_expense(self, **fields: Any) -> Expense:
        if fields:
            self.expense_form.update(**fields)
        return self._mutate(lambda: self.expense_form.submit(self._write_expense))

    def open_sale(self, cropping_id: int) -> None:
        self._select(cropping_id)
        self.sale_form.open_create()

    def submit_sale(self, **fields: Any) -> Sale:
        if fields:
            self.sale_form.update(**fields)
        return self._mutate(lambda: self.sale_form.submit(self._write_sale))

    def cancel(self) -> None:
        """Close whichever form is open without writing."""
        self.expense_form.cancel()
        self.sale_form.cancel()
        self.selected_cropping_id = None

    def complete(self, cropping_id: int, completed_at: Optional[date] = None) -> None:
        self._mutate(lambda: self.service.complete_cropping(cropping_id, completed_at))

    def delete(self, cropping_id: int) -> None:
        self._mutate(lambda: self.service.delete_cropping(cropping_id))

    def _select(self, cropping_id: int) -> None:
        if self.expense_form.is_open or self.sale_form.is_open:
            raise ConflictError("Another form is already open")
        cropping = self.service.require_cropping(cropping_id)
        if cropping.completed:
            raise ConflictError(f"Cropping {cropping_id} is already completed")
        self.selected_cropping_id = cropping_id

    def _write_expense(self, _record_id: Optional[int], fields: dict[str, Any]) -> Expense:
        return self.service.add_expense(
            self.selected_cropping_id, fields["name"], fields["amount"], fields.get("date")
        )

    def _write_sale(self, _record_id: Optional[int], fields: dict[str, Any]) -> Sale:
        return self.service.add_sale(
            self.selected_cropping_id,
            fields["fish_type"],
            fields["kilos"],
            fields["price_per_kilo"],
            fields.get("date"),
        )
