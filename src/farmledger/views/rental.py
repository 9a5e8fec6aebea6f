"""Rental records page."""

from typing import Any, Optional

from farmledger.database.base import Database
from farmledger.domain.aggregation import group_rental_transactions
from farmledger.domain.entities import PaymentStatus, RentalRecord, RentalTransaction, Tenant
from farmledger.domain.forms import TENANT_POLICY, FormController
from farmledger.domain.rental import RentalService
from farmledger.views.base import PageView


class RentalPage(PageView):
    """Tenants and rental rows grouped by transaction."""

    title = "Rental Records"

    def __init__(self, db: Database, service: Optional[RentalService] = None):
        super().__init__()
        self.service = service or RentalService(db)
        self.tenant_form = FormController(TENANT_POLICY)
        self.tenants: list[Tenant] = []
        self.records: list[RentalRecord] = []

    def _fetch(self) -> None:
        self.tenants = self.service.list_tenants()
        self.records = self.service.list_records()

    @property
    def transactions(self) -> list[RentalTransaction]:
        return list(group_rental_transactions(self.records).values())

    def add_tenant(self) -> None:
        self.tenant_form.open_create()

    def submit_tenant(self, **fields: Any) -> int:
        if fields:
            self.tenant_form.update(**fields)
        return self._mutate(
            lambda: self.tenant_form.submit(
                lambda _id, f: self.service.create_tenant(f["name"], f["tax_amount"])
            )
        )

    def cancel(self) -> None:
        self.tenant_form.cancel()

    def create_transaction(
        self, month: int, year: int, statuses: Optional[dict[str, PaymentStatus | str]] = None
    ) -> str:
        return self._mutate(lambda: self.service.create_transaction(month, year, statuses))

    def set_status(self, record_id: int, status: PaymentStatus | str) -> None:
        self._mutate(lambda: self.service.set_status(record_id, status))
