"""Copras records page."""

from typing import Any, Optional

from farmledger.database.base import Database
from farmledger.domain.area import AreaService
from farmledger.domain.copras import CoprasService
from farmledger.domain.entities import Area, CoprasRecord, CoprasSummary, NetIncomePolicy
from farmledger.domain.errors import NotFoundError, record_not_found
from farmledger.domain.forms import COPRAS_RECORD_POLICY, FormController
from farmledger.views.base import PageView


class CoprasPage(PageView):
    """Copras records table with summary cards and an add/edit form."""

    title = "Copras Records"

    def __init__(
        self,
        db: Database,
        policy: NetIncomePolicy = NetIncomePolicy(),
        area_id: Optional[int] = None,
    ):
        super().__init__()
        self.area_id = area_id
        self.service = CoprasService(db, policy)
        self.area_service = AreaService(db)
        self.form = FormController(COPRAS_RECORD_POLICY)
        self.records: list[CoprasRecord] = []
        self.areas: list[Area] = []

    def _fetch(self) -> None:
        self.areas = self.area_service.list_areas()
        self.records = self.service.list_records(area_id=self.area_id)

    @property
    def summary(self) -> CoprasSummary:
        return self.service.summarize(self.records)

    def find_record(self, record_id: int) -> Optional[CoprasRecord]:
        return next((r for r in self.records if r.id == record_id), None)

    def add(self) -> None:
        """Open the form for a new record."""
        self.form.open_create()

    def edit(self, record_id: int) -> None:
        """Open the form pre-populated from a record in the snapshot."""
        record = self.find_record(record_id)
        if record is None:
            raise NotFoundError(record_not_found("Copras record", record_id))
        self.form.open_edit(
            record_id,
            {
                "date": record.date,
                "area_id": record.area_id,
                "farmer": record.farmer,
                "sales": record.sales,
                "expenses": record.expenses,
                "weight": record.weight,
            },
        )

    def submit(self, **fields: Any) -> int:
        """Apply the given field values to the open form and save it."""
        if fields:
            self.form.update(**fields)
        return self._mutate(lambda: self.form.submit(self.service.save_record))

    def cancel(self) -> None:
        self.form.cancel()

    def delete(self, record_id: int) -> None:
        self._mutate(lambda: self.service.delete_record(record_id))
