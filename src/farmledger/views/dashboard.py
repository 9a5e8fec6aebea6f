"""Dashboard (home) page."""

from typing import Optional

from farmledger.database.base import Database
from farmledger.domain.dashboard import DashboardService
from farmledger.domain.entities import DashboardSummary, NetIncomePolicy
from farmledger.views.base import PageView


class DashboardPage(PageView):
    """Summary badges per line of business."""

    title = "Dashboard"

    def __init__(self, db: Database, policy: NetIncomePolicy = NetIncomePolicy()):
        super().__init__()
        self.service = DashboardService(db, policy)
        self.summary: Optional[DashboardSummary] = None

    def _fetch(self) -> None:
        self.summary = self.service.build_summary()
