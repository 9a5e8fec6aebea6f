"""Activity log page."""

from farmledger.database.base import Database
from farmledger.domain.activity_log import ActivityLogService
from farmledger.domain.entities import ActivityLog
from farmledger.views.base import PageView


class ActivityLogPage(PageView):
    """Newest-first list of activities with add and delete."""

    title = "Activity Log"

    def __init__(self, db: Database):
        super().__init__()
        self.service = ActivityLogService(db)
        self.logs: list[ActivityLog] = []

    def _fetch(self) -> None:
        self.logs = self.service.list_logs()

    def add(self, action: str) -> int:
        return self._mutate(lambda: self.service.add_log(action))

    def delete(self, log_id: int) -> None:
        self._mutate(lambda: self.service.delete_log(log_id))
