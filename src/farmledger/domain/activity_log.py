"""Activity log domain service."""

import logging

from farmledger.database.base import Database
from farmledger.domain.entities import ActivityLog
from farmledger.domain.forms import ACTIVITY_LOG_POLICY

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Service for the append/delete activity log."""

    def __init__(self, db: Database):
        """Initialize activity log service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_log(self, action: str) -> int:
        """Append an activity.

        Raises:
            ValidationError: If the action text is blank
        """
        fields = ACTIVITY_LOG_POLICY.clean({"action": action})
        log_id = self.db.create_activity_log(fields["action"])
        logger.info("Added activity log %s", log_id)
        return log_id

    def list_logs(self) -> list[ActivityLog]:
        """List activities, newest first."""
        return self.db.list_activity_logs()

    def delete_log(self, log_id: int) -> None:
        """Delete an activity.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        self.db.delete_activity_log(log_id)
        logger.info("Deleted activity log %s", log_id)
