"""Dashboard summary service."""

from farmledger.database.base import Database
from farmledger.domain.aggregation import compute_totals
from farmledger.domain.entities import DashboardSummary, NetIncomePolicy, PaymentStatus


class DashboardService:
    """Builds the per-line-of-business badge counts for the home screen."""

    def __init__(self, db: Database, policy: NetIncomePolicy = NetIncomePolicy()):
        self.db = db
        self.policy = policy

    def build_summary(self) -> DashboardSummary:
        croppings = self.db.list_croppings()
        ongoing = sum(1 for c in croppings if not c.completed)
        records = self.db.list_copras_records()
        return DashboardSummary(
            areas=len(self.db.list_areas()),
            copras_records=len(records),
            ongoing_croppings=ongoing,
            completed_croppings=len(croppings) - ongoing,
            tenants=len(self.db.list_tenants()),
            unpaid_rentals=len(self.db.list_rental_records(status=PaymentStatus.UNPAID)),
            activity_logs=len(self.db.list_activity_logs()),
            copras_totals=compute_totals(records, self.policy),
        )
