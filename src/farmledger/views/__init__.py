"""Page view-state objects, one per screen."""

from farmledger.views.activity_log import ActivityLogPage
from farmledger.views.copras import CoprasPage
from farmledger.views.dashboard import DashboardPage
from farmledger.views.fishpond import CroppingCard, FishpondPage
from farmledger.views.rental import RentalPage

__all__ = [
    "ActivityLogPage",
    "CoprasPage",
    "CroppingCard",
    "DashboardPage",
    "FishpondPage",
    "RentalPage",
]
