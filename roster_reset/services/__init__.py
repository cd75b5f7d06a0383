"""Services layer - ビジネスロジック"""

from roster_reset.services.daily_reset import DailyResetCoordinator, current_date_key
from roster_reset.services.roster_resetter import RosterResetter

__all__ = [
    "DailyResetCoordinator",
    "RosterResetter",
    "current_date_key",
]
