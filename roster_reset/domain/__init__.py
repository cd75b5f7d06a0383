"""Domain layer - 外部依存なしのドメインモデルとインターフェース定義"""

from roster_reset.domain.errors import (
    ConfigError,
    DailyResetIncompleteError,
    GroupResetError,
    RosterResetError,
)
from roster_reset.domain.models import (
    DailyResetResult,
    GroupResetFailure,
    GroupResetResult,
)
from roster_reset.domain.ports import (
    ResetControlRepository,
    RosterRepository,
)

__all__ = [
    # Models
    "GroupResetResult",
    "GroupResetFailure",
    "DailyResetResult",
    # Errors
    "RosterResetError",
    "ConfigError",
    "GroupResetError",
    "DailyResetIncompleteError",
    # Ports
    "ResetControlRepository",
    "RosterRepository",
]
