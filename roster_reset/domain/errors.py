"""ドメイン固有の例外クラス"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roster_reset.domain.models import DailyResetResult


class RosterResetError(Exception):
    """Roster Reset の基底例外"""

    pass


class ConfigError(RosterResetError, ValueError):
    """環境変数の設定エラー"""

    pass


class GroupResetError(RosterResetError):
    """グループ単位のロスターリセット失敗"""

    def __init__(self, group_id: str, message: str) -> None:
        super().__init__(f"group_id={group_id}: {message}")
        self.group_id = group_id


class DailyResetIncompleteError(RosterResetError):
    """一部のグループのリセットに失敗した（コントロールレコードは更新済み）"""

    def __init__(self, result: DailyResetResult) -> None:
        failed = ", ".join(f.group_id for f in result.failures)
        super().__init__(
            f"Daily reset {result.date_key} incomplete: "
            f"{len(result.failures)} group(s) failed ({failed})"
        )
        self.result = result
