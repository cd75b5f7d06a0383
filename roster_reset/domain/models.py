"""ドメインモデル - 外部依存なしのデータ構造"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GroupResetResult:
    """1グループ分のロスターリセット結果"""

    group_id: str
    entries_cleared: int = 0
    batches_committed: int = 0


@dataclass(frozen=True)
class GroupResetFailure:
    """リセットに失敗したグループ"""

    group_id: str
    error: str  # 例外メッセージ


@dataclass(frozen=True)
class DailyResetResult:
    """日次リセット1回分の実行結果"""

    date_key: str  # YYYY-MM-DD（リセット用タイムゾーン基準）
    reset_performed: bool  # False: 本日分は実施済みでスキップ
    groups: list[GroupResetResult] = field(default_factory=list)
    failures: list[GroupResetFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures

    @property
    def groups_reset(self) -> int:
        return len(self.groups)

    @property
    def entries_cleared(self) -> int:
        return sum(g.entries_cleared for g in self.groups)
