"""共通テストフィクスチャ

全テストから利用可能なモックオブジェクトとインメモリ実装を提供。

モックの作成:
- MagicMock(spec=ABC) でABCのメソッドシグネチャを保持
- 状態の検証が必要なテストはインメモリ実装（Fake*）を使う
"""

from __future__ import annotations

import datetime
import threading
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
from roster_reset.domain.ports import ResetControlRepository, RosterRepository

RESET_TIME = datetime.datetime(2026, 10, 19, 21, 0, tzinfo=datetime.UTC)


class FakeResetControlRepository(ResetControlRepository):
    """Firestore トランザクションの直列化をロックで再現したインメモリ実装"""

    def __init__(self, last_reset_date: str | None = None) -> None:
        self.last_reset_date = last_reset_date
        self.claims: list[str] = []
        self._lock = threading.Lock()

    def claim_reset_date(self, date_key: str) -> bool:
        with self._lock:
            self.claims.append(date_key)
            if self.last_reset_date and self.last_reset_date >= date_key:
                return False
            self.last_reset_date = date_key
            return True


class FakeRosterRepository(RosterRepository):
    """groups/{groupId}/busRoster を辞書で持つインメモリ実装"""

    def __init__(
        self,
        rosters: dict[str, dict[str, dict]] | None = None,
        now: datetime.datetime = RESET_TIME,
    ) -> None:
        self.rosters = rosters or {}
        self.groups: dict[str, dict] = {gid: {} for gid in self.rosters}
        self.commits: list[tuple[str, int]] = []
        self.failing_groups: set[str] = set()
        self._now = now

    def list_group_ids(self) -> list[str]:
        return list(self.groups)

    def iter_entry_ids(self, group_id: str, page_size: int) -> Iterator[str]:
        if group_id in self.failing_groups:
            raise ConnectionError("network unreachable")
        ids = sorted(self.rosters.get(group_id, {}))
        for start in range(0, len(ids), page_size):
            yield from ids[start : start + page_size]

    def clear_entries(self, group_id: str, entry_ids: list[str]) -> None:
        roster = self.rosters.setdefault(group_id, {})
        for entry_id in entry_ids:
            roster.setdefault(entry_id, {}).update(
                {"isOnBus": False, "joinedAt": None, "updatedAt": self._now}
            )
        self.commits.append((group_id, len(entry_ids)))

    def stamp_group_reset(self, group_id: str) -> None:
        self.groups.setdefault(group_id, {})["lastResetAt"] = self._now


def make_roster(count: int, prefix: str = "rider") -> dict[str, dict]:
    """乗車中のロスターエントリを count 件生成するヘルパー"""
    joined = datetime.datetime(2026, 10, 19, 7, 30, tzinfo=datetime.UTC)
    return {
        f"{prefix}{i:05d}": {
            "name": f"Rider {i}",
            "isOnBus": True,
            "joinedAt": joined,
            "updatedAt": joined,
        }
        for i in range(count)
    }


# ========== インメモリ実装 ==========


@pytest.fixture
def fake_control_repo() -> FakeResetControlRepository:
    return FakeResetControlRepository()


@pytest.fixture
def fake_roster_repo() -> FakeRosterRepository:
    """3グループ（うち1つは空）のロスター"""
    return FakeRosterRepository(
        {
            "group-a": make_roster(3, "a"),
            "group-b": make_roster(5, "b"),
            "group-empty": {},
        }
    )


# ========== モックフィクスチャ ==========


@pytest.fixture
def mock_control_repo() -> MagicMock:
    """ResetControlRepository のモック（本日分を確保できる）"""
    mock = MagicMock(spec=ResetControlRepository)
    mock.claim_reset_date.return_value = True
    return mock


@pytest.fixture
def mock_roster_repo() -> MagicMock:
    """RosterRepository のモック（エントリなし）"""
    mock = MagicMock(spec=RosterRepository)
    mock.list_group_ids.return_value = []
    mock.iter_entry_ids.return_value = iter([])
    return mock


@pytest.fixture
def roster_factory():
    """make_roster ヘルパーをテストから使うためのフィクスチャ"""
    return make_roster


@pytest.fixture
def fake_roster_factory():
    """任意のロスターで FakeRosterRepository を生成するフィクスチャ"""
    return FakeRosterRepository


@pytest.fixture
def fake_control_factory():
    """任意の lastResetDate で FakeResetControlRepository を生成するフィクスチャ"""
    return FakeResetControlRepository
