"""Ports - 永続化層のインターフェース定義（ABC）

各Port（抽象基底クラス）は Firestore 等のドキュメントDBとの契約を定義します。
実装クラス（Adapter）はこれらのABCを継承し、全ての抽象メソッドを実装する必要があります。
テストでは MagicMock(spec=...) またはインメモリ実装で差し替える。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator


class ResetControlRepository(ABC):
    """日次リセットの冪等性ガード（systemSettings/dailyRosterReset 等）"""

    @abstractmethod
    def claim_reset_date(self, date_key: str) -> bool:
        """
        コントロールレコードの lastResetDate を date_key に進める。

        読み取り・比較・書き込みはトランザクション内でアトミックに行う。
        同日に同時実行された場合でも True を受け取るのは1回だけ。

        Returns:
            True: 本日分のリセットを新たに確保した（リセットが必要）
            False: lastResetDate が既に date_key（リセット不要）
        """
        pass


class RosterRepository(ABC):
    """グループとバス乗車ロスターの操作（groups/{groupId}/busRoster 等）"""

    @abstractmethod
    def list_group_ids(self) -> list[str]:
        """全グループのIDを取得"""
        pass

    @abstractmethod
    def iter_entry_ids(self, group_id: str, page_size: int) -> Iterator[str]:
        """グループのロスターエントリIDをページ単位で読みながら順に返す"""
        pass

    @abstractmethod
    def clear_entries(self, group_id: str, entry_ids: list[str]) -> None:
        """
        エントリを1つのアトミックなバッチで乗車前の状態に戻す。

        isOnBus=False, joinedAt=None, updatedAt=サーバー時刻 を merge で書き込む。
        """
        pass

    @abstractmethod
    def stamp_group_reset(self, group_id: str) -> None:
        """グループの lastResetAt をサーバー時刻で更新"""
        pass
