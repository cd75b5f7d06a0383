"""RosterResetter - 1グループ分のバス乗車ロスターを一括クリアする"""

from __future__ import annotations

import logging

from roster_reset.config import DEFAULT_BATCH_SIZE, DEFAULT_PAGE_SIZE
from roster_reset.domain.errors import GroupResetError
from roster_reset.domain.models import GroupResetResult
from roster_reset.domain.ports import RosterRepository

logger = logging.getLogger(__name__)


class RosterResetter:
    """
    グループの全ロスターエントリを「乗車していない」状態に戻す。

    処理フロー:
    1. ロスターエントリIDをページ単位で読み込む
    2. batch_size 件たまるごとに1バッチとしてコミット
    3. 残りの端数バッチをコミット
    4. グループの lastResetAt を更新（エントリ0件でも実施）

    各バッチはアトミックだが、グループ全体はアトミックではない。
    途中で失敗した場合、一部のエントリだけがクリアされ lastResetAt は未更新のまま残る。
    """

    def __init__(
        self,
        roster_repo: RosterRepository,
        batch_size: int = DEFAULT_BATCH_SIZE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """
        Args:
            roster_repo: ロスターの永続化（Firestore等）
            batch_size: 1バッチあたりの書き込み件数
            page_size: 1ページあたりの読み込み件数
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._roster = roster_repo
        self._batch_size = batch_size
        self._page_size = page_size

    def reset_roster_for_group(self, group_id: str | None) -> GroupResetResult | None:
        """
        グループのロスターをクリアし、lastResetAt を更新する。

        Args:
            group_id: グループID。空文字列 / None の場合は何もしない

        Returns:
            GroupResetResult。group_id が空の場合は None

        Raises:
            GroupResetError: 読み込み・コミット・スタンプのいずれかに失敗した場合
        """
        if not group_id:
            return None

        pending: list[str] = []
        cleared = 0
        batches = 0

        try:
            for entry_id in self._roster.iter_entry_ids(group_id, self._page_size):
                pending.append(entry_id)
                if len(pending) >= self._batch_size:
                    self._roster.clear_entries(group_id, pending)
                    cleared += len(pending)
                    batches += 1
                    logger.debug(
                        "Committed batch: group_id=%s, batch=%d, size=%d",
                        group_id,
                        batches,
                        len(pending),
                        extra={"group_id": group_id},
                    )
                    pending = []

            if pending:
                self._roster.clear_entries(group_id, pending)
                cleared += len(pending)
                batches += 1

            self._roster.stamp_group_reset(group_id)
        except Exception as e:
            raise GroupResetError(
                group_id, f"reset aborted after clearing {cleared} entries: {e}"
            ) from e

        logger.info(
            "Roster reset: group_id=%s, entries=%d, batches=%d",
            group_id,
            cleared,
            batches,
            extra={"group_id": group_id},
        )
        return GroupResetResult(
            group_id=group_id, entries_cleared=cleared, batches_committed=batches
        )
