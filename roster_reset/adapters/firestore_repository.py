"""Firestore Repository Adapter

ResetControlRepository と RosterRepository の Firestore 実装。

Firestore コレクション構造:
  systemSettings/dailyRosterReset           ← 日次リセットのコントロールレコード
  groups/{groupId}                          ← グループ（lastResetAt のみ更新）
  groups/{groupId}/busRoster/{riderId}      ← バス乗車ロスター
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from google.cloud import firestore
from google.cloud.firestore_v1.field_path import FieldPath

from roster_reset.config import FIRESTORE_MAX_BATCH_WRITES
from roster_reset.domain.ports import ResetControlRepository, RosterRepository

logger = logging.getLogger(__name__)

_SYSTEM_SETTINGS = "systemSettings"
_DAILY_ROSTER_RESET = "dailyRosterReset"
_GROUPS = "groups"
_BUS_ROSTER = "busRoster"


def claim_in_transaction(
    transaction: firestore.Transaction,
    ref: firestore.DocumentReference,
    date_key: str,
) -> bool:
    """
    トランザクション内で lastResetDate を確認し、必要なら date_key に更新する。

    競合時は firestore.transactional がこの関数ごと再実行する。
    lastResetDate が date_key 以降（同日 or 時計の巻き戻り）の場合は書き込まない。
    """
    snap = ref.get(transaction=transaction)
    data = (snap.to_dict() or {}) if snap.exists else {}
    last_reset_date = data.get("lastResetDate")

    if last_reset_date and last_reset_date >= date_key:
        return False

    transaction.set(
        ref,
        {
            "lastResetDate": date_key,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        },
        merge=True,
    )
    return True


class FirestoreResetControlRepository(ResetControlRepository):
    """
    Firestore を使った ResetControlRepository 実装。

    systemSettings/dailyRosterReset をトランザクションで読み書きする。
    """

    def __init__(self, db: firestore.Client) -> None:
        """
        Args:
            db: 初期化済みの Firestore クライアント
        """
        self._db = db

    def claim_reset_date(self, date_key: str) -> bool:
        ref = self._db.collection(_SYSTEM_SETTINGS).document(_DAILY_ROSTER_RESET)
        transaction = self._db.transaction()
        claimed = firestore.transactional(claim_in_transaction)(
            transaction, ref, date_key
        )
        logger.info("Claim reset date: date_key=%s, claimed=%s", date_key, claimed)
        return claimed


class FirestoreRosterRepository(RosterRepository):
    """
    Firestore を使った RosterRepository 実装。

    groups と groups/{groupId}/busRoster サブコレクションを扱う。
    """

    def __init__(self, db: firestore.Client) -> None:
        self._db = db

    def list_group_ids(self) -> list[str]:
        """groups コレクションの全ドキュメントIDを取得"""
        return [snap.id for snap in self._db.collection(_GROUPS).stream()]

    def iter_entry_ids(self, group_id: str, page_size: int) -> Iterator[str]:
        """
        ドキュメントID順に page_size 件ずつ読み、start_after カーソルで次ページへ進む。

        コレクション全体をメモリに載せないためのページング。
        """
        query = (
            self._roster_collection(group_id)
            .order_by(FieldPath.document_id())
            .limit(page_size)
        )
        last_snap = None
        while True:
            page_query = query if last_snap is None else query.start_after(last_snap)
            snaps = list(page_query.stream())
            for snap in snaps:
                yield snap.id
            if len(snaps) < page_size:
                return
            last_snap = snaps[-1]

    def clear_entries(self, group_id: str, entry_ids: list[str]) -> None:
        if not entry_ids:
            return
        if len(entry_ids) > FIRESTORE_MAX_BATCH_WRITES:
            raise ValueError(
                f"Batch of {len(entry_ids)} writes exceeds Firestore limit "
                f"of {FIRESTORE_MAX_BATCH_WRITES}"
            )

        roster = self._roster_collection(group_id)
        batch = self._db.batch()
        for entry_id in entry_ids:
            batch.set(
                roster.document(entry_id),
                {
                    "isOnBus": False,
                    "joinedAt": None,
                    "updatedAt": firestore.SERVER_TIMESTAMP,
                },
                merge=True,
            )
        batch.commit()

    def stamp_group_reset(self, group_id: str) -> None:
        self._db.collection(_GROUPS).document(group_id).set(
            {"lastResetAt": firestore.SERVER_TIMESTAMP}, merge=True
        )

    # ── ヘルパー ──────────────────────────────────────────────────────────────

    def _roster_collection(self, group_id: str) -> firestore.CollectionReference:
        return self._db.collection(_GROUPS).document(group_id).collection(_BUS_ROSTER)
