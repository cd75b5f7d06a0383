"""Factory - 依存性注入の組み立て

Firestore クライアントと各Adapter・Serviceを組み立て、DailyResetCoordinatorを生成する。
"""

import logging

from google.cloud import firestore

from roster_reset.adapters.firestore_repository import (
    FirestoreResetControlRepository,
    FirestoreRosterRepository,
)
from roster_reset.config import AppConfig
from roster_reset.services.daily_reset import DailyResetCoordinator
from roster_reset.services.roster_resetter import RosterResetter

logger = logging.getLogger(__name__)


def create_firestore_client(config: AppConfig) -> firestore.Client:
    """設定に従って Firestore クライアントを生成（未指定時は ADC のプロジェクト）"""
    kwargs: dict = {}
    if config.project_id:
        kwargs["project"] = config.project_id
    if config.firestore_database:
        kwargs["database"] = config.firestore_database
    return firestore.Client(**kwargs)


def create_coordinator(
    config: AppConfig | None = None,
    db: firestore.Client | None = None,
) -> DailyResetCoordinator:
    """
    DailyResetCoordinatorを生成（全依存を組み立て）。

    Args:
        config: アプリケーション設定（Noneの場合は環境変数から読み込み）
        db: Firestore クライアント（Noneの場合は config から生成）

    Returns:
        DailyResetCoordinator: 実行可能なコーディネータ

    Raises:
        ConfigError: 設定値が不正な場合
    """
    if config is None:
        config = AppConfig.from_env()

    logger.info(
        "Creating coordinator: project_id=%s, timezone=%s, batch_size=%d, page_size=%d",
        config.project_id,
        config.reset_timezone,
        config.batch_size,
        config.page_size,
    )

    if db is None:
        db = create_firestore_client(config)

    roster_repo = FirestoreRosterRepository(db)
    resetter = RosterResetter(
        roster_repo,
        batch_size=config.batch_size,
        page_size=config.page_size,
    )
    return DailyResetCoordinator(
        control_repo=FirestoreResetControlRepository(db),
        roster_repo=roster_repo,
        resetter=resetter,
        timezone_name=config.reset_timezone,
    )
