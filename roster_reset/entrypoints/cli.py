#!/usr/bin/env python3
"""CLI Entrypoint - コマンドラインから日次リセットを1回実行

使い方:
    python -m roster_reset.entrypoints.cli

環境変数:
    LOG_LEVEL: ログレベル (DEBUG, INFO, WARNING, ERROR) デフォルト: INFO
    FIRESTORE_EMULATOR_HOST: 設定するとエミュレーターに接続
    その他は roster_reset.config.AppConfig を参照
"""

import logging
import sys

from roster_reset.entrypoints.factory import create_coordinator
from roster_reset.logging_config import setup_logging


def main():
    """メインエントリーポイント"""
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("Daily Roster Reset - Starting")

    try:
        coordinator = create_coordinator()
        result = coordinator.ensure_daily_reset()

        if not result.reset_performed:
            logger.info("Already reset for %s", result.date_key)
            return

        for group in result.groups:
            logger.info(
                "group_id=%s entries=%d batches=%d",
                group.group_id,
                group.entries_cleared,
                group.batches_committed,
            )
        for failure in result.failures:
            logger.error("group_id=%s - Error: %s", failure.group_id, failure.error)

        # 失敗したグループがあれば終了コード1
        if result.failures:
            logger.warning("%d group(s) had errors", len(result.failures))
            sys.exit(1)

        logger.info("All groups reset successfully")

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
