"""Cloud Functions Entrypoint - Cloud Scheduler から毎日 0:00 に実行

デプロイ例（Pub/Sub トリガー）:
    gcloud functions deploy daily-roster-reset \\
        --gen2 \\
        --runtime=python313 \\
        --region=europe-west1 \\
        --source=. \\
        --entry-point=scheduled_daily_roster_reset \\
        --trigger-topic=daily-roster-reset \\
        --timeout=540s

    gcloud scheduler jobs create pubsub daily-roster-reset \\
        --schedule="0 0 * * *" \\
        --time-zone="Europe/Istanbul" \\
        --topic=daily-roster-reset \\
        --message-body="{}"

環境変数:
    - PROJECT_ID (optional)
    - FIRESTORE_DATABASE (optional)
    - RESET_TIMEZONE (default: Europe/Istanbul)
    - RESET_BATCH_SIZE (default: 400)
    - ROSTER_PAGE_SIZE (default: 400)
    - LOG_LEVEL (default: INFO)
"""

import logging
from datetime import datetime

import functions_framework

from roster_reset.domain.errors import DailyResetIncompleteError
from roster_reset.domain.models import DailyResetResult
from roster_reset.entrypoints.factory import create_coordinator
from roster_reset.logging_config import setup_logging

setup_logging()

logger = logging.getLogger(__name__)


def run_daily_reset() -> DailyResetResult:
    """コーディネータを組み立てて1回実行する（両トリガー共通）"""
    invocation_time = datetime.now()
    logger.info("Daily roster reset triggered at %s", invocation_time.isoformat())

    coordinator = create_coordinator()
    result = coordinator.ensure_daily_reset()

    duration = (datetime.now() - invocation_time).total_seconds()
    logger.info(
        "Daily roster reset finished: date_key=%s, performed=%s, groups=%d, "
        "failed=%d (took %.2fs)",
        result.date_key,
        result.reset_performed,
        result.groups_reset,
        len(result.failures),
        duration,
    )
    return result


@functions_framework.cloud_event
def scheduled_daily_roster_reset(cloud_event) -> None:
    """
    Pub/Sub (Cloud Scheduler) トリガーのエントリーポイント。ペイロードは使用しない。

    失敗したグループがあれば例外を送出し、実行失敗として記録させる。
    コントロールレコードは更新済みのため、同日の再実行はスキップされる。
    """
    result = run_daily_reset()
    if not result.succeeded:
        raise DailyResetIncompleteError(result)


@functions_framework.http
def daily_roster_reset_http(request):
    """
    HTTP トリガーのエントリーポイント（Cloud Scheduler HTTP ターゲット・手動実行用）。

    Args:
        request (flask.Request): HTTPリクエスト（内容は使用しない）

    Returns:
        tuple: (レスポンステキスト, ステータスコード)
    """
    try:
        result = run_daily_reset()
    except Exception as e:
        logger.exception("Fatal error in daily roster reset")
        return f"Error: {e}", 500

    if not result.reset_performed:
        return f"Already reset for {result.date_key}", 200

    message = (
        f"Reset {result.groups_reset} group(s) for {result.date_key}: "
        f"{result.entries_cleared} entries cleared, {len(result.failures)} failed"
    )
    if not result.succeeded:
        return message, 500
    return message, 200
