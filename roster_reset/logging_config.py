"""ロギング設定モジュール

Cloud Functions / Cloud Run 環境ではJSON形式、ローカルではテキスト形式でログを出力する。

使い方:
    from roster_reset.logging_config import setup_logging
    setup_logging()

    # リセット対象の日付キー・グループIDはラベルとして出力される
    logger.info("...", extra={"date_key": "2026-10-20", "group_id": "g1"})

環境変数:
    LOG_LEVEL: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL) デフォルト: INFO
    K_SERVICE / CLOUD_RUN_JOB / FUNCTION_TARGET: クラウド環境判定（自動設定される）
"""

import json
import logging
import os

# Cloud Logging が LogEntry.labels として取り込む特殊フィールド
LABELS_FIELD = "logging.googleapis.com/labels"

# extra= で渡されたときにラベルへ載せる属性
LABEL_ATTRIBUTES = ("date_key", "group_id")


class CloudLoggingFormatter(logging.Formatter):
    """Cloud Logging互換のJSONフォーマッタ

    `severity` にはログレベル名をそのまま使う（Cloud Logging の LogSeverity と同名）。
    date_key / group_id はラベルに載せ、ログエクスプローラでの絞り込みに使う。
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        labels = {
            name: str(getattr(record, name))
            for name in LABEL_ATTRIBUTES
            if getattr(record, name, None) is not None
        }
        if labels:
            log_entry[LABELS_FIELD] = labels
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def is_cloud_environment() -> bool:
    """Cloud Functions / Cloud Run 上で実行されているかを判定"""
    return bool(
        os.getenv("K_SERVICE")
        or os.getenv("CLOUD_RUN_JOB")
        or os.getenv("FUNCTION_TARGET")
    )


def setup_logging() -> None:
    """ログ設定を初期化する

    クラウド環境では Cloud Logging 互換の JSON フォーマットを使用し、
    ローカルではテキスト形式を使用する。
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    handler = logging.StreamHandler()
    if is_cloud_environment():
        handler.setFormatter(CloudLoggingFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.handlers.clear()
    root_logger.addHandler(handler)
