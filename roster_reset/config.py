"""設定管理 - 環境変数の型安全な読み込み"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from roster_reset.domain.errors import ConfigError

# Firestore の1バッチあたりの書き込み上限
FIRESTORE_MAX_BATCH_WRITES = 500

DEFAULT_RESET_TIMEZONE = "Europe/Istanbul"
DEFAULT_BATCH_SIZE = 400
DEFAULT_PAGE_SIZE = 400


@dataclass(frozen=True)
class AppConfig:
    """アプリケーション設定"""
    project_id: str | None = None
    firestore_database: str | None = None
    reset_timezone: str = DEFAULT_RESET_TIMEZONE
    batch_size: int = DEFAULT_BATCH_SIZE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if not 1 <= self.batch_size <= FIRESTORE_MAX_BATCH_WRITES:
            raise ConfigError(
                f"RESET_BATCH_SIZE must be between 1 and {FIRESTORE_MAX_BATCH_WRITES}, "
                f"got {self.batch_size}"
            )
        if self.page_size < 1:
            raise ConfigError(f"ROSTER_PAGE_SIZE must be >= 1, got {self.page_size}")
        if not self.reset_timezone:
            raise ConfigError("RESET_TIMEZONE must not be empty")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """環境変数から設定を読み込む"""
        load_dotenv()

        return cls(
            project_id=os.getenv("PROJECT_ID") or None,
            firestore_database=os.getenv("FIRESTORE_DATABASE") or None,
            reset_timezone=os.getenv("RESET_TIMEZONE", DEFAULT_RESET_TIMEZONE),
            batch_size=_int_env("RESET_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            page_size=_int_env("ROSTER_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
