"""AppConfig のユニットテスト"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from roster_reset.config import AppConfig
from roster_reset.domain.errors import ConfigError

_ENV_KEYS = (
    "PROJECT_ID",
    "FIRESTORE_DATABASE",
    "RESET_TIMEZONE",
    "RESET_BATCH_SIZE",
    "ROSTER_PAGE_SIZE",
)


def _from_env(env: dict) -> AppConfig:
    """.env を読まずに、指定した環境変数だけで AppConfig を生成する"""
    import os

    base = {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}
    with (
        patch("roster_reset.config.load_dotenv"),
        patch.dict("os.environ", {**base, **env}, clear=True),
    ):
        return AppConfig.from_env()


class TestAppConfigFromEnv:
    def test_defaults(self):
        config = _from_env({})

        assert config.project_id is None
        assert config.firestore_database is None
        assert config.reset_timezone == "Europe/Istanbul"
        assert config.batch_size == 400
        assert config.page_size == 400

    def test_overrides(self):
        config = _from_env(
            {
                "PROJECT_ID": "bus-app",
                "FIRESTORE_DATABASE": "roster-db",
                "RESET_TIMEZONE": "Asia/Tokyo",
                "RESET_BATCH_SIZE": "250",
                "ROSTER_PAGE_SIZE": "1000",
            }
        )

        assert config.project_id == "bus-app"
        assert config.firestore_database == "roster-db"
        assert config.reset_timezone == "Asia/Tokyo"
        assert config.batch_size == 250
        assert config.page_size == 1000

    def test_blank_values_fall_back_to_defaults(self):
        config = _from_env({"PROJECT_ID": "", "RESET_BATCH_SIZE": " "})

        assert config.project_id is None
        assert config.batch_size == 400

    def test_non_integer_batch_size(self):
        with pytest.raises(ConfigError, match="RESET_BATCH_SIZE"):
            _from_env({"RESET_BATCH_SIZE": "four hundred"})

    @pytest.mark.parametrize("value", ["0", "501"])
    def test_batch_size_out_of_range(self, value):
        """Firestore のバッチ上限 500 を超える値・0 は拒否"""
        with pytest.raises(ConfigError):
            _from_env({"RESET_BATCH_SIZE": value})

    def test_page_size_must_be_positive(self):
        with pytest.raises(ConfigError, match="ROSTER_PAGE_SIZE"):
            _from_env({"ROSTER_PAGE_SIZE": "0"})

    def test_config_error_is_value_error(self):
        """既存の ValueError ハンドリングでも捕捉できる"""
        with pytest.raises(ValueError):
            AppConfig(reset_timezone="")
