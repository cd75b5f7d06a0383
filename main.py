"""Cloud Functions デプロイ用エントリーポイント

このファイルはGCP Cloud Functionsのデプロイ時に参照されます。
--entry-point には scheduled_daily_roster_reset（Pub/Sub）または
daily_roster_reset_http（HTTP）を指定する。
"""

from roster_reset.entrypoints.cloud_function import (  # noqa: F401
    daily_roster_reset_http,
    scheduled_daily_roster_reset,
)
