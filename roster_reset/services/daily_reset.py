"""DailyResetCoordinator - 1日1回の全グループ ロスターリセット

リセット用タイムゾーンでの日付キー（YYYY-MM-DD）をコントロールレコードと
トランザクションで比較・更新し、その日に初めて確保できた場合のみ全グループを処理する。
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from roster_reset.config import DEFAULT_RESET_TIMEZONE
from roster_reset.domain.models import (
    DailyResetResult,
    GroupResetFailure,
    GroupResetResult,
)
from roster_reset.domain.ports import ResetControlRepository, RosterRepository
from roster_reset.services.roster_resetter import RosterResetter

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def current_date_key(clock: Clock, timezone_name: str) -> str:
    """
    指定タイムゾーンでの現在日付を YYYY-MM-DD 形式で返す。

    タイムゾーンが解決できない場合は例外を出さず、
    実行環境のローカル日付にフォールバックする（精度は落ちる）。

    Args:
        clock: 現在時刻を返す関数（テスト用に差し替え可能）
        timezone_name: IANA タイムゾーン名（例: "Europe/Istanbul"）
    """
    now = clock()
    try:
        tz = ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning(
            "Unknown timezone %r, falling back to local date", timezone_name
        )
        # naive datetime はローカル時刻とみなされる
        local = now.astimezone()
        return f"{local.year:04d}-{local.month:02d}-{local.day:02d}"
    return now.astimezone(tz).date().isoformat()


class DailyResetCoordinator:
    """
    日次リセットの冪等な実行を統括する。

    1. 日付キーを計算
    2. コントロールレコードで本日分を確保（トランザクション）
    3. 確保できた場合のみ、全グループを順番にリセット

    1グループの失敗は記録して次のグループへ進む。
    """

    def __init__(
        self,
        control_repo: ResetControlRepository,
        roster_repo: RosterRepository,
        resetter: RosterResetter,
        timezone_name: str = DEFAULT_RESET_TIMEZONE,
        clock: Clock | None = None,
    ) -> None:
        """
        Args:
            control_repo: 冪等性ガード
            roster_repo: グループ一覧の取得元
            resetter: グループ単位のリセット処理
            timezone_name: 日付キーのタイムゾーン
            clock: 現在時刻（None の場合は UTC の現在時刻）
        """
        self._control = control_repo
        self._roster = roster_repo
        self._resetter = resetter
        self._timezone_name = timezone_name
        self._clock = clock or utc_now

    def ensure_daily_reset(self) -> DailyResetResult:
        """
        本日分のリセットが未実施なら全グループをリセットする。

        Returns:
            DailyResetResult: 実行結果（スキップ時は reset_performed=False）

        Raises:
            Exception: コントロールレコードのトランザクション、
                またはグループ一覧の取得に失敗した場合はそのまま伝播
        """
        date_key = current_date_key(self._clock, self._timezone_name)
        logger.info(
            "Checking daily roster reset: date_key=%s, timezone=%s",
            date_key,
            self._timezone_name,
            extra={"date_key": date_key},
        )

        if not self._control.claim_reset_date(date_key):
            logger.info(
                "Roster already reset for %s, nothing to do",
                date_key,
                extra={"date_key": date_key},
            )
            return DailyResetResult(date_key=date_key, reset_performed=False)

        group_ids = self._roster.list_group_ids()
        logger.info(
            "Resetting rosters for %d group(s)",
            len(group_ids),
            extra={"date_key": date_key},
        )

        groups: list[GroupResetResult] = []
        failures: list[GroupResetFailure] = []
        for group_id in group_ids:
            try:
                result = self._resetter.reset_roster_for_group(group_id)
            except Exception as e:
                logger.exception(
                    "Roster reset failed: group_id=%s",
                    group_id,
                    extra={"date_key": date_key, "group_id": group_id},
                )
                failures.append(GroupResetFailure(group_id=group_id, error=str(e)))
                continue
            if result is not None:
                groups.append(result)

        result = DailyResetResult(
            date_key=date_key,
            reset_performed=True,
            groups=groups,
            failures=failures,
        )
        if failures:
            logger.error(
                "Daily roster reset %s finished with errors: reset=%d, failed=%d",
                date_key,
                result.groups_reset,
                len(failures),
                extra={"date_key": date_key},
            )
        else:
            logger.info(
                "Daily roster reset %s complete: groups=%d, entries=%d",
                date_key,
                result.groups_reset,
                result.entries_cleared,
                extra={"date_key": date_key},
            )
        return result
