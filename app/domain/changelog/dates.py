"""체인지로그 날짜/제목 계산

서버와 클라이언트의 제목이 어긋나지 않도록 항상 설정된 고정 타임존 기준으로 계산한다.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.domain.changelog.constants import MONTH_NAMES


def changelog_zone() -> ZoneInfo:
    return ZoneInfo(settings.changelog_timezone)


def now_in_changelog_tz() -> datetime:
    """체인지로그 기준 타임존의 현재 시각"""
    return datetime.now(changelog_zone())


def to_changelog_tz(moment: datetime) -> datetime:
    """기준 타임존으로 변환, naive 값은 UTC 로 간주"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(changelog_zone())


def changelog_title(moment: datetime) -> str:
    """기준 타임존의 월 이름과 연도로 제목 생성 (예: October, 2026)"""
    local = to_changelog_tz(moment)
    return f"{MONTH_NAMES[local.month - 1]}, {local.year}"


def month_label(moment: datetime) -> str:
    """월별 그룹 라벨 (예: October 2026)"""
    local = to_changelog_tz(moment)
    return f"{MONTH_NAMES[local.month - 1]} {local.year}"
