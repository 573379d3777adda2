from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.domain.changelog.dates import month_label, to_changelog_tz
from app.domain.changelog.extractor import strip_quotes
from app.domain.changelog.schemas import ChangelogView, EntryView, MonthGroup
from app.infra.db.database import Database
from app.infra.db.models import Changelog, ChangelogEntry
from app.infra.db.repository import list_changelogs

logger = get_logger(__name__)


def entry_badges(entry: EntryView) -> list[str]:
    """항목 라벨, 라벨이 없는 레거시 항목은 component 하나로 대체"""
    if entry.labels:
        return list(entry.labels)
    return [entry.component] if entry.component else []


def collect_badges(entries: list[EntryView]) -> list[str]:
    """항목 라벨을 처음 등장한 순서대로 중복 없이 모음"""
    badges: list[str] = []
    for entry in entries:
        for badge in entry_badges(entry):
            if badge not in badges:
                badges.append(badge)
    return badges


def legacy_entries(content: str) -> list[EntryView]:
    """구조화된 항목이 없는 체인지로그의 본문을 줄 단위 항목으로 변환"""
    lines = [strip_quotes(line) for line in content.splitlines()]
    return [EntryView(content=line, position=i) for i, line in enumerate(line for line in lines if line)]


def to_entry_view(entry: ChangelogEntry) -> EntryView:
    return EntryView(
        content=entry.content,
        position=entry.position,
        component=entry.component,
        scope=entry.scope,
        impact=entry.impact,
        labels=list(entry.labels or []),
        is_technical=entry.is_technical,
        is_user_facing=entry.is_user_facing,
    )


def to_changelog_view(changelog: Changelog) -> ChangelogView:
    if changelog.entries:
        entries = [to_entry_view(e) for e in sorted(changelog.entries, key=lambda e: e.position)]
    else:
        entries = legacy_entries(changelog.content)

    return ChangelogView(
        id=changelog.id,
        title=changelog.title,
        type=changelog.type,
        created_at=to_changelog_tz(changelog.created_at),
        badges=collect_badges(entries),
        entries=entries,
    )


def matches_filters(view: ChangelogView, category: str | None, change_type: str | None) -> bool:
    """배지(대소문자 무시)와 유형으로 필터링"""
    if change_type and str(getattr(view.type, "value", view.type)).lower() != change_type.lower():
        return False
    if category and category.lower() not in {b.lower() for b in view.badges}:
        return False
    return True


def group_by_month(views: list[ChangelogView]) -> list[MonthGroup]:
    """최신순 목록을 생성 월 단위로 묶음, 그룹 순서는 입력 순서를 따름"""
    groups: dict[str, list[ChangelogView]] = {}
    for view in views:
        groups.setdefault(month_label(view.created_at), []).append(view)
    return [MonthGroup(label=label, changelogs=items) for label, items in groups.items()]


async def browse_changelogs(
    database: Database,
    category: str | None = None,
    change_type: str | None = None,
) -> list[MonthGroup]:
    """공개 조회용 체인지로그 목록

    Args:
        database: 저장소 핸들
        category: 배지 필터
        change_type: 유형 필터

    Returns:
        월별로 묶인 최신순 체인지로그
    """
    try:
        async with database.session() as session:
            changelogs = await list_changelogs(session)
    except SQLAlchemyError as e:
        logger.error("체인지로그 조회 실패 error=%s", type(e).__name__)
        raise PersistenceError(stage="read", detail=str(e)) from e

    views = [to_changelog_view(c) for c in changelogs]
    filtered = [v for v in views if matches_filters(v, category, change_type)]
    logger.info("체인지로그 조회 total=%d filtered=%d", len(views), len(filtered))
    return group_by_month(filtered)
