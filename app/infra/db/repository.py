"""집합 단위 저장소 조회/삽입 함수

모든 함수는 호출자가 연 세션과 트랜잭션 안에서 동작한다.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.domain.changelog.schemas import ChangeType, Commit, EntryDraft, FileChange
from app.infra.db.models import (
    Changelog,
    ChangelogEntry,
    CommitFileChange,
    EntryCommitLink,
    ProcessedCommit,
)


def _as_utc(moment: datetime) -> datetime:
    """SQLite 는 타임존을 저장하지 않으므로 항상 UTC 로 저장"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


async def find_stored_hashes(session: AsyncSession, hashes: Iterable[str]) -> dict[str, str]:
    """저장된 커밋 hash 조회

    Returns:
        hash → 저장 당시 레포지토리 식별자
    """
    unique = list(dict.fromkeys(hashes))
    if not unique:
        return {}

    result = await session.execute(
        select(ProcessedCommit.hash, ProcessedCommit.repo_url).where(
            ProcessedCommit.hash.in_(unique)
        )
    )
    return {row.hash: row.repo_url for row in result}


async def insert_changelog(
    session: AsyncSession,
    title: str,
    content: str,
    change_type: ChangeType,
    created_at: datetime,
) -> Changelog:
    changelog = Changelog(
        title=title,
        content=content,
        type=change_type.value,
        created_at=_as_utc(created_at),
    )
    session.add(changelog)
    await session.flush()
    return changelog


async def insert_entries(
    session: AsyncSession, changelog_id: int, drafts: Sequence[EntryDraft]
) -> list[ChangelogEntry]:
    """항목 삽입, position 은 0부터 빈틈없이 부여"""
    entries = [
        ChangelogEntry(
            changelog_id=changelog_id,
            content=draft.content,
            component=draft.component,
            scope=draft.scope,
            impact=draft.impact.value,
            labels=list(draft.labels),
            is_technical=draft.is_technical,
            is_user_facing=draft.is_user_facing,
            position=position,
        )
        for position, draft in enumerate(drafts)
    ]
    session.add_all(entries)
    await session.flush()
    return entries


async def insert_commit(
    session: AsyncSession, changelog_id: int, repo_key: str, commit: Commit
) -> ProcessedCommit:
    stats = commit.stats
    record = ProcessedCommit(
        hash=commit.hash,
        message=commit.message,
        date=_as_utc(commit.date),
        repo_url=repo_key,
        changelog_id=changelog_id,
        stats=(
            {
                "totalAdditions": stats.total_additions,
                "totalDeletions": stats.total_deletions,
                "filesChanged": stats.files_changed,
            }
            if stats
            else None
        ),
    )
    session.add(record)
    await session.flush()
    return record


async def insert_file_changes(
    session: AsyncSession, commit_id: int, files: Sequence[FileChange]
) -> list[CommitFileChange]:
    records = [
        CommitFileChange(
            commit_id=commit_id,
            path=f.path,
            additions=f.additions,
            deletions=f.deletions,
            patch=f.patch,
            component=f.component,
        )
        for f in files
    ]
    if records:
        session.add_all(records)
        await session.flush()
    return records


async def insert_entry_commit_links(
    session: AsyncSession, entry_ids: Sequence[int], commit_ids: Sequence[int]
) -> int:
    """모든 항목과 모든 커밋을 연결"""
    links = [
        EntryCommitLink(entry_id=entry_id, commit_id=commit_id)
        for entry_id in entry_ids
        for commit_id in commit_ids
    ]
    session.add_all(links)
    await session.flush()
    return len(links)


async def list_changelogs(session: AsyncSession) -> list[Changelog]:
    """최신순 체인지로그와 정렬된 항목 조회"""
    result = await session.execute(
        select(Changelog)
        .options(selectinload(Changelog.entries))
        .order_by(Changelog.created_at.desc(), Changelog.id.desc())
    )
    return list(result.scalars().all())


async def list_commit_hashes_for_entry(session: AsyncSession, entry_id: int) -> list[str]:
    """항목의 근거가 된 커밋 hash 조회"""
    result = await session.execute(
        select(ProcessedCommit.hash)
        .join(EntryCommitLink, EntryCommitLink.commit_id == ProcessedCommit.id)
        .where(EntryCommitLink.entry_id == entry_id)
        .order_by(ProcessedCommit.id)
    )
    return list(result.scalars().all())
