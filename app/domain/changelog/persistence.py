"""체인지로그 저장 트랜잭션

중복 재확인 → 체인지로그 → 항목 → 커밋/파일 변경 → 항목-커밋 연결을
하나의 트랜잭션으로 수행한다. 어느 단계든 실패하면 전체가 롤백된다.
"""

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import NoNewCommitsError, PersistenceError, ValidationError
from app.core.logging import get_logger
from app.domain.changelog.schemas import (
    ChangeType,
    Commit,
    EntryDraft,
    RepositoryIdentity,
    SubmittedChangelog,
)
from app.domain.changelog.service import filter_new_commits
from app.domain.changelog.dates import changelog_title, now_in_changelog_tz
from app.infra.db.database import Database
from app.infra.db.repository import (
    insert_changelog,
    insert_commit,
    insert_entries,
    insert_entry_commit_links,
    insert_file_changes,
)

logger = get_logger(__name__)


def flatten_content(entries: list[EntryDraft]) -> str:
    """레거시 본문: 항목 내용을 줄바꿈으로 연결"""
    return "\n".join(entry.content for entry in entries)


async def submit_changelog(
    database: Database,
    identity: RepositoryIdentity,
    entries: list[EntryDraft],
    commits: list[Commit],
    change_type: ChangeType = ChangeType.FEATURE,
) -> SubmittedChangelog:
    """승인된 항목과 커밋 배치를 원자적으로 저장

    Args:
        database: 저장소 핸들
        identity: 레포지토리 식별자
        entries: 사람이 최종 승인한 항목 (표시 순서)
        commits: 검토 시점에 조회한 커밋 배치
        change_type: 체인지로그 유형

    Returns:
        저장된 체인지로그 요약

    Raises:
        NoNewCommitsError: 배치의 모든 커밋이 이미 저장된 경우
        PersistenceError: 저장 단계 실패, stage 로 실패 단계를 알림
    """
    if not entries:
        raise ValidationError(detail="최소 1개의 항목이 필요합니다")

    stage = "dedup_check"
    try:
        async with database.session() as session:
            async with session.begin():
                new_commits = await filter_new_commits(session, identity, commits)
                if not new_commits:
                    raise NoNewCommitsError(
                        detail=f"이미 처리된 커밋입니다 repo={identity.key} batch={len(commits)}"
                    )

                stage = "changelog"
                created_at = now_in_changelog_tz()
                changelog = await insert_changelog(
                    session,
                    title=changelog_title(created_at),
                    content=flatten_content(entries),
                    change_type=change_type,
                    created_at=created_at,
                )

                stage = "entries"
                entry_records = await insert_entries(session, changelog.id, entries)

                commit_ids = []
                for commit in new_commits:
                    stage = "commits"
                    record = await insert_commit(session, changelog.id, identity.key, commit)
                    commit_ids.append(record.id)

                    stage = "file_changes"
                    await insert_file_changes(session, record.id, commit.files or [])

                stage = "links"
                link_count = await insert_entry_commit_links(
                    session, [e.id for e in entry_records], commit_ids
                )

                stage = "commit"

            submitted = SubmittedChangelog(
                id=changelog.id,
                title=changelog.title,
                type=change_type,
                created_at=created_at,
                entry_count=len(entry_records),
                commit_count=len(new_commits),
                commit_hashes=[c.hash for c in new_commits],
            )

    except SQLAlchemyError as e:
        logger.error(
            "체인지로그 저장 실패 repo=%s stage=%s error=%s",
            identity.key,
            stage,
            type(e).__name__,
        )
        raise PersistenceError(stage=stage, detail=str(e)) from e

    logger.info(
        "체인지로그 저장 완료 id=%d repo=%s entries=%d commits=%d links=%d skipped=%d",
        submitted.id,
        identity.key,
        submitted.entry_count,
        submitted.commit_count,
        link_count,
        len(commits) - len(new_commits),
    )
    return submitted
