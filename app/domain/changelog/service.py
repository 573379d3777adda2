import asyncio
from enum import Enum

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import InvalidIdentityError, PersistenceError, SourceUnavailableError
from app.core.logging import get_logger
from app.domain.changelog.classifiers import detect_file_component
from app.domain.changelog.schemas import (
    Commit,
    CommitDetail,
    CommitInfo,
    FileChange,
    RepositoryIdentity,
)
from app.infra.db.database import Database
from app.infra.db.repository import find_stored_hashes
from app.infra.github.client import get_commit_detail, get_commits

logger = get_logger(__name__)


class DetailFailurePolicy(str, Enum):
    """커밋 상세 조회 일부 실패 시 정책"""

    ABORT = "abort"
    DROP = "drop"
    RETRY_ONCE = "retry_once"


def to_source_error(error: Exception) -> SourceUnavailableError:
    """httpx 예외를 SourceUnavailableError 로 변환"""
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        status_code = response.status_code
        if status_code == 429 or (
            status_code == 403 and response.headers.get("x-ratelimit-remaining") == "0"
        ):
            reason = "rate_limited"
        elif status_code in (401, 403):
            reason = "unauthorized"
        elif status_code == 404:
            reason = "not_found"
        else:
            reason = "transient"
        return SourceUnavailableError(reason=reason, detail=f"GitHub API 오류: HTTP {status_code}")

    if isinstance(error, httpx.RequestError):
        return SourceUnavailableError(reason="transient", detail=f"GitHub 요청 실패: {type(error).__name__}")

    return SourceUnavailableError(reason="transient", detail=f"GitHub 응답 처리 실패: {type(error).__name__}")


async def filter_new_commits(
    session: AsyncSession,
    identity: RepositoryIdentity,
    commits: list,
) -> list:
    """저장된 커밋을 제외한 새 커밋만 반환 (순서 유지)

    저장소에 hash 가 있으면 레포지토리 식별자와 무관하게 처리된 것으로 본다.
    한 배치 안의 중복 hash 는 첫 번째만 남긴다.
    """
    hashes = [_commit_hash(c) for c in commits]
    stored = await find_stored_hashes(session, hashes)

    mismatched = sorted(h for h, repo in stored.items() if repo != identity.key)
    if mismatched:
        logger.warning(
            "다른 레포지토리로 저장된 커밋 발견 repo=%s count=%d", identity.key, len(mismatched)
        )

    seen: set[str] = set()
    new_commits = []
    for commit, commit_hash in zip(commits, hashes, strict=True):
        if commit_hash in stored or commit_hash in seen:
            continue
        seen.add(commit_hash)
        new_commits.append(commit)

    logger.info(
        "중복 커밋 필터링 repo=%s fetched=%d stored=%d new=%d",
        identity.key,
        len(commits),
        len(stored),
        len(new_commits),
    )
    return new_commits


def _commit_hash(commit) -> str:
    return commit.sha if isinstance(commit, CommitInfo) else commit.hash


def build_commit(info: CommitInfo, detail: CommitDetail | None = None) -> Commit:
    """조회 결과를 파이프라인 커밋으로 변환"""
    if detail is None:
        return Commit(hash=info.sha, message=info.message, date=info.date)

    files = [
        FileChange(
            path=f.filename,
            additions=f.additions,
            deletions=f.deletions,
            patch=f.patch,
            component=detect_file_component(f.filename),
        )
        for f in detail.files
    ]
    return Commit(hash=info.sha, message=info.message, date=info.date, files=files)


async def fetch_commit_details(
    identity: RepositoryIdentity,
    commits: list[CommitInfo],
    token: str | None = None,
    policy: DetailFailurePolicy = DetailFailurePolicy.ABORT,
) -> list[Commit]:
    """커밋별 상세 정보를 동시 요청 제한 안에서 조회

    Raises:
        SourceUnavailableError: ABORT 정책에서 하나라도 실패하거나, RETRY_ONCE 재시도도 실패한 경우
    """
    semaphore = asyncio.Semaphore(settings.github_max_concurrent_requests)

    async def fetch_with_limit(info: CommitInfo) -> Commit | None:
        async with semaphore:
            attempts = 2 if policy == DetailFailurePolicy.RETRY_ONCE else 1
            for attempt in range(1, attempts + 1):
                try:
                    detail = await get_commit_detail(identity, info.sha, token)
                    return build_commit(info, detail)
                except (httpx.HTTPError, KeyError, ValueError) as e:
                    logger.warning(
                        "커밋 상세 조회 실패 sha=%s attempt=%d error=%s",
                        info.sha[:7],
                        attempt,
                        type(e).__name__,
                    )
                    if attempt < attempts:
                        continue
                    if policy == DetailFailurePolicy.DROP:
                        return None
                    raise to_source_error(e) from e
        return None

    results = await asyncio.gather(*[fetch_with_limit(info) for info in commits])
    detailed = [commit for commit in results if commit is not None]

    dropped = len(commits) - len(detailed)
    if dropped:
        logger.warning("상세 조회 실패 커밋 제외 repo=%s dropped=%d", identity.key, dropped)
    return detailed


async def fetch_new_commits(
    database: Database,
    identity: RepositoryIdentity,
    token: str | None = None,
    include_files: bool = True,
    policy: DetailFailurePolicy | None = None,
) -> list[Commit]:
    """최근 커밋을 조회하고 이미 처리된 커밋을 제외

    Args:
        database: 저장소 핸들
        identity: 원격 레포지토리 식별자
        token: GitHub 토큰, 없으면 설정값 사용
        include_files: 파일 단위 diff 포함 여부
        policy: 상세 조회 실패 정책, 없으면 설정값 사용

    Returns:
        최신순의 새 커밋 목록
    """
    if not identity.is_remote:
        raise InvalidIdentityError("로컬 경로 레포지토리는 커밋을 조회할 수 없습니다")

    token = token or settings.github_token or None
    if policy is None:
        policy = DetailFailurePolicy(settings.commit_detail_failure_policy)

    try:
        recent = await get_commits(identity, token, per_page=settings.commit_page_size)
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.error("커밋 목록 조회 실패 repo=%s error=%s", identity.key, type(e).__name__)
        raise to_source_error(e) from e

    try:
        async with database.session() as session:
            new_infos = await filter_new_commits(session, identity, recent)
    except SQLAlchemyError as e:
        logger.error("처리된 커밋 조회 실패 repo=%s error=%s", identity.key, e)
        raise PersistenceError(stage="dedup_check", detail=str(e)) from e

    if not include_files:
        return [build_commit(info) for info in new_infos]

    return await fetch_commit_details(identity, new_infos, token, policy)
