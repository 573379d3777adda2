from datetime import datetime, timezone

import httpx

from app.core.config import settings
from app.core.logging import get_logger
from app.domain.changelog.schemas import CommitDetail, CommitInfo, FileDetail, RepositoryIdentity

logger = get_logger(__name__)

GITHUB_API_BASE = "https://api.github.com"
MAX_PAGE_SIZE = 100

_client = httpx.AsyncClient(timeout=settings.github_timeout)


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 토큰

    Returns:
        HTTP 헤더 딕셔너리
    """
    headers = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


def _parse_date(value: str | None) -> datetime:
    """GitHub ISO 8601 시각 파싱, 없으면 현재 시각"""
    if not value:
        return datetime.now(timezone.utc)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _repo_path(identity: RepositoryIdentity) -> str:
    if not identity.is_remote:
        raise ValueError(f"원격 레포지토리가 아닙니다: {identity.key}")
    return f"{GITHUB_API_BASE}/repos/{identity.owner}/{identity.repo}"


async def get_commits(
    identity: RepositoryIdentity,
    token: str | None = None,
    per_page: int = 50,
) -> list[CommitInfo]:
    """레포지토리 최근 커밋 한 페이지 조회

    Args:
        identity: 레포지토리 식별자
        token: GitHub 토큰
        per_page: 가져올 커밋 개수, 최대 100

    Returns:
        최신순 커밋 목록

    Raises:
        httpx.HTTPStatusError: GitHub API 호출 실패 시
    """
    url = f"{_repo_path(identity)}/commits"
    params = {"per_page": min(per_page, MAX_PAGE_SIZE)}

    response = await _client.get(url, headers=_get_headers(token), params=params)
    response.raise_for_status()
    data = response.json()

    commits = [
        CommitInfo(
            sha=commit["sha"],
            message=commit["commit"]["message"],
            date=_parse_date((commit["commit"].get("author") or {}).get("date")),
        )
        for commit in data
    ]

    logger.info("커밋 조회 완료 repo=%s count=%d", identity.key, len(commits))
    return commits


async def get_commit_detail(
    identity: RepositoryIdentity, sha: str, token: str | None = None
) -> CommitDetail:
    """개별 커밋 상세 정보 조회

    Args:
        identity: 레포지토리 식별자
        sha: 커밋 SHA
        token: GitHub 토큰

    Returns:
        파일 단위 변경을 포함한 커밋 상세 정보
    """
    url = f"{_repo_path(identity)}/commits/{sha}"

    response = await _client.get(url, headers=_get_headers(token))
    response.raise_for_status()
    data = response.json()

    files = [
        FileDetail(
            filename=f["filename"],
            additions=f.get("additions", 0),
            deletions=f.get("deletions", 0),
            patch=f.get("patch") or "",
        )
        for f in data.get("files", [])
    ]

    logger.info("커밋 상세 조회 완료 repo=%s sha=%s files=%d", identity.key, sha[:7], len(files))
    return CommitDetail(
        sha=data["sha"],
        message=data["commit"]["message"],
        date=_parse_date((data["commit"].get("author") or {}).get("date")),
        files=files,
    )
