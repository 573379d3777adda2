"""레포지토리 식별자 해석

원격 URL(https, scp 형식 ssh)을 기본 주소 체계로 사용한다.
로컬 경로 주소는 레거시 모드이며 별도의 중복 제거 파티션(local:<path>)을 가진다.
"""

import posixpath
import re
from urllib.parse import urlparse

from app.core.exceptions import InvalidIdentityError
from app.domain.changelog.schemas import RepositoryIdentity

SCP_URL_PATTERN = re.compile(r"^[\w.-]+@(?P<host>[\w.-]+):(?P<path>.+)$")
SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
REMOTE_SCHEMES = {"http", "https", "ssh", "git"}


def _split_owner_repo(path: str, locator: str) -> tuple[str, str]:
    segments = [s for s in path.strip("/").split("/") if s]
    if len(segments) < 2:
        raise InvalidIdentityError(f"owner/repo 경로가 불완전합니다: {locator}")

    owner, repo = segments[0], segments[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]

    if not owner or not repo:
        raise InvalidIdentityError(f"owner/repo 경로가 불완전합니다: {locator}")
    if not SEGMENT_PATTERN.match(owner) or not SEGMENT_PATTERN.match(repo):
        raise InvalidIdentityError(f"허용되지 않는 문자가 포함되어 있습니다: {locator}")
    return owner, repo


def parse_remote(locator: str) -> RepositoryIdentity | None:
    """원격 URL 파싱, URL 형식이 아니면 None 반환"""
    scp_match = SCP_URL_PATTERN.match(locator)
    if scp_match:
        owner, repo = _split_owner_repo(scp_match.group("path"), locator)
        return RepositoryIdentity(kind="remote", owner=owner, repo=repo)

    parsed = urlparse(locator)
    if parsed.scheme.lower() in REMOTE_SCHEMES and parsed.netloc:
        owner, repo = _split_owner_repo(parsed.path, locator)
        return RepositoryIdentity(kind="remote", owner=owner, repo=repo)

    return None


def parse_local(locator: str) -> RepositoryIdentity:
    """로컬 경로를 레거시 식별자로 변환"""
    if "\x00" in locator:
        raise InvalidIdentityError("경로에 NUL 문자가 포함되어 있습니다")

    path = posixpath.normpath(locator.replace("\\", "/"))
    if path in {".", ""}:
        raise InvalidIdentityError(f"사용할 수 없는 경로입니다: {locator}")
    return RepositoryIdentity(kind="local", path=path)


def resolve_identity(locator: str, allow_local: bool = False) -> RepositoryIdentity:
    """레포지토리 주소를 정규화된 식별자로 변환

    Args:
        locator: 레포지토리 URL 또는 로컬 경로
        allow_local: 레거시 로컬 경로 모드 허용 여부

    Returns:
        레포지토리 식별자

    Raises:
        InvalidIdentityError: URL도 경로도 아니거나 owner/repo가 누락된 경우
    """
    if not isinstance(locator, str) or not locator.strip():
        raise InvalidIdentityError("레포지토리 주소가 비어 있습니다")

    locator = locator.strip()
    identity = parse_remote(locator)
    if identity is not None:
        return identity

    if allow_local:
        return parse_local(locator)

    raise InvalidIdentityError(f"유효하지 않은 레포지토리 URL: {locator}")
