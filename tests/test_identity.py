"""레포지토리 식별자 해석 테스트"""

import pytest

from app.core.exceptions import InvalidIdentityError
from app.domain.changelog.identity import parse_local, parse_remote, resolve_identity


class TestResolveRemote:
    """원격 URL 해석 테스트"""

    @pytest.mark.parametrize(
        "locator,expected_owner,expected_repo",
        [
            ("https://github.com/user/my-repo", "user", "my-repo"),
            ("https://github.com/user/my-repo.git", "user", "my-repo"),
            ("https://github.com/user/my-repo/", "user", "my-repo"),
            ("https://github.com/user/my-repo/tree/main/src", "user", "my-repo"),
            ("git@github.com:org-name/repo_name.git", "org-name", "repo_name"),
            ("ssh://git@github.com/User123/Repo.Name", "User123", "Repo.Name"),
            ("  https://github.com/user/repo  ", "user", "repo"),
        ],
    )
    def test_valid_urls(self, locator, expected_owner, expected_repo):
        """유효한 URL 파싱"""
        identity = resolve_identity(locator)

        assert identity.is_remote
        assert identity.owner == expected_owner
        assert identity.repo == expected_repo
        assert identity.key == f"{expected_owner}/{expected_repo}"

    def test_https_and_scp_share_key(self):
        """같은 레포지토리의 두 주소 형식은 같은 파티션 키를 가짐"""
        https = resolve_identity("https://github.com/owner/repo.git")
        scp = resolve_identity("git@github.com:owner/repo")

        assert https == scp
        assert https.key == "owner/repo"

    @pytest.mark.parametrize(
        "locator",
        [
            "https://github.com/user",
            "https://github.com/",
            "git@github.com:user",
            "https://github.com/us er/repo",
        ],
    )
    def test_incomplete_urls(self, locator):
        """owner/repo 가 불완전하면 InvalidIdentityError"""
        with pytest.raises(InvalidIdentityError):
            resolve_identity(locator)

    @pytest.mark.parametrize("locator", ["", "   ", "not-a-url", "/srv/repos/app"])
    def test_non_url_rejected_by_default(self, locator):
        """로컬 모드를 허용하지 않으면 URL 이 아닌 주소는 거부"""
        with pytest.raises(InvalidIdentityError):
            resolve_identity(locator)

    def test_parse_remote_returns_none_for_path(self):
        assert parse_remote("/srv/repos/app") is None


class TestResolveLocal:
    """레거시 로컬 경로 모드 테스트"""

    def test_local_path_allowed(self):
        identity = resolve_identity("/srv/repos/app/", allow_local=True)

        assert not identity.is_remote
        assert identity.path == "/srv/repos/app"
        assert identity.key == "local:/srv/repos/app"

    def test_local_path_normalized(self):
        """경로 표기가 달라도 같은 키로 정규화"""
        a = parse_local("/srv/repos/./app")
        b = parse_local("/srv/repos/other/../app")

        assert a.key == b.key

    def test_remote_preferred_when_local_allowed(self):
        identity = resolve_identity("https://github.com/owner/repo", allow_local=True)
        assert identity.is_remote

    @pytest.mark.parametrize("locator", [".", "./", "bad\x00path"])
    def test_invalid_local_paths(self, locator):
        with pytest.raises(InvalidIdentityError):
            parse_local(locator)
