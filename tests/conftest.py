"""테스트 공통 fixture"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from app.api.dependencies import get_database
from app.core.limiter import limiter
from app.domain.changelog.schemas import (
    Commit,
    CommitDetail,
    CommitInfo,
    EntryDraft,
    FileChange,
    FileDetail,
    RepositoryIdentity,
)
from app.infra.db.database import Database
from app.main import app


@pytest_asyncio.fixture
async def database(tmp_path):
    """임시 파일 SQLite 저장소"""
    db = Database(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await db.open()
    await db.create_schema()
    yield db
    await db.close()


@pytest.fixture
def count_rows():
    """테이블 행 개수 조회 helper"""

    async def _count(database: Database, model) -> int:
        async with database.session() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count


@pytest.fixture
def identity() -> RepositoryIdentity:
    return RepositoryIdentity(kind="remote", owner="owner", repo="repo")


@pytest.fixture
def commit_date() -> datetime:
    return datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_commit(commit_date):
    """파이프라인 커밋 생성 helper"""

    def _make(hash: str, message: str = "Update code", files: list[FileChange] | None = None) -> Commit:
        return Commit(hash=hash, message=message, date=commit_date, files=files)

    return _make


@pytest.fixture
def sample_commits(make_commit) -> list[Commit]:
    """테스트용 커밋 리스트"""
    return [
        make_commit(
            "a1",
            "Fix login bug",
            files=[
                FileChange(
                    path="src/app/api/auth/route.ts",
                    additions=12,
                    deletions=3,
                    patch="@@ -1,3 +1,12 @@\n-if (user)\n+if (user && user.active)",
                    component="api",
                )
            ],
        ),
        make_commit(
            "a2",
            "Add dark mode",
            files=[
                FileChange(
                    path="src/components/ThemeToggle.tsx",
                    additions=40,
                    deletions=0,
                    patch="@@ -0,0 +1,40 @@\n+export function ThemeToggle() {}",
                    component="ui",
                ),
                FileChange(
                    path="styles/theme.css",
                    additions=8,
                    deletions=2,
                    patch="+.dark { background: #000; }",
                    component="styles",
                ),
            ],
        ),
    ]


@pytest.fixture
def sample_entries() -> list[EntryDraft]:
    """테스트용 항목 리스트"""
    return [
        EntryDraft(content="- Fixed an issue where some users could not log in", labels=["Authentication"]),
        EntryDraft(content="- Added a dark mode option", component="User Interface"),
        EntryDraft(content="- Improved search performance", labels=["Search", "Performance"]),
    ]


@pytest.fixture
def sample_commit_infos(commit_date) -> list[CommitInfo]:
    return [
        CommitInfo(sha="a1", message="Fix login bug", date=commit_date),
        CommitInfo(sha="a2", message="Add dark mode", date=commit_date),
    ]


@pytest.fixture
def make_detail(commit_date):
    """커밋 상세 응답 생성 helper"""

    def _make(sha: str, message: str = "Update code") -> CommitDetail:
        return CommitDetail(
            sha=sha,
            message=message,
            date=commit_date,
            files=[
                FileDetail(filename="src/app/api/route.ts", additions=3, deletions=1, patch="+ok"),
                FileDetail(filename="README.md", additions=1, deletions=0, patch="+docs"),
            ],
        )

    return _make


@pytest_asyncio.fixture
async def async_client(database):
    """저장소가 주입된 비동기 HTTP 클라이언트"""
    app.dependency_overrides[get_database] = lambda: database
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_github_response():
    """GitHub API 응답 mock 생성"""
    mock = MagicMock()
    mock.raise_for_status = MagicMock()
    return mock


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error", headers: dict | None = None):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("GET", "https://test.com"),
            response=httpx.Response(status_code, headers=headers),
        )

    return _create
