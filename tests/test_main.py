"""app/main.py 테스트"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from app.core.context import get_repository, get_request_id
from app.core.middleware import RequestLoggingMiddleware
from app.main import app, lifespan


class TestHealthCheck:
    """헬스체크 엔드포인트 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_returns_up(self):
        """헬스체크 엔드포인트가 정상 응답을 반환"""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "UP"}


class TestRequestId:
    @pytest.mark.asyncio
    async def test_request_id_header_propagated(self, async_client):
        response = await async_client.get("/api/v1/changelog", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, async_client):
        response = await async_client.get("/api/v1/changelog")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_context_cleared_when_request_cancelled(self):
        middleware = RequestLoggingMiddleware(app=AsyncMock())
        request = Request(
            {
                "type": "http",
                "method": "GET",
                "path": "/api/v1/changelog",
                "headers": [(b"x-request-id", b"req-cancel")],
                "query_string": b"",
            }
        )
        call_next = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await middleware.dispatch(request, call_next)

        assert get_request_id() is None
        assert get_repository() is None

class TestAppConfiguration:
    """앱 설정 테스트"""

    def test_app_has_correct_title(self):
        """앱 제목이 올바르게 설정됨"""
        assert app.title == "Changelog Generator"

    def test_app_has_correct_version(self):
        """앱 버전이 올바르게 설정됨"""
        assert app.version == "1.0.0"

    def test_router_is_included(self):
        """API 라우터가 포함됨"""
        routes = [route.path for route in app.routes]
        assert "/health" in routes
        assert "/api/v1/changelog" in routes
        assert "/api/v1/changelog/commits" in routes
        assert "/api/v1/changelog/generate" in routes
        assert "/api/v1/changelog/submit" in routes


class TestLifespan:
    """저장소 핸들 수명 주기 테스트"""

    @pytest.mark.asyncio
    async def test_opens_and_closes_database(self, tmp_path, monkeypatch):
        monkeypatch.setattr("app.main.settings.database_url", f"sqlite+aiosqlite:///{tmp_path}/life.db")
        monkeypatch.setattr("app.main.close_github_client", _noop)

        async with lifespan(app):
            database = app.state.database
            assert database.is_open

        assert not database.is_open


async def _noop():
    return None
