"""예외 처리 테스트"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.exceptions import (
    ErrorCode,
    PersistenceError,
    SourceUnavailableError,
    register_exception_handlers,
)


@pytest.fixture
def error_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/persistence")
    async def persistence():
        raise PersistenceError(stage="links", detail="UNIQUE constraint failed")

    @app.get("/source")
    async def source():
        raise SourceUnavailableError(reason="rate_limited", detail="HTTP 429")

    return app


class TestExceptionClasses:
    def test_persistence_error_stage(self):
        error = PersistenceError(stage="commits")

        assert error.stage == "commits"
        assert "stage=commits" in error.message
        assert error.error_code == ErrorCode.PERSISTENCE_FAILED

    @pytest.mark.parametrize(
        "reason,status_code",
        [("unauthorized", 401), ("not_found", 404), ("rate_limited", 502), ("transient", 502)],
    )
    def test_source_error_status(self, reason, status_code):
        assert SourceUnavailableError(reason=reason).status_code == status_code


class TestHandlers:
    @pytest.mark.asyncio
    async def test_detail_in_development(self, error_app):
        transport = ASGITransport(app=error_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/persistence")

        assert response.status_code == 500
        assert response.json() == {
            "error_code": "PERSISTENCE_FAILED",
            "message": "체인지로그 저장에 실패했습니다 (stage=links)",
            "detail": "UNIQUE constraint failed",
        }

    @pytest.mark.asyncio
    async def test_detail_hidden_in_production(self, error_app):
        with patch("app.core.exceptions.settings") as mock_settings:
            mock_settings.is_production = True
            transport = ASGITransport(app=error_app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/source")

        assert response.status_code == 502
        assert "detail" not in response.json()
