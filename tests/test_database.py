"""저장소 핸들 테스트"""

import pytest

from app.core.config import Settings
from app.infra.db.database import Database


class TestEngineOptions:
    def test_sqlite_options(self):
        options = Database("sqlite+aiosqlite:///./test.db")._engine_options()

        assert "pool_size" not in options
        assert options["connect_args"]["timeout"] >= 15.0

    def test_server_options(self):
        database = Database("postgresql+asyncpg://user:pw@db/changelog", pool_size=7, pool_timeout=3.0)
        options = database._engine_options()

        assert database.is_sqlite is False
        assert options["pool_size"] == 7
        assert options["pool_timeout"] == 3.0
        assert options["pool_pre_ping"] is True

    def test_from_settings(self):
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///./x.db", db_pool_size=9)
        database = Database.from_settings(settings)

        assert database.url == "sqlite+aiosqlite:///./x.db"
        assert database.pool_size == 9


class TestLifecycle:
    def test_session_before_open(self):
        database = Database("sqlite+aiosqlite:///./never.db")

        with pytest.raises(RuntimeError):
            database.session()
        with pytest.raises(RuntimeError):
            _ = database.engine

    @pytest.mark.asyncio
    async def test_open_close(self, tmp_path):
        database = Database(f"sqlite+aiosqlite:///{tmp_path}/life.db")

        await database.open()
        await database.open()
        assert database.is_open
        await database.create_schema()

        await database.close()
        await database.close()
        assert not database.is_open
