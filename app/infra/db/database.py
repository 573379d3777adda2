"""저장소 연결 관리

프로세스 시작 시 open, 종료 시 close 하는 명시적 핸들.
전역 캐시 없이 lifespan 에서 생성해 app.state 로 주입한다.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import Settings
from app.core.logging import get_logger
from app.infra.db.models import Base

logger = get_logger(__name__)


class Database:
    """비동기 SQLAlchemy 엔진과 세션 팩토리 소유자"""

    def __init__(
        self,
        url: str,
        pool_size: int = 3,
        max_overflow: int = 0,
        pool_timeout: float = 5.0,
        pool_recycle: int = 600,
        connect_timeout: float = 5.0,
    ):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.connect_timeout = connect_timeout
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            url=settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            connect_timeout=settings.db_connect_timeout,
        )

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.url).get_backend_name() == "sqlite"

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database가 열려 있지 않습니다")
        return self._engine

    def _engine_options(self) -> dict:
        if self.is_sqlite:
            # SQLite 는 풀 크기 옵션 대신 잠금 대기 시간만 지정
            return {"connect_args": {"timeout": max(self.connect_timeout, 15.0)}}
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
            "connect_args": {"timeout": self.connect_timeout},
        }

    async def open(self) -> None:
        """엔진과 세션 팩토리 생성"""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, **self._engine_options())
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)
        logger.info(
            "데이터베이스 연결 준비 backend=%s pool_size=%d",
            make_url(self.url).get_backend_name(),
            self.pool_size,
        )

    async def create_schema(self) -> None:
        """테이블 생성, 이미 있으면 건너뜀"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("데이터베이스 스키마 준비 완료")

    def session(self) -> AsyncSession:
        """새 세션 반환"""
        if self._session_factory is None:
            raise RuntimeError("Database가 열려 있지 않습니다")
        return self._session_factory()

    async def close(self) -> None:
        """커넥션 풀 정리"""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("데이터베이스 연결 종료")
