"""비동기 SQLAlchemy 엔진과 세션

요청 하나가 트랜잭션 하나입니다. 서비스는 ``flush``까지만 하고,
커밋과 롤백은 ``get_db``가 요청 경계에서 처리합니다.
"""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.core.config import settings

POSTGRES_POOL_OPTIONS: dict[str, Any] = {
    "pool_pre_ping": True,
    "pool_size": 10,
    "max_overflow": 20,
}


def engine_options(database_url: str) -> dict[str, Any]:
    """URL에 맞는 엔진 옵션

    SQLite는 풀 크기 옵션을 받지 않고, 인메모리 DB는 커넥션 하나를
    공유해야 스키마가 남아 있습니다.
    """
    if not database_url.startswith("sqlite"):
        return dict(POSTGRES_POOL_OPTIONS)

    in_memory = ":memory:" in database_url or database_url.endswith("://")
    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if in_memory:
        options["poolclass"] = StaticPool
    return options


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **engine_options(settings.database_url),
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 세션 의존성

    예외가 전파되면 그 요청에서 flush된 변경(마일스톤 삭제와 이슈 분리 등)이
    모두 롤백됩니다.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()


async def close_db() -> None:
    await engine.dispose()
