import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from .config import settings

logger = logging.getLogger("uvicorn.error")


def build_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        # aiosqlite: без пула, каждое соединение открывается заново
        return create_async_engine(url, echo=settings.DB_ECHO, poolclass=NullPool)

    connect_args = {"ssl": "require"} if settings.DB_SSL else {}
    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,      # проверка соединения перед использованием
        connect_args=connect_args,
    )


engine = build_engine(settings.async_database_url)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Асинхронный генератор сессии.
    Используется как Depends(get_db) в роутерах: сессия берётся из пула
    на время запроса и возвращается после ответа.
    """
    async with AsyncSessionLocal() as session:
        yield session


async def init_models() -> None:
    """
    Создаёт таблицы users и ads, если их ещё нет.
    Повторный вызов безопасен: create_all проверяет существование таблиц.
    """
    # models импортируются здесь, чтобы метаданные знали обе таблицы
    from models.base import Base
    import models.user  # noqa: F401
    import models.ad  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info("Таблицы созданы/проверены")
