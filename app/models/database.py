from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from app.utils.config import Settings


# ========== 1. BASE ДЛЯ МОДЕЛЕЙ ==========
class Base(DeclarativeBase):
    """Единый Base для всех моделей"""
    pass


# ========== 2. ASYNC ДВИЖОК ==========
def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Async движок по настройкам (asyncpg в production, aiosqlite в тестах)"""
    return create_async_engine(settings.async_database_url, echo=settings.db_echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Фабрика async сессий"""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ========== 3. СХЕМА ==========
async def create_tables(engine: AsyncEngine) -> None:
    """Создание таблиц (для разработки и тестов, миграций нет)"""
    # Импорт регистрирует модели в Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
