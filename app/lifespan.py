from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

from app.models.database import create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan менеджер для управления событиями запуска/остановки приложения.
    """
    settings = app.state.settings
    engine = app.state.engine

    # ========== STARTUP ==========
    logger.info(f"Запуск {settings.service_name}...")

    if engine is not None and settings.create_tables:
        await create_tables(engine)
        logger.info("Таблицы базы данных созданы")

    yield

    # ========== SHUTDOWN ==========
    logger.info(f"Остановка {settings.service_name}...")

    if engine is not None:
        await engine.dispose()
        logger.info("Соединения с базой закрыты")
