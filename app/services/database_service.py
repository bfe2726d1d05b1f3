"""
Сервис для работы с базой данных сэмплов телеметрии
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.sample import MinerSample
from app.utils.constants import RANGE_COLUMNS
from app.utils.logging_config import StructuredLogger

logger = StructuredLogger("database")


class SampleRepository:
    """
    Доступ к таблице сэмплов.

    Каждый метод делает ровно один запрос к базе. Ошибки логируются
    и пробрасываются дальше - их превращает в 500 роутер.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def insert_sample(self, row: Dict[str, Any]) -> None:
        """Вставка одного сэмпла"""
        try:
            async with self.session_factory() as session:
                await session.execute(insert(MinerSample).values(**row))
                await session.commit()

            logger.debug(
                "Сэмпл записан",
                event="db_insert_sample",
                miner_id=row.get("miner_id"),
                ts=row.get("ts")
            )

        except Exception as e:
            logger.error(
                "Ошибка записи сэмпла",
                event="db_insert_sample_error",
                miner_id=row.get("miner_id"),
                error=str(e),
                error_type=type(e).__name__
            )
            raise

    async def get_latest_sample(self, miner_id: str) -> Optional[Dict[str, Any]]:
        """Последний сэмпл майнера (максимальный ts) или None"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(MinerSample)
                    .where(MinerSample.miner_id == miner_id)
                    .order_by(MinerSample.ts.desc())
                    .limit(1)
                )
                sample = result.scalar_one_or_none()

            logger.debug(
                "Получение последнего сэмпла",
                event="db_get_latest_sample",
                miner_id=miner_id,
                found=sample is not None
            )
            return sample.to_dict() if sample is not None else None

        except Exception as e:
            logger.error(
                "Ошибка получения последнего сэмпла",
                event="db_get_latest_sample_error",
                miner_id=miner_id,
                error=str(e),
                error_type=type(e).__name__
            )
            raise

    async def get_samples_since(self, miner_id: str, from_ts: int) -> List[Dict[str, Any]]:
        """Сэмплы майнера с ts >= from_ts по возрастанию ts (без лимита)"""
        columns = [getattr(MinerSample, name) for name in RANGE_COLUMNS]

        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(*columns)
                    .where(MinerSample.miner_id == miner_id)
                    .where(MinerSample.ts >= from_ts)
                    .order_by(MinerSample.ts.asc())
                )
                samples = [dict(row) for row in result.mappings().all()]

            logger.debug(
                "Получение сэмплов за период",
                event="db_get_samples_since",
                miner_id=miner_id,
                from_ts=from_ts,
                count=len(samples)
            )
            return samples

        except Exception as e:
            logger.error(
                "Ошибка получения сэмплов за период",
                event="db_get_samples_since_error",
                miner_id=miner_id,
                from_ts=from_ts,
                error=str(e),
                error_type=type(e).__name__
            )
            raise
