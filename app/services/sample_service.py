"""
Обработчики телеметрии: прием, последний сэмпл, диапазон
"""
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

from app.services.auth_service import IngestAuth
from app.services.database_service import SampleRepository
from app.utils.coercion import build_sample_row
from app.utils.constants import (
    DEFAULT_RANGE_HOURS,
    MAX_RANGE_HOURS,
    SECONDS_PER_HOUR,
    ERROR_UNAUTHORIZED,
    ERROR_MINER_ID_REQUIRED,
)
from app.utils.helpers import parse_hours, unix_now
from app.utils.logging_config import StructuredLogger

logger = StructuredLogger("samples")


@dataclass
class HandlerResult:
    """Результат обработчика: статус и JSON тело (успех или ошибка)"""
    status_code: int
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, payload: Dict[str, Any]) -> "HandlerResult":
        return cls(200, payload)

    @classmethod
    def error(cls, status_code: int, message: str) -> "HandlerResult":
        return cls(status_code, {"error": message})


class SampleService:
    """Сервис обработки запросов телеметрии"""

    def __init__(
            self,
            repository: SampleRepository,
            auth: IngestAuth,
            clock: Callable[[], float] = time.time,
            default_hours: int = DEFAULT_RANGE_HOURS,
            max_hours: int = MAX_RANGE_HOURS
    ):
        self.repository = repository
        self.auth = auth
        self.clock = clock
        self.default_hours = default_hours
        self.max_hours = max_hours

    async def ingest(
            self,
            authorization: Optional[str],
            read_payload: Callable[[], Awaitable[Any]]
    ) -> HandlerResult:
        """
        Прием одного сэмпла

        Args:
            authorization: Заголовок Authorization
            read_payload: Корутина чтения JSON тела (вызывается только после авторизации)

        Returns:
            200 {"ok": true}, 401 или 400
        """
        if not self.auth.is_authorized(authorization):
            logger.ingest_rejected(ERROR_UNAUTHORIZED, 401)
            return HandlerResult.error(401, ERROR_UNAUTHORIZED)

        payload = await read_payload()
        if not isinstance(payload, dict):
            payload = {}

        row = build_sample_row(payload, self.clock())
        if not row["miner_id"]:
            logger.ingest_rejected(ERROR_MINER_ID_REQUIRED, 400)
            return HandlerResult.error(400, ERROR_MINER_ID_REQUIRED)

        await self.repository.insert_sample(row)

        logger.sample_ingested(row["miner_id"], row["ts"])
        return HandlerResult.ok({"ok": True})

    async def latest(self, miner_id: Optional[str]) -> HandlerResult:
        """Последний сэмпл майнера ({"miner_id", "sample"})"""
        if not miner_id:
            return HandlerResult.error(400, ERROR_MINER_ID_REQUIRED)

        sample = await self.repository.get_latest_sample(miner_id)
        return HandlerResult.ok({"miner_id": miner_id, "sample": sample})

    async def range(self, miner_id: Optional[str], hours_raw: Optional[str]) -> HandlerResult:
        """Сэмплы майнера за последние hours часов по возрастанию ts"""
        if not miner_id:
            return HandlerResult.error(400, ERROR_MINER_ID_REQUIRED)

        hours = parse_hours(hours_raw, default=self.default_hours, max_hours=self.max_hours)
        from_ts = unix_now(self.clock()) - hours * SECONDS_PER_HOUR

        samples = await self.repository.get_samples_since(miner_id, from_ts)
        return HandlerResult.ok({
            "miner_id": miner_id,
            "fromTs": from_ts,
            "hours": hours,
            "samples": samples
        })
