"""
Pydantic схемы ответов API телеметрии - версия для Pydantic V2
"""
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field


# ========== ОШИБКИ ==========
class ErrorResponse(BaseModel):
    """Тело ответа при ошибке"""
    error: str = Field(description="Причина ошибки")


# ========== СЭМПЛЫ ==========
class RangeSample(BaseModel):
    """Сокращенный сэмпл для графиков"""
    ts: int
    temp: Optional[float] = None
    vrTemp: Optional[float] = None
    power: Optional[float] = None
    hashRate_1m: Optional[float] = None
    fanrpm: Optional[int] = None
    errorPercentage: Optional[float] = None
    bestDiff: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class Sample(RangeSample):
    """Полный сэмпл телеметрии"""
    miner_id: str
    voltage: Optional[float] = None
    current: Optional[float] = None
    hashRate: Optional[float] = None
    hashRate_10m: Optional[float] = None
    hashRate_1h: Optional[float] = None
    expectedHashrate: Optional[float] = None
    fanspeed: Optional[float] = None
    frequency: Optional[int] = None
    coreVoltageActual: Optional[int] = None
    sharesAccepted: Optional[int] = None
    sharesRejected: Optional[int] = None
    isUsingFallbackStratum: Optional[int] = None
    responseTime: Optional[float] = None
    uptimeSeconds: Optional[int] = None
    blockHeight: Optional[int] = None
    version: Optional[str] = None
    bestSessionDiff: Optional[int] = None


# ========== ОТВЕТЫ ==========
class IngestResponse(BaseModel):
    """Сэмпл принят"""
    ok: bool = True


class LatestResponse(BaseModel):
    """Последний сэмпл майнера"""
    miner_id: str
    sample: Optional[Sample] = None


class RangeResponse(BaseModel):
    """Сэмплы майнера за период"""
    miner_id: str
    fromTs: int = Field(description="Нижняя граница ts (включительно)")
    hours: int = Field(ge=1, description="Размер окна в часах после ограничения")
    samples: List[RangeSample] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Проверка здоровья сервиса"""
    status: str
    service: str
    version: str
    timestamp: float
