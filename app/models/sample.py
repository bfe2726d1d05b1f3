from typing import Any, Dict

from sqlalchemy import BigInteger, Column, Float, Index, Integer, String

from app.models.database import Base
from app.utils.constants import SAMPLES_TABLE, SAMPLE_COLUMNS


class MinerSample(Base):
    """Один сэмпл телеметрии майнера. Только вставка, без update/delete."""

    __tablename__ = SAMPLES_TABLE

    id = Column(Integer, primary_key=True, autoincrement=True)
    ts = Column(BigInteger, nullable=False)
    miner_id = Column(String, nullable=False)

    # Датчики
    temp = Column(Float, nullable=True)
    vrTemp = Column(Float, nullable=True)
    power = Column(Float, nullable=True)
    voltage = Column(Float, nullable=True)
    current = Column(Float, nullable=True)

    # Хэшрейт
    hashRate = Column(Float, nullable=True)
    hashRate_1m = Column(Float, nullable=True)
    hashRate_10m = Column(Float, nullable=True)
    hashRate_1h = Column(Float, nullable=True)
    expectedHashrate = Column(Float, nullable=True)

    # Охлаждение
    fanspeed = Column(Float, nullable=True)
    fanrpm = Column(BigInteger, nullable=True)

    # Конфигурация
    frequency = Column(BigInteger, nullable=True)
    coreVoltageActual = Column(BigInteger, nullable=True)

    # Шары
    errorPercentage = Column(Float, nullable=True)
    sharesAccepted = Column(BigInteger, nullable=True)
    sharesRejected = Column(BigInteger, nullable=True)

    # Пул
    isUsingFallbackStratum = Column(BigInteger, nullable=True)
    responseTime = Column(Float, nullable=True)

    # Система
    uptimeSeconds = Column(BigInteger, nullable=True)
    blockHeight = Column(BigInteger, nullable=True)
    version = Column(String, nullable=True)

    # Сложность
    bestDiff = Column(BigInteger, nullable=True)
    bestSessionDiff = Column(BigInteger, nullable=True)

    # Не уникальный: дубли (miner_id, ts) допустимы
    __table_args__ = (
        Index("ix_bitaxe_samples_miner_ts", "miner_id", "ts"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Сэмпл как JSON-словарь (без суррогатного id)"""
        return {name: getattr(self, name) for name in SAMPLE_COLUMNS}

    def __repr__(self):
        return f"<MinerSample {self.miner_id}@{self.ts}>"
