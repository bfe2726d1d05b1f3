from functools import lru_cache
from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Секрет для приема телеметрии (Authorization: Bearer <token>)
    ingest_token: str

    # База данных
    database_url: Optional[str] = None  # Если задан - перекрывает db_*
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "telemetry_db"
    db_user: str = "telemetry"
    db_password: str = ""
    db_echo: bool = False
    create_tables: bool = False  # Схема обычно создается снаружи

    # Запрос диапазона
    range_default_hours: int = 24
    range_max_hours: int = 24 * 90  # 90 дней

    # Сервис
    service_name: str = "Miner Telemetry API"
    host: str = "0.0.0.0"
    port: int = 8787

    # Логирование
    log_dir: str = "logs"
    log_to_file: bool = True

    # Разработка
    debug: bool = False

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def async_database_url(self) -> str:
        """URL для async движка SQLAlchemy"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache
def get_settings() -> Settings:
    """Настройки из окружения (создаются один раз)"""
    return Settings()
