# app/utils/logging_config.py
"""
Конфигурация логирования для приложения
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
import json
from datetime import datetime, UTC
from typing import Dict, Any

from app.utils.config import Settings

# Стандартные атрибуты LogRecord, которые не считаем extra полями
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Форматировщик логов в JSON"""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # Extra поля (event, miner_id, ...)
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and key not in log_record and not key.startswith('_'):
                log_record[key] = value

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Цветной форматировщик для консоли"""

    COLORS = {
        'DEBUG': '\033[36m',  # Cyan
        'INFO': '\033[32m',  # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',  # Red
        'CRITICAL': '\033[41m',  # Red background
        'RESET': '\033[0m',  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        log_time = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        message = super().format(record)

        return f"{log_time} {color}{record.levelname:8s}{reset} [{record.name}] {message}"


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Настройка логирования для приложения

    Args:
        settings: Настройки сервиса (debug, log_dir, log_to_file)

    Returns:
        Корневой логгер
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    # Удаляем существующие обработчики
    logger.handlers.clear()

    # Консольный обработчик
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColorFormatter('%(message)s'))
    logger.addHandler(console_handler)

    if settings.log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # Файловый обработчик (ротация по размеру)
        file_handler = RotatingFileHandler(
            filename=log_dir / "telemetry_api.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

        # Обработчик ошибок (отдельный файл)
        error_handler = RotatingFileHandler(
            filename=log_dir / "errors.log",
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.WARNING)
        error_handler.setFormatter(JSONFormatter())
        logger.addHandler(error_handler)

    # Логи внешних библиотек
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

    logger.info("Логирование настроено")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Получение логгера с заданным именем

    Args:
        name: Имя логгера

    Returns:
        Настроенный логгер
    """
    return logging.getLogger(name)


class StructuredLogger:
    """
    Логгер для структурированного логирования
    """

    def __init__(self, name: str):
        self.logger = get_logger(name)

    def _log_with_context(self, level: int, msg: str, exc_info: bool = False, **kwargs):
        """Логирование с дополнительным контекстом"""
        # stacklevel=3: пропускаем этот метод и публичную обертку
        self.logger.log(level, msg, extra=kwargs, exc_info=exc_info, stacklevel=3)

    def info(self, msg: str, **kwargs):
        """Логирование уровня INFO"""
        self._log_with_context(logging.INFO, msg, **kwargs)

    def debug(self, msg: str, **kwargs):
        """Логирование уровня DEBUG"""
        self._log_with_context(logging.DEBUG, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Логирование уровня WARNING"""
        self._log_with_context(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: bool = False, **kwargs):
        """Логирование уровня ERROR"""
        self._log_with_context(logging.ERROR, msg, exc_info=exc_info, **kwargs)

    def sample_ingested(self, miner_id: str, ts: int, **kwargs):
        """Логирование принятого сэмпла телеметрии"""
        self.info(f"Сэмпл принят: {miner_id} @ {ts}",
                  event="sample_ingested",
                  miner_id=miner_id,
                  ts=ts,
                  **kwargs)

    def ingest_rejected(self, reason: str, status_code: int, **kwargs):
        """Логирование отклоненного приема телеметрии"""
        self.warning(f"Прием телеметрии отклонен: {reason}",
                     event="ingest_rejected",
                     reason=reason,
                     status_code=status_code,
                     **kwargs)

    def request_failed(self, method: str, path: str, error: Exception, **kwargs):
        """Логирование необработанной ошибки запроса"""
        self.error(f"Ошибка обработки {method} {path}: {error}",
                   exc_info=True,
                   event="request_failed",
                   method=method,
                   path=path,
                   error=str(error),
                   error_type=type(error).__name__,
                   **kwargs)
