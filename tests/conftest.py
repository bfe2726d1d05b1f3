"""
Конфигурация для тестов
"""
import logging
import pytest
import sys
import os
from unittest.mock import AsyncMock, Mock

from fastapi.testclient import TestClient

# Добавляем корень проекта в sys.path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.main import create_app
from app.services.database_service import SampleRepository
from app.utils.config import Settings
from app.utils.logging_config import ColorFormatter

TEST_TOKEN = "test-ingest-secret"
FROZEN_NOW = 1_700_000_000.75


@pytest.fixture(autouse=True)
def reset_console_logging():
    """Снимаем консольный обработчик setup_logging после теста"""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, ColorFormatter):
            root.removeHandler(handler)


@pytest.fixture
def test_settings(tmp_path):
    """Настройки с временной SQLite базой"""
    return Settings(
        ingest_token=TEST_TOKEN,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'telemetry.db'}",
        create_tables=True,
        log_to_file=False,
    )


@pytest.fixture
def clock():
    """Управляемые часы сервера"""
    clock = Mock(return_value=FROZEN_NOW)
    return clock


@pytest.fixture
def client(test_settings, clock):
    """TestClient поверх реальной SQLite базы"""
    app = create_app(settings=test_settings, clock=clock)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_repository():
    """Мок репозитория сэмплов"""
    repository = Mock(spec=SampleRepository)
    repository.insert_sample = AsyncMock(return_value=None)
    repository.get_latest_sample = AsyncMock(return_value=None)
    repository.get_samples_since = AsyncMock(return_value=[])
    return repository


@pytest.fixture
def mock_client(test_settings, clock, mock_repository):
    """TestClient с мок-репозиторием (без базы)"""
    app = create_app(settings=test_settings, repository=mock_repository, clock=clock)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Заголовки с валидным токеном"""
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def sample_payload():
    """Пример тела запроса от Bitaxe"""
    return {
        "miner_id": "bitaxe-01",
        "ts": 1_700_000_000,
        "temp": 55.2,
        "vrTemp": 61.0,
        "power": 14.8,
        "voltage": 5.1,
        "current": 2900,
        "hashRate": 512.3,
        "hashRate_1m": 505.1,
        "hashRate_10m": 498.7,
        "hashRate_1h": 500.2,
        "expectedHashrate": 520,
        "fanspeed": 48.5,
        "fanrpm": 3850,
        "frequency": 525,
        "coreVoltageActual": 1150,
        "errorPercentage": 0.4,
        "sharesAccepted": 1234,
        "sharesRejected": 3,
        "isUsingFallbackStratum": False,
        "responseTime": 42.5,
        "uptimeSeconds": 86400,
        "blockHeight": 880000,
        "version": "v2.4.1",
        "bestDiff": 4294967296,
        "bestSessionDiff": 12345678,
    }
