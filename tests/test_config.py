"""
Тесты настроек и логирования
"""
import json
import logging

from app.utils.config import Settings
from app.utils.logging_config import JSONFormatter, StructuredLogger, setup_logging


class TestSettings:
    """Тесты Settings"""

    def test_assembled_database_url(self):
        settings = Settings(
            ingest_token="t",
            db_host="db.internal",
            db_port=5432,
            db_name="telemetry",
            db_user="writer",
            db_password="pw",
        )

        assert settings.async_database_url == "postgresql+asyncpg://writer:pw@db.internal:5432/telemetry"

    def test_database_url_override(self):
        settings = Settings(ingest_token="t", database_url="sqlite+aiosqlite:///./local.db")

        assert settings.async_database_url == "sqlite+aiosqlite:///./local.db"

    def test_range_defaults(self):
        settings = Settings(ingest_token="t")

        assert settings.range_default_hours == 24
        assert settings.range_max_hours == 2160

    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("INGEST_TOKEN", "from-env")

        assert Settings().ingest_token == "from-env"


class TestLogging:
    """Тесты конфигурации логирования"""

    def test_json_formatter_includes_extra(self):
        record = logging.LogRecord("samples", logging.INFO, __file__, 10, "Сэмпл принят", None, None)
        record.event = "sample_ingested"
        record.miner_id = "m1"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Сэмпл принят"
        assert data["level"] == "INFO"
        assert data["event"] == "sample_ingested"
        assert data["miner_id"] == "m1"
        assert "args" not in data

    def test_structured_logger_extra(self, caplog):
        logger = StructuredLogger("samples-test")

        with caplog.at_level(logging.INFO, logger="samples-test"):
            logger.sample_ingested("m1", 1000)

        record = caplog.records[-1]
        assert record.event == "sample_ingested"
        assert record.miner_id == "m1"
        assert record.ts == 1000

    def test_setup_logging_writes_files(self, tmp_path):
        settings = Settings(ingest_token="t", log_dir=str(tmp_path / "logs"), log_to_file=True)

        root = setup_logging(settings)
        try:
            logging.getLogger("check").warning("проверка")
            for handler in root.handlers:
                handler.flush()

            assert (tmp_path / "logs" / "telemetry_api.log").exists()
            assert (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
        finally:
            for handler in list(root.handlers):
                if isinstance(handler, logging.FileHandler):
                    handler.close()
                    root.removeHandler(handler)
