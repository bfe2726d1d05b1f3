from typing import Callable, Dict, Optional
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
import uvicorn

from app.api.v1.telemetry import router as telemetry_router
from app.lifespan import lifespan
from app.models.database import create_engine_from_settings, create_session_factory
from app.schemas.models import HealthResponse
from app.services.auth_service import IngestAuth
from app.services.database_service import SampleRepository
from app.services.sample_service import SampleService
from app.utils.config import Settings, get_settings
from app.utils.constants import (
    API_VERSION,
    SERVICE_SLUG,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_HEADERS,
    CORS_MAX_AGE,
    ERROR_NOT_FOUND,
)
from app.utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def cors_headers(origin: Optional[str]) -> Dict[str, str]:
    """CORS заголовки: отражаем Origin запроса или '*'"""
    return {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Max-Age": CORS_MAX_AGE,
    }


# ========== Middleware для CORS ==========
class CORSHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        headers = cors_headers(request.headers.get("Origin"))

        # Preflight для любого пути
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Неизвестный путь или метод -> 404 {"error": "Not found"}"""
    if exc.status_code in (404, 405):
        return JSONResponse({"error": ERROR_NOT_FOUND}, status_code=404)
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


def create_app(
        settings: Optional[Settings] = None,
        repository: Optional[SampleRepository] = None,
        clock: Optional[Callable[[], float]] = None
) -> FastAPI:
    """
    Фабрика приложения

    Args:
        settings: Настройки (по умолчанию из окружения)
        repository: Репозиторий сэмплов (по умолчанию SQLAlchemy по settings)
        clock: Источник времени в unix-секундах (по умолчанию time.time)
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.service_name,
        version=API_VERSION,
        description="Прием и выдача телеметрии майнеров",
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    engine = None
    if repository is None:
        engine = create_engine_from_settings(settings)
        repository = SampleRepository(create_session_factory(engine))

    app.state.settings = settings
    app.state.engine = engine
    app.state.sample_service = SampleService(
        repository=repository,
        auth=IngestAuth(settings.ingest_token),
        clock=clock or time.time,
        default_hours=settings.range_default_hours,
        max_hours=settings.range_max_hours
    )

    app.add_middleware(CORSHeadersMiddleware)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    app.include_router(telemetry_router)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Базовая проверка здоровья сервиса"""
        return {
            "status": "healthy",
            "service": SERVICE_SLUG,
            "version": API_VERSION,
            "timestamp": time.time()
        }

    logger.info(f"{settings.service_name} {API_VERSION} сконфигурирован")
    return app


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info"
    )
