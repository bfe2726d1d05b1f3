from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.dependencies import get_sample_service
from app.schemas.models import ErrorResponse, IngestResponse, LatestResponse, RangeResponse
from app.services.sample_service import HandlerResult, SampleService
from app.utils.logging_config import StructuredLogger

logger = StructuredLogger("api")

router = APIRouter(tags=["telemetry"])

_MINER_ID_ERRORS = {400: {"model": ErrorResponse, "description": "miner_id не передан"}}


async def respond(request: Request, handler: Callable[[], Awaitable[HandlerResult]]) -> JSONResponse:
    """
    Единая граница ошибок: результат обработчика -> JSON ответ.

    Любое исключение (битый JSON, ошибка базы) превращается в 500.
    """
    try:
        result = await handler()
    except Exception as e:
        logger.request_failed(request.method, request.url.path, e)
        return JSONResponse({"error": str(e) or type(e).__name__}, status_code=500)

    return JSONResponse(result.payload, status_code=result.status_code)


@router.post(
    "/ingest",
    summary="Прием сэмпла телеметрии",
    response_model=IngestResponse,
    responses={
        400: {"model": ErrorResponse, "description": "miner_id не передан"},
        401: {"model": ErrorResponse, "description": "Неверный токен"},
        500: {"model": ErrorResponse, "description": "Битый JSON или ошибка базы"},
    }
)
async def ingest(
        request: Request,
        service: SampleService = Depends(get_sample_service)
):
    """
    Запись одного сэмпла от майнера.

    - **Authorization**: `Bearer <token>` (обязательно)
    - **miner_id**: идентификатор майнера (обязательно)
    - **ts**: unix-время сэмпла (по умолчанию время сервера)

    Нечисловые метрики сохраняются как null, запрос при этом не отклоняется.
    """
    return await respond(
        request,
        lambda: service.ingest(request.headers.get("Authorization"), request.json)
    )


@router.get(
    "/latest",
    summary="Последний сэмпл майнера",
    response_model=LatestResponse,
    responses=_MINER_ID_ERRORS
)
async def latest(
        request: Request,
        miner_id: Optional[str] = None,
        service: SampleService = Depends(get_sample_service)
):
    """
    Сэмпл с максимальным ts. Для неизвестного майнера sample = null (не 404).
    """
    return await respond(request, lambda: service.latest(miner_id))


@router.get(
    "/range",
    summary="Сэмплы майнера за период",
    response_model=RangeResponse,
    responses=_MINER_ID_ERRORS
)
async def samples_range(
        request: Request,
        miner_id: Optional[str] = None,
        hours: Optional[str] = None,
        service: SampleService = Depends(get_sample_service)
):
    """
    Сокращенные сэмплы за последние часы, по возрастанию ts.

    - **miner_id**: идентификатор майнера (обязательно)
    - **hours**: размер окна (по умолчанию 24, от 1 до 2160)
    """
    return await respond(request, lambda: service.range(miner_id, hours))
