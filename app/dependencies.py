"""
Зависимости для FastAPI Depends.

Все объекты создаются в create_app() и лежат в app.state,
глобального состояния нет.
"""
from fastapi import Request

from app.services.sample_service import SampleService


def get_sample_service(request: Request) -> SampleService:
    return request.app.state.sample_service


__all__ = [
    "get_sample_service"
]
