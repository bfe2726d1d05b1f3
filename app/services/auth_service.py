"""
Сервис для авторизации приема телеметрии
"""
from typing import Optional

from app.utils.constants import BEARER_PREFIX
from app.utils.logging_config import StructuredLogger

logger = StructuredLogger("auth")


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Токен из заголовка 'Authorization: Bearer <token>' (пустая строка если нет)"""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return ""
    return authorization[len(BEARER_PREFIX):]


class IngestAuth:
    """Проверка общего секрета для /ingest"""

    def __init__(self, ingest_token: str):
        self.ingest_token = ingest_token

        if not ingest_token:
            logger.warning(
                "Токен приема телеметрии не задан, /ingest будет отклонять все запросы",
                event="auth_token_missing"
            )

    def is_authorized(self, authorization: Optional[str]) -> bool:
        """
        Проверка заголовка Authorization

        Args:
            authorization: Значение заголовка (может отсутствовать)

        Returns:
            True если токен непустой и совпадает с настроенным
        """
        token = extract_bearer_token(authorization)

        # Обычное сравнение строк, без constant-time
        authorized = bool(token) and bool(self.ingest_token) and token == self.ingest_token

        if not authorized:
            logger.debug(
                "Неверный или отсутствующий токен",
                event="auth_rejected",
                has_header=authorization is not None,
                has_bearer=bool(token)
            )
        return authorized
