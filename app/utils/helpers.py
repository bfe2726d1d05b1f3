import math
import re
import time
from typing import Optional

from app.utils.constants import DEFAULT_RANGE_HOURS, MIN_RANGE_HOURS, MAX_RANGE_HOURS

# Ведущее целое число, как у parseInt(x, 10)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def unix_now(now: Optional[float] = None) -> int:
    """Текущее время в unix-секундах (с округлением вниз)"""
    if now is None:
        now = time.time()
    return math.floor(now)


def clamp(value: int, lower: int, upper: int) -> int:
    """Ограничивает значение диапазоном [lower, upper]"""
    return max(lower, min(upper, value))


def parse_int_prefix(raw: Optional[str]) -> Optional[int]:
    """
    Разбор строки как целого в десятичной системе.

    Берется ведущее целое число ("12h" -> 12, "3.7" -> 3), остаток
    строки игнорируется. Если числа в начале нет - возвращается None.
    """
    if raw is None:
        return None

    match = _LEADING_INT_RE.match(raw)
    if not match:
        return None
    return int(match.group(1))


def parse_hours(
        raw: Optional[str],
        default: int = DEFAULT_RANGE_HOURS,
        max_hours: int = MAX_RANGE_HOURS
) -> int:
    """
    Количество часов для запроса диапазона

    Args:
        raw: Значение query параметра hours (может отсутствовать)
        default: Значение по умолчанию для пустого/нечислового ввода
        max_hours: Верхняя граница

    Returns:
        Часы в диапазоне [1, max_hours]
    """
    hours = parse_int_prefix(raw or None)
    if hours is None:
        hours = default
    return clamp(hours, MIN_RANGE_HOURS, max_hours)
