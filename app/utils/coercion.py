"""
Приведение произвольного JSON к фиксированной строке сэмпла.

Все функции чистые и никогда не бросают исключений: отсутствующее,
нечисловое или бесконечное значение превращается в None. Плохое
необязательное поле не отклоняет весь сэмпл.
"""
import math
from typing import Any, Callable, Dict, Mapping, Optional, Union

Number = Union[int, float]

# Диапазон колонок BigInteger (signed 64-bit)
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def _to_number(v: Any) -> Optional[Number]:
    """Числовое значение или None"""
    if v is None:
        return None

    # bool - подкласс int, кодируем как 0/1
    if isinstance(v, bool):
        return int(v)

    if isinstance(v, int):
        # Целые, не представимые как float, считаем бесконечностью
        try:
            float(v)
        except OverflowError:
            return None
        return v

    if isinstance(v, float):
        return v if math.isfinite(v) else None

    if isinstance(v, str):
        text = v.strip()
        if not text:
            return None
        try:
            n = float(text)
        except ValueError:
            return None
        return n if math.isfinite(n) else None

    return None


def to_float(v: Any) -> Optional[float]:
    """Число с плавающей точкой или None"""
    n = _to_number(v)
    return None if n is None else float(n)


def to_int(v: Any) -> Optional[int]:
    """Целое с отбрасыванием дробной части (к нулю) или None"""
    n = _to_number(v)
    if n is None:
        return None
    if not isinstance(n, int):
        n = math.trunc(n)
    return n if INT64_MIN <= n <= INT64_MAX else None


def to_str(v: Any) -> str:
    """Строковое представление; пустые/ложные значения дают пустую строку"""
    if v is None or v is False or v == "" or v == 0 or v == [] or v == {}:
        return ""
    if v is True:
        return "true"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def to_optional_str(v: Any) -> Optional[str]:
    """Строка или None для пустого значения"""
    return to_str(v) or None


def coerce_timestamp(v: Any, now: float) -> int:
    """
    Время сэмпла в unix-секундах.

    Принимается только настоящее конечное число (строки и bool - нет),
    помещающееся в 64 бита, иначе берется время сервера.
    """
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        n = _to_number(v)
        if n is not None:
            ts = math.floor(n)
            if INT64_MIN <= ts <= INT64_MAX:
                return ts
    return math.floor(now)


Coercer = Callable[[Any], Any]

# Поле -> функция приведения (ts и miner_id обрабатываются отдельно)
SAMPLE_FIELD_COERCERS: Dict[str, Coercer] = {
    # Датчики
    "temp": to_float,
    "vrTemp": to_float,
    "power": to_float,
    "voltage": to_float,
    "current": to_float,

    # Хэшрейт
    "hashRate": to_float,
    "hashRate_1m": to_float,
    "hashRate_10m": to_float,
    "hashRate_1h": to_float,
    "expectedHashrate": to_float,

    # Охлаждение
    "fanspeed": to_float,
    "fanrpm": to_int,

    # Конфигурация
    "frequency": to_int,
    "coreVoltageActual": to_int,

    # Шары
    "errorPercentage": to_float,
    "sharesAccepted": to_int,
    "sharesRejected": to_int,

    # Пул
    "isUsingFallbackStratum": to_int,
    "responseTime": to_float,

    # Система
    "uptimeSeconds": to_int,
    "blockHeight": to_int,
    "version": to_optional_str,

    # Сложность
    "bestDiff": to_int,
    "bestSessionDiff": to_int,
}


def extract_miner_id(payload: Mapping[str, Any]) -> str:
    """miner_id из тела запроса (пустая строка если нет)"""
    return to_str(payload.get("miner_id"))


def build_sample_row(payload: Mapping[str, Any], now: float) -> Dict[str, Any]:
    """
    Строка для вставки в таблицу сэмплов

    Args:
        payload: Разобранное JSON тело запроса
        now: Время сервера (unix-секунды) для ts по умолчанию

    Returns:
        Словарь со всеми колонками сэмпла
    """
    row: Dict[str, Any] = {
        "ts": coerce_timestamp(payload.get("ts"), now),
        "miner_id": extract_miner_id(payload),
    }
    for field, coerce in SAMPLE_FIELD_COERCERS.items():
        row[field] = coerce(payload.get(field))
    return row
