"""
Константы для всего приложения
"""

# ========== СЕРВИС ==========
SERVICE_SLUG = "miner-telemetry-api"
API_VERSION = "1.0.0"

# ========== ТАБЛИЦА СЭМПЛОВ ==========
SAMPLES_TABLE = "bitaxe_samples"

# Полный набор колонок сэмпла (порядок как в таблице, без суррогатного id)
SAMPLE_COLUMNS = (
    "ts", "miner_id",
    "temp", "vrTemp", "power", "voltage", "current",
    "hashRate", "hashRate_1m", "hashRate_10m", "hashRate_1h", "expectedHashrate",
    "fanspeed", "fanrpm",
    "frequency", "coreVoltageActual",
    "errorPercentage", "sharesAccepted", "sharesRejected",
    "isUsingFallbackStratum", "responseTime",
    "uptimeSeconds", "blockHeight", "version",
    "bestDiff", "bestSessionDiff",
)

# Сокращенный набор колонок для /range
RANGE_COLUMNS = (
    "ts", "temp", "vrTemp", "power", "hashRate_1m", "fanrpm", "errorPercentage", "bestDiff",
)

# ========== ВРЕМЕННЫЕ ИНТЕРВАЛЫ ==========
SECONDS_PER_HOUR = 3600
DEFAULT_RANGE_HOURS = 24
MIN_RANGE_HOURS = 1
MAX_RANGE_HOURS = 24 * 90  # 90 дней

# ========== CORS ==========
CORS_ALLOW_METHODS = "GET,POST,OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization"
CORS_MAX_AGE = "86400"  # 24 часа

# ========== АВТОРИЗАЦИЯ ==========
BEARER_PREFIX = "Bearer "

# ========== СООБЩЕНИЯ ОБ ОШИБКАХ ==========
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_MINER_ID_REQUIRED = "miner_id required"
ERROR_NOT_FOUND = "Not found"
