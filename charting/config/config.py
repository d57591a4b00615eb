import os
from dotenv import load_dotenv
from loguru import logger

# Загрузка переменных окружения из файла .env
try:
    load_dotenv()
except Exception as e:
    logger.error(f"Ошибка при загрузке переменных окружения: {e}")


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_float(name, default):
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Некорректное значение {name}={value!r}, используем {default}")
        return default


CONFIG = {
    'API': {
        'BASE_URL': os.getenv('CHART_API_URL', 'http://localhost:3003'),
        'TIMEOUT': _env_float('CHART_API_TIMEOUT', 15.0),  # секунды
        'TOKEN': os.getenv('CHART_API_TOKEN'),
    },
    # Параметры графика по умолчанию
    'CHART': {
        'SYMBOL': os.getenv('CHART_SYMBOL', 'BTCUSDT'),
        'TIMEFRAME': os.getenv('CHART_TIMEFRAME', '1h'),
        'USE_REAL_DATA': _env_bool('CHART_USE_REAL_DATA', False),
    },
    # Параметры индикаторов
    'INDICATORS': {
        'MACD_FAST': 12,
        'MACD_SLOW': 26,
        'MACD_SIGNAL': 9,
        'RSI_PERIOD': 14,
        'RSI_OVERBOUGHT': 70,
        'RSI_OVERSOLD': 30,
    }
}
