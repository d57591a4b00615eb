"""
Загрузка свечей с бэкенда анализа монет.

Эндпоинт /coin-analysis возвращает все свечи; фильтрация по символу и
интервалу выполняется на стороне клиента.
"""
from datetime import datetime, timezone
from typing import List

from loguru import logger

from charting.api.api_client import ApiClient
from charting.data.models import Candle, to_epoch_seconds
from charting.exceptions import ApiError

COIN_ANALYSIS_ENDPOINT = '/coin-analysis'


def parse_candle(raw: dict, interval: str) -> Candle:
    """
    Преобразует запись бэкенда в свечу.

    Параметры:
        raw: Словарь с полями openTime (мс), open, high, low, close, volume.
        interval: Таймфрейм. Для '1d' время - дата 'YYYY-MM-DD',
            для остальных - секунды epoch.
    """
    open_time_ms = int(raw['openTime'])
    if interval == '1d':
        time = datetime.fromtimestamp(open_time_ms / 1000, tz=timezone.utc).strftime('%Y-%m-%d')
    else:
        time = open_time_ms // 1000

    return Candle(
        time=time,
        open=float(raw['open']),
        high=float(raw['high']),
        low=float(raw['low']),
        close=float(raw['close']),
        volume=float(raw.get('volume') or 0),
    )


def fetch_candles(client: ApiClient, symbol: str = 'BTCUSDT', interval: str = '1h') -> List[Candle]:
    """
    Получает свечи для символа и интервала.

    Параметры:
        client: HTTP-клиент бэкенда.
        symbol: Торговая пара (например, 'BTCUSDT').
        interval: Таймфрейм ('1h', '4h', '1d', ...).

    Возвращает:
        list[Candle]: Свечи, отсортированные по возрастанию времени.

    Исключения:
        ApiError: Ошибка запроса или ответ без признака успеха.
    """
    response = client.get(COIN_ANALYSIS_ENDPOINT)
    payload = response.data

    if not isinstance(payload, dict) or not payload.get('success') or payload.get('statusCode') != 200:
        status = payload.get('statusCode') if isinstance(payload, dict) else response.status
        raise ApiError(f"API returned error: {status}", status=status, data=payload)

    records = [
        item for item in payload.get('data') or []
        if item.get('symbol') == symbol and item.get('interval') == interval
    ]
    logger.info(f"Загружено {len(records)} свечей {symbol} {interval} с бэкенда")

    candles = [parse_candle(item, interval) for item in records]
    candles.sort(key=lambda c: to_epoch_seconds(c.time) or 0)
    return candles


def get_available_symbols(client: ApiClient) -> List[str]:
    """Список символов, для которых бэкенд хранит свечи."""
    response = client.get(COIN_ANALYSIS_ENDPOINT)
    payload = response.data
    if not isinstance(payload, dict) or not payload.get('success'):
        raise ApiError("API returned error", status=response.status, data=payload)
    return sorted({item.get('symbol') for item in payload.get('data') or [] if item.get('symbol')})
