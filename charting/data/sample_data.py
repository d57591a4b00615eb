"""
Генерация тестовых свечей.

Используется, когда реальные данные недоступны (нет бэкенда или ошибка запроса).
Случайное блуждание с небольшим смещением вверх, волатильность зависит от таймфрейма.
"""
from datetime import datetime, timezone
from typing import List, Optional

import numpy as np
from loguru import logger

from charting.data.models import Candle

# Таймфрейм -> (минут в свече, количество свечей, волатильность)
TIMEFRAME_SETTINGS = {
    '1m': (1, 500, 0.001),
    '5m': (5, 400, 0.003),
    '15m': (15, 300, 0.005),
    '1h': (60, 250, 0.01),
    '4h': (240, 200, 0.02),
    '1d': (1440, 180, 0.03),
}

BASE_PRICE = 45000.0
START_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def generate_sample_candles(timeframe: str = '1h', seed: Optional[int] = None) -> List[Candle]:
    """
    Генерирует ряд свечей для указанного таймфрейма.

    Параметры:
        timeframe: Код таймфрейма ('1m', '5m', '15m', '1h', '4h', '1d').
        seed: Зерно генератора случайных чисел для воспроизводимости.

    Возвращает:
        list[Candle]: Свечи по возрастанию времени. Для '1d' время задается
        строкой даты, для остальных таймфреймов - секундами epoch.
    """
    if timeframe not in TIMEFRAME_SETTINGS:
        logger.warning(f"Неизвестный таймфрейм {timeframe}, используем 1h")
        timeframe = '1h'

    minutes, count, base_volatility = TIMEFRAME_SETTINGS[timeframe]
    rng = np.random.default_rng(seed)
    start = int(START_TIME.timestamp())

    candles = []
    current_price = BASE_PRICE
    for i in range(count):
        timestamp = start + i * minutes * 60
        if timeframe == '1d':
            time = datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime('%Y-%m-%d')
        else:
            time = timestamp

        volatility = base_volatility + rng.random() * base_volatility
        trend = (rng.random() - 0.48) * 0.01

        open_price = current_price * (1 + (rng.random() - 0.5) * 0.002)
        close_change = trend + (rng.random() - 0.5) * volatility
        close_price = open_price * (1 + close_change)

        max_change = abs(close_change) + volatility * 0.5
        high = max(open_price, close_price) * (1 + rng.random() * max_change)
        low = min(open_price, close_price) * (1 - rng.random() * max_change)
        volume = 100 + rng.random() * 900

        candles.append(Candle(
            time=time,
            open=float(open_price),
            high=float(high),
            low=float(low),
            close=float(close_price),
            volume=float(volume),
        ))
        current_price = close_price

    logger.debug(f"Сгенерировано {len(candles)} тестовых свечей для {timeframe}")
    return candles
