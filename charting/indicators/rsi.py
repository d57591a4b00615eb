"""
Индекс относительной силы (RSI) со сглаживанием Уайлдера.
"""
import math
from typing import List, Sequence

import numpy as np
from loguru import logger

from charting.data.models import Time
from charting.indicators.ema import IndicatorPoint

# RS при нулевом среднем убытке. Фиксированное соглашение, дает RSI = 99.01.
ZERO_LOSS_RS = 100


def calculate_rsi(close: Sequence[float], times: Sequence[Time], period: int = 14) -> List[IndicatorPoint]:
    """
    Рассчитывает RSI.

    Параметры:
        close: Цены закрытия.
        times: Время каждой свечи.
        period: Период RSI.

    Возвращает:
        list[IndicatorPoint]: Ровно len(times) точек, значения округлены до
        2 знаков. Первые period позиций равны None; при нехватке данных
        (меньше period + 1 цен) все значения None.
    """
    prices = np.asarray(close, dtype=float).tolist()

    if period < 1:
        logger.debug(f"Некорректный период RSI: {period}")
        return [IndicatorPoint(time=time, value=None) for time in times]

    if len(prices) < period + 1:
        logger.debug(f"Недостаточно данных для RSI: {len(prices)} < {period + 1}")
        return [IndicatorPoint(time=time, value=None) for time in times]

    changes = [prices[i] - prices[i - 1] for i in range(1, len(prices))]

    avg_gain = 0.0
    avg_loss = 0.0
    for change in changes[:period]:
        if change > 0:
            avg_gain += change
        else:
            avg_loss += abs(change)
    avg_gain /= period
    avg_loss /= period

    values = [None] * period
    for i in range(period, len(prices)):
        change = changes[i - 1]
        gain = max(change, 0.0)
        loss = max(-change, 0.0)
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

        rs = ZERO_LOSS_RS if avg_loss == 0 else avg_gain / avg_loss
        rsi = 100 - (100 / (1 + rs))
        values.append(math.floor(rsi * 100 + 0.5) / 100)

    return [
        IndicatorPoint(time=time, value=values[i] if i < len(values) else None)
        for i, time in enumerate(times)
    ]
