"""
Экспоненциальная скользящая средняя (EMA).

Первое значение - простое среднее первых period элементов, далее
рекуррентная формула v[i] = (x[i] - v[i-1]) * k + v[i-1], k = 2 / (period + 1).
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from charting.data.models import Time


@dataclass(frozen=True)
class IndicatorPoint:
    """Значение индикатора, выровненное по времени свечи. None - недостаточно данных."""
    time: Time
    value: Optional[float]


def calculate_ema(series: Sequence[float], period: int) -> List[float]:
    """
    Рассчитывает EMA без выравнивания по времени.

    Параметры:
        series: Ряд значений (list, numpy array или pandas Series).
        period: Период EMA (>= 1).

    Возвращает:
        list[float]: len(series) - period + 1 значений; пустой список, если
        данных меньше периода.
    """
    values = np.asarray(series, dtype=float).tolist()
    if period < 1 or len(values) < period:
        return []

    multiplier = 2 / (period + 1)
    ema = [sum(values[:period]) / period]
    for value in values[period:]:
        ema.append((value - ema[-1]) * multiplier + ema[-1])
    return ema


def compute_ema(series: Sequence[float], times: Sequence[Time], period: int) -> List[IndicatorPoint]:
    """
    EMA, выровненная по times: первые period - 1 позиций равны None.

    Возвращает:
        list[IndicatorPoint]: Ровно len(times) точек.
    """
    ema = calculate_ema(series, period)
    offset = period - 1
    result = []
    for i, time in enumerate(times):
        j = i - offset
        value = ema[j] if 0 <= j < len(ema) else None
        result.append(IndicatorPoint(time=time, value=value))
    return result
