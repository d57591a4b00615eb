"""
MACD (Moving Average Convergence Divergence).

MACD = EMA(fast) - EMA(slow)
Сигнальная линия = EMA(signal) от MACD
Гистограмма = MACD - сигнальная линия
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from charting.data.models import Time
from charting.indicators.ema import calculate_ema


@dataclass(frozen=True)
class MACDConfig:
    fast: int = 12
    slow: int = 26
    signal: int = 9


@dataclass(frozen=True)
class MACDPoint:
    time: Time
    macd: Optional[float]
    signal: Optional[float]
    histogram: Optional[float]


def _empty(times: Sequence[Time]) -> List[MACDPoint]:
    return [MACDPoint(time=time, macd=None, signal=None, histogram=None) for time in times]


def calculate_macd(close: Sequence[float], times: Sequence[Time],
                   config: Optional[MACDConfig] = None) -> List[MACDPoint]:
    """
    Рассчитывает MACD, сигнальную линию и гистограмму.

    Параметры:
        close: Цены закрытия.
        times: Время каждой свечи (той же длины, что и close).
        config: Периоды fast/slow/signal (по умолчанию 12/26/9).

    Возвращает:
        list[MACDPoint]: Ровно len(times) точек. Позиции до slow - 1 пустые;
        при нехватке данных все значения None.
    """
    config = config or MACDConfig()
    fast, slow, signal = config.fast, config.slow, config.signal

    if min(fast, slow, signal) < 1:
        logger.debug(f"Некорректные периоды MACD: {fast}/{slow}/{signal}")
        return _empty(times)

    if len(close) < slow:
        logger.debug(f"Недостаточно данных для MACD: {len(close)} < {slow}")
        return _empty(times)

    fast_ema = calculate_ema(close, fast)
    slow_ema = calculate_ema(close, slow)

    # Значения MACD выровнены по началу быстрой EMA со смещением fast - 1.
    offset = fast - 1
    length = min(len(slow_ema), len(fast_ema) - offset)
    macd_line = [fast_ema[i + offset] - slow_ema[i] for i in range(length)]
    signal_line = calculate_ema(macd_line, signal)

    start_index = slow - 1
    result = []
    for i, time in enumerate(times):
        macd_index = i - start_index
        if macd_index < 0 or macd_index >= len(macd_line):
            result.append(MACDPoint(time=time, macd=None, signal=None, histogram=None))
            continue

        macd_value = macd_line[macd_index]
        signal_index = macd_index - (signal - 1)
        signal_value = signal_line[signal_index] if 0 <= signal_index < len(signal_line) else None
        histogram = macd_value - signal_value if signal_value is not None else None

        result.append(MACDPoint(time=time, macd=macd_value, signal=signal_value, histogram=histogram))

    return result
