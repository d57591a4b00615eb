"""
Сборка индикаторов для вспомогательных панелей графика.

Индикаторы пересчитываются полностью при каждом обновлении данных.
"""
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from charting.config.config import CONFIG
from charting.data.models import Candle, to_datetime
from charting.indicators.macd import MACDConfig, calculate_macd
from charting.indicators.rsi import calculate_rsi


def build_indicator_frame(candles: Sequence[Candle], macd_config: Optional[MACDConfig] = None,
                          rsi_period: Optional[int] = None) -> pd.DataFrame:
    """
    Рассчитывает MACD и RSI для свечей.

    Параметры:
        candles: Свечи по возрастанию времени.
        macd_config: Периоды MACD (по умолчанию из CONFIG).
        rsi_period: Период RSI (по умолчанию из CONFIG).

    Возвращает:
        pd.DataFrame: Индекс - время свечи, колонки macd, signal, histogram, rsi.
        Пустые значения - NaN.
    """
    settings = CONFIG['INDICATORS']
    if macd_config is None:
        macd_config = MACDConfig(settings['MACD_FAST'], settings['MACD_SLOW'], settings['MACD_SIGNAL'])
    if rsi_period is None:
        rsi_period = settings['RSI_PERIOD']

    closes = [c.close for c in candles]
    times = [c.time for c in candles]

    macd = calculate_macd(closes, times, macd_config)
    rsi = calculate_rsi(closes, times, rsi_period)

    def nan_if_none(value):
        return np.nan if value is None else value

    frame = pd.DataFrame(
        {
            'macd': [nan_if_none(p.macd) for p in macd],
            'signal': [nan_if_none(p.signal) for p in macd],
            'histogram': [nan_if_none(p.histogram) for p in macd],
            'rsi': [nan_if_none(p.value) for p in rsi],
        },
        index=pd.DatetimeIndex([to_datetime(t) for t in times], name='timestamp'),
        dtype=float,
    )
    return frame
