"""
Расчеты для графиков.

Содержит функции для расчета ширины свечей и подготовки данных для отрисовки.
"""

import numpy as np
from matplotlib.dates import date2num

from charting.data.models import to_datetime
from gui.ui_config import UIConfig

# Минут в свече для каждого таймфрейма
TIMEFRAME_MINUTES = {
    '1m': 1, '5m': 5, '15m': 15,
    '1h': 60, '4h': 240, '1d': 1440,
}


def calculate_candle_width(timeframe_code, df):
    """
    Рассчитывает ширину свечи в днях для корректного отображения.
    """
    if len(df) > 1:
        time_diffs = df.index.to_series().diff().dropna()
        if len(time_diffs) > 0:
            avg_time_diff = time_diffs.mean()
            return avg_time_diff.total_seconds() / 86400.0 * 0.7

    minutes = TIMEFRAME_MINUTES.get(timeframe_code)
    if minutes is None:
        return 0.6
    return minutes / 60.0 / 24.0 * 0.7


def prepare_plot_payload(df, timeframe_code):
    """
    Готовит массивы данных для отрисовки свечей.

    Параметры:
        df: DataFrame с колонками Open, High, Low, Close, Volume и индексом по времени.
        timeframe_code: Код таймфрейма.
    """
    width_days = calculate_candle_width(timeframe_code, df)
    timestamps = np.array([date2num(ts) for ts in df.index])
    opens = df['Open'].astype(float).values
    closes = df['Close'].astype(float).values
    highs = df['High'].astype(float).values
    lows = df['Low'].astype(float).values

    colors = np.where(closes >= opens, UIConfig.CANDLE_BULLISH_COLOR, UIConfig.CANDLE_BEARISH_COLOR)

    return {
        'timestamps': timestamps,
        'opens': opens,
        'closes': closes,
        'highs': highs,
        'lows': lows,
        'colors': colors,
        'width_days': width_days
    }


def find_candle_index(timestamps, x_value, width_days):
    """
    Находит свечу под курсором.

    Параметры:
        timestamps: Отсортированные координаты свечей (date2num).
        x_value: Координата курсора по оси X.
        width_days: Ширина свечи в днях.

    Возвращает:
        int или None, если ближайшая свеча дальше ширины свечи.
    """
    if len(timestamps) == 0:
        return None
    position = int(np.searchsorted(timestamps, x_value))
    candidates = [i for i in (position - 1, position) if 0 <= i < len(timestamps)]
    nearest = min(candidates, key=lambda i: abs(timestamps[i] - x_value))
    if abs(timestamps[nearest] - x_value) > width_days:
        return None
    return nearest


def format_candle_info(candle):
    """Текст всплывающей подсказки: время и OHLC свечи."""
    dt = to_datetime(candle.time)
    time_text = dt.strftime('%d.%m.%Y %H:%M') if dt is not None else str(candle.time)

    def price(value):
        return f"{value:,.2f}".replace(",", " ")

    return (
        f"{time_text}\n"
        f"O: {price(candle.open)}  H: {price(candle.high)}\n"
        f"L: {price(candle.low)}  C: {price(candle.close)}"
    )
