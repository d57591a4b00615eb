"""
Отрисовка графиков.

Содержит функции для отрисовки свечей и панелей индикаторов MACD и RSI.
"""

import numpy as np
from matplotlib.dates import date2num
from matplotlib.patches import Rectangle
from loguru import logger

from charting.config.config import CONFIG
from gui.ui_config import UIConfig


def draw_price(ax_price, payload):
    """
    Отрисовывает свечной график вручную.
    """
    timestamps = payload['timestamps']
    opens = payload['opens']
    closes = payload['closes']
    highs = payload['highs']
    lows = payload['lows']
    colors = payload['colors']
    width_days = payload['width_days']

    if len(timestamps) == 0:
        logger.warning("Нет свечей для отрисовки")
        return

    for idx, ts in enumerate(timestamps):
        ax_price.plot(
            [ts, ts],
            [lows[idx], highs[idx]],
            color=colors[idx],
            linewidth=0.5,
            alpha=0.8
        )

    for idx, ts in enumerate(timestamps):
        body_bottom = min(opens[idx], closes[idx])
        body_height = abs(closes[idx] - opens[idx])
        if body_height == 0:
            body_height = (highs[idx] - lows[idx]) * 0.1
            if body_height == 0:
                body_height = (highs.max() - lows.min()) * 0.001
        x_pos = ts - width_days / 2
        candle = Rectangle(
            (x_pos, body_bottom),
            width_days,
            body_height,
            facecolor=colors[idx],
            edgecolor=colors[idx],
            linewidth=0.5
        )
        ax_price.add_patch(candle)

    future_space = width_days * 10
    ax_price.set_xlim(timestamps[0] - width_days, timestamps[-1] + future_space)
    ax_price.set_ylim(lows.min() * 0.99, highs.max() * 1.01)


def _x_values(frame):
    return np.array([date2num(ts) for ts in frame.index])


def draw_macd(ax_macd, frame, width_days):
    """
    Отрисовывает панель MACD: линия MACD, сигнальная линия и гистограмма.

    Параметры:
        ax_macd: Ось панели MACD.
        frame: DataFrame индикаторов (колонки macd, signal, histogram).
        width_days: Ширина столбца гистограммы в днях.
    """
    defined = frame.dropna(subset=['macd'])
    if defined.empty:
        logger.debug("MACD не рассчитан: недостаточно данных")
        return

    histogram = frame['histogram'].dropna()
    if not histogram.empty:
        colors = np.where(
            histogram.values >= 0,
            UIConfig.MACD_HISTOGRAM_POSITIVE_COLOR,
            UIConfig.MACD_HISTOGRAM_NEGATIVE_COLOR,
        )
        ax_macd.bar(_x_values(histogram), histogram.values, width=width_days, color=colors, alpha=0.6)

    ax_macd.plot(_x_values(defined), defined['macd'].values,
                 color=UIConfig.MACD_LINE_COLOR, linewidth=1.2, label='MACD')

    signal = frame['signal'].dropna()
    if not signal.empty:
        ax_macd.plot(_x_values(signal), signal.values,
                     color=UIConfig.MACD_SIGNAL_COLOR, linewidth=1.2, label='Signal')

    ax_macd.axhline(0, color=UIConfig.CHART_GRID_COLOR, linewidth=0.8)


def draw_rsi(ax_rsi, frame):
    """
    Отрисовывает панель RSI с уровнями перекупленности и перепроданности.
    """
    settings = CONFIG['INDICATORS']
    ax_rsi.set_ylim(0, 100)
    ax_rsi.axhline(settings['RSI_OVERBOUGHT'], color=UIConfig.RSI_LEVEL_COLOR, linewidth=0.8, linestyle='--')
    ax_rsi.axhline(settings['RSI_OVERSOLD'], color=UIConfig.RSI_LEVEL_COLOR, linewidth=0.8, linestyle='--')

    rsi = frame['rsi'].dropna()
    if rsi.empty:
        logger.debug("RSI не рассчитан: недостаточно данных")
        return

    ax_rsi.plot(_x_values(rsi), rsi.values, color=UIConfig.RSI_LINE_COLOR, linewidth=1.2, label='RSI')
    logger.debug(f"RSI отрисован: {len(rsi)} точек")
