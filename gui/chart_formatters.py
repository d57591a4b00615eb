"""
Форматирование осей графика.

Содержит функции для форматирования осей X и Y и оформления панелей.
"""

from matplotlib.ticker import FuncFormatter
from matplotlib.dates import DateFormatter, AutoDateLocator

from gui.ui_config import UIConfig


def apply_price_formatter(axis):
    """
    Настраивает форматирование оси Y для отображения полных цен.
    """
    if axis is None:
        return
    axis.ticklabel_format(style='plain', axis='y', useOffset=False)

    def price_formatter(value, _):
        return f"{value:,.2f}".replace(",", " ")

    axis.yaxis.set_major_formatter(FuncFormatter(price_formatter))


def apply_time_axis_formatting(axis, timeframe_code):
    """
    Применяет форматирование оси X в зависимости от таймфрейма.
    """
    if timeframe_code in ('1d', '1D'):
        date_format = DateFormatter('%d %b')
        locator = AutoDateLocator(maxticks=12)
    elif timeframe_code in ('1h', '4h'):
        date_format = DateFormatter('%d.%m %H:%M')
        locator = AutoDateLocator(maxticks=15)
    else:
        date_format = DateFormatter('%H:%M')
        locator = AutoDateLocator(maxticks=20)

    axis.xaxis.set_major_locator(locator)
    axis.xaxis.set_major_formatter(date_format)


def style_axes(axis, ylabel=None):
    """
    Оформляет панель в темной теме: фон, рамка, подписи справа.
    """
    axis.set_facecolor(UIConfig.CHART_BACKGROUND_COLOR)
    for spine in axis.spines.values():
        spine.set_color(UIConfig.CHART_GRID_COLOR)
    axis.tick_params(axis='both', colors=UIConfig.CHART_TEXT_COLOR, labelsize=UIConfig.FONT_SIZE_SMALL - 2)
    axis.grid(True, color=UIConfig.CHART_GRID_COLOR, alpha=0.5)
    axis.yaxis.tick_right()
    axis.yaxis.set_label_position('right')
    if ylabel:
        axis.set_ylabel(ylabel, color=UIConfig.CHART_TEXT_COLOR)
