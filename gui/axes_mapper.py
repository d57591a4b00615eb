"""
Проекция координат графика matplotlib в пиксели оверлея.

Ось X ценовой панели хранит даты в формате matplotlib (date2num).
Пиксели отсчитываются от левого верхнего угла фигуры.
"""
import math
from typing import Optional

from matplotlib.dates import date2num

from charting.data.models import Time, to_datetime


class AxesCoordinateMapper:
    """
    Реализация CoordinateMapper поверх matplotlib Axes.

    Для точек вне текущих пределов осей возвращает None.
    """

    def __init__(self, axes):
        """
        Параметры:
            axes: Ценовая панель (matplotlib Axes) с датами по оси X.
        """
        self.axes = axes

    @property
    def figure(self):
        return self.axes.figure

    @property
    def width(self) -> float:
        return float(self.figure.bbox.width)

    @property
    def height(self) -> float:
        return float(self.figure.bbox.height)

    def time_to_x(self, time: Time) -> Optional[float]:
        dt = to_datetime(time)
        if dt is None:
            return None
        x_value = date2num(dt)
        x_min, x_max = sorted(self.axes.get_xlim())
        if not x_min <= x_value <= x_max:
            return None
        y_ref = self.axes.get_ylim()[0]
        display_x, _ = self.axes.transData.transform((x_value, y_ref))
        return float(display_x)

    def price_to_y(self, price: float) -> Optional[float]:
        if price is None or not math.isfinite(price):
            return None
        y_min, y_max = sorted(self.axes.get_ylim())
        if not y_min <= price <= y_max:
            return None
        x_ref = self.axes.get_xlim()[0]
        _, display_y = self.axes.transData.transform((x_ref, price))
        return self.height - float(display_y)

    def pixel_to_domain(self, display_x: float, display_y: float):
        """
        Обратная проекция координат события matplotlib (от левого нижнего угла).

        Возвращает:
            (date_num, price) или None, если точка вне ценовой панели.
        """
        if not self.axes.contains_point((display_x, display_y)):
            return None
        x_value, price = self.axes.transData.inverted().transform((display_x, display_y))
        return float(x_value), float(price)
