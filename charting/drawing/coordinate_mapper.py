"""
Интерфейс проекции координат графика в пиксели.

Реализацию предоставляет график-хост. Возврат None - нормальная ситуация
(точка вне видимой области), а не ошибка: вызывающий код просто пропускает
такую точку.
"""
from typing import Optional, Protocol, Tuple, runtime_checkable

from charting.data.models import Time
from charting.drawing.models import DomainPoint


@runtime_checkable
class CoordinateMapper(Protocol):
    """Начало координат - левый верхний угол поверхности, ось y направлена вниз."""

    @property
    def width(self) -> float:
        ...

    @property
    def height(self) -> float:
        ...

    def time_to_x(self, time: Time) -> Optional[float]:
        ...

    def price_to_y(self, price: float) -> Optional[float]:
        ...


def project_point(mapper: CoordinateMapper, point: DomainPoint) -> Optional[Tuple[float, float]]:
    """
    Проецирует точку в пиксели.

    Возвращает:
        (x, y) или None, если хотя бы одна координата вне видимой области.
    """
    try:
        x = mapper.time_to_x(point.time)
        y = mapper.price_to_y(point.price)
    except (TypeError, ValueError):
        return None
    if x is None or y is None:
        return None
    return float(x), float(y)
