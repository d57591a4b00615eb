"""
Интерфейс 2D-поверхности для отрисовки построений.

Координаты в пикселях, начало в левом верхнем углу. Поверхностью владеет
только DrawingRenderer: другие компоненты на ней не рисуют.
"""
from typing import Optional, Protocol, Sequence, Tuple

Pixel = Tuple[float, float]


class DrawingSurface(Protocol):

    @property
    def width(self) -> float:
        ...

    @property
    def height(self) -> float:
        ...

    def clear(self) -> None:
        """Очищает всю поверхность."""

    def line(self, x1: float, y1: float, x2: float, y2: float, color: str, width: float) -> None:
        ...

    def polygon(self, points: Sequence[Pixel], color: str, width: float,
                fill: Optional[str] = None) -> None:
        ...

    def circle(self, x: float, y: float, radius: float, color: str, width: float,
               fill: Optional[str] = None) -> None:
        ...

    def rectangle(self, x: float, y: float, width: float, height: float, color: str,
                  line_width: float, fill: Optional[str] = None) -> None:
        ...

    def text(self, x: float, y: float, text: str, color: str, size: float,
             background: Optional[str] = None, align: str = 'left') -> None:
        """Текст, выровненный по вертикали по центру относительно y."""

    def flush(self) -> None:
        """Выводит накопленные изменения (синхронно)."""
