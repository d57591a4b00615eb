"""
Поверхность рисования на основе matplotlib.

Поверх всех панелей фигуры создается прозрачная ось на всю фигуру с
пиксельной системой координат (начало в левом верхнем углу). Артисты
получают возрастающий zorder, чтобы порядок вызовов совпадал с порядком
наложения.
"""
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Polygon, Rectangle
from loguru import logger

from charting.exceptions import SurfaceUnavailableError
from gui.ui_config import UIConfig

OVERLAY_LABEL = 'drawing-overlay'
LABEL_PADDING = 4


class MatplotlibSurface:
    """
    Реализация DrawingSurface на прозрачной оси matplotlib.
    """

    def __init__(self, figure, overlay_axes):
        self.figure = figure
        self.ax = overlay_axes
        self._artists = []
        self._zorder = 0
        self.sync_size()

    @classmethod
    def create(cls, figure) -> 'MatplotlibSurface':
        """
        Создает оверлей на фигуре.

        Исключения:
            SurfaceUnavailableError: Нет фигуры или canvas.
        """
        if figure is None or getattr(figure, 'canvas', None) is None:
            raise SurfaceUnavailableError()

        overlay_axes = figure.add_axes([0, 0, 1, 1], label=OVERLAY_LABEL,
                                       zorder=UIConfig.DRAWING_OVERLAY_ZORDER)
        overlay_axes.set_axis_off()
        overlay_axes.patch.set_alpha(0)
        overlay_axes.set_navigate(False)
        return cls(figure, overlay_axes)

    @property
    def width(self) -> float:
        return float(self.figure.bbox.width)

    @property
    def height(self) -> float:
        return float(self.figure.bbox.height)

    def sync_size(self):
        """Приводит пределы оси к текущему размеру фигуры в пикселях."""
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)

    def _next_zorder(self):
        self._zorder += 1
        return self._zorder

    def _add_patch(self, patch):
        self.ax.add_patch(patch)
        self._artists.append(patch)

    def clear(self):
        for artist in self._artists:
            artist.remove()
        self._artists = []
        self._zorder = 0

    def line(self, x1, y1, x2, y2, color, width):
        line = Line2D([x1, x2], [y1, y2], color=color, linewidth=width,
                      solid_capstyle='round', solid_joinstyle='round', zorder=self._next_zorder())
        self.ax.add_line(line)
        self._artists.append(line)

    def polygon(self, points, color, width, fill=None):
        self._add_patch(Polygon(
            list(points), closed=True, edgecolor=color, linewidth=width,
            facecolor=fill if fill else 'none', joinstyle='round', zorder=self._next_zorder(),
        ))

    def circle(self, x, y, radius, color, width, fill=None):
        self._add_patch(Circle(
            (x, y), radius, edgecolor=color, linewidth=width,
            facecolor=fill if fill else 'none', zorder=self._next_zorder(),
        ))

    def rectangle(self, x, y, width, height, color, line_width, fill=None):
        self._add_patch(Rectangle(
            (x, y), width, height, edgecolor=color, linewidth=line_width,
            facecolor=fill if fill else 'none', joinstyle='round', zorder=self._next_zorder(),
        ))

    def text(self, x, y, text, color, size, background=None, align='left'):
        bbox = None
        if background:
            bbox = dict(facecolor=background, edgecolor='none', pad=LABEL_PADDING)
        artist = self.ax.text(x, y, text, color=color, fontsize=size, ha=align, va='center',
                              bbox=bbox, zorder=self._next_zorder())
        self._artists.append(artist)

    def flush(self):
        self.figure.canvas.draw_idle()

    def release(self):
        """Удаляет оверлей с фигуры."""
        self.clear()
        try:
            self.figure.delaxes(self.ax)
        except (KeyError, ValueError) as e:
            logger.debug(f"Оверлей уже удален с фигуры: {e}")
