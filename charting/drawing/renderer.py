"""
Отрисовка построений на поверхности.

Рендерер не хранит состояния между вызовами: при каждом срабатывании
(смена видимой области, изменение модели, изменение размера) поверхность
очищается полностью и все примитивы проецируются заново.
"""
import math
from typing import Optional, Sequence

from loguru import logger

from charting.drawing.coordinate_mapper import CoordinateMapper, project_point
from charting.drawing.models import (
    ActiveDrawing, DEFAULT_LINE_WIDTH, LineDrawing, LineType, ShapeDrawing, ShapeType, TextDrawing,
)
from charting.drawing.surface import DrawingSurface

HANDLE_RADIUS = 4
HANDLE_OUTLINE_COLOR = '#ffffff'
HANDLE_OUTLINE_WIDTH = 2
RAY_EXTEND_LENGTH = 10000
PRICE_LABEL_COLOR = '#000000'
PRICE_LABEL_SIZE = 12
PRICE_LABEL_MARGIN = 10
SHAPE_LINE_WIDTH = 2


class DrawingRenderer:
    """
    Проецирует модель построений на поверхность.

    Порядок: линии, затем фигуры (каждые в порядке создания), затем тексты,
    поверх всего - текущее незавершенное построение. Примитив, у которого
    хотя бы одна точка не проецируется, пропускается целиком.
    """

    def __init__(self, surface: DrawingSurface, mapper: CoordinateMapper):
        """
        Параметры:
            surface: Поверхность для рисования (в пикселях).
            mapper: Проекция (время, цена) -> (x, y).
        """
        self.surface = surface
        self.mapper = mapper

    def render(self, lines: Sequence[LineDrawing], shapes: Sequence[ShapeDrawing],
               texts: Sequence[TextDrawing] = (), active: Optional[ActiveDrawing] = None):
        """
        Полностью перерисовывает поверхность.

        Возвращает:
            int: Количество отрисованных примитивов.
        """
        self.surface.clear()
        drawn = 0

        for line in lines:
            drawn += self.draw_line(line.type, line.points, line.color, line.line_width)
        for shape in shapes:
            drawn += self.draw_shape(shape.type, shape.points, shape.color, shape.fill_color)
        for text in texts:
            drawn += self.draw_text(text)

        if active is not None:
            if active.is_line:
                drawn += self.draw_line(active.type, active.points, active.color, active.line_width)
            else:
                drawn += self.draw_shape(active.type, active.points, active.color, active.fill_color)

        self.surface.flush()
        return drawn

    def _project_all(self, points):
        pixels = []
        for point in points:
            pixel = project_point(self.mapper, point)
            if pixel is None:
                return None
            pixels.append(pixel)
        return pixels

    def draw_handle(self, x, y, color):
        """Маркер точки привязки (как в TradingView)."""
        self.surface.circle(x, y, HANDLE_RADIUS, HANDLE_OUTLINE_COLOR, HANDLE_OUTLINE_WIDTH, fill=color)

    def draw_line(self, line_type, points, color, line_width=DEFAULT_LINE_WIDTH) -> int:
        """
        Рисует линию одного из типов trendline, horizontal-line, vertical-line, ray.

        Возвращает:
            int: 1, если линия отрисована, иначе 0.
        """
        if len(points) < 2:
            return 0
        pixels = self._project_all(points[:2])
        if pixels is None:
            return 0
        (x1, y1), (x2, y2) = pixels
        surface = self.surface

        if line_type == LineType.TRENDLINE.value:
            surface.line(x1, y1, x2, y2, color, line_width)
            self.draw_handle(x1, y1, color)
            self.draw_handle(x2, y2, color)
        elif line_type == LineType.HORIZONTAL.value:
            surface.line(0, y1, surface.width, y1, color, line_width)
            self.draw_price_label(points[0].price, y1, color)
        elif line_type == LineType.VERTICAL.value:
            surface.line(x1, 0, x1, surface.height, color, line_width)
        elif line_type == LineType.RAY.value:
            dx = x2 - x1
            dy = y2 - y1
            length = math.hypot(dx, dy)
            if length == 0:
                return 0
            end_x = x1 + dx / length * RAY_EXTEND_LENGTH
            end_y = y1 + dy / length * RAY_EXTEND_LENGTH
            surface.line(x1, y1, end_x, end_y, color, line_width)
            self.draw_handle(x1, y1, color)
        else:
            logger.warning(f"Неизвестный тип линии: {line_type}")
            return 0
        return 1

    def draw_price_label(self, price, y, color):
        """Метка цены у правого края поверхности."""
        self.surface.text(
            self.surface.width - PRICE_LABEL_MARGIN, y, f"{price:.2f}",
            PRICE_LABEL_COLOR, PRICE_LABEL_SIZE, background=color, align='right',
        )

    def draw_shape(self, shape_type, points, color, fill_color=None) -> int:
        """
        Рисует фигуру: rectangle, circle или triangle.

        Возвращает:
            int: 1, если фигура отрисована, иначе 0.
        """
        if len(points) < 2:
            return 0
        pixels = self._project_all(points[:2])
        if pixels is None:
            return 0
        (x1, y1), (x2, y2) = pixels
        surface = self.surface

        if shape_type == ShapeType.RECTANGLE.value:
            surface.rectangle(x1, y1, x2 - x1, y2 - y1, color, SHAPE_LINE_WIDTH, fill=fill_color)
            for hx, hy in ((x1, y1), (x2, y2), (x1, y2), (x2, y1)):
                self.draw_handle(hx, hy, color)
        elif shape_type == ShapeType.CIRCLE.value:
            radius = math.hypot(x2 - x1, y2 - y1)
            surface.circle(x1, y1, radius, color, SHAPE_LINE_WIDTH, fill=fill_color)
            self.draw_handle(x1, y1, color)
            self.draw_handle(x2, y2, color)
        elif shape_type == ShapeType.TRIANGLE.value:
            center_x = (x1 + x2) / 2
            vertices = [(center_x, y1), (x1, y2), (x2, y2)]
            surface.polygon(vertices, color, SHAPE_LINE_WIDTH, fill=fill_color)
            for hx, hy in vertices:
                self.draw_handle(hx, hy, color)
        else:
            logger.warning(f"Неизвестный тип фигуры: {shape_type}")
            return 0
        return 1

    def draw_text(self, text: TextDrawing) -> int:
        pixel = project_point(self.mapper, text.point)
        if pixel is None:
            return 0
        self.surface.text(pixel[0], pixel[1], text.text, text.color, text.font_size)
        return 1
