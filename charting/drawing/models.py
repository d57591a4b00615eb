"""
Модель пользовательских построений на графике.

Все примитивы хранятся в координатах предметной области (время, цена),
а не в пикселях: при каждом изменении видимой области они заново
проецируются на поверхность рисования.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from charting.data.models import Time

# Стили по умолчанию (как у TradingView)
DEFAULT_COLOR = '#f7931a'
DEFAULT_LINE_WIDTH = 2
DEFAULT_FILL_COLOR = '#f7931a1a'  # тот же цвет, прозрачность 10%
DEFAULT_TEXT_COLOR = '#d1d4dc'
DEFAULT_TEXT_SIZE = 12


class LineType(str, Enum):
    TRENDLINE = 'trendline'
    HORIZONTAL = 'horizontal-line'
    VERTICAL = 'vertical-line'
    RAY = 'ray'


class ShapeType(str, Enum):
    RECTANGLE = 'rectangle'
    CIRCLE = 'circle'
    TRIANGLE = 'triangle'


# Короткие названия инструментов
TYPE_ALIASES = {
    'horizontal': LineType.HORIZONTAL.value,
    'vertical': LineType.VERTICAL.value,
}

LINE_TYPES = frozenset(t.value for t in LineType)
SHAPE_TYPES = frozenset(t.value for t in ShapeType)
TEXT_TYPE = 'text'


def normalize_type(drawing_type: str) -> Optional[str]:
    """
    Приводит название инструмента к каноническому виду.

    Возвращает:
        str или None, если тип не является линией или фигурой.
    """
    if isinstance(drawing_type, Enum):
        drawing_type = drawing_type.value
    drawing_type = TYPE_ALIASES.get(drawing_type, drawing_type)
    if drawing_type in LINE_TYPES or drawing_type in SHAPE_TYPES:
        return drawing_type
    return None


def is_line_type(drawing_type: str) -> bool:
    return drawing_type in LINE_TYPES


@dataclass(frozen=True)
class DomainPoint:
    """Точка в координатах графика: время свечи и цена."""
    time: Time
    price: float


@dataclass(frozen=True)
class LineDrawing:
    id: int
    type: str
    points: Tuple[DomainPoint, DomainPoint]
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_LINE_WIDTH


@dataclass(frozen=True)
class ShapeDrawing:
    id: int
    type: str
    points: Tuple[DomainPoint, DomainPoint]
    color: str = DEFAULT_COLOR
    fill_color: Optional[str] = DEFAULT_FILL_COLOR


@dataclass(frozen=True)
class TextDrawing:
    id: int
    point: DomainPoint
    text: str
    color: str = DEFAULT_TEXT_COLOR
    font_size: int = DEFAULT_TEXT_SIZE


Drawing = Union[LineDrawing, ShapeDrawing, TextDrawing]


@dataclass
class ActiveDrawing:
    """
    Построение в процессе создания.

    Хранит одну или две точки; вторая точка перезаписывается при
    перемещении указателя (предпросмотр).
    """
    id: int
    type: str
    points: List[DomainPoint] = field(default_factory=list)
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_LINE_WIDTH
    fill_color: Optional[str] = None

    @property
    def is_line(self) -> bool:
        return is_line_type(self.type)

    def to_primitive(self) -> Union[LineDrawing, ShapeDrawing]:
        """Фиксирует построение. Требует ровно двух точек."""
        points = (self.points[0], self.points[1])
        if self.is_line:
            return LineDrawing(id=self.id, type=self.type, points=points,
                               color=self.color, line_width=self.line_width)
        return ShapeDrawing(id=self.id, type=self.type, points=points,
                            color=self.color, fill_color=self.fill_color)


@dataclass
class DrawingCollections:
    lines: List[LineDrawing] = field(default_factory=list)
    shapes: List[ShapeDrawing] = field(default_factory=list)
    texts: List[TextDrawing] = field(default_factory=list)

    def clear(self):
        self.lines.clear()
        self.shapes.clear()
        self.texts.clear()

    def is_empty(self) -> bool:
        return not (self.lines or self.shapes or self.texts)
