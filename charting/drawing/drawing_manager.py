"""
Менеджер пользовательских построений.

Хранит коллекции линий, фигур и текстов в координатах графика и текущее
незавершенное построение. Ни одна операция не выбрасывает исключений:
отсутствие построений - это пустые коллекции.
"""
from itertools import count
from typing import Optional, Tuple

from loguru import logger

from charting.drawing.models import (
    ActiveDrawing, DEFAULT_COLOR, DEFAULT_FILL_COLOR, DEFAULT_LINE_WIDTH, DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE, DomainPoint, DrawingCollections, LineDrawing, ShapeDrawing, TextDrawing,
    is_line_type, normalize_type,
)


class DrawingManager:
    """
    Модель построений и операции над ней.

    После каждого изменения модели вызывается redraw() привязанного
    оверлея (см. gui.drawing_overlay.DrawingOverlay). Без оверлея менеджер
    работает как чистая модель.
    """

    def __init__(self):
        self.drawings = DrawingCollections()
        self.active_drawing: Optional[ActiveDrawing] = None
        self.overlay = None
        self._ids = count(1)

    # ==================== ДОСТУП К МОДЕЛИ ====================

    @property
    def lines(self) -> Tuple[LineDrawing, ...]:
        return tuple(self.drawings.lines)

    @property
    def shapes(self) -> Tuple[ShapeDrawing, ...]:
        return tuple(self.drawings.shapes)

    @property
    def texts(self) -> Tuple[TextDrawing, ...]:
        return tuple(self.drawings.texts)

    def bind_overlay(self, overlay):
        """Привязывает оверлей, который перерисовывается при изменениях модели."""
        self.overlay = overlay

    def _notify(self):
        if self.overlay is not None:
            self.overlay.redraw()

    # ==================== ПОСТРОЕНИЕ ====================

    def start(self, drawing_type: str, point: DomainPoint):
        """
        Начинает новое построение с одной точкой.

        Текущее незавершенное построение отбрасывается без сохранения.

        Параметры:
            drawing_type: Тип ('trendline', 'horizontal-line', 'vertical-line', 'ray',
                'rectangle', 'circle', 'triangle'; допустимы 'horizontal' и 'vertical').
            point: Первая точка.
        """
        canonical = normalize_type(drawing_type)
        if canonical is None:
            logger.warning(f"Неизвестный инструмент рисования: {drawing_type}")
            return

        drawing_id = next(self._ids)
        if is_line_type(canonical):
            self.active_drawing = ActiveDrawing(
                id=drawing_id, type=canonical, points=[point],
                color=DEFAULT_COLOR, line_width=DEFAULT_LINE_WIDTH,
            )
        else:
            self.active_drawing = ActiveDrawing(
                id=drawing_id, type=canonical, points=[point],
                color=DEFAULT_COLOR, fill_color=DEFAULT_FILL_COLOR,
            )
        logger.debug(f"Начато построение {canonical} #{drawing_id} в точке {point}")
        self._notify()

    def continue_drawing(self, point: DomainPoint):
        """
        Добавляет вторую точку или заменяет ее (предпросмотр при перемещении).
        """
        if self.active_drawing is None:
            return

        points = self.active_drawing.points
        if len(points) == 1:
            points.append(point)
        else:
            points[1] = point

        self._notify()

    def finish(self):
        """
        Завершает построение.

        Построение с двумя точками сохраняется в коллекцию линий или фигур,
        иначе отбрасывается. Незавершенное построение очищается в любом случае.
        """
        if self.active_drawing is None:
            return

        active = self.active_drawing
        self.active_drawing = None

        if len(active.points) >= 2:
            primitive = active.to_primitive()
            if active.is_line:
                self.drawings.lines.append(primitive)
            else:
                self.drawings.shapes.append(primitive)
            logger.info(f"Построение {active.type} #{active.id} сохранено")
        else:
            logger.debug(f"Построение {active.type} #{active.id} отброшено: недостаточно точек")

        self._notify()

    def cancel(self):
        """Отбрасывает незавершенное построение без сохранения."""
        if self.active_drawing is None:
            return
        logger.debug(f"Построение {self.active_drawing.type} #{self.active_drawing.id} отменено")
        self.active_drawing = None
        self._notify()

    def add_text(self, point: DomainPoint, text: str,
                 color: str = DEFAULT_TEXT_COLOR, font_size: int = DEFAULT_TEXT_SIZE):
        """
        Добавляет текстовую метку.

        Параметры:
            point: Точка привязки.
            text: Текст метки (пустая строка игнорируется).
        """
        if not text:
            return
        self.drawings.texts.append(
            TextDrawing(id=next(self._ids), point=point, text=text, color=color, font_size=font_size)
        )
        self._notify()

    # ==================== УДАЛЕНИЕ ====================

    def clear_all(self):
        """Удаляет все линии, фигуры и тексты."""
        self.drawings.clear()
        logger.info("Все построения удалены")
        self._notify()

    def remove_last(self):
        """
        Удаляет последнее построение.

        Сначала удаляется последняя фигура, и только если фигур нет -
        последняя линия. Это не отмена последнего действия по всем типам:
        линия, нарисованная после фигуры, удаляется после нее.
        """
        if self.drawings.shapes:
            removed = self.drawings.shapes.pop()
        elif self.drawings.lines:
            removed = self.drawings.lines.pop()
        else:
            return
        logger.debug(f"Удалено построение {removed.type} #{removed.id}")
        self._notify()

    def destroy(self):
        """Очищает модель, отключает поверхность рисования и все подписки."""
        self.drawings.clear()
        self.active_drawing = None
        overlay = self.overlay
        self.overlay = None
        if overlay is not None:
            overlay.detach()
