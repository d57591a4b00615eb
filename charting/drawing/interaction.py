"""
Конечный автомат интерактивного рисования.

Состояния:
    IDLE -> TOOL_SELECTED -> FIRST_POINT_PLACED -> PREVIEWING -> (finish) -> IDLE

Поддерживаются оба способа построения: перетаскивание (нажать, вести,
отпустить) и два клика (клик, вести, клик). Выбор другого инструмента или
отмена из любого состояния отбрасывают незавершенное построение.
"""
from enum import Enum
from typing import Optional

from loguru import logger

from charting.drawing.drawing_manager import DrawingManager
from charting.drawing.models import DomainPoint, TEXT_TYPE, normalize_type

CURSOR_TOOL = 'cursor'


class InteractionState(str, Enum):
    IDLE = 'idle'
    TOOL_SELECTED = 'tool_selected'
    FIRST_POINT_PLACED = 'first_point_placed'
    PREVIEWING = 'previewing'


class DrawingInteraction:
    """
    Переводит события указателя (уже в координатах графика) в операции
    DrawingManager.
    """

    def __init__(self, manager: DrawingManager):
        self.manager = manager
        self.state = InteractionState.IDLE
        self.tool: Optional[str] = None
        self.pending_text: Optional[str] = None

    def select_tool(self, tool: Optional[str], text: Optional[str] = None):
        """
        Выбирает инструмент рисования.

        Параметры:
            tool: Инструмент построения, 'text', 'cursor' или None (без инструмента).
            text: Текст метки для инструмента 'text'.
        """
        self.cancel()

        if tool is None or tool == CURSOR_TOOL:
            return
        if tool == TEXT_TYPE:
            self.tool = TEXT_TYPE
            self.pending_text = text
        else:
            canonical = normalize_type(tool)
            if canonical is None:
                logger.warning(f"Инструмент {tool} не поддерживается")
                return
            self.tool = canonical

        self.state = InteractionState.TOOL_SELECTED
        logger.info(f"Выбран инструмент рисования: {self.tool}")

    def cancel(self):
        """Отменяет построение и возвращает автомат в IDLE."""
        if self.state in (InteractionState.FIRST_POINT_PLACED, InteractionState.PREVIEWING):
            self.manager.cancel()
        self.state = InteractionState.IDLE
        self.tool = None
        self.pending_text = None

    def pointer_down(self, point: DomainPoint):
        """
        Нажатие кнопки указателя.

        В TOOL_SELECTED начинает построение; в FIRST_POINT_PLACED и PREVIEWING
        ставит вторую точку и завершает построение (режим двух кликов).
        """
        if self.state == InteractionState.TOOL_SELECTED:
            if self.tool == TEXT_TYPE:
                self.manager.add_text(point, self.pending_text or '')
                self._commit()
                return
            self.manager.start(self.tool, point)
            self.state = InteractionState.FIRST_POINT_PLACED
        elif self.state in (InteractionState.FIRST_POINT_PLACED, InteractionState.PREVIEWING):
            self.manager.continue_drawing(point)
            self.manager.finish()
            self._commit()

    def pointer_move(self, point: DomainPoint):
        """Перемещение указателя: предпросмотр второй точки."""
        if self.state in (InteractionState.FIRST_POINT_PLACED, InteractionState.PREVIEWING):
            self.manager.continue_drawing(point)
            self.state = InteractionState.PREVIEWING

    def pointer_up(self, point: DomainPoint):
        """
        Отпускание кнопки указателя.

        Завершает построение только после перетаскивания (PREVIEWING);
        после простого клика автомат ждет вторую точку.
        """
        if self.state == InteractionState.PREVIEWING:
            self.manager.continue_drawing(point)
            self.manager.finish()
            self._commit()

    def _commit(self):
        logger.debug(f"Построение инструментом {self.tool} завершено")
        self.state = InteractionState.IDLE
        self.tool = None
        self.pending_text = None
