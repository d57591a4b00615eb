"""
Панель инструментов рисования.

Кнопки выбора инструмента (курсор, линии, фигуры, текст) и команды
удаления построений.
"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QPushButton
from PyQt5.QtCore import pyqtSignal
from loguru import logger

from gui.ui_config import UIConfig

DRAWING_TOOLS = [
    ('cursor', 'Курсор'),
    ('trendline', 'Линия тренда'),
    ('horizontal-line', 'Горизонтальная линия'),
    ('vertical-line', 'Вертикальная линия'),
    ('ray', 'Луч'),
    ('rectangle', 'Прямоугольник'),
    ('circle', 'Круг'),
    ('triangle', 'Треугольник'),
    ('text', 'Текст'),
]


class DrawingToolbarWidget(QWidget):
    """
    Вертикальная панель инструментов рисования.
    """

    tool_selected = pyqtSignal(str)
    remove_last_requested = pyqtSignal()
    clear_all_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.current_tool = 'cursor'
        self.buttons = {}
        self.setup_ui()

    def setup_ui(self):
        """Настройка UI панели."""
        layout = QVBoxLayout()
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(4)

        for tool, label in DRAWING_TOOLS:
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.setStyleSheet(UIConfig.TOOL_BUTTON_STYLE)
            btn.clicked.connect(lambda checked, t=tool: self.on_tool_clicked(t))
            layout.addWidget(btn)
            self.buttons[tool] = btn

        layout.addSpacing(20)

        remove_btn = QPushButton("Удалить последнее")
        remove_btn.setStyleSheet(UIConfig.TOOL_BUTTON_STYLE)
        remove_btn.clicked.connect(self.remove_last_requested.emit)
        layout.addWidget(remove_btn)

        clear_btn = QPushButton("Очистить все")
        clear_btn.setStyleSheet(UIConfig.TOOL_BUTTON_STYLE)
        clear_btn.clicked.connect(self.clear_all_requested.emit)
        layout.addWidget(clear_btn)

        layout.addStretch()
        self.setLayout(layout)
        self.setFixedWidth(UIConfig.TOOLBAR_WIDTH)
        self.setStyleSheet(UIConfig.PANEL_STYLE)
        self.set_tool('cursor')

    def set_tool(self, tool: str):
        """Отмечает активный инструмент без генерации сигнала."""
        for code, btn in self.buttons.items():
            btn.setChecked(code == tool)
        self.current_tool = tool

    def on_tool_clicked(self, tool: str):
        self.set_tool(tool)
        logger.debug(f"Нажата кнопка инструмента: {tool}")
        self.tool_selected.emit(tool)
