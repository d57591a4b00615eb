"""
Виджет панели выбора таймфрейма.

Отображает кнопки для выбора таймфрейма графика.
"""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton
from PyQt5.QtCore import pyqtSignal
from loguru import logger

from gui.ui_config import UIConfig

TIMEFRAMES = [
    ("1m", "1m"), ("5m", "5m"), ("15m", "15m"),
    ("1h", "1h"), ("4h", "4h"), ("1d", "1D"),
]


class TimeframePanelWidget(QWidget):
    """
    Панель выбора таймфрейма.
    """

    timeframe_changed = pyqtSignal(str)  # Сигнал при изменении таймфрейма

    def __init__(self, current_timeframe="1h", parent=None):
        """Инициализация панели таймфреймов."""
        super().__init__(parent)
        self.current_timeframe = current_timeframe
        self.buttons = {}
        self.setup_ui()

    def setup_ui(self):
        """Настройка UI панели."""
        layout = QHBoxLayout()
        layout.setContentsMargins(10, 5, 10, 5)
        layout.setSpacing(5)

        label = QLabel("Таймфрейм:")
        label.setStyleSheet(f"color: {UIConfig.TEXT_COLOR_PRIMARY}; font-size: {UIConfig.FONT_SIZE_NORMAL}px;")
        layout.addWidget(label)

        for code, label_text in TIMEFRAMES:
            btn = QPushButton(label_text)
            btn.setCheckable(True)
            btn.setMinimumSize(50, 32)
            btn.clicked.connect(lambda checked, c=code: self.on_timeframe_clicked(c))
            btn.setStyleSheet(UIConfig.TOOL_BUTTON_STYLE)
            layout.addWidget(btn)
            self.buttons[code] = btn

        layout.addStretch()
        self.setLayout(layout)
        self.set_timeframe(self.current_timeframe)
        self.setStyleSheet(f"background-color: {UIConfig.SECONDARY_BACKGROUND_COLOR};")

    def set_timeframe(self, timeframe_code: str):
        """
        Устанавливает активный таймфрейм.

        Параметры:
            timeframe_code: Код таймфрейма.
        """
        for code, btn in self.buttons.items():
            btn.setChecked(code == timeframe_code)
        if timeframe_code in self.buttons:
            self.current_timeframe = timeframe_code

    def on_timeframe_clicked(self, timeframe_code: str):
        """Обработчик клика по кнопке таймфрейма."""
        if timeframe_code == self.current_timeframe:
            self.set_timeframe(timeframe_code)
            return
        self.set_timeframe(timeframe_code)
        logger.info(f"Выбран таймфрейм: {timeframe_code}")
        self.timeframe_changed.emit(timeframe_code)
