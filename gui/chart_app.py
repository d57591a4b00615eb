"""
Главное окно приложения графика.

Структура:
- Левая панель: инструменты рисования
- Правая панель: свечной график с панелями MACD и RSI
- Нижняя панель: выбор таймфрейма
"""

import sys

from PyQt5.QtWidgets import QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from loguru import logger

from charting.api.api_client import ApiClient, ApiConfig
from charting.config.config import CONFIG
from gui.chart_widget import CandlestickChartWidget
from gui.drawing_toolbar import DrawingToolbarWidget
from gui.timeframe_panel_widget import TimeframePanelWidget
from gui.ui_config import UIConfig


class ChartWindow(QMainWindow):
    """
    Главное окно: график, панель инструментов и выбор таймфрейма.
    """

    def __init__(self, api_config: ApiConfig, symbol: str, timeframe: str, use_real_data: bool = False):
        """
        Параметры:
            api_config: Конфигурация бэкенда (создается один раз в main).
            symbol: Торговая пара.
            timeframe: Таймфрейм при запуске.
            use_real_data: Загружать свечи с бэкенда.
        """
        super().__init__()
        self.symbol = symbol
        self.api_client = ApiClient(api_config)

        self.setWindowTitle(f"{symbol} - график")
        self.resize(UIConfig.MAIN_WINDOW_WIDTH, UIConfig.MAIN_WINDOW_HEIGHT)
        self.setMinimumSize(UIConfig.MAIN_WINDOW_MIN_WIDTH, UIConfig.MAIN_WINDOW_MIN_HEIGHT)
        self.setStyleSheet(UIConfig.MAIN_WINDOW_STYLE)

        self.drawing_toolbar = DrawingToolbarWidget()
        self.chart_widget = CandlestickChartWidget(self.api_client, use_real_data=use_real_data)
        self.timeframe_panel = TimeframePanelWidget(current_timeframe=timeframe)

        chart_layout = QVBoxLayout()
        chart_layout.setContentsMargins(0, 0, 0, 0)
        chart_layout.addWidget(self.chart_widget, stretch=1)
        chart_layout.addWidget(self.timeframe_panel)

        chart_panel = QWidget()
        chart_panel.setLayout(chart_layout)

        main_layout = QHBoxLayout()
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.drawing_toolbar)
        main_layout.addWidget(chart_panel, stretch=1)

        central = QWidget()
        central.setLayout(main_layout)
        self.setCentralWidget(central)

        self.drawing_toolbar.tool_selected.connect(self.chart_widget.set_drawing_tool)
        self.drawing_toolbar.remove_last_requested.connect(self.chart_widget.remove_last_drawing)
        self.drawing_toolbar.clear_all_requested.connect(self.chart_widget.clear_drawings)
        self.chart_widget.tool_changed.connect(self.drawing_toolbar.set_tool)
        self.timeframe_panel.timeframe_changed.connect(self.on_timeframe_changed)

        self.chart_widget.load_data(symbol, timeframe)

    def on_timeframe_changed(self, timeframe: str):
        self.chart_widget.cancel_drawing()
        self.chart_widget.load_data(self.symbol, timeframe)


def main(api_config: ApiConfig = None, symbol: str = None, timeframe: str = None, use_real_data: bool = None):
    """
    Точка входа в приложение.

    Параметры:
        api_config: Конфигурация бэкенда (по умолчанию из CONFIG).
        symbol: Торговая пара (по умолчанию CONFIG['CHART']['SYMBOL']).
        timeframe: Таймфрейм при запуске.
        use_real_data: Загружать свечи с бэкенда.
    """
    chart_settings = CONFIG['CHART']
    if api_config is None:
        api_config = ApiConfig.from_config(CONFIG)
    if symbol is None:
        symbol = chart_settings['SYMBOL']
    if timeframe is None:
        timeframe = chart_settings['TIMEFRAME']
    if use_real_data is None:
        use_real_data = chart_settings['USE_REAL_DATA']

    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    app = QApplication(sys.argv)
    app.setFont(QFont(UIConfig.FONT_FAMILY, UIConfig.FONT_SIZE_NORMAL))

    window = ChartWindow(
        api_config=api_config,
        symbol=symbol,
        timeframe=timeframe,
        use_real_data=use_real_data,
    )
    window.show()

    logger.info(f"Приложение графика запущено: {symbol} {timeframe}")

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
