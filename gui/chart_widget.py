"""
Виджет свечного графика с панелями индикаторов и инструментами рисования.

Структура фигуры (общая ось X):
- Ценовая панель со свечами и оверлеем построений
- Панель MACD
- Панель RSI
"""

from datetime import timezone

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QInputDialog
from PyQt5.QtCore import pyqtSignal
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.backends.backend_qt5agg import NavigationToolbar2QT as NavigationToolbar
from matplotlib.dates import num2date
from matplotlib.figure import Figure
from loguru import logger

from charting.api.coin_analysis import fetch_candles
from charting.data.models import candles_to_dataframe
from charting.data.sample_data import generate_sample_candles
from charting.drawing.drawing_manager import DrawingManager
from charting.drawing.interaction import DrawingInteraction, InteractionState
from charting.drawing.models import DomainPoint, TEXT_TYPE
from charting.exceptions import ApiError
from charting.indicators.indicator_frame import build_indicator_frame
from gui.axes_mapper import AxesCoordinateMapper
from gui.chart_calculators import find_candle_index, format_candle_info, prepare_plot_payload
from gui.chart_drawers import draw_price, draw_macd, draw_rsi
from gui.chart_formatters import apply_price_formatter, apply_time_axis_formatting, style_axes
from gui.drawing_overlay import DrawingOverlay
from gui.ui_config import UIConfig


class CandlestickChartWidget(QWidget):
    """
    Виджет для отображения свечного графика и пользовательских построений.

    Построения хранятся в DrawingManager и переживают обновление данных:
    при каждой перерисовке фигуры оверлей отключается и подключается к
    новой ценовой панели.
    """

    tool_changed = pyqtSignal(str)  # Текущий инструмент после завершения построения
    data_loaded = pyqtSignal(int)   # Количество загруженных свечей

    def __init__(self, api_client=None, use_real_data=False, parent=None):
        """
        Параметры:
            api_client: Клиент бэкенда (ApiClient) или None.
            use_real_data: Загружать свечи с бэкенда вместо тестовых данных.
            parent: Родительский виджет.
        """
        super().__init__(parent)
        self.api_client = api_client
        self.use_real_data = use_real_data and api_client is not None

        self.figure = Figure(figsize=(16, 10), facecolor=UIConfig.CHART_BACKGROUND_COLOR, dpi=100)
        self.canvas = FigureCanvas(self.figure)
        self.toolbar = NavigationToolbar(self.canvas, self)

        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.canvas)
        layout.addWidget(self.toolbar)
        self.setLayout(layout)
        self.setStyleSheet(f"background-color: {UIConfig.CHART_BACKGROUND_COLOR};")

        self.drawing_manager = DrawingManager()
        self.interaction = DrawingInteraction(self.drawing_manager)
        self.overlay = None
        self.mapper = None
        self.ax_price = None

        self.current_symbol = None
        self.current_timeframe = None
        self.candles = []
        self.hover_annotation = None
        self._timestamps = []
        self._width_days = 0.0

        self._event_ids = [
            self.canvas.mpl_connect('button_press_event', self.on_mouse_press),
            self.canvas.mpl_connect('motion_notify_event', self.on_mouse_move),
            self.canvas.mpl_connect('button_release_event', self.on_mouse_release),
            self.canvas.mpl_connect('key_press_event', self.on_key_press),
        ]

    # ==================== ДАННЫЕ ====================

    def load_data(self, symbol: str, timeframe: str):
        """
        Загружает свечи и перерисовывает график.

        При ошибке бэкенда используются тестовые данные.
        """
        candles = None
        if self.use_real_data:
            try:
                candles = fetch_candles(self.api_client, symbol, timeframe)
            except ApiError as e:
                logger.error(f"Не удалось загрузить свечи {symbol} {timeframe}: {e}")

        if not candles:
            logger.info(f"Используем тестовые данные для {symbol} {timeframe}")
            candles = generate_sample_candles(timeframe)

        self.current_symbol = symbol
        self.current_timeframe = timeframe
        self.plot_candles(candles, timeframe)

    def plot_candles(self, candles, timeframe: str):
        """
        Отрисовывает свечи, MACD, RSI и подключает оверлей построений.

        Параметры:
            candles: Список свечей по возрастанию времени.
            timeframe: Код таймфрейма.
        """
        self.detach_overlay()
        self.candles = list(candles)
        self.hover_annotation = None
        self.figure.clear()

        if not self.candles:
            logger.warning("Нет данных для графика")
            self.canvas.draw_idle()
            return

        df = candles_to_dataframe(self.candles)
        payload = prepare_plot_payload(df, timeframe)
        indicators = build_indicator_frame(self.candles)

        grid_spec = self.figure.add_gridspec(
            3, 1,
            height_ratios=[UIConfig.PRICE_PANE_RATIO, UIConfig.MACD_PANE_RATIO, UIConfig.RSI_PANE_RATIO],
            hspace=0.05,
        )
        ax_price = self.figure.add_subplot(grid_spec[0])
        ax_macd = self.figure.add_subplot(grid_spec[1], sharex=ax_price)
        ax_rsi = self.figure.add_subplot(grid_spec[2], sharex=ax_price)

        draw_price(ax_price, payload)
        draw_macd(ax_macd, indicators, payload['width_days'])
        draw_rsi(ax_rsi, indicators)

        style_axes(ax_price)
        style_axes(ax_macd, "MACD")
        style_axes(ax_rsi, "RSI")
        apply_price_formatter(ax_price)
        apply_time_axis_formatting(ax_rsi, timeframe)
        ax_price.tick_params(axis='x', labelbottom=False)
        ax_macd.tick_params(axis='x', labelbottom=False)

        self.figure.subplots_adjust(left=0.02, right=0.93, bottom=0.06, top=0.98)

        self._timestamps = payload['timestamps']
        self._width_days = payload['width_days']
        self.hover_annotation = ax_price.annotate(
            "", xy=(0, 0), xytext=(12, 12), textcoords='offset points',
            color=UIConfig.CHART_TEXT_COLOR, fontsize=UIConfig.FONT_SIZE_SMALL - 3,
            bbox=dict(boxstyle='round', facecolor=UIConfig.TERTIARY_BACKGROUND_COLOR,
                      edgecolor=UIConfig.CHART_GRID_COLOR),
            annotation_clip=False, visible=False,
        )

        self.ax_price = ax_price
        self.attach_overlay()
        self.canvas.draw_idle()

        logger.info(f"График отрисован: {len(self.candles)} свечей, таймфрейм {timeframe}")
        self.data_loaded.emit(len(self.candles))

    # ==================== ОВЕРЛЕЙ ====================

    def attach_overlay(self):
        if self.ax_price is None:
            return
        self.overlay = DrawingOverlay(self.figure, self.ax_price)
        self.mapper = AxesCoordinateMapper(self.ax_price)
        if not self.overlay.attach(self.drawing_manager):
            self.overlay = None

    def detach_overlay(self):
        if self.overlay is not None:
            self.overlay.detach()
        self.overlay = None
        self.mapper = None
        self.ax_price = None

    def destroy_drawings(self):
        """Удаляет построения и отключает оверлей (при закрытии виджета)."""
        self.interaction.cancel()
        self.drawing_manager.destroy()
        self.overlay = None
        for cid in self._event_ids:
            self.canvas.mpl_disconnect(cid)
        self._event_ids = []

    def closeEvent(self, event):
        self.destroy_drawings()
        super().closeEvent(event)

    # ==================== ИНСТРУМЕНТЫ ====================

    def set_drawing_tool(self, tool: str):
        """
        Устанавливает инструмент рисования.

        Для инструмента 'text' запрашивает текст метки.
        """
        text = None
        if tool == TEXT_TYPE:
            text, ok = QInputDialog.getText(self, "Текст", "Текст метки:")
            if not ok or not text:
                self.interaction.cancel()
                self.tool_changed.emit('cursor')
                return
        self.interaction.select_tool(tool, text=text)

    def cancel_drawing(self):
        self.interaction.cancel()
        self.tool_changed.emit('cursor')

    def remove_last_drawing(self):
        self.drawing_manager.remove_last()

    def clear_drawings(self):
        self.drawing_manager.clear_all()

    # ==================== СОБЫТИЯ МЫШИ ====================

    def _event_to_point(self, event):
        """Переводит координаты события мыши в точку графика (время, цена)."""
        if self.mapper is None or event.x is None or event.y is None:
            return None
        domain = self.mapper.pixel_to_domain(event.x, event.y)
        if domain is None:
            return None
        x_value, price = domain
        time = num2date(x_value).astimezone(timezone.utc).timestamp()
        return DomainPoint(time=time, price=price)

    def _drawing_allowed(self, event):
        # Во время панорамирования/масштабирования рисование выключено
        return not self.toolbar.mode and getattr(event, 'button', None) in (None, 1)

    def on_mouse_press(self, event):
        if self.interaction.state == InteractionState.IDLE or not self._drawing_allowed(event):
            return
        point = self._event_to_point(event)
        if point is None:
            return
        self.interaction.pointer_down(point)
        self._sync_tool()

    def _update_hover(self, event, drawing: bool):
        """Показывает OHLC свечи под курсором; во время построения подсказка скрыта."""
        if self.hover_annotation is None:
            return

        index = None
        domain = None
        if not drawing and self.mapper is not None and event.x is not None and event.y is not None:
            domain = self.mapper.pixel_to_domain(event.x, event.y)
        if domain is not None:
            index = find_candle_index(self._timestamps, domain[0], self._width_days)

        if index is None:
            if self.hover_annotation.get_visible():
                self.hover_annotation.set_visible(False)
                self.canvas.draw_idle()
            return

        self.hover_annotation.xy = (self._timestamps[index], domain[1])
        self.hover_annotation.set_text(format_candle_info(self.candles[index]))
        self.hover_annotation.set_visible(True)
        self.canvas.draw_idle()

    def on_mouse_move(self, event):
        drawing = self.interaction.state in (InteractionState.FIRST_POINT_PLACED, InteractionState.PREVIEWING)
        self._update_hover(event, drawing)
        if not drawing:
            return
        if self.toolbar.mode:
            return
        point = self._event_to_point(event)
        if point is None:
            return
        self.interaction.pointer_move(point)

    def on_mouse_release(self, event):
        if self.interaction.state != InteractionState.PREVIEWING or not self._drawing_allowed(event):
            return
        point = self._event_to_point(event)
        if point is None:
            return
        self.interaction.pointer_up(point)
        self._sync_tool()

    def on_key_press(self, event):
        if event.key == 'escape':
            self.cancel_drawing()

    def _sync_tool(self):
        if self.interaction.state == InteractionState.IDLE:
            self.tool_changed.emit('cursor')
