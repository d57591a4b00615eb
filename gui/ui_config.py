"""
Модуль для хранения всех настроек UI графика.

Этот модуль содержит настройки, касающиеся:
- Размеров окна и панелей графика
- Цветов (палитра TradingView, свечи, индикаторы, построения)
- Стилей виджетов (QSS)

ВСЕ настройки UI должны быть определены здесь, а не в коде виджетов.
"""


class UIConfig:
    """
    Класс для хранения всех настроек UI.

    Все настройки интерфейса должны быть определены здесь для избежания дублирования
    и централизованного управления стилями приложения.
    """

    # ==================== РАЗМЕРЫ ====================
    MAIN_WINDOW_WIDTH = 1600
    MAIN_WINDOW_HEIGHT = 1000
    MAIN_WINDOW_MIN_WIDTH = 1000
    MAIN_WINDOW_MIN_HEIGHT = 700

    # Панель инструментов рисования (слева)
    TOOLBAR_WIDTH = 180

    # Соотношение высот панелей: цена, MACD, RSI
    PRICE_PANE_RATIO = 4
    MACD_PANE_RATIO = 1.3
    RSI_PANE_RATIO = 1

    # ==================== ЦВЕТА (TradingView Style) ====================
    BACKGROUND_COLOR = "#131722"
    SECONDARY_BACKGROUND_COLOR = "#1e222d"
    TERTIARY_BACKGROUND_COLOR = "#2a2e39"

    TEXT_COLOR_PRIMARY = "#d1d4dc"
    TEXT_COLOR_SECONDARY = "#868993"

    ACCENT_COLOR = "#2962ff"
    ACCENT_COLOR_PRESSED = "#1747cc"

    CHART_BACKGROUND_COLOR = "#1e222d"
    CHART_GRID_COLOR = "#2b2f3a"
    CHART_TEXT_COLOR = "#d1d4dc"

    CANDLE_BULLISH_COLOR = "#26a69a"
    CANDLE_BEARISH_COLOR = "#ef5350"

    # Индикаторы
    MACD_LINE_COLOR = "#2962ff"
    MACD_SIGNAL_COLOR = "#ff6d00"
    MACD_HISTOGRAM_POSITIVE_COLOR = "#26a69a"
    MACD_HISTOGRAM_NEGATIVE_COLOR = "#ef5350"
    RSI_LINE_COLOR = "#7e57c2"
    RSI_LEVEL_COLOR = "#787b86"

    # Оверлей построений поверх всех панелей
    DRAWING_OVERLAY_ZORDER = 10

    # ==================== ШРИФТЫ ====================
    FONT_FAMILY = "Segoe UI"
    FONT_SIZE_NORMAL = 14
    FONT_SIZE_SMALL = 12
    FONT_SIZE_LARGE = 18

    # ==================== СТИЛИ QSS ====================
    MAIN_WINDOW_STYLE = f"""
        QMainWindow {{
            background-color: {BACKGROUND_COLOR};
            color: {TEXT_COLOR_PRIMARY};
        }}
    """

    TOOL_BUTTON_STYLE = f"""
        QPushButton {{
            background-color: {SECONDARY_BACKGROUND_COLOR};
            color: {TEXT_COLOR_PRIMARY};
            border: 1px solid {TERTIARY_BACKGROUND_COLOR};
            border-radius: 4px;
            font-size: {FONT_SIZE_NORMAL}px;
            padding: 6px 10px;
            text-align: left;
        }}
        QPushButton:hover {{
            background-color: {TERTIARY_BACKGROUND_COLOR};
        }}
        QPushButton:checked {{
            background-color: {ACCENT_COLOR};
            color: white;
            border-color: {ACCENT_COLOR};
        }}
        QPushButton:pressed {{
            background-color: {ACCENT_COLOR_PRESSED};
        }}
    """

    PANEL_STYLE = f"""
        QWidget {{
            background-color: {SECONDARY_BACKGROUND_COLOR};
        }}
    """
