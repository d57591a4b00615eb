"""
Главная точка входа в приложение графика.

По умолчанию запускает GUI с инструментами рисования. С флагом --report
выводит в консоль последние значения MACD и RSI без запуска GUI.
"""

import argparse

from loguru import logger
from prettytable import PrettyTable

from charting.api.api_client import ApiClient, ApiConfig
from charting.api.coin_analysis import fetch_candles
from charting.config.config import CONFIG
from charting.data.sample_data import generate_sample_candles
from charting.exceptions import ApiError
from charting.indicators.indicator_frame import build_indicator_frame


def load_candles(api_config, symbol, timeframe, use_real_data):
    """
    Загружает свечи с бэкенда или генерирует тестовые.

    Параметры:
        api_config: Конфигурация бэкенда.
        symbol: Торговая пара.
        timeframe: Таймфрейм.
        use_real_data: Запрашивать бэкенд.
    """
    if use_real_data:
        try:
            candles = fetch_candles(ApiClient(api_config), symbol, timeframe)
            if candles:
                return candles
            logger.warning(f"Бэкенд не вернул свечей для {symbol} {timeframe}")
        except ApiError as e:
            logger.error(f"Ошибка загрузки свечей: {e}")
    return generate_sample_candles(timeframe)


def print_indicator_report(candles, rows=10):
    """
    Выводит последние значения индикаторов в консоль.
    """
    frame = build_indicator_frame(candles)

    table = PrettyTable()
    table.field_names = ["Время", "Close", "MACD", "Signal", "Histogram", "RSI"]

    def fmt(value, digits=4):
        return "-" if value != value else f"{value:.{digits}f}"

    tail = list(zip(candles, frame.itertuples(index=False)))[-rows:]
    for candle, row in tail:
        table.add_row([
            candle.time, f"{candle.close:.2f}",
            fmt(row.macd), fmt(row.signal), fmt(row.histogram), fmt(row.rsi, 2),
        ])

    print(table)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="График с инструментами рисования и индикаторами")
    parser.add_argument('--symbol', default=CONFIG['CHART']['SYMBOL'])
    parser.add_argument('--timeframe', default=CONFIG['CHART']['TIMEFRAME'])
    parser.add_argument('--real-data', action='store_true', default=CONFIG['CHART']['USE_REAL_DATA'])
    parser.add_argument('--report', action='store_true', help="Вывести индикаторы в консоль без GUI")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    api_config = ApiConfig.from_config(CONFIG)
    logger.info(f"Бэкенд: {api_config.base_url}, символ {args.symbol}, таймфрейм {args.timeframe}")

    if args.report:
        candles = load_candles(api_config, args.symbol, args.timeframe, args.real_data)
        print_indicator_report(candles)
        return

    from gui.chart_app import main as gui_main
    gui_main(
        api_config=api_config,
        symbol=args.symbol,
        timeframe=args.timeframe,
        use_real_data=args.real_data,
    )


if __name__ == "__main__":
    main()
