"""
Модели рыночных данных.

Свеча приходит от внешнего источника (API или генератор тестовых данных)
и не изменяется после создания.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

import pandas as pd

Time = Union[int, float, str]


@dataclass(frozen=True)
class Candle:
    """
    Свеча OHLCV.

    Параметры:
        time: Время свечи. Целое число секунд epoch для внутридневных таймфреймов
            или строка даты ISO ('YYYY-MM-DD') для дневного.
        open, high, low, close: Цены.
        volume: Объем.
    """
    time: Time
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


def to_datetime(time: Time) -> Optional[datetime]:
    """
    Преобразует время свечи в datetime (UTC, без tzinfo).

    Возвращает:
        datetime или None, если значение не удалось разобрать.
    """
    if time is None or isinstance(time, bool):
        return None
    try:
        if isinstance(time, (int, float)):
            return datetime.fromtimestamp(float(time), tz=timezone.utc).replace(tzinfo=None)
        ts = pd.Timestamp(time)
    except (ValueError, TypeError, OverflowError, OSError):
        return None
    if ts is pd.NaT:
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert('UTC').tz_localize(None)
    return ts.to_pydatetime()


def to_epoch_seconds(time: Time) -> Optional[float]:
    """Время свечи в секундах epoch или None."""
    dt = to_datetime(time)
    if dt is None:
        return None
    return dt.replace(tzinfo=timezone.utc).timestamp()


def candles_to_dataframe(candles) -> pd.DataFrame:
    """
    Преобразует список свечей в DataFrame с индексом по времени.

    Колонки названы так же, как ожидают функции отрисовки: Open, High, Low, Close, Volume.
    """
    rows = [
        {
            'timestamp': to_datetime(c.time),
            'Open': float(c.open),
            'High': float(c.high),
            'Low': float(c.low),
            'Close': float(c.close),
            'Volume': float(c.volume),
        }
        for c in candles
    ]
    df = pd.DataFrame(rows, columns=['timestamp', 'Open', 'High', 'Low', 'Close', 'Volume'])
    df['timestamp'] = pd.to_datetime(df['timestamp'])
    df.set_index('timestamp', inplace=True)
    return df
