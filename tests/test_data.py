from datetime import datetime

import numpy as np
import pandas as pd

from charting.data.models import Candle, candles_to_dataframe, to_datetime, to_epoch_seconds
from charting.data.sample_data import TIMEFRAME_SETTINGS, generate_sample_candles
from charting.indicators.indicator_frame import build_indicator_frame
from charting.indicators.macd import MACDConfig


def test_to_datetime_accepts_epoch_and_date_string():
    assert to_datetime(1704067200) == datetime(2024, 1, 1)
    assert to_datetime('2024-01-01') == datetime(2024, 1, 1)
    assert to_datetime('garbage') is None
    assert to_datetime(None) is None


def test_to_epoch_seconds():
    assert to_epoch_seconds('2024-01-02') == 1704153600


def test_candles_to_dataframe():
    candles = [Candle(1704067200, 1, 2, 0.5, 1.5, 10), Candle(1704070800, 1.5, 3, 1, 2.5, 20)]
    df = candles_to_dataframe(candles)

    assert list(df.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']
    assert isinstance(df.index, pd.DatetimeIndex)
    assert df['Close'].tolist() == [1.5, 2.5]


def test_sample_candles_are_consistent():
    candles = generate_sample_candles('1h', seed=42)

    assert len(candles) == TIMEFRAME_SETTINGS['1h'][1]
    times = [c.time for c in candles]
    assert times == sorted(times)
    for c in candles:
        assert c.low <= min(c.open, c.close)
        assert c.high >= max(c.open, c.close)


def test_sample_candles_daily_use_date_strings():
    candles = generate_sample_candles('1d', seed=1)
    assert candles[0].time == '2024-01-01'
    assert candles[1].time == '2024-01-02'


def test_sample_candles_are_reproducible():
    assert generate_sample_candles('5m', seed=7) == generate_sample_candles('5m', seed=7)


def test_unknown_timeframe_falls_back_to_hourly():
    assert len(generate_sample_candles('7h', seed=1)) == TIMEFRAME_SETTINGS['1h'][1]


def test_indicator_frame():
    candles = generate_sample_candles('1h', seed=3)
    frame = build_indicator_frame(candles, MACDConfig(12, 26, 9), rsi_period=14)

    assert list(frame.columns) == ['macd', 'signal', 'histogram', 'rsi']
    assert len(frame) == len(candles)
    assert frame['macd'].iloc[:25].isna().all()
    assert frame['rsi'].iloc[:14].isna().all()
    assert not np.isnan(frame['rsi'].iloc[-1])
    defined = frame.dropna()
    assert np.allclose(defined['histogram'], defined['macd'] - defined['signal'])
