import math

import pytest

from charting.indicators.ema import calculate_ema, compute_ema
from charting.indicators.macd import MACDConfig, calculate_macd
from charting.indicators.rsi import calculate_rsi


# ==================== EMA ====================

def test_ema_constant_series():
    assert calculate_ema([5.0] * 10, 3) == pytest.approx([5.0] * 8)


def test_ema_first_value_is_simple_average():
    ema = calculate_ema([1, 2, 3, 4], 3)
    assert ema[0] == pytest.approx(2.0)
    # k = 0.5: (4 - 2) * 0.5 + 2
    assert ema[1] == pytest.approx(3.0)


def test_ema_shorter_than_period_is_empty():
    assert calculate_ema([1.0, 2.0], 3) == []
    assert calculate_ema([], 3) == []


def test_compute_ema_aligned_to_times():
    times = [10, 20, 30, 40]
    points = compute_ema([1, 2, 3, 4], times, 3)
    assert [p.time for p in points] == times
    assert points[0].value is None and points[1].value is None
    assert points[2].value == pytest.approx(2.0)


# ==================== RSI ====================

def test_rsi_insufficient_data():
    times = list(range(14))
    points = calculate_rsi([float(i) for i in range(14)], times, 14)
    assert len(points) == 14
    assert all(p.value is None for p in points)


def test_rsi_rising_series_uses_zero_loss_convention():
    closes = [float(i) for i in range(1, 31)]
    times = list(range(30))
    points = calculate_rsi(closes, times, 14)

    assert len(points) == 30
    assert all(p.value is None for p in points[:14])
    assert points[14].value == 99.01
    assert all(p.value == 99.01 for p in points[14:])


def test_rsi_falling_series_is_zero():
    closes = [float(i) for i in range(30, 0, -1)]
    points = calculate_rsi(closes, list(range(30)), 14)
    assert points[14].value == 0.0


def test_rsi_values_in_range_and_rounded():
    closes = [100 + 5 * math.sin(i / 3) for i in range(60)]
    points = calculate_rsi(closes, list(range(60)), 14)
    for p in points[14:]:
        assert 0 <= p.value <= 100
        assert round(p.value, 2) == p.value


# ==================== MACD ====================

def test_macd_insufficient_data():
    points = calculate_macd([1.0] * 25, list(range(25)))
    assert len(points) == 25
    assert all(p.macd is None and p.signal is None and p.histogram is None for p in points)


def test_macd_constant_series_is_zero():
    points = calculate_macd([100.0] * 40, list(range(40)))

    assert len(points) == 40
    assert all(p.macd is None for p in points[:25])
    assert points[25].macd == pytest.approx(0.0)
    # сигнальная линия появляется через signal - 1 значений MACD
    assert points[32].signal is None
    assert points[33].signal == pytest.approx(0.0)
    assert points[33].histogram == pytest.approx(0.0)


def test_macd_histogram_is_macd_minus_signal():
    closes = [100 + 10 * math.sin(i / 5) + i * 0.3 for i in range(80)]
    points = calculate_macd(closes, list(range(80)), MACDConfig(12, 26, 9))

    defined = [p for p in points if p.histogram is not None]
    assert defined
    for p in defined:
        assert p.histogram == pytest.approx(p.macd - p.signal)


def test_macd_custom_periods():
    points = calculate_macd([float(i) for i in range(20)], list(range(20)), MACDConfig(3, 6, 3))
    assert all(p.macd is None for p in points[:5])
    assert points[5].macd is not None
    assert points[6].signal is None
    assert points[7].signal is not None


# ==================== НЕКОРРЕКТНЫЕ ПЕРИОДЫ ====================

@pytest.mark.parametrize("period", [0, -3])
def test_rsi_non_positive_period_is_empty(period):
    points = calculate_rsi([1.0, 2.0, 3.0], [1, 2, 3], period)
    assert [p.time for p in points] == [1, 2, 3]
    assert all(p.value is None for p in points)


@pytest.mark.parametrize("config", [MACDConfig(0, 26, 9), MACDConfig(12, 0, 9), MACDConfig(12, 26, 0)])
def test_macd_non_positive_period_is_empty(config):
    closes = [float(i) for i in range(30)]
    points = calculate_macd(closes, list(range(30)), config)
    assert len(points) == 30
    assert all(p.macd is None and p.signal is None and p.histogram is None for p in points)


def test_ema_non_positive_period_is_empty():
    assert calculate_ema([1.0, 2.0], 0) == []
    assert all(p.value is None for p in compute_ema([1.0, 2.0], [1, 2], 0))
