"""Technical indicators over plain sequences of closing prices.

Every function here is pure and total: inputs are never modified and
degenerate denominators (zero variance, zero price) fall back to 0
instead of producing NaN or raising. The one deliberate exception is
``moving_average``, which marks positions without enough history as NaN.
"""
import math
from typing import List, Sequence

import numpy as np
import pandas as pd


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation of the first ``min(len(x), len(y))`` elements.

    Returns 0 for fewer than two paired values and for constant input.
    """
    n = min(len(x), len(y))
    if n < 2:
        return 0.0

    x_arr = _as_array(x[:n])
    y_arr = _as_array(y[:n])
    x_diff = x_arr - x_arr.mean()
    y_diff = y_arr - y_arr.mean()

    numerator = float(np.sum(x_diff * y_diff))
    denominator = math.sqrt(float(np.sum(x_diff ** 2)) * float(np.sum(y_diff ** 2)))
    if denominator == 0 or not math.isfinite(denominator):
        return 0.0
    return numerator / denominator


def returns(prices: Sequence[float]) -> List[float]:
    """Day-over-day fractional changes, one shorter than ``prices``."""
    result = []
    for previous, current in zip(prices[:-1], prices[1:]):
        if previous == 0:
            result.append(0.0)
        else:
            result.append((current - previous) / previous)
    return result


def volatility(prices: Sequence[float], window: int = 20) -> float:
    """Population standard deviation of the returns of the trailing ``window`` prices."""
    window_returns = returns(list(prices)[-window:])
    if not window_returns:
        return 0.0
    return float(np.std(window_returns))


def rsi(prices: Sequence[float], period: int = 14) -> float:
    """Relative strength index over the trailing ``period + 1`` prices.

    Gains and losses are averaged over ``period``. A window without any
    loss scores 70 rather than the textbook ceiling of 100.
    """
    changes = np.diff(_as_array(list(prices)[-(period + 1):]))
    avg_gain = float(np.clip(changes, 0, None).sum()) / period
    avg_loss = float(-np.clip(changes, None, 0).sum()) / period

    if avg_loss == 0:
        return 70.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def moving_average(prices: Sequence[float], period: int) -> List[float]:
    """Simple moving average, NaN where fewer than ``period`` prices are available."""
    if period <= 0:
        raise ValueError("Moving average period must be positive")
    series = pd.Series(list(prices), dtype=float)
    return series.rolling(window=period).mean().tolist()


def momentum(prices: Sequence[float], period: int = 10) -> float:
    """Mean return over the trailing ``period`` prices, 0 without enough history."""
    if len(prices) < period:
        return 0.0
    recent_returns = returns(list(prices)[-period:])
    if not recent_returns:
        return 0.0
    return float(np.mean(recent_returns))


def _deviation(price: float, average: float) -> float:
    if average == 0 or not math.isfinite(average):
        return 0.0
    return (price - average) / average


def mean_reversion_signal(price: float, ma20: float, ma50: float) -> float:
    """Negative mean fractional deviation of ``price`` from both moving averages.

    A price above both averages gives a negative (pull-down) signal.
    """
    short_term_dev = _deviation(price, ma20)
    long_term_dev = _deviation(price, ma50)
    return -(short_term_dev + long_term_dev) / 2
