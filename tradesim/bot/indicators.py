"""
Technical indicators computed over close prices.

Both indicators return a defined fallback instead of raising when the history
is too short, since short windows are routine while the simulation warms up.
"""

from typing import Sequence

import numpy as np

from ..core.models import Candle

RSI_NEUTRAL = 50.0


def closes(candles: Sequence[Candle]) -> np.ndarray:
    """Close prices as a float array"""
    return np.fromiter((c.close for c in candles), dtype=float, count=len(candles))


def sma(prices: Sequence[float], period: int) -> float:
    """Simple moving average of the last `period` prices, 0 if too few"""
    if period <= 0 or len(prices) < period:
        return 0.0
    return float(np.mean(np.asarray(prices, dtype=float)[-period:]))


def rsi(prices: Sequence[float], period: int) -> float:
    """
    Relative Strength Index over the trailing `period` price changes.

    Returns 50 when fewer than period + 1 prices exist and 100 when the
    window contains no losses.
    """
    if period <= 0 or len(prices) < period + 1:
        return RSI_NEUTRAL

    deltas = np.diff(np.asarray(prices, dtype=float)[-(period + 1):])
    gains = deltas[deltas >= 0].sum()
    losses = -deltas[deltas < 0].sum()

    if losses == 0:
        return 100.0

    rs = (gains / period) / (losses / period)
    return float(100 - (100 / (1 + rs)))
