"""
Synthetic price series generation.

Candles are produced by a bounded random walk: each candle opens at the
previous close (occasionally gapped) and draws its high, low and close as
offsets from the open scaled by a per-instrument volatility. The high and low
offsets are clamped against the close offset so every candle satisfies
low <= min(open, close) <= max(open, close) <= high.
"""

import logging
import time as _time
from typing import List, Optional

import numpy as np

from ..core.models import Candle

logger = logging.getLogger(__name__)

# Initial price range
INITIAL_PRICE_MIN = 50.0
INITIAL_PRICE_MAX = 500.0

# Volatility range
VOLATILITY_MIN = 0.001
VOLATILITY_MAX = 0.01

# Volume settings
VOLUME_BASE_MIN = 1000
VOLUME_BASE_MAX = 10000
VOLUME_MULTIPLIER_MIN = 0.5
VOLUME_MULTIPLIER_MAX = 2.0

# Probability that a candle opens with a gap from the previous close
GAP_PROBABILITY = 0.2


class PriceSeriesGenerator:
    """Random-walk OHLCV generator backed by an injectable numpy Generator"""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def seeded(cls, seed: Optional[int]) -> 'PriceSeriesGenerator':
        """Create a generator whose output is reproducible for a given seed"""
        return cls(np.random.default_rng(seed))

    def _uniform(self) -> float:
        return float(self.rng.random())

    def initial_price(self) -> float:
        """Random starting price within the initial range"""
        return INITIAL_PRICE_MIN + self._uniform() * (INITIAL_PRICE_MAX - INITIAL_PRICE_MIN)

    def generate_volatility(self) -> float:
        """Per-instrument volatility, drawn once at initialization"""
        return VOLATILITY_MIN + self._uniform() * (VOLATILITY_MAX - VOLATILITY_MIN)

    def generate_volume(self, price: float) -> int:
        """Random volume scaled by price level"""
        base = VOLUME_BASE_MIN + self._uniform() * (VOLUME_BASE_MAX - VOLUME_BASE_MIN)
        multiplier = (VOLUME_MULTIPLIER_MIN
                      + self._uniform() * (VOLUME_MULTIPLIER_MAX - VOLUME_MULTIPLIER_MIN))
        return int(round(base * multiplier * (price / 100)))

    def _build_candle(self, previous_close: float, time: int, volatility: float) -> Candle:
        gap = 0.0
        if self._uniform() > 1 - GAP_PROBABILITY:
            gap = (self._uniform() - 0.5) * volatility * 2
        open_price = previous_close * (1 + gap)

        high_offset = self._uniform() * volatility * 2
        low_offset = -self._uniform() * volatility * 2
        close_offset = (self._uniform() - 0.5) * volatility * 2

        high = open_price * (1 + max(high_offset, 0.0, close_offset))
        low = open_price * (1 + min(low_offset, 0.0, close_offset))
        close = open_price * (1 + close_offset)

        return Candle(
            time=time,
            open=open_price,
            high=high,
            low=low,
            close=close,
            volume=self.generate_volume(close),
        )

    def initial_candle(self, time: Optional[int] = None,
                       volatility: float = VOLATILITY_MIN) -> Candle:
        """Candle with no predecessor, seeded from a random initial price"""
        if time is None:
            time = int(_time.time())
        return self._build_candle(self.initial_price(), time, volatility)

    def next_candle(self, previous: Candle, interval_seconds: int, volatility: float) -> Candle:
        """Exactly one successor candle at previous.time + interval_seconds"""
        return self._build_candle(previous.close, previous.time + interval_seconds, volatility)

    def generate_historical_data(self, count: int, interval_seconds: int, volatility: float,
                                 end_time: Optional[int] = None) -> List[Candle]:
        """
        Generate a chained history of candles ending at "now"

        Args:
            count: Number of candles to produce
            interval_seconds: Spacing between candle times
            volatility: Step-size parameter for the instrument
            end_time: Epoch seconds the history ends at (defaults to now)

        Returns:
            List of candles in chronological order
        """
        if count <= 0:
            return []
        if end_time is None:
            end_time = int(_time.time())

        start = end_time - count * interval_seconds
        candles = [self.initial_candle(start, volatility)]
        while len(candles) < count:
            candles.append(self.next_candle(candles[-1], interval_seconds, volatility))

        logger.debug(f"Generated {count} candles at {interval_seconds}s, volatility {volatility:.4f}")
        return candles
