"""
In-memory candle store holding the sliding candle window, volatility and the
latest pattern annotations for every instrument.
"""

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional

import pandas as pd

from ..core.models import Candle, PatternAnnotation
from ..core.exceptions import UnknownInstrumentError
from .frames import candles_to_frame

DEFAULT_MAX_CANDLES = 500


class CandleStore:
    """Per-instrument candle windows; oldest candles are dropped silently"""

    def __init__(self, max_candles: int = DEFAULT_MAX_CANDLES):
        if max_candles <= 0:
            raise ValueError("Candle window must be positive")

        self.max_candles = max_candles
        self.candles: Dict[str, Deque[Candle]] = {}
        self.volatility: Dict[str, float] = {}
        self.patterns: Dict[str, List[PatternAnnotation]] = {}

    def register(self, instrument_id: str, volatility: float) -> None:
        """Start tracking an instrument with a fixed volatility"""
        self.volatility[instrument_id] = volatility
        self.candles[instrument_id] = deque(maxlen=self.max_candles)
        self.patterns[instrument_id] = []

    def _window(self, instrument_id: str) -> Deque[Candle]:
        if instrument_id not in self.candles:
            raise UnknownInstrumentError(instrument_id)
        return self.candles[instrument_id]

    def set_history(self, instrument_id: str, candles: Iterable[Candle]) -> None:
        """Replace an instrument's window with the given candles"""
        window = self._window(instrument_id)
        window.clear()
        window.extend(candles)

    def append(self, instrument_id: str, candle: Candle) -> None:
        self._window(instrument_id).append(candle)

    def get_candles(self, instrument_id: str) -> List[Candle]:
        """Snapshot of the candle window, oldest first"""
        return list(self._window(instrument_id))

    def latest(self, instrument_id: str) -> Optional[Candle]:
        window = self._window(instrument_id)
        return window[-1] if window else None

    def latest_price(self, instrument_id: str) -> Optional[float]:
        candle = self.latest(instrument_id)
        return candle.close if candle else None

    def current_prices(self) -> Dict[str, float]:
        """Latest close for every instrument that has candles"""
        return {
            instrument_id: window[-1].close
            for instrument_id, window in self.candles.items() if window
        }

    def get_volatility(self, instrument_id: str) -> float:
        if instrument_id not in self.volatility:
            raise UnknownInstrumentError(instrument_id)
        return self.volatility[instrument_id]

    def set_patterns(self, instrument_id: str, patterns: List[PatternAnnotation]) -> None:
        """Replace the pattern annotations for an instrument"""
        self._window(instrument_id)
        self.patterns[instrument_id] = list(patterns)

    def get_patterns(self, instrument_id: str) -> List[PatternAnnotation]:
        return list(self.patterns.get(instrument_id, []))

    def price_change(self, instrument_id: str) -> Dict[str, float]:
        """Change between the last two closes, absolute and in percent"""
        window = self._window(instrument_id)
        if len(window) < 2:
            return {'price': 0.0, 'change': 0.0, 'percentage': 0.0}

        current = window[-1].close
        previous = window[-2].close
        change = current - previous
        return {
            'price': current,
            'change': change,
            'percentage': (change / previous) * 100 if previous else 0.0,
        }

    def to_frame(self, instrument_id: str) -> pd.DataFrame:
        return candles_to_frame(self._window(instrument_id))

    @property
    def instrument_ids(self) -> List[str]:
        return list(self.candles.keys())

    def __len__(self) -> int:
        return len(self.candles)
