"""Synthetic market data: instrument catalog, price generation and candle storage."""

from .catalog import generate_instruments
from .generator import PriceSeriesGenerator
from .store import CandleStore
from .frames import candles_to_frame
from .watchlist import Watchlist

__all__ = [
    'generate_instruments', 'PriceSeriesGenerator', 'CandleStore',
    'candles_to_frame', 'Watchlist',
]
