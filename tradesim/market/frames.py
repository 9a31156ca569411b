"""
Conversion of candle sequences to pandas DataFrames for analysis and display.
"""

from typing import Iterable

import pandas as pd

from ..core.models import Candle

COLUMNS = ['open', 'high', 'low', 'close', 'volume']


def candles_to_frame(candles: Iterable[Candle]) -> pd.DataFrame:
    """OHLCV frame indexed by UTC timestamp"""
    rows = [(c.time, c.open, c.high, c.low, c.close, c.volume) for c in candles]
    frame = pd.DataFrame(rows, columns=['time'] + COLUMNS)
    frame.index = pd.to_datetime(frame.pop('time'), unit='s', utc=True)
    frame.index.name = 'timestamp'
    return frame
