"""
Core type definitions for the market simulator.
Contains all enums used across the ledger, bot and pattern components.
"""

from enum import Enum


class OrderType(Enum):
    """Types of orders that can be placed"""
    MARKET = "market"
    LIMIT = "limit"


class OrderSide(Enum):
    """Side of the order - buy or sell"""
    BUY = "buy"
    SELL = "sell"


class OrderStatus(Enum):
    """Order lifecycle states. FILLED and CANCELED are terminal."""
    PENDING = "pending"
    FILLED = "filled"
    CANCELED = "canceled"


class Significance(Enum):
    """Directional meaning of a candlestick pattern"""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class AlertCondition(Enum):
    """Direction a price alert watches for"""
    ABOVE = "above"
    BELOW = "below"


class StrategyType(Enum):
    """Trading bot strategies"""
    SMA = "sma"
    BUY_LOW_SELL_HIGH = "buyLowSellHigh"
    RSI = "rsi"


class TradeAction(Enum):
    """Decision emitted by the strategy engine"""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class Timeframe(Enum):
    """Candle intervals accepted by the simulation driver"""
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"

    @property
    def seconds(self) -> int:
        """Interval length in seconds"""
        return _TIMEFRAME_SECONDS[self]


_TIMEFRAME_SECONDS = {
    Timeframe.M1: 60,
    Timeframe.M5: 300,
    Timeframe.M15: 900,
    Timeframe.H1: 3600,
    Timeframe.H4: 14400,
    Timeframe.D1: 86400,
}
