"""
Core data models for the market simulator.
Contains all dataclasses and model definitions.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Union
import math
import time
import uuid

from .types import (
    OrderType, OrderSide, OrderStatus, Significance,
    AlertCondition, StrategyType, TradeAction,
)
from .exceptions import InvalidBotConfigError


def generate_id() -> str:
    """Short random identifier for orders and alerts"""
    return uuid.uuid4().hex[:13]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Instrument:
    """A tradable instrument from the fixed catalog"""
    id: str
    symbol: str
    name: str
    color: str = ""


@dataclass
class Candle:
    """OHLCV summary of one interval; time is in epoch seconds"""
    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0

    @property
    def body_size(self) -> float:
        """Size of the candlestick body"""
        return abs(self.close - self.open)

    @property
    def upper_shadow(self) -> float:
        """Length of upper shadow"""
        return self.high - max(self.open, self.close)

    @property
    def lower_shadow(self) -> float:
        """Length of lower shadow"""
        return min(self.open, self.close) - self.low

    @property
    def total_range(self) -> float:
        """Total price range of the candle"""
        return self.high - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open

    def is_well_formed(self) -> bool:
        """True when low <= min(open, close) <= max(open, close) <= high"""
        return (self.low <= min(self.open, self.close)
                and max(self.open, self.close) <= self.high
                and self.volume >= 0)


@dataclass
class PatternAnnotation:
    """A candlestick pattern recognised on the newest candle"""
    name: str
    description: str
    time: int
    significance: Significance


@dataclass
class Order:
    """Represents a trading order"""
    instrument_id: str
    side: OrderSide
    order_type: OrderType
    price: float
    amount: float
    id: str = field(default_factory=generate_id)
    status: OrderStatus = OrderStatus.PENDING
    created_at: int = field(default_factory=now_ms)
    filled_at: Optional[int] = None

    @property
    def value(self) -> float:
        """Cash value of the order at its own price"""
        return self.price * self.amount

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING


@dataclass
class OrderRejection:
    """Returned instead of an order when placement is refused"""
    reason: str
    instrument_id: str
    side: OrderSide
    price: float
    amount: float

    def __bool__(self) -> bool:
        return False


@dataclass
class PriceAlert:
    """Fires once when the price crosses a threshold"""
    instrument_id: str
    price: float
    condition: AlertCondition
    id: str = field(default_factory=generate_id)
    triggered: bool = False
    created_at: int = field(default_factory=now_ms)

    def is_satisfied_by(self, current_price: float) -> bool:
        """Whether the given price meets this alert's condition"""
        if self.condition == AlertCondition.ABOVE:
            return current_price >= self.price
        return current_price <= self.price


@dataclass
class Decision:
    """Trading decision produced by a strategy"""
    action: TradeAction
    reason: str
    price: float


# Accepted spellings of each bot parameter
_PARAM_ALIASES = {
    'buyThreshold': 'buy_threshold',
    'sellThreshold': 'sell_threshold',
    'shortPeriod': 'short_period',
    'longPeriod': 'long_period',
    'rsiPeriod': 'rsi_period',
    'rsiOverbought': 'rsi_overbought',
    'rsiOversold': 'rsi_oversold',
}

# Parameters that are window lengths and must be positive whole numbers
_PERIOD_PARAMS = {'short_period', 'long_period', 'rsi_period'}


def _coerce_param(name: str, value: Any) -> Union[int, float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidBotConfigError(f"Bot parameter {name} must be numeric, got {value!r}")
    if not math.isfinite(number):
        raise InvalidBotConfigError(f"Bot parameter {name} must be finite, got {value!r}")

    if name in _PERIOD_PARAMS:
        if number <= 0 or not number.is_integer():
            raise InvalidBotConfigError(f"Bot parameter {name} must be a positive integer, got {value!r}")
        return int(number)
    return number


@dataclass(frozen=True)
class BotParams:
    """Full set of strategy parameters with defaults"""
    buy_threshold: float = 0.03
    sell_threshold: float = 0.05
    short_period: int = 9
    long_period: int = 21
    rsi_period: int = 14
    rsi_overbought: float = 70
    rsi_oversold: float = 30

    def merged(self, overrides: Optional[Dict[str, Any]] = None) -> 'BotParams':
        """
        Return a copy with the sparse overrides applied.

        Keys may be snake_case field names or their camelCase aliases.
        None values are ignored so a partial form can be passed through as-is.
        Numeric strings and whole floats are coerced; periods must be
        positive integers.
        """
        if not overrides:
            return self

        known = {f.name for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            name = _PARAM_ALIASES.get(key, key)
            if name not in known:
                raise InvalidBotConfigError(f"Unknown bot parameter: {key}")
            if value is None:
                continue
            changes[name] = _coerce_param(name, value)
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class BotConfig:
    """Per-instrument trading bot settings"""
    enabled: bool = False
    strategy: Union[StrategyType, str] = StrategyType.SMA
    params: BotParams = field(default_factory=BotParams)
