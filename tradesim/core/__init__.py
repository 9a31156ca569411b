"""Core components of the market simulator."""

from .types import (
    OrderType, OrderSide, OrderStatus, Significance,
    AlertCondition, StrategyType, TradeAction, Timeframe,
)
from .models import (
    Instrument, Candle, PatternAnnotation, Order, OrderRejection,
    PriceAlert, Decision, BotParams, BotConfig,
)
from .exceptions import (
    TradeSimError, InsufficientFundsError, InsufficientHoldingsError,
    InvalidOrderError, UnknownInstrumentError, InvalidBotConfigError, InvalidAlertError,
    ConfigurationError,
)

__all__ = [
    'OrderType', 'OrderSide', 'OrderStatus', 'Significance',
    'AlertCondition', 'StrategyType', 'TradeAction', 'Timeframe',
    'Instrument', 'Candle', 'PatternAnnotation', 'Order', 'OrderRejection',
    'PriceAlert', 'Decision', 'BotParams', 'BotConfig',
    'TradeSimError', 'InsufficientFundsError', 'InsufficientHoldingsError',
    'InvalidOrderError', 'UnknownInstrumentError', 'InvalidBotConfigError', 'InvalidAlertError',
    'ConfigurationError',
]
