"""Trading bot strategies, indicators and configuration."""

from .strategies import StrategyEngine, create_order_from_decision
from .config import BotConfigRegistry
from .indicators import sma, rsi

__all__ = ['StrategyEngine', 'create_order_from_decision', 'BotConfigRegistry', 'sma', 'rsi']
