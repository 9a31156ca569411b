"""
TradeSim - an educational market-trading simulator.

This package provides:
- Synthetic random-walk price series for a fixed instrument catalog
- Candlestick pattern detection
- A cash/holding ledger filling market and limit orders
- Price alerts
- Configurable trading bots (SMA crossover, buy-low/sell-high, RSI)
"""

import logging
from typing import Optional

__version__ = "1.0.0"
__author__ = "TradeSim Team"

from .core.types import (
    OrderType, OrderSide, OrderStatus, Significance,
    AlertCondition, StrategyType, TradeAction, Timeframe,
)
from .core.models import (
    Instrument, Candle, PatternAnnotation, Order, OrderRejection,
    PriceAlert, Decision, BotParams, BotConfig,
)
from .config.settings import SimulationConfig
from .market.generator import PriceSeriesGenerator
from .market.store import CandleStore
from .patterns.detector import PatternDetector
from .portfolio.portfolio import Portfolio
from .portfolio.holding import Holding
from .trading.ledger import OrderLedger
from .alerts.ledger import AlertLedger
from .bot.strategies import StrategyEngine, create_order_from_decision
from .bot.config import BotConfigRegistry
from .simulation.driver import SimulationDriver, TickResult


def configure_logging(level: str = "INFO"):
    """Basic console logging for scripts and the demo entry point"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Convenience factory functions
def create_simulation(seed: Optional[int] = None, initial_balance: float = 10000.0,
                      timeframe: str = "15m", start: bool = True) -> SimulationDriver:
    """Create a simulation driver with default settings"""
    config = SimulationConfig()
    config.ledger.initial_balance = initial_balance
    config.market.timeframe = timeframe
    config.market.seed = seed
    config.validate()

    driver = SimulationDriver(config)
    if start:
        driver.start_session()
    return driver


__all__ = [
    # Core types
    'OrderType', 'OrderSide', 'OrderStatus', 'Significance',
    'AlertCondition', 'StrategyType', 'TradeAction', 'Timeframe',
    # Core models
    'Instrument', 'Candle', 'PatternAnnotation', 'Order', 'OrderRejection',
    'PriceAlert', 'Decision', 'BotParams', 'BotConfig', 'Holding',
    # Main components
    'SimulationConfig', 'PriceSeriesGenerator', 'CandleStore', 'PatternDetector',
    'Portfolio', 'OrderLedger', 'AlertLedger', 'StrategyEngine',
    'create_order_from_decision', 'BotConfigRegistry',
    'SimulationDriver', 'TickResult',
    # Convenience functions
    'configure_logging', 'create_simulation',
]
