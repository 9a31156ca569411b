"""
Pytest configuration and shared fixtures.
"""

import pytest

from tradesim.config.settings import SimulationConfig, MarketConfig
from tradesim.core.models import Candle
from tradesim.market.generator import PriceSeriesGenerator
from tradesim.portfolio.portfolio import Portfolio
from tradesim.trading.ledger import OrderLedger
from tradesim.simulation.driver import SimulationDriver


def make_candles(closes, start_time=1_700_000_000, interval=60):
    """Candles whose open equals the previous close, with a small range"""
    candles = []
    previous = closes[0]
    for i, close in enumerate(closes):
        open_price = previous
        candles.append(Candle(
            time=start_time + i * interval,
            open=open_price,
            high=max(open_price, close) + 0.5,
            low=min(open_price, close) - 0.5,
            close=close,
            volume=1000,
        ))
        previous = close
    return candles


@pytest.fixture
def sample_portfolio():
    """Create a sample portfolio for testing"""
    return Portfolio(initial_balance=10000.0)


@pytest.fixture
def sample_ledger(sample_portfolio):
    """Create an order ledger over the sample portfolio"""
    return OrderLedger(sample_portfolio)


@pytest.fixture
def seeded_generator():
    """Reproducible price generator"""
    return PriceSeriesGenerator.seeded(42)


@pytest.fixture
def sample_driver():
    """Started simulation with a fixed seed and short history"""
    config = SimulationConfig(market=MarketConfig(history_size=40, seed=7))
    driver = SimulationDriver(config)
    driver.start_session()
    return driver


@pytest.fixture
def rising_candles():
    """Forty candles with strictly rising closes"""
    return make_candles([100.0 + i for i in range(40)])
