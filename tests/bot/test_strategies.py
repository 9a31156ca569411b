"""
Tests for indicators and trading bot strategies.
"""

import pytest

from tradesim.bot.indicators import rsi, sma
from tradesim.bot.strategies import StrategyEngine, create_order_from_decision
from tradesim.core.models import BotConfig, BotParams, Decision
from tradesim.core.types import OrderSide, OrderStatus, OrderType, StrategyType, TradeAction
from conftest import make_candles


@pytest.fixture
def engine():
    return StrategyEngine()


def enabled(strategy, **params):
    return BotConfig(enabled=True, strategy=strategy, params=BotParams().merged(params))


class TestIndicators:
    def test_sma(self):
        assert sma([1.0, 2.0, 3.0, 4.0], 2) == 3.5

    def test_sma_insufficient_history(self):
        """SMA is 0 rather than an error when the history is short"""
        assert sma([1.0, 2.0], 5) == 0.0

    def test_rsi_neutral_when_short(self):
        assert rsi([1.0] * 14, 14) == 50.0

    def test_rsi_no_losses(self):
        assert rsi([float(i) for i in range(20)], 14) == 100.0

    def test_rsi_mixed(self):
        """Gains 3, losses 1 over three changes gives RSI 75"""
        assert rsi([10.0, 11.0, 10.0, 12.0], 3) == pytest.approx(75.0)

    def test_rsi_only_losses(self):
        assert rsi([float(20 - i) for i in range(20)], 14) == pytest.approx(0.0)


class TestStrategyEngine:
    def test_disabled_bot_holds(self, engine, rising_candles):
        decision = engine.decide(rising_candles, BotConfig(enabled=False))

        assert decision.action == TradeAction.HOLD
        assert decision.price == rising_candles[-1].close

    def test_insufficient_history_holds(self, engine):
        candles = make_candles([100.0 + i for i in range(29)])
        decision = engine.decide(candles, enabled(StrategyType.SMA))

        assert decision.action == TradeAction.HOLD
        assert 'insufficient data' in decision.reason

    def test_no_candles_price_zero(self, engine):
        decision = engine.decide([], enabled(StrategyType.SMA))
        assert decision.action == TradeAction.HOLD
        assert decision.price == 0

    def test_unknown_strategy_holds(self, engine, rising_candles):
        """An unrecognised strategy never raises"""
        decision = engine.decide(rising_candles, BotConfig(enabled=True, strategy='macd'))

        assert decision.action == TradeAction.HOLD
        assert decision.reason == 'No valid strategy selected'

    def test_string_strategy_value(self, engine, rising_candles):
        decision = engine.decide(rising_candles, BotConfig(enabled=True, strategy='rsi'))
        assert decision.action == TradeAction.SELL

    def test_sma_buy_on_rising_prices(self, engine, rising_candles):
        decision = engine.decide(rising_candles, enabled(StrategyType.SMA))

        assert decision.action == TradeAction.BUY
        assert '135.00' in decision.reason  # mean of closes 131..139
        assert '129.00' in decision.reason  # mean of closes 119..139
        assert decision.price == 139.0

    def test_sma_sell_on_falling_prices(self, engine):
        candles = make_candles([200.0 - i for i in range(40)])
        assert engine.decide(candles, enabled(StrategyType.SMA)).action == TradeAction.SELL

    def test_sma_hold_when_equal(self, engine):
        candles = make_candles([100.0] * 40)
        assert engine.decide(candles, enabled(StrategyType.SMA)).action == TradeAction.HOLD

    def test_sma_custom_periods(self, engine):
        """Short period overrides change the comparison window"""
        closes = [100.0] * 35 + [120.0, 120.0, 120.0, 90.0, 90.0]
        candles = make_candles(closes)
        assert engine.decide(candles, enabled(StrategyType.SMA)).action == TradeAction.BUY
        assert engine.decide(candles, enabled(StrategyType.SMA, shortPeriod=2)).action == TradeAction.SELL

    def test_buy_low_sell_high_buys_dip(self, engine):
        candles = make_candles([100.0] * 39 + [90.0])
        decision = engine.decide(candles, enabled(StrategyType.BUY_LOW_SELL_HIGH))

        assert decision.action == TradeAction.BUY
        assert '9.09' in decision.reason

    def test_buy_low_sell_high_sells_rise(self, engine):
        candles = make_candles([100.0] * 39 + [110.0])
        decision = engine.decide(candles, enabled(StrategyType.BUY_LOW_SELL_HIGH))

        assert decision.action == TradeAction.SELL
        assert '8.91' in decision.reason

    def test_buy_low_sell_high_holds_in_range(self, engine):
        candles = make_candles([100.0] * 39 + [101.0])
        decision = engine.decide(candles, enabled(StrategyType.BUY_LOW_SELL_HIGH))
        assert decision.action == TradeAction.HOLD

    def test_buy_low_sell_high_thresholds(self, engine):
        candles = make_candles([100.0] * 39 + [101.0])
        config = enabled(StrategyType.BUY_LOW_SELL_HIGH, sellThreshold=0.005)
        assert engine.decide(candles, config).action == TradeAction.SELL

    def test_rsi_overbought_on_monotonic_rise(self, engine, rising_candles):
        """No losses gives RSI 100, above the default overbought level"""
        decision = engine.decide(rising_candles, enabled(StrategyType.RSI))

        assert decision.action == TradeAction.SELL
        assert '100.00' in decision.reason
        assert '70' in decision.reason

    def test_rsi_oversold_on_monotonic_fall(self, engine):
        candles = make_candles([200.0 - i for i in range(40)])
        decision = engine.decide(candles, enabled(StrategyType.RSI))

        assert decision.action == TradeAction.BUY
        assert '0.00' in decision.reason

    def test_rsi_hold_in_range(self, engine):
        candles = make_candles([100.0 + (1 if i % 2 else -1) for i in range(40)])
        decision = engine.decide(candles, enabled(StrategyType.RSI))

        assert decision.action == TradeAction.HOLD
        assert 'within normal range' in decision.reason


class TestCreateOrderFromDecision:
    def test_hold_creates_nothing(self):
        decision = Decision(TradeAction.HOLD, 'flat', 100.0)
        assert create_order_from_decision(decision, '1') is None

    def test_buy_creates_pending_market_order(self):
        decision = Decision(TradeAction.BUY, 'dip', 123.0)
        order = create_order_from_decision(decision, '3')

        assert order.instrument_id == '3'
        assert order.side == OrderSide.BUY
        assert order.order_type == OrderType.MARKET
        assert order.status == OrderStatus.PENDING
        assert order.price == 123.0
        assert order.amount == 0.1

    def test_sell_with_custom_amount(self):
        order = create_order_from_decision(Decision(TradeAction.SELL, 'peak', 50.0), '2', amount=2)
        assert order.side == OrderSide.SELL
        assert order.amount == 2
