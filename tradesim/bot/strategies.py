"""
Trading bot strategies that turn a candle window into buy/sell/hold decisions.
"""

import logging
from typing import Callable, Dict, Optional, Sequence

from ..core.models import BotConfig, BotParams, Candle, Decision, Order
from ..core.types import OrderSide, OrderType, StrategyType, TradeAction
from .indicators import closes, rsi, sma

logger = logging.getLogger(__name__)

MIN_CANDLES = 30
AVERAGE_PERIOD = 10
DEFAULT_TRADE_AMOUNT = 0.1


def resolve_strategy(strategy) -> Optional[StrategyType]:
    """StrategyType for an enum member or its string value, None if unknown"""
    if isinstance(strategy, StrategyType):
        return strategy
    try:
        return StrategyType(strategy)
    except ValueError:
        return None


class StrategyEngine:
    """Pure decision logic; selects a strategy from the bot configuration"""

    def __init__(self, min_candles: int = MIN_CANDLES):
        self.min_candles = min_candles
        self._strategies: Dict[StrategyType, Callable[[Sequence[Candle], BotParams], Decision]] = {
            StrategyType.SMA: self.sma_strategy,
            StrategyType.BUY_LOW_SELL_HIGH: self.buy_low_sell_high_strategy,
            StrategyType.RSI: self.rsi_strategy,
        }

    def decide(self, candles: Sequence[Candle], config: BotConfig) -> Decision:
        """Make a trading decision based on the bot's strategy"""
        if not config.enabled or len(candles) < self.min_candles:
            return Decision(
                action=TradeAction.HOLD,
                reason='Trading bot disabled or insufficient data',
                price=candles[-1].close if candles else 0.0,
            )

        strategy = resolve_strategy(config.strategy)
        if strategy is None:
            logger.warning(f"Unknown strategy {config.strategy!r}, holding")
            return Decision(
                action=TradeAction.HOLD,
                reason='No valid strategy selected',
                price=candles[-1].close,
            )

        return self._strategies[strategy](candles, config.params)

    @staticmethod
    def sma_strategy(candles: Sequence[Candle], params: BotParams) -> Decision:
        """Buy when the short SMA is above the long SMA, sell when below"""
        prices = closes(candles)
        short_sma = sma(prices, params.short_period)
        long_sma = sma(prices, params.long_period)
        current_price = float(prices[-1])

        values = (f"SMA({params.short_period}) {short_sma:.2f}, "
                  f"SMA({params.long_period}) {long_sma:.2f}")
        if short_sma > long_sma:
            return Decision(TradeAction.BUY,
                            f"Short-term SMA above long-term SMA: {values}", current_price)
        if short_sma < long_sma:
            return Decision(TradeAction.SELL,
                            f"Short-term SMA below long-term SMA: {values}", current_price)
        return Decision(TradeAction.HOLD,
                        f"SMAs are equal - no clear signal: {values}", current_price)

    @staticmethod
    def buy_low_sell_high_strategy(candles: Sequence[Candle], params: BotParams) -> Decision:
        """Buy dips below the recent average, sell rises above it"""
        prices = closes(candles)
        current_price = float(prices[-1])
        average = sma(prices, AVERAGE_PERIOD)

        if average == 0:
            return Decision(TradeAction.HOLD, 'Average price unavailable', current_price)

        deviation = (current_price - average) / average
        if deviation < -params.buy_threshold:
            return Decision(
                TradeAction.BUY,
                f"Price dropped {-deviation * 100:.2f}% below average {average:.2f} - buying the dip",
                current_price)
        if deviation > params.sell_threshold:
            return Decision(
                TradeAction.SELL,
                f"Price rose {deviation * 100:.2f}% above average {average:.2f} - taking profit",
                current_price)
        return Decision(
            TradeAction.HOLD,
            f"Price within normal range ({deviation * 100:+.2f}% from average {average:.2f})",
            current_price)

    @staticmethod
    def rsi_strategy(candles: Sequence[Candle], params: BotParams) -> Decision:
        """Buy oversold, sell overbought"""
        prices = closes(candles)
        value = rsi(prices, params.rsi_period)
        current_price = float(prices[-1])

        if value < params.rsi_oversold:
            return Decision(
                TradeAction.BUY,
                f"RSI ({value:.2f}) below oversold threshold ({params.rsi_oversold:g})",
                current_price)
        if value > params.rsi_overbought:
            return Decision(
                TradeAction.SELL,
                f"RSI ({value:.2f}) above overbought threshold ({params.rsi_overbought:g})",
                current_price)
        return Decision(TradeAction.HOLD, f"RSI ({value:.2f}) within normal range", current_price)


def create_order_from_decision(decision: Decision, instrument_id: str,
                               amount: float = DEFAULT_TRADE_AMOUNT) -> Optional[Order]:
    """Pending market order for a buy/sell decision, None for hold"""
    if decision.action == TradeAction.HOLD:
        return None

    return Order(
        instrument_id=instrument_id,
        side=OrderSide(decision.action.value),
        order_type=OrderType.MARKET,
        price=decision.price,
        amount=amount,
    )
