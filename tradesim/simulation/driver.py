"""
Simulation driver that advances the synthetic market one tick at a time and
wires the candle store, pattern detector, order ledger, alerts and bots
together.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from ..config.settings import SimulationConfig
from ..core.models import (
    Candle, Decision, Instrument, PatternAnnotation, Order, PriceAlert,
)
from ..core.types import AlertCondition, OrderSide, OrderType, Timeframe, TradeAction
from ..core.exceptions import InvalidOrderError, UnknownInstrumentError
from ..market.catalog import generate_instruments
from ..market.generator import PriceSeriesGenerator
from ..market.store import CandleStore
from ..market.watchlist import Watchlist
from ..patterns.detector import PatternDetector
from ..portfolio.portfolio import Portfolio
from ..trading.ledger import OrderLedger, PlacementResult
from ..alerts.ledger import AlertLedger
from ..bot.config import BotConfigRegistry
from ..bot.strategies import StrategyEngine, create_order_from_decision


@dataclass
class InitialData:
    """Snapshot produced by initialize_data"""
    instruments: List[Instrument]
    candles: Dict[str, List[Candle]]
    volatility: Dict[str, float]
    patterns: Dict[str, List[PatternAnnotation]]


@dataclass
class TickResult:
    """Everything that changed during one tick"""
    candles: Dict[str, Candle] = field(default_factory=dict)
    patterns: Dict[str, List[PatternAnnotation]] = field(default_factory=dict)
    filled_orders: List[Order] = field(default_factory=list)
    bot_decisions: Dict[str, Decision] = field(default_factory=dict)
    triggered_alerts: List[PriceAlert] = field(default_factory=list)


class SimulationDriver:
    """Owns all simulation state and runs the per-tick update"""

    def __init__(self, config: Optional[SimulationConfig] = None,
                 generator: Optional[PriceSeriesGenerator] = None):
        self.config = config or SimulationConfig()
        self.generator = generator or PriceSeriesGenerator.seeded(self.config.market.seed)
        self.timeframe: Timeframe = self.config.timeframe

        self.instruments: List[Instrument] = []
        self.store = CandleStore(max_candles=self.config.market.max_candles)
        self.detector = PatternDetector()
        self.portfolio = Portfolio(self.config.ledger.initial_balance)
        self.ledger = OrderLedger(self.portfolio)
        self.alerts = AlertLedger()
        self.bot_configs = BotConfigRegistry()
        self.strategy_engine = StrategyEngine(min_candles=self.config.bot.min_candles)
        self.watchlist = Watchlist()
        self.selected_instrument_id: Optional[str] = None

        # State
        self.session_active = False
        self.initialized = False
        self.tick_count = 0

        # Callbacks
        self.alert_callbacks: List[Callable[[PriceAlert], None]] = []
        self.tick_callbacks: List[Callable[[TickResult], None]] = []

        self.logger = logging.getLogger(__name__)

    # Session gate

    def start_session(self) -> None:
        """Activate the simulation, initializing market data on first use"""
        self.session_active = True
        if not self.initialized:
            self.initialize_data()
        self.logger.info("Simulation session started")

    def end_session(self) -> None:
        self.session_active = False
        self.logger.info("Simulation session ended")

    # Setup

    def initialize_data(self) -> InitialData:
        """Build the catalog and seed price history for every instrument"""
        self.instruments = generate_instruments()
        self.ledger.instrument_ids = {i.id for i in self.instruments}
        interval = self.timeframe.seconds

        for instrument in self.instruments:
            volatility = self.generator.generate_volatility()
            self.store.register(instrument.id, volatility)
            history = self.generator.generate_historical_data(
                self.config.market.history_size, interval, volatility)
            self.store.set_history(instrument.id, history)
            self.store.set_patterns(instrument.id, self.detector.detect(history))

        if self.selected_instrument_id is None:
            self.selected_instrument_id = self.instruments[0].id
        self.initialized = True
        self.logger.info(f"Initialized {len(self.instruments)} instruments with "
                         f"{self.config.market.history_size} candles at {self.timeframe.value}")

        return InitialData(
            instruments=list(self.instruments),
            candles={i.id: self.store.get_candles(i.id) for i in self.instruments},
            volatility=dict(self.store.volatility),
            patterns={i.id: self.store.get_patterns(i.id) for i in self.instruments},
        )

    def set_timeframe(self, timeframe: Union[Timeframe, str]) -> None:
        self.timeframe = Timeframe(timeframe)

    def select_instrument(self, instrument_id: str) -> None:
        self._require_instrument(instrument_id)
        self.selected_instrument_id = instrument_id

    def get_instrument(self, instrument_id: str) -> Instrument:
        for instrument in self.instruments:
            if instrument.id == instrument_id:
                return instrument
        raise UnknownInstrumentError(instrument_id)

    def _require_instrument(self, instrument_id: str) -> None:
        self.get_instrument(instrument_id)

    # Tick

    def advance_tick(self, timeframe: Optional[Union[Timeframe, str]] = None) -> TickResult:
        """
        Advance every instrument by one candle.

        For each instrument: append the next candle, re-detect patterns,
        settle pending limit orders at the new close, run an enabled bot and
        check price alerts. Does nothing while no session is active.
        """
        result = TickResult()
        if not self.session_active or not self.initialized:
            return result

        if timeframe is not None:
            self.set_timeframe(timeframe)
        interval = self.timeframe.seconds

        for instrument in self.instruments:
            iid = instrument.id
            previous = self.store.latest(iid)
            if previous is None:
                candle = self.generator.initial_candle(volatility=self.store.get_volatility(iid))
            else:
                candle = self.generator.next_candle(previous, interval, self.store.get_volatility(iid))
            self.store.append(iid, candle)
            result.candles[iid] = candle

            patterns = self.detector.detect(self.store.get_candles(iid))
            self.store.set_patterns(iid, patterns)
            result.patterns[iid] = patterns

            result.filled_orders.extend(self.ledger.process_orders(iid, candle.close))

            decision = self.run_trading_bot(iid)
            if decision is not None:
                result.bot_decisions[iid] = decision

            result.triggered_alerts.extend(self._dispatch_alerts(iid, candle.close))

        self.tick_count += 1
        for callback in self.tick_callbacks:
            try:
                callback(result)
            except Exception as e:
                self.logger.error(f"Error in tick callback: {e}")
        return result

    def _dispatch_alerts(self, instrument_id: str, price: float) -> List[PriceAlert]:
        """Notify callbacks of newly satisfied alerts, then mark them triggered"""
        triggered = self.alerts.check_alerts(instrument_id, price)
        for alert in triggered:
            for callback in self.alert_callbacks:
                try:
                    callback(alert)
                except Exception as e:
                    self.logger.error(f"Error in alert callback: {e}")
            self.alerts.mark_alert_as_triggered(alert.id)
        return triggered

    def run(self, ticks: int, tick_delay: Optional[float] = None) -> List[TickResult]:
        """Blocking loop advancing a fixed number of ticks"""
        delay = self.config.tick_interval_seconds if tick_delay is None else tick_delay
        results = []
        for i in range(ticks):
            results.append(self.advance_tick())
            if delay > 0 and i < ticks - 1:
                time.sleep(delay)
        return results

    # Orders

    def place_order(self, instrument_id: str, side: Union[OrderSide, str],
                    order_type: Union[OrderType, str], amount: float,
                    price: Optional[float] = None) -> PlacementResult:
        """Place an order; market orders default to the latest close"""
        self._require_instrument(instrument_id)
        if price is None:
            price = self.store.latest_price(instrument_id)
            if price is None:
                raise InvalidOrderError(f"No price available for {instrument_id}")
        return self.ledger.place_order(instrument_id, side, order_type, price, amount)

    def cancel_order(self, order_id: str) -> bool:
        return self.ledger.cancel_order(order_id)

    def process_orders(self, instrument_id: str, price: float) -> List[Order]:
        return self.ledger.process_orders(instrument_id, price)

    # Bots

    def update_bot_config(self, instrument_id: str, enabled: Optional[bool] = None,
                          strategy=None, params: Optional[Dict[str, Any]] = None):
        self._require_instrument(instrument_id)
        return self.bot_configs.update(instrument_id, enabled=enabled,
                                       strategy=strategy, params=params)

    def run_trading_bot(self, instrument_id: str) -> Optional[Decision]:
        """
        Run the instrument's bot and place an order for a buy/sell decision.

        Returns None when the bot is disabled, the session is inactive or the
        history is too short; otherwise the decision made.
        """
        if not self.session_active:
            return None
        config = self.bot_configs.get(instrument_id)
        if not config.enabled:
            return None
        candles = self.store.get_candles(instrument_id)
        if len(candles) < self.strategy_engine.min_candles:
            return None

        decision = self.strategy_engine.decide(candles, config)
        if decision.action == TradeAction.HOLD:
            return decision

        order = create_order_from_decision(decision, instrument_id, self.config.bot.trade_amount)
        if order is not None:
            placed = self.ledger.submit(order)
            if placed:
                self.logger.info(f"Bot {decision.action.value} order placed for "
                                 f"{instrument_id}: {decision.reason}")
            else:
                self.logger.info(f"Bot {decision.action.value} order for {instrument_id} "
                                 f"rejected: {placed.reason}")
        return decision

    # Alerts

    def add_alert(self, instrument_id: str, price: float,
                  condition: Union[AlertCondition, str]) -> PriceAlert:
        self._require_instrument(instrument_id)
        return self.alerts.add_alert(instrument_id, price, condition)

    def remove_alert(self, alert_id: str) -> bool:
        return self.alerts.remove_alert(alert_id)

    def check_alerts(self, instrument_id: str, price: float) -> List[PriceAlert]:
        return self.alerts.check_alerts(instrument_id, price)

    def mark_alert_as_triggered(self, alert_id: str) -> None:
        self.alerts.mark_alert_as_triggered(alert_id)

    # Callbacks

    def register_alert_callback(self, callback: Callable[[PriceAlert], None]):
        """Register callback for triggered price alerts"""
        if not callable(callback):
            raise ValueError("Callback must be callable")
        self.alert_callbacks.append(callback)

    def register_tick_callback(self, callback: Callable[[TickResult], None]):
        """Register callback for completed ticks"""
        if not callable(callback):
            raise ValueError("Callback must be callable")
        self.tick_callbacks.append(callback)

    # Status

    def current_prices(self) -> Dict[str, float]:
        return self.store.current_prices()

    def get_status(self) -> Dict:
        """Get current simulation status"""
        status = self.ledger.get_summary(self.current_prices())
        status.update({
            'session_active': self.session_active,
            'timeframe': self.timeframe.value,
            'tick_count': self.tick_count,
            'instruments': len(self.instruments),
            'selected_instrument_id': self.selected_instrument_id,
            'bots_enabled': self.bot_configs.enabled_instruments(),
            'alerts': len(self.alerts),
            'watchlist': list(self.watchlist),
        })
        return status

    def __str__(self) -> str:
        return (f"SimulationDriver(Instruments: {len(self.instruments)}, "
                f"Ticks: {self.tick_count}, Balance: ${self.ledger.balance:.2f})")

    def __repr__(self) -> str:
        return self.__str__()
