"""
Order ledger: places, cancels and settles orders against the portfolio.
"""

import logging
import threading
from typing import Iterable, List, Optional, Union

from ..portfolio.portfolio import Portfolio
from ..core.models import Order, OrderRejection, now_ms
from ..core.types import OrderSide, OrderStatus, OrderType
from ..core.exceptions import (
    InsufficientFundsError, InsufficientHoldingsError,
    InvalidOrderError, UnknownInstrumentError,
)

PlacementResult = Union[Order, OrderRejection]


class OrderLedger:
    """
    Append-only order ledger backed by a portfolio.

    Market orders settle synchronously at placement; limit orders wait for a
    settlement pass. Orders are never removed, only moved from PENDING to
    FILLED or CANCELED. A single re-entrant lock guards the orders, holdings
    and cash balance.
    """

    def __init__(self, portfolio: Portfolio, instrument_ids: Optional[Iterable[str]] = None):
        self.portfolio = portfolio
        self.instrument_ids = set(instrument_ids) if instrument_ids is not None else None
        self.orders: List[Order] = []
        self._lock = threading.RLock()
        self.logger = logging.getLogger(__name__)

    @property
    def balance(self) -> float:
        return self.portfolio.cash

    @property
    def holdings(self):
        return self.portfolio.get_holdings()

    def place_order(self, instrument_id: str, side: Union[OrderSide, str],
                    order_type: Union[OrderType, str], price: float,
                    amount: float) -> PlacementResult:
        """
        Place a market or limit order

        Args:
            instrument_id: Instrument to trade
            side: buy or sell
            order_type: market settles now, limit waits for its price
            price: Transaction price for market orders, limit price otherwise
            amount: Units to trade, must be positive

        Returns:
            The recorded order, or an OrderRejection if a market order
            could not be funded or covered by holdings
        """
        try:
            side = OrderSide(side)
            order_type = OrderType(order_type)
        except ValueError as e:
            raise InvalidOrderError(str(e))

        order = Order(
            instrument_id=instrument_id,
            side=side,
            order_type=order_type,
            price=price,
            amount=amount,
        )
        return self.submit(order)

    def submit(self, order: Order) -> PlacementResult:
        """Record a pre-built order, settling it immediately if it is a market order"""
        self._validate(order)

        with self._lock:
            if order.order_type == OrderType.LIMIT:
                order.status = OrderStatus.PENDING
                self.orders.append(order)
                self.logger.info(f"Limit {order.side.value} {order.amount:g} {order.instrument_id} "
                                 f"@ {order.price:.2f} pending ({order.id})")
                return order

            try:
                self._settle(order)
            except (InsufficientFundsError, InsufficientHoldingsError) as e:
                self.logger.info(f"Rejected market {order.side.value} for {order.instrument_id}: {e}")
                return OrderRejection(
                    reason=str(e),
                    instrument_id=order.instrument_id,
                    side=order.side,
                    price=order.price,
                    amount=order.amount,
                )

            self._mark_filled(order)
            self.orders.append(order)
            return order

    def _validate(self, order: Order) -> None:
        if self.instrument_ids is not None and order.instrument_id not in self.instrument_ids:
            raise UnknownInstrumentError(order.instrument_id)
        if order.amount <= 0:
            raise InvalidOrderError("Amount must be positive")
        if order.price <= 0:
            raise InvalidOrderError("Price must be positive")

    def _settle(self, order: Order) -> None:
        """Apply the order to the portfolio at its own price"""
        if order.side == OrderSide.BUY:
            self.portfolio.execute_buy(order.instrument_id, order.amount, order.price)
        else:
            self.portfolio.execute_sell(order.instrument_id, order.amount, order.price)

    def _mark_filled(self, order: Order) -> None:
        order.status = OrderStatus.FILLED
        order.filled_at = now_ms()
        self.logger.info(f"Filled {order.order_type.value} {order.side.value} {order.amount:g} "
                         f"{order.instrument_id} @ {order.price:.2f}, balance {self.balance:.2f}")

    def cancel_order(self, order_id: str) -> bool:
        """Cancel a pending order. Filled or canceled orders are left unchanged"""
        with self._lock:
            order = self.get_order(order_id)
            if order is None or order.status != OrderStatus.PENDING:
                return False
            order.status = OrderStatus.CANCELED
            self.logger.info(f"Canceled order {order_id}")
            return True

    def process_orders(self, instrument_id: str, current_price: float) -> List[Order]:
        """
        Settlement pass: fill pending limit orders whose price has been reached.

        Orders are evaluated in placement order. Fills happen at the limit
        price. An order the portfolio cannot fund or cover stays pending and
        is retried on the next pass.
        """
        filled = []
        with self._lock:
            for order in self.orders:
                if (order.instrument_id != instrument_id
                        or order.status != OrderStatus.PENDING
                        or order.order_type != OrderType.LIMIT):
                    continue
                if not self._can_fill(order, current_price):
                    continue

                try:
                    self._settle(order)
                except (InsufficientFundsError, InsufficientHoldingsError) as e:
                    self.logger.debug(f"Deferring order {order.id}: {e}")
                    continue

                self._mark_filled(order)
                filled.append(order)
        return filled

    @staticmethod
    def _can_fill(order: Order, current_price: float) -> bool:
        if order.side == OrderSide.BUY:
            return current_price <= order.price
        return current_price >= order.price

    def get_order(self, order_id: str) -> Optional[Order]:
        for order in self.orders:
            if order.id == order_id:
                return order
        return None

    def get_pending_orders(self, instrument_id: Optional[str] = None) -> List[Order]:
        """Get all pending orders, optionally filtered by instrument"""
        return self._by_status(OrderStatus.PENDING, instrument_id)

    def get_filled_orders(self, instrument_id: Optional[str] = None) -> List[Order]:
        """Get all filled orders, optionally filtered by instrument"""
        return self._by_status(OrderStatus.FILLED, instrument_id)

    def _by_status(self, status: OrderStatus, instrument_id: Optional[str]) -> List[Order]:
        with self._lock:
            return [
                o for o in self.orders
                if o.status == status and (instrument_id is None or o.instrument_id == instrument_id)
            ]

    def get_summary(self, current_prices: dict) -> dict:
        """Balance, holdings and order counts"""
        with self._lock:
            return {
                'balance': self.portfolio.cash,
                'initial_balance': self.portfolio.initial_balance,
                'holdings': self.portfolio.get_holdings_summary(current_prices),
                'portfolio_value': self.portfolio.get_portfolio_value(current_prices),
                'total_pnl': self.portfolio.get_pnl(current_prices),
                'unrealized_pnl': self.portfolio.get_unrealized_pnl(current_prices),
                'pending_orders': len(self.get_pending_orders()),
                'filled_orders': len(self.get_filled_orders()),
                'canceled_orders': len(self._by_status(OrderStatus.CANCELED, None)),
            }

    def __str__(self) -> str:
        return f"OrderLedger(Orders: {len(self.orders)}, Balance: ${self.balance:.2f})"

    def __repr__(self) -> str:
        return self.__str__()
