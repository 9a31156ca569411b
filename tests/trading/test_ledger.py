"""
Tests for order placement, cancellation and settlement.
"""

import pytest

from tradesim.core.models import Order, OrderRejection
from tradesim.core.types import OrderSide, OrderStatus, OrderType
from tradesim.core.exceptions import InvalidOrderError, UnknownInstrumentError
from tradesim.portfolio.portfolio import Portfolio
from tradesim.trading.ledger import OrderLedger


class TestMarketOrders:
    def test_market_buy_fills_immediately(self, sample_ledger):
        order = sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 100.0, 2)

        assert isinstance(order, Order)
        assert order.status == OrderStatus.FILLED
        assert order.filled_at is not None
        assert sample_ledger.balance == 9800.0
        assert sample_ledger.portfolio.get_holding('1').amount == 2

    def test_average_price_after_two_buys(self, sample_ledger):
        """1 @ 100 then 1 @ 200 gives 2 units at 150"""
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 100.0, 1)
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 200.0, 1)

        holding = sample_ledger.portfolio.get_holding('1')
        assert holding.amount == 2
        assert holding.average_price == 150.0

    def test_market_buy_insufficient_balance_rejected(self, sample_ledger):
        """Rejected placements are reported and not recorded"""
        result = sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 500.0, 100)

        assert isinstance(result, OrderRejection)
        assert 'Insufficient funds' in result.reason
        assert sample_ledger.orders == []
        assert sample_ledger.balance == 10000.0

    def test_market_sell_without_holding_rejected(self, sample_ledger):
        result = sample_ledger.place_order('1', OrderSide.SELL, OrderType.MARKET, 100.0, 1)

        assert isinstance(result, OrderRejection)
        assert sample_ledger.orders == []

    def test_market_sell_more_than_held_rejected(self, sample_ledger):
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 100.0, 1)
        result = sample_ledger.place_order('1', OrderSide.SELL, OrderType.MARKET, 100.0, 2)

        assert not result
        assert len(sample_ledger.orders) == 1

    def test_market_sell_full_holding(self, sample_ledger):
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 100.0, 2)
        sample_ledger.place_order('1', OrderSide.SELL, OrderType.MARKET, 120.0, 2)

        assert sample_ledger.holdings == []
        assert sample_ledger.balance == 10040.0

    def test_string_enums_accepted(self, sample_ledger):
        order = sample_ledger.place_order('1', 'buy', 'market', 10.0, 1)
        assert order.side == OrderSide.BUY

    @pytest.mark.parametrize("price,amount", [(100.0, 0), (100.0, -1), (0, 1)])
    def test_invalid_orders(self, sample_ledger, price, amount):
        with pytest.raises(InvalidOrderError):
            sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, price, amount)

    def test_invalid_side(self, sample_ledger):
        with pytest.raises(InvalidOrderError):
            sample_ledger.place_order('1', 'short', OrderType.MARKET, 10.0, 1)

    def test_unknown_instrument(self):
        ledger = OrderLedger(Portfolio(), instrument_ids=['1'])
        with pytest.raises(UnknownInstrumentError):
            ledger.place_order('99', OrderSide.BUY, OrderType.MARKET, 10.0, 1)


class TestLimitOrders:
    def test_limit_order_is_pending(self, sample_ledger):
        order = sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 100.0, 1)

        assert order.status == OrderStatus.PENDING
        assert sample_ledger.balance == 10000.0
        assert sample_ledger.get_pending_orders('1') == [order]

    def test_buy_limit_fill_boundary(self, sample_ledger):
        """Buy limit at 100 waits at 101 and fills at 100"""
        order = sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 100.0, 1)

        assert sample_ledger.process_orders('1', 101.0) == []
        assert order.status == OrderStatus.PENDING

        assert sample_ledger.process_orders('1', 100.0) == [order]
        assert order.status == OrderStatus.FILLED
        assert order.filled_at is not None

    def test_buy_limit_fills_at_limit_price(self, sample_ledger):
        """Transaction price is the order's limit, not the tick price"""
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 100.0, 1)
        sample_ledger.process_orders('1', 90.0)

        assert sample_ledger.balance == 9900.0
        assert sample_ledger.portfolio.get_holding('1').average_price == 100.0

    def test_sell_limit_fill_boundary(self, sample_ledger):
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 90.0, 1)
        order = sample_ledger.place_order('1', OrderSide.SELL, OrderType.LIMIT, 100.0, 1)

        assert sample_ledger.process_orders('1', 99.0) == []
        assert sample_ledger.process_orders('1', 105.0) == [order]
        assert sample_ledger.balance == 10000.0 - 90.0 + 100.0
        assert sample_ledger.holdings == []

    def test_other_instruments_untouched(self, sample_ledger):
        order = sample_ledger.place_order('2', OrderSide.BUY, OrderType.LIMIT, 100.0, 1)
        sample_ledger.process_orders('1', 50.0)
        assert order.status == OrderStatus.PENDING

    def test_underfunded_fill_stays_pending(self, sample_ledger):
        """A fill the balance cannot cover is retried on a later pass"""
        order = sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 200.0, 60)

        assert sample_ledger.process_orders('1', 150.0) == []
        assert order.status == OrderStatus.PENDING
        assert sample_ledger.balance == 10000.0

        sample_ledger.portfolio.cash += 5000.0
        assert sample_ledger.process_orders('1', 150.0) == [order]
        assert sample_ledger.balance == 3000.0

    def test_sell_without_holding_stays_pending(self, sample_ledger):
        order = sample_ledger.place_order('1', OrderSide.SELL, OrderType.LIMIT, 100.0, 1)
        sample_ledger.process_orders('1', 120.0)
        assert order.status == OrderStatus.PENDING

    def test_fifo_order_of_fills(self, sample_ledger):
        """Earlier orders get the balance first when funds are short"""
        first = sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 100.0, 60)
        second = sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 100.0, 60)

        filled = sample_ledger.process_orders('1', 100.0)

        assert filled == [first]
        assert second.status == OrderStatus.PENDING

    def test_balance_never_negative(self, sample_ledger):
        for price in (100.0, 150.0, 300.0, 500.0):
            sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, price, 30)
            sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, price, 10)
            sample_ledger.place_order('1', OrderSide.SELL, OrderType.LIMIT, price, 5)
        for price in (90.0, 600.0, 50.0, 700.0):
            sample_ledger.process_orders('1', price)
            assert sample_ledger.balance >= 0
            assert all(h.amount > 0 for h in sample_ledger.holdings)


class TestCancel:
    def test_cancel_pending(self, sample_ledger):
        order = sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 100.0, 1)

        assert sample_ledger.cancel_order(order.id)
        assert order.status == OrderStatus.CANCELED
        assert sample_ledger.process_orders('1', 50.0) == []
        assert order in sample_ledger.orders

    def test_cancel_filled_is_noop(self, sample_ledger):
        order = sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 100.0, 1)

        assert not sample_ledger.cancel_order(order.id)
        assert order.status == OrderStatus.FILLED

    def test_cancel_twice(self, sample_ledger):
        order = sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 100.0, 1)
        sample_ledger.cancel_order(order.id)

        assert not sample_ledger.cancel_order(order.id)
        assert order.status == OrderStatus.CANCELED

    def test_cancel_unknown(self, sample_ledger):
        assert not sample_ledger.cancel_order('missing')


class TestSubmit:
    def test_submit_prebuilt_market_order(self, sample_ledger):
        order = Order('1', OrderSide.BUY, OrderType.MARKET, price=50.0, amount=0.1)
        placed = sample_ledger.submit(order)

        assert placed is order
        assert order.status == OrderStatus.FILLED
        assert sample_ledger.balance == pytest.approx(9995.0)

    def test_summary(self, sample_ledger):
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.MARKET, 100.0, 1)
        sample_ledger.place_order('1', OrderSide.BUY, OrderType.LIMIT, 90.0, 1)
        summary = sample_ledger.get_summary({'1': 110.0})

        assert summary['filled_orders'] == 1
        assert summary['pending_orders'] == 1
        assert summary['portfolio_value'] == 9900.0 + 110.0
