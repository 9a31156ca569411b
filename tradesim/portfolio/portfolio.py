"""
Portfolio management for cash and holdings.
"""

import logging
from typing import Dict, List, Optional

from .holding import Holding
from ..core.exceptions import InsufficientFundsError, InsufficientHoldingsError

logger = logging.getLogger(__name__)

INITIAL_BALANCE = 10000.0


class Portfolio:
    """Manages the cash balance and instrument holdings"""

    def __init__(self, initial_balance: float = INITIAL_BALANCE):
        if initial_balance <= 0:
            raise ValueError("Initial balance must be positive")

        self.cash = initial_balance
        self.initial_balance = initial_balance
        # Only holdings with a positive amount are kept
        self.holdings: Dict[str, Holding] = {}

    def get_holding(self, instrument_id: str) -> Optional[Holding]:
        return self.holdings.get(instrument_id)

    def held_amount(self, instrument_id: str) -> float:
        holding = self.holdings.get(instrument_id)
        return holding.amount if holding else 0.0

    def can_buy(self, amount: float, price: float) -> bool:
        """Check if we have enough cash to buy"""
        if amount <= 0 or price <= 0:
            return False
        return amount * price <= self.cash

    def can_sell(self, instrument_id: str, amount: float) -> bool:
        """Check if we hold enough units to sell"""
        holding = self.holdings.get(instrument_id)
        return holding is not None and holding.can_sell(amount)

    def execute_buy(self, instrument_id: str, amount: float, price: float) -> Holding:
        """Debit cash and add units to the holding"""
        cost = amount * price
        if not self.can_buy(amount, price):
            raise InsufficientFundsError(cost, self.cash)

        self.cash -= cost
        holding = self.holdings.get(instrument_id)
        if holding is None:
            holding = Holding(instrument_id, amount, price)
            self.holdings[instrument_id] = holding
        else:
            holding.add(amount, price)
        return holding

    def execute_sell(self, instrument_id: str, amount: float, price: float) -> float:
        """Remove units and credit the proceeds. Returns the proceeds"""
        if not self.can_sell(instrument_id, amount):
            raise InsufficientHoldingsError(instrument_id, amount, self.held_amount(instrument_id))

        holding = self.holdings[instrument_id]
        holding.remove(amount)
        if holding.is_closed:
            del self.holdings[instrument_id]

        proceeds = amount * price
        self.cash += proceeds
        return proceeds

    def get_holdings(self) -> List[Holding]:
        return list(self.holdings.values())

    def get_portfolio_value(self, current_prices: Dict[str, float]) -> float:
        """Cash plus holdings at current prices (average price if unknown)"""
        total_value = self.cash
        for instrument_id, holding in self.holdings.items():
            current_price = current_prices.get(instrument_id, holding.average_price)
            total_value += holding.market_value(current_price)
        return total_value

    def get_holdings_value(self, current_prices: Dict[str, float]) -> float:
        return self.get_portfolio_value(current_prices) - self.cash

    def get_pnl(self, current_prices: Dict[str, float]) -> float:
        """Calculate total profit/loss vs initial balance"""
        return self.get_portfolio_value(current_prices) - self.initial_balance

    def get_unrealized_pnl(self, current_prices: Dict[str, float]) -> float:
        """Calculate unrealized P&L for all holdings"""
        total_unrealized = 0.0
        for instrument_id, holding in self.holdings.items():
            current_price = current_prices.get(instrument_id, holding.average_price)
            total_unrealized += holding.unrealized_pnl(current_price)
        return total_unrealized

    def get_holdings_summary(self, current_prices: Dict[str, float]) -> Dict:
        """Get summary of all holdings"""
        summary = {}
        for instrument_id, holding in self.holdings.items():
            current_price = current_prices.get(instrument_id, holding.average_price)
            unrealized_pnl = holding.unrealized_pnl(current_price)
            cost_basis = holding.cost_basis
            summary[instrument_id] = {
                'amount': holding.amount,
                'average_price': holding.average_price,
                'current_price': current_price,
                'market_value': holding.market_value(current_price),
                'cost_basis': cost_basis,
                'unrealized_pnl': unrealized_pnl,
                'pnl_percent': (unrealized_pnl / cost_basis * 100) if cost_basis > 0 else 0.0,
            }
        return summary

    def __str__(self) -> str:
        return f"Portfolio(Cash: ${self.cash:.2f}, Holdings: {len(self.holdings)})"

    def __repr__(self) -> str:
        return self.__str__()
