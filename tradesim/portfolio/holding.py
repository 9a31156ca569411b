"""
Holding management for a single instrument.
"""

from dataclasses import dataclass

# Remaining amounts below this are treated as a fully closed holding
DUST_THRESHOLD = 1e-9


@dataclass
class Holding:
    """Units of one instrument held, with volume-weighted average cost"""
    instrument_id: str
    amount: float = 0.0
    average_price: float = 0.0

    @property
    def cost_basis(self) -> float:
        return self.amount * self.average_price

    def market_value(self, current_price: float) -> float:
        """Market value at current price"""
        return self.amount * current_price

    def unrealized_pnl(self, current_price: float) -> float:
        """Unrealized profit/loss at current price"""
        return (current_price - self.average_price) * self.amount

    def add(self, amount: float, price: float) -> None:
        """Add units, updating the average price"""
        if amount <= 0:
            raise ValueError("Amount must be positive")

        cost = amount * price
        new_amount = self.amount + amount
        self.average_price = (self.average_price * self.amount + cost) / new_amount
        self.amount = new_amount

    def remove(self, amount: float) -> bool:
        """Remove units. Returns False if more than held is requested"""
        if amount <= 0:
            raise ValueError("Amount must be positive")

        if not self.can_sell(amount):
            return False

        self.amount = max(self.amount - amount, 0.0)
        if self.is_closed:
            self.amount = 0.0
        return True

    def can_sell(self, amount: float) -> bool:
        """Amounts exceeding the holding by no more than float dust are sellable"""
        return amount > 0 and amount - self.amount <= DUST_THRESHOLD

    @property
    def is_closed(self) -> bool:
        return self.amount < DUST_THRESHOLD

    def __str__(self) -> str:
        return f"Holding({self.instrument_id}: {self.amount:g} @ ${self.average_price:.2f})"

    def __repr__(self) -> str:
        return self.__str__()
