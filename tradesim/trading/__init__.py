"""Order placement and settlement."""

from .ledger import OrderLedger, PlacementResult

__all__ = ['OrderLedger', 'PlacementResult']
