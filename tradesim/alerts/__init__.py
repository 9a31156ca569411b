"""Price alerts."""

from .ledger import AlertLedger

__all__ = ['AlertLedger']
