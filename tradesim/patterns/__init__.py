"""Candlestick pattern detection."""

from .detector import PatternDetector

__all__ = ['PatternDetector']
