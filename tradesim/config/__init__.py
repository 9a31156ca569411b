"""Simulation settings."""

from .settings import (
    SimulationConfig, LedgerConfig, MarketConfig, BotDefaults,
    DEFAULT_CONFIG, INTRADAY_CONFIG, SWING_CONFIG,
)

__all__ = [
    'SimulationConfig', 'LedgerConfig', 'MarketConfig', 'BotDefaults',
    'DEFAULT_CONFIG', 'INTRADAY_CONFIG', 'SWING_CONFIG',
]
