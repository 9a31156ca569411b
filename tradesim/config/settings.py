"""
Configuration settings for the market simulator.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional
import json
import os

from ..core.types import Timeframe
from ..core.exceptions import ConfigurationError


@dataclass
class LedgerConfig:
    """Configuration for the order and portfolio ledger"""
    initial_balance: float = 10000.0


@dataclass
class MarketConfig:
    """Configuration for synthetic price generation"""
    history_size: int = 100  # Candles generated per instrument at start
    max_candles: int = 500   # Sliding window kept per instrument
    timeframe: str = "15m"
    seed: Optional[int] = None


@dataclass
class BotDefaults:
    """Configuration shared by all trading bots"""
    trade_amount: float = 0.1
    min_candles: int = 30


@dataclass
class SimulationConfig:
    """Main simulation configuration"""
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    market: MarketConfig = field(default_factory=MarketConfig)
    bot: BotDefaults = field(default_factory=BotDefaults)
    tick_interval_seconds: float = 1.0
    log_level: str = "INFO"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError for settings the simulation cannot run with"""
        if self.ledger.initial_balance <= 0:
            raise ConfigurationError("Initial balance must be positive")
        if self.market.history_size < 0:
            raise ConfigurationError("History size cannot be negative")
        if self.market.max_candles <= 0:
            raise ConfigurationError("Candle window must be positive")
        if self.bot.trade_amount <= 0:
            raise ConfigurationError("Bot trade amount must be positive")
        if self.tick_interval_seconds < 0:
            raise ConfigurationError("Tick interval cannot be negative")
        if self.market.timeframe not in {t.value for t in Timeframe}:
            raise ConfigurationError(f"Unknown timeframe: {self.market.timeframe}")

    @property
    def timeframe(self) -> Timeframe:
        return Timeframe(self.market.timeframe)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationConfig':
        """Build a configuration from nested dictionaries"""
        try:
            return cls(
                ledger=LedgerConfig(**data.get('ledger', {})),
                market=MarketConfig(**data.get('market', {})),
                bot=BotDefaults(**data.get('bot', {})),
                tick_interval_seconds=data.get('tick_interval_seconds', 1.0),
                log_level=data.get('log_level', "INFO"),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_file(cls, config_path: str) -> 'SimulationConfig':
        """Load configuration from JSON file"""
        try:
            with open(config_path, 'r') as f:
                data = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load simulation config from {config_path}: {e}")
        return cls.from_dict(data)

    def save_to_file(self, config_path: str):
        """Save configuration to JSON file"""
        with open(config_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_env(cls, prefix: str = "TRADESIM_") -> 'SimulationConfig':
        """Create configuration from environment variables"""
        seed = os.getenv(f'{prefix}SEED')
        try:
            return cls(
                ledger=LedgerConfig(
                    initial_balance=float(os.getenv(f'{prefix}INITIAL_BALANCE', '10000'))
                ),
                market=MarketConfig(
                    history_size=int(os.getenv(f'{prefix}HISTORY_SIZE', '100')),
                    timeframe=os.getenv(f'{prefix}TIMEFRAME', '15m'),
                    seed=int(seed) if seed else None,
                ),
                log_level=os.getenv(f'{prefix}LOG_LEVEL', 'INFO'),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}")


# Predefined configurations
DEFAULT_CONFIG = SimulationConfig()

INTRADAY_CONFIG = SimulationConfig(
    market=MarketConfig(timeframe="1m", history_size=200),
)

SWING_CONFIG = SimulationConfig(
    ledger=LedgerConfig(initial_balance=50000.0),
    market=MarketConfig(timeframe="4h"),
    bot=BotDefaults(trade_amount=1.0),
)
