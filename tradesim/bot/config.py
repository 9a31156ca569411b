"""
Per-instrument trading bot configuration.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Union

from ..core.models import BotConfig
from ..core.types import StrategyType

logger = logging.getLogger(__name__)


class BotConfigRegistry:
    """Holds bot settings for each instrument; missing entries use defaults"""

    def __init__(self):
        self.configs: Dict[str, BotConfig] = {}

    def get(self, instrument_id: str) -> BotConfig:
        """Stored configuration, or the defaults if none was saved"""
        return self.configs.get(instrument_id) or BotConfig()

    def update(self, instrument_id: str, enabled: Optional[bool] = None,
               strategy: Optional[Union[StrategyType, str]] = None,
               params: Optional[Dict[str, Any]] = None) -> BotConfig:
        """
        Merge a partial update into the instrument's configuration.

        Args:
            instrument_id: Instrument the bot trades
            enabled: New enabled flag, unchanged if None
            strategy: StrategyType or its string value, unchanged if None
            params: Sparse parameter overrides merged over current values

        Returns:
            The resulting configuration
        """
        current = self.get(instrument_id)
        changes: Dict[str, Any] = {'params': current.params.merged(params)}
        if enabled is not None:
            changes['enabled'] = enabled
        if strategy is not None:
            if not isinstance(strategy, StrategyType):
                try:
                    strategy = StrategyType(strategy)
                except ValueError:
                    logger.warning(f"Storing unrecognised strategy {strategy!r} for {instrument_id}")
            changes['strategy'] = strategy

        updated = replace(current, **changes)
        self.configs[instrument_id] = updated
        logger.info(f"Bot config for {instrument_id}: enabled={updated.enabled}, "
                    f"strategy={getattr(updated.strategy, 'value', updated.strategy)}")
        return updated

    def enabled_instruments(self):
        """Ids of instruments whose bot is switched on"""
        return [iid for iid, config in self.configs.items() if config.enabled]
