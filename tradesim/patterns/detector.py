"""
Candlestick pattern detection on the newest candles of a window.
"""

import logging
from typing import List, Sequence

from ..core.models import Candle, PatternAnnotation
from ..core.types import Significance

logger = logging.getLogger(__name__)

DOJI_BODY_RATIO = 0.1
SMALL_BODY_RATIO = 0.3
SHADOW_BODY_MULTIPLE = 2
SMALL_SHADOW_RATIO = 0.1


class PatternDetector:
    """
    Recognises single- and two-candle patterns on the tail of a candle window.

    Only the final two candles are inspected; earlier history does not affect
    the result. Ratio tests are relative to the candle's high-low range so
    they do not depend on price level.
    """

    def detect(self, candles: Sequence[Candle]) -> List[PatternAnnotation]:
        """Patterns present on the latest candle, in a fixed order"""
        if len(candles) < 2:
            return []

        previous, latest = candles[-2], candles[-1]
        patterns = []

        if self.is_doji(latest):
            patterns.append(self._annotate(
                'Doji',
                'Indicates indecision in the market, potential reversal signal.',
                latest, Significance.NEUTRAL))

        if self.is_hammer(latest):
            patterns.append(self._annotate(
                'Hammer',
                'Potential bullish reversal pattern after a downtrend.',
                latest, Significance.BULLISH))

        if self.is_shooting_star(latest):
            patterns.append(self._annotate(
                'Shooting Star',
                'Potential bearish reversal pattern after an uptrend.',
                latest, Significance.BEARISH))

        if self.is_bullish_engulfing(previous, latest):
            patterns.append(self._annotate(
                'Bullish Engulfing',
                'Strong bullish reversal pattern showing buyers taking control.',
                latest, Significance.BULLISH))

        if self.is_bearish_engulfing(previous, latest):
            patterns.append(self._annotate(
                'Bearish Engulfing',
                'Strong bearish reversal pattern showing sellers taking control.',
                latest, Significance.BEARISH))

        if patterns:
            logger.debug(f"Patterns at {latest.time}: {', '.join(p.name for p in patterns)}")
        return patterns

    @staticmethod
    def _annotate(name: str, description: str, candle: Candle,
                  significance: Significance) -> PatternAnnotation:
        return PatternAnnotation(name=name, description=description,
                                 time=candle.time, significance=significance)

    @staticmethod
    def is_doji(candle: Candle) -> bool:
        """Body is less than 10% of the total range"""
        total_range = candle.total_range
        if total_range == 0:
            return candle.open == candle.close
        return candle.body_size / total_range < DOJI_BODY_RATIO

    @staticmethod
    def is_hammer(candle: Candle) -> bool:
        """Small body, long lower shadow, negligible upper shadow"""
        total_range = candle.total_range
        if total_range == 0:
            return False
        body = candle.body_size
        return (body / total_range < SMALL_BODY_RATIO
                and candle.lower_shadow > body * SHADOW_BODY_MULTIPLE
                and candle.upper_shadow / total_range < SMALL_SHADOW_RATIO)

    @staticmethod
    def is_shooting_star(candle: Candle) -> bool:
        """Small body, long upper shadow, negligible lower shadow"""
        total_range = candle.total_range
        if total_range == 0:
            return False
        body = candle.body_size
        return (body / total_range < SMALL_BODY_RATIO
                and candle.upper_shadow > body * SHADOW_BODY_MULTIPLE
                and candle.lower_shadow / total_range < SMALL_SHADOW_RATIO)

    @staticmethod
    def is_bullish_engulfing(previous: Candle, current: Candle) -> bool:
        return (previous.is_bearish and current.is_bullish
                and current.open < previous.close
                and current.close > previous.open)

    @staticmethod
    def is_bearish_engulfing(previous: Candle, current: Candle) -> bool:
        return (previous.is_bullish and current.is_bearish
                and current.open > previous.close
                and current.close < previous.open)
