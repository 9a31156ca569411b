"""
Fixed catalog of tradable instruments.
"""

from typing import List

from ..core.models import Instrument


def generate_instruments() -> List[Instrument]:
    """The ten instruments available for trading"""
    return [
        Instrument('1', 'BTC', 'Bitcoin', '#F7931A'),
        Instrument('2', 'ETH', 'Ethereum', '#627EEA'),
        Instrument('3', 'AAPL', 'Apple Inc.', '#A2AAAD'),
        Instrument('4', 'MSFT', 'Microsoft', '#00A4EF'),
        Instrument('5', 'AMZN', 'Amazon', '#FF9900'),
        Instrument('6', 'TSLA', 'Tesla', '#CC0000'),
        Instrument('7', 'GOOG', 'Google', '#4285F4'),
        Instrument('8', 'META', 'Meta', '#0668E1'),
        Instrument('9', 'NFLX', 'Netflix', '#E50914'),
        Instrument('10', 'DIS', 'Disney', '#006EC5'),
    ]
