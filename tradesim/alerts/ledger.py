"""
Price alerts with a two-phase check/mark protocol.
"""

import logging
import threading
from typing import List, Optional, Union

from ..core.models import PriceAlert
from ..core.types import AlertCondition
from ..core.exceptions import InvalidAlertError

logger = logging.getLogger(__name__)


class AlertLedger:
    """
    Owns price alerts for all instruments.

    check_alerts only reports alerts whose condition is met; callers dispatch
    their notifications and then commit with mark_alert_as_triggered. A
    triggered alert never re-arms.
    """

    def __init__(self):
        self.alerts: List[PriceAlert] = []
        self._lock = threading.RLock()

    def add_alert(self, instrument_id: str, price: float,
                  condition: Union[AlertCondition, str]) -> PriceAlert:
        """Create an alert in the non-triggered state"""
        if price <= 0:
            raise InvalidAlertError("Alert price must be positive")
        try:
            condition = AlertCondition(condition)
        except ValueError as e:
            raise InvalidAlertError(str(e))

        alert = PriceAlert(
            instrument_id=instrument_id,
            price=price,
            condition=condition,
        )
        with self._lock:
            self.alerts.append(alert)
        logger.info(f"Alert {alert.id}: {instrument_id} {alert.condition.value} {price:.2f}")
        return alert

    def remove_alert(self, alert_id: str) -> bool:
        """Remove an alert regardless of state. Returns whether it existed"""
        with self._lock:
            before = len(self.alerts)
            self.alerts = [a for a in self.alerts if a.id != alert_id]
            return len(self.alerts) < before

    def check_alerts(self, instrument_id: str, current_price: float) -> List[PriceAlert]:
        """Untriggered alerts for the instrument whose condition the price meets"""
        with self._lock:
            return [
                alert for alert in self.alerts
                if alert.instrument_id == instrument_id
                and not alert.triggered
                and alert.is_satisfied_by(current_price)
            ]

    def mark_alert_as_triggered(self, alert_id: str) -> None:
        with self._lock:
            alert = self.get_alert(alert_id)
            if alert is not None and not alert.triggered:
                alert.triggered = True
                logger.info(f"Alert {alert_id} triggered for {alert.instrument_id} "
                            f"({alert.condition.value} {alert.price:.2f})")

    def get_alert(self, alert_id: str) -> Optional[PriceAlert]:
        for alert in self.alerts:
            if alert.id == alert_id:
                return alert
        return None

    def get_alerts(self, instrument_id: Optional[str] = None) -> List[PriceAlert]:
        with self._lock:
            return [a for a in self.alerts if instrument_id is None or a.instrument_id == instrument_id]

    def __len__(self) -> int:
        return len(self.alerts)
