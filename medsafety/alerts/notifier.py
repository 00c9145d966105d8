"""
Alert notification collaborators.

The engine's obligation ends once an alert is stored; notifiers only hand
the stored alert on. Delivery problems are logged and never propagate back
into the operation that raised the alert.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from ..config import settings
from .models import MedicationAlert
from .schemas import AlertResponse

# Set up logging
logger = logging.getLogger(__name__)

class AlertNotifier(ABC):
    """Receives every alert after it has been persisted."""

    @abstractmethod
    def notify(self, alert: MedicationAlert) -> None:
        ...


class LoggingNotifier(AlertNotifier):
    """Default notifier: writes the alert to the application log."""

    def notify(self, alert: MedicationAlert) -> None:
        logger.info(
            f"Alert {alert.id} [{alert.severity.value}/{alert.alert_type.value}] "
            f"for patient {alert.patient_id}: {alert.message}"
        )


class WebhookNotifier(AlertNotifier):
    """
    Posts each alert as JSON to a delivery service.

    Args:
        url: Endpoint of the notification service
        timeout: Request timeout in seconds
        client: Optional preconfigured httpx client
    """
    def __init__(self, url: str, timeout: float = 5.0, client: Optional[httpx.Client] = None):
        self.url = url
        self.client = client or httpx.Client(timeout=timeout)

    def notify(self, alert: MedicationAlert) -> None:
        payload = AlertResponse.model_validate(alert).model_dump(mode="json")
        try:
            response = self.client.post(self.url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Delivery of alert {alert.id} to {self.url} failed: {str(e)}")


_notifier: Optional[AlertNotifier] = None

def get_notifier() -> AlertNotifier:
    """
    Notifier dependency - Returns the configured notifier.

    A webhook notifier is used when ALERT_WEBHOOK_URL is set, otherwise alerts
    are only logged.
    """
    global _notifier
    if _notifier is None:
        if settings.alert_webhook_url:
            _notifier = WebhookNotifier(settings.alert_webhook_url, timeout=settings.notification_timeout_seconds)
        else:
            _notifier = LoggingNotifier()
    return _notifier
