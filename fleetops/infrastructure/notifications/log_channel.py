"""Channel that writes notifications to the structured log."""

from __future__ import annotations

from fleetops.domain.ports.notification_channel import INotificationChannel
from fleetops.shared import get_logger

logger = get_logger(__name__)


class LogNotificationChannel(INotificationChannel):
    """Fallback primary channel when no webhook is configured."""

    def __init__(self, name: str = "log") -> None:
        self.name = name

    async def send(self, subject: str, message: str) -> None:
        logger.warning(
            "notification.log", channel=self.name, subject=subject, body=message
        )
