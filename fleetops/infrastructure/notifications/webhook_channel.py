"""Webhook notification channel - Infrastructure layer."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx

from fleetops.domain.ports.notification_channel import INotificationChannel
from fleetops.shared import get_logger

logger = get_logger(__name__)


class WebhookNotificationChannel(INotificationChannel):
    """POSTs notifications as JSON to an HTTP endpoint (mail relay, chat hook)."""

    def __init__(self, name: str, url: str, *, timeout: float = 10.0) -> None:
        self.name = name
        self._url = url
        self._timeout = timeout

    async def send(self, subject: str, message: str) -> None:
        payload = {
            "channel": self.name,
            "subject": subject,
            "message": message,
            "sent_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "notification.webhook.http_error",
                channel=self.name,
                status_code=e.response.status_code,
            )
            raise Exception(
                f"Webhook {self.name} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "notification.webhook.request_error", channel=self.name, error=str(e)
            )
            raise Exception(f"Failed to reach webhook {self.name}: {e}") from e

        logger.debug("notification.webhook.sent", channel=self.name, subject=subject)
