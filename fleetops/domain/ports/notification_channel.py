"""Domain port for delivering notifications."""

from __future__ import annotations

from typing import Protocol


class INotificationChannel(Protocol):
    """A destination for alert and deployment notices."""

    name: str

    async def send(self, subject: str, message: str) -> None:
        """Deliver one notification.

        Raises:
            Exception: Any failure to deliver.
        """
        ...
