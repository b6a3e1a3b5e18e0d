"""Notification channel implementations."""

from .log_channel import LogNotificationChannel
from .webhook_channel import WebhookNotificationChannel

__all__ = ["LogNotificationChannel", "WebhookNotificationChannel"]
