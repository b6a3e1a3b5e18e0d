from __future__ import annotations

import httpx
import pytest

from fleetops.infrastructure.notifications import (
    LogNotificationChannel,
    WebhookNotificationChannel,
)


class _StubResponse:
    def __init__(self, status_code: int):
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("POST", "http://hooks/alerts")
            response = httpx.Response(self.status_code, request=request, text="error")
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response: _StubResponse):
        self._response = response
        self.posted: list[tuple[str, dict]] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def post(self, url: str, json: dict):
        self.posted.append((url, json))
        return self._response


@pytest.mark.asyncio
async def test_webhook_channel_posts_payload(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(204))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    channel = WebhookNotificationChannel("primary", "http://hooks/alerts")
    await channel.send("subject", "body")

    url, payload = client.posted[0]
    assert url == "http://hooks/alerts"
    assert payload["channel"] == "primary"
    assert payload["subject"] == "subject"
    assert payload["message"] == "body"


@pytest.mark.asyncio
async def test_webhook_channel_raises_on_http_error(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda timeout: _StubAsyncClient(_StubResponse(500))
    )

    channel = WebhookNotificationChannel("urgent", "http://hooks/alerts")
    with pytest.raises(Exception, match="HTTP 500"):
        await channel.send("subject", "body")


@pytest.mark.asyncio
async def test_log_channel_never_raises() -> None:
    channel = LogNotificationChannel()

    await channel.send("subject", "body")

    assert channel.name == "log"
