from __future__ import annotations

import httpx
import pytest

from fleetops.domain.entities.health import ProbeResult, ProbeTarget, TargetKind
from fleetops.infrastructure.probes import (
    HttpHealthProbe,
    MongoHealthProbe,
    RedisHealthProbe,
    SchemeRoutingHealthProbe,
)


def _target(url: str, name: str = "database") -> ProbeTarget:
    return ProbeTarget(name=name, kind=TargetKind.SERVICE, url=url)


class _StubResponse:
    def __init__(self, status_code: int):
        self.status_code = status_code


class _StubAsyncClient:
    def __init__(self, response=None, error: Exception | None = None):
        self._response = response
        self._error = error
        self.requested: list[str] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str):
        self.requested.append(url)
        if self._error is not None:
            raise self._error
        return self._response


@pytest.mark.asyncio
async def test_http_probe_healthy(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(200))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    result = await HttpHealthProbe(timeout=1.0).check(_target("http://svc/health"))

    assert result.is_healthy
    assert result.response_time_ms is not None
    assert client.requested == ["http://svc/health"]


@pytest.mark.asyncio
async def test_http_probe_error_status(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda timeout: _StubAsyncClient(_StubResponse(503))
    )

    result = await HttpHealthProbe().check(_target("http://svc/health"))

    assert not result.is_healthy
    assert "503" in result.error


@pytest.mark.asyncio
async def test_http_probe_redirect_counts_as_healthy(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda timeout: _StubAsyncClient(_StubResponse(302))
    )

    result = await HttpHealthProbe().check(_target("http://svc/health"))

    assert result.is_healthy


@pytest.mark.asyncio
async def test_http_probe_transport_failure(monkeypatch) -> None:
    request = httpx.Request("GET", "http://svc/health")
    error = httpx.ConnectError("connection refused", request=request)
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda timeout: _StubAsyncClient(error=error)
    )

    result = await HttpHealthProbe().check(_target("http://svc/health"))

    assert not result.is_healthy
    assert "connection refused" in result.error


class _StubRedis:
    def __init__(self, error: Exception | None = None):
        self._error = error
        self.closed = False

    async def ping(self) -> bool:
        if self._error is not None:
            raise self._error
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_redis_probe_pings_and_closes(monkeypatch) -> None:
    stub = _StubRedis()
    monkeypatch.setattr(
        "fleetops.infrastructure.probes.redis_probe.aioredis.from_url",
        lambda url, **kwargs: stub,
    )

    result = await RedisHealthProbe().check(_target("redis://cache:6379/0"))

    assert result.is_healthy
    assert stub.closed


@pytest.mark.asyncio
async def test_redis_probe_failure(monkeypatch) -> None:
    stub = _StubRedis(error=ConnectionError("refused"))
    monkeypatch.setattr(
        "fleetops.infrastructure.probes.redis_probe.aioredis.from_url",
        lambda url, **kwargs: stub,
    )

    result = await RedisHealthProbe().check(_target("redis://cache:6379/0"))

    assert not result.is_healthy
    assert "refused" in result.error
    assert stub.closed


class _StubAdmin:
    def __init__(self, error: Exception | None):
        self._error = error

    def command(self, name: str) -> dict:
        if self._error is not None:
            raise self._error
        return {"ok": 1}


class _StubMongoClient:
    error: Exception | None = None

    def __init__(self, url: str, **kwargs):
        self.admin = _StubAdmin(self.error)
        self.closed = False

    def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_mongo_probe(monkeypatch) -> None:
    monkeypatch.setattr(
        "fleetops.infrastructure.probes.mongo_probe.MongoClient", _StubMongoClient
    )
    probe = MongoHealthProbe(timeout=0.5)

    assert (await probe.check(_target("mongodb://db:27017"))).is_healthy

    monkeypatch.setattr(_StubMongoClient, "error", RuntimeError("no primary"))
    result = await probe.check(_target("mongodb://db:27017"))
    assert not result.is_healthy
    assert "no primary" in result.error


class _RecordingProbe:
    def __init__(self) -> None:
        self.targets: list[ProbeTarget] = []

    async def check(self, target: ProbeTarget) -> ProbeResult:
        self.targets.append(target)
        return ProbeResult.healthy()


@pytest.mark.asyncio
async def test_scheme_routing_probe_dispatches_by_scheme() -> None:
    http, redis = _RecordingProbe(), _RecordingProbe()
    probe = SchemeRoutingHealthProbe(probes={"http": http, "redis": redis})

    await probe.check(_target("http://svc/health"))
    await probe.check(_target("REDIS://cache:6379"))

    assert len(http.targets) == 1
    assert len(redis.targets) == 1


@pytest.mark.asyncio
async def test_scheme_routing_probe_rejects_unknown_or_empty_url() -> None:
    probe = SchemeRoutingHealthProbe(probes={})

    unsupported = await probe.check(_target("ftp://files"))
    empty = await probe.check(_target(""))

    assert not unsupported.is_healthy and "ftp" in unsupported.error
    assert not empty.is_healthy
