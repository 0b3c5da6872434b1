"""
Pytest configuration and shared fixtures for version_redirect tests.
"""

import time
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from version_redirect.config import RedirectConfig
from version_redirect.exceptions import StorageError
from version_redirect.storage.memory import MemoryKeyValueStore

REGISTRY_HOST = "registry.npmjs.org"
ORIGIN = "http://origin.test"


class FakeNetwork:
    """Routes outbound requests to a fake registry and a fake fallback origin.

    Registry lookups return 404 for unpublished packages. The origin echoes
    the method, raw path and query of every request it receives.
    """

    def __init__(self) -> None:
        self.registry_responses: dict[str, tuple[int, dict[str, Any]]] = {}
        self.registry_error: Exception | None = None
        self.registry_requests: list[httpx.Request] = []
        self.origin_requests: list[httpx.Request] = []

    def publish(self, package: str, version: str) -> None:
        self.respond(package, 200, json={"name": f"@electron/{package}", "version": version})

    def respond(self, package: str, status: int, **kwargs: Any) -> None:
        self.registry_responses[package] = (status, kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == REGISTRY_HOST:
            self.registry_requests.append(request)
            if self.registry_error is not None:
                raise self.registry_error
            package = request.url.path.removeprefix("/@electron/").removesuffix("/latest")
            status, kwargs = self.registry_responses.get(
                package, (404, {"json": {"error": "Not found"}})
            )
            return httpx.Response(status, **kwargs)

        self.origin_requests.append(request)
        return httpx.Response(
            200,
            headers={"content-type": "text/plain", "x-served-by": "origin"},
            text=f"origin:{request.method} {request.url.raw_path.decode()}",
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingStore(MemoryKeyValueStore):
    """Memory store that records every call made to it."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__(clock=clock)
        self.gets: list[str] = []
        self.puts: list[tuple[str, str, int | None]] = []

    async def get(self, key: str) -> str | None:
        self.gets.append(key)
        return await super().get(key)

    async def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self.puts.append((key, value, ttl_seconds))
        await super().put(key, value, ttl_seconds)


class FailingStore:
    """Store whose backend is unavailable.

    Raises StorageError by default; pass error_type to mimic a backend client
    leaking its own exceptions.
    """

    def __init__(
        self,
        fail_get: bool = True,
        fail_put: bool = True,
        error_type: type[Exception] = StorageError,
    ) -> None:
        self.fail_get = fail_get
        self.fail_put = fail_put
        self.error_type = error_type
        self.puts: list[tuple[str, str, int | None]] = []

    async def get(self, key: str) -> str | None:
        if self.fail_get:
            raise self.error_type(f"Cannot read {key}: backend unavailable")
        return None

    async def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        if self.fail_put:
            raise self.error_type(f"Cannot write {key}: backend unavailable")
        self.puts.append((key, value, ttl_seconds))


@pytest.fixture
def config() -> RedirectConfig:
    """Default configuration with the fake fallback origin."""
    return RedirectConfig(fallback_origin=ORIGIN)


@pytest.fixture
def network() -> FakeNetwork:
    """Fresh fake registry and origin for each test."""
    return FakeNetwork()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> RecordingStore:
    """Empty recording store driven by the fake clock."""
    return RecordingStore(clock=clock)


@pytest.fixture
def failing_store() -> FailingStore:
    """Store failing on both reads and writes."""
    return FailingStore()


@pytest.fixture
def write_failing_store() -> FailingStore:
    """Store that reads as empty but fails every write."""
    return FailingStore(fail_get=False, fail_put=True)


@pytest.fixture
def disconnected_store() -> FailingStore:
    """Store whose client raises ConnectionError on reads and writes."""
    return FailingStore(error_type=ConnectionError)


@pytest.fixture
def disconnected_write_store() -> FailingStore:
    """Store that reads as empty but whose client raises ConnectionError on writes."""
    return FailingStore(fail_get=False, fail_put=True, error_type=ConnectionError)
