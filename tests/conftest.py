"""Shared pytest fixtures for drama client tests."""

import logging

import pytest
from typing import Any, List, Union

from drama_client.api.client import DramaAPIClient
from drama_client.config.settings import ClientConfig
from drama_client.errors import TransportFailure
from drama_client.models.context import RequestContext
from drama_client.observability.logging import DIAGNOSTICS_LOGGER_NAME
from drama_client.transport.base import Transport, TransportResponse


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O")
    config.addinivalue_line("markers", "integration: client pipeline tests")


def envelope(data: Any = None) -> dict:
    return {"success": True, "data": data}


def error_envelope(message: str, code: str = None) -> dict:
    error = {"message": message}
    if code is not None:
        error["code"] = code
    return {"success": False, "error": error}


class FakeTransport(Transport):
    """Replays scripted outcomes and records every context it was sent."""

    def __init__(self, outcomes: List[Union[TransportResponse, Exception]] = None):
        self.outcomes = list(outcomes or [])
        self.sent: List[RequestContext] = []
        self.closed = False

    def queue(self, *outcomes: Union[TransportResponse, Exception]) -> "FakeTransport":
        self.outcomes.extend(outcomes)
        return self

    async def send(self, context: RequestContext) -> TransportResponse:
        self.sent.append(context)
        if not self.outcomes:
            raise AssertionError(f"Unexpected request: {context.method} {context.url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays (seconds)."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)

    @property
    def delays_ms(self) -> List[int]:
        return [round(d * 1000) for d in self.delays]


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def ok():
    """Build a 200 response carrying a success envelope."""
    def _ok(data: Any = None, status_code: int = 200, headers: dict = None) -> TransportResponse:
        return TransportResponse(status_code=status_code, headers=headers or {}, data=envelope(data))
    return _ok


@pytest.fixture
def http_error():
    """Build a non-2xx response, optionally carrying an error envelope."""
    def _http_error(status_code: int, message: str = None, body: Any = None) -> TransportResponse:
        if body is None and message is not None:
            body = error_envelope(message)
        return TransportResponse(status_code=status_code, headers={}, data=body)
    return _http_error


@pytest.fixture
def transport_error():
    def _transport_error(message: str = "dial tcp: lookup backend: no such host") -> TransportFailure:
        return TransportFailure(message)
    return _transport_error


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def client_config():
    return ClientConfig(base_url="http://backend.test")


@pytest.fixture
def client(client_config, fake_transport, recording_sleep, fake_clock):
    return DramaAPIClient(
        client_config,
        fake_transport,
        sleep=recording_sleep,
        clock=fake_clock,
    )


@pytest.fixture
def api_records(caplog):
    """Return a callable listing captured diagnostics records by message."""
    caplog.set_level(logging.DEBUG, logger=DIAGNOSTICS_LOGGER_NAME)

    def _records(kind: str = None):
        records = [r for r in caplog.records if r.name == DIAGNOSTICS_LOGGER_NAME]
        if kind is not None:
            records = [r for r in records if r.getMessage().endswith(kind)]
        return records
    return _records
