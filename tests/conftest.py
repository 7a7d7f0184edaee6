"""Shared fixtures: deterministic clock and scripted transport."""

import asyncio
from collections import deque
from datetime import timedelta
from typing import Optional, Union

import pytest

from connectivity.config import ConnectivityConfig
from connectivity.interfaces.transport import ITransport
from connectivity.transport import TransportResponse

START_MS = 1_700_000_000_000


class FakeClock:
    """Epoch-millisecond clock advanced by hand."""

    def __init__(self, now_ms: int = START_MS):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class HttpStatus:
    """Scripted non-200 response."""

    def __init__(self, status_code: int, latency_ms: int = 10):
        self.status_code = status_code
        self.latency_ms = latency_ms


Outcome = Union[int, HttpStatus, Exception]


class FakeTransport(ITransport):
    """Transport replaying scripted outcomes.

    An int is a 200 response taking that many milliseconds on the shared
    clock, an HttpStatus is a non-200 response and an exception instance is
    raised. When the script
    runs out, ``default`` is replayed.
    """

    status = HttpStatus

    def __init__(self, clock: FakeClock, default: Outcome = 50):
        self.clock = clock
        self.default = default
        self.script: deque[Outcome] = deque()
        self.calls: list[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.closed = False

    def queue(self, *outcomes: Outcome) -> None:
        self.script.extend(outcomes)

    async def get(self, url: str) -> TransportResponse:
        self.calls.append(url)
        outcome = self.script.popleft() if self.script else self.default
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(outcome, Exception):
            self.clock.advance(1)
            raise outcome
        if isinstance(outcome, HttpStatus):
            self.clock.advance(outcome.latency_ms)
            return TransportResponse(outcome.status_code)
        self.clock.advance(outcome)
        return TransportResponse(200)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport(clock: FakeClock) -> FakeTransport:
    return FakeTransport(clock)


@pytest.fixture
def make_config():
    """Build a config isolated from .env files, with a long interval."""

    def _make(**overrides) -> ConnectivityConfig:
        values = {
            "endpoint": "https://probe.test/ping",
            "check_interval": timedelta(seconds=60),
        }
        values.update(overrides)
        return ConnectivityConfig(_env_file=None, **values)

    return _make
