"""Pytest configuration and shared fixtures."""
import asyncio
import json
from collections.abc import AsyncIterator
from datetime import date
from typing import Any

import pytest

from aquawatt.assistant import AssistantConfig, ContextAggregator, StreamingReplyEngine
from aquawatt.llm import CompletionTransport, StreamChunk
from aquawatt.sources import (
    BillingRecord,
    ConnectedDevice,
    InMemoryUsageSource,
    RoomUsage,
    WeeklyUsagePoint,
)


def sse_line(content: str) -> bytes:
    """Encode one completion delta as an event-stream record."""
    payload = {"choices": [{"index": 0, "delta": {"content": content}}]}
    return f"data: {json.dumps(payload)}\n\n".encode()


DONE_LINE = b"data: [DONE]\n\n"


def sse_body(*fragments: str, done: bool = True) -> bytes:
    """Full event-stream body for the given fragments."""
    body = b"".join(sse_line(fragment) for fragment in fragments)
    return body + DONE_LINE if done else body


class FakeTransport(CompletionTransport):
    """Transport yielding canned reads and recording requests."""

    def __init__(
        self,
        reads: list[bytes] | None = None,
        error: Exception | None = None,
        error_after: int = 0,
        hang: bool = False,
    ):
        self.reads = list(reads or [])
        self.error = error
        self.error_after = error_after
        self.hang = hang
        self.payloads: list[dict[str, Any]] = []
        self.reads_taken = 0
        self.stream_closed = False
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def stream(self, payload: dict[str, Any]) -> AsyncIterator[bytes]:
        self.payloads.append(payload)
        try:
            for index, data in enumerate(self.reads):
                if self.error is not None and index == self.error_after:
                    raise self.error
                self.reads_taken += 1
                yield data
            if self.error is not None and self.error_after >= len(self.reads):
                raise self.error
            if self.hang:
                await asyncio.Event().wait()
        finally:
            self.stream_closed = True

    async def close(self) -> None:
        self.closed = True


class ChunkRecorder:
    """Chunk callback that records everything it receives."""

    def __init__(self):
        self.chunks: list[StreamChunk] = []

    def __call__(self, chunk: StreamChunk) -> None:
        self.chunks.append(chunk)

    @property
    def contents(self) -> list[str]:
        return [c.content for c in self.chunks if c.content is not None]

    @property
    def text(self) -> str:
        return "".join(self.contents)

    @property
    def terminal_count(self) -> int:
        return sum(1 for c in self.chunks if c.done)

    def assert_well_formed(self) -> None:
        """Exactly one terminal chunk, and it is the last one."""
        assert self.terminal_count == 1
        assert self.chunks[-1].done


class FailingSource(InMemoryUsageSource):
    """In-memory source whose selected queries raise."""

    def __init__(self, failing: set[str], **data: Any):
        super().__init__(**data)
        self.failing = failing

    def _check(self, name: str) -> None:
        if name in self.failing:
            raise ConnectionError(f"{name} unavailable")

    async def fetch_weekly_usage(self):
        self._check("weekly")
        return await super().fetch_weekly_usage()

    async def fetch_room_distribution(self):
        self._check("rooms")
        return await super().fetch_room_distribution()

    async def fetch_current_bill(self):
        self._check("bill")
        return await super().fetch_current_bill()

    async def fetch_devices(self):
        self._check("devices")
        return await super().fetch_devices()


@pytest.fixture
def sample_data() -> dict[str, Any]:
    """Records for a small household."""
    return {
        "weekly": [
            WeeklyUsagePoint(label="Mon", water=45, electricity=12),
            WeeklyUsagePoint(label="Tue", water=38.5, electricity=10.25),
        ],
        "rooms": [
            RoomUsage(room="Kitchen", total_water=120.5, total_electricity=85.2),
            RoomUsage(room="Garden", total_water=180.3, total_electricity=25.1),
        ],
        "bill": BillingRecord(
            id="bill-1",
            period_start=date(2025, 1, 1),
            period_end=date(2025, 1, 31),
            water_cost=40.1,
            electricity_cost=52.3,
            total_amount=92.4,
        ),
        "devices": [
            ConnectedDevice(id="d1", name="Kitchen meter", device_type="water", is_active=True),
            ConnectedDevice(id="d2", name="Main meter", device_type="electricity", is_active=True),
            ConnectedDevice(id="d3", name="Garden valve", device_type="water", is_active=False),
        ],
    }


@pytest.fixture
def sample_source(sample_data) -> InMemoryUsageSource:
    return InMemoryUsageSource(**sample_data)


@pytest.fixture
def empty_source() -> InMemoryUsageSource:
    return InMemoryUsageSource()


@pytest.fixture
def recorder() -> ChunkRecorder:
    return ChunkRecorder()


@pytest.fixture
def offline_engine(sample_source) -> StreamingReplyEngine:
    """Engine without credentials (heuristic fallback)."""
    return StreamingReplyEngine(AssistantConfig(), ContextAggregator(sample_source))


def make_engine(source, transport: CompletionTransport | None, **config: Any) -> StreamingReplyEngine:
    return StreamingReplyEngine(AssistantConfig(**config), ContextAggregator(source), transport=transport)
