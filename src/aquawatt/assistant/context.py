"""Per-turn context digests built from the usage data sources."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..sources import BillingRecord, ConnectedDevice, RoomUsage, UsageDataSource, WeeklyUsagePoint

logger = logging.getLogger(__name__)


class ContextSummary(BaseModel):
    """Short human-readable digests of the user's data.

    An empty field means the source was unavailable for this turn.
    """

    model_config = ConfigDict(frozen=True)

    usage_summary: str = Field(default="", description="Weekly usage and room distribution")
    billing_summary: str = Field(default="", description="Current billing period")
    device_summary: str = Field(default="", description="Connected device counts")

    def to_prompt_context(self) -> str:
        """Serialize for embedding in the system instruction."""
        return json.dumps(self.model_dump())


def _number(value: float) -> str:
    """Render 45.0 as '45' and other values unrounded (120.125 stays '120.125')."""
    if float(value).is_integer():
        return str(int(value))
    return str(float(value))


def summarize_usage(weekly: list[WeeklyUsagePoint], rooms: list[RoomUsage]) -> str:
    if not weekly:
        return ""
    weekly_txt = "; ".join(
        f"{p.label}: water {_number(p.water)} / elec {_number(p.electricity)}" for p in weekly
    )
    summary = f"Weekly usage -> {weekly_txt}"
    if rooms:
        rooms_txt = "; ".join(
            f"{r.room} W:{_number(r.total_water)} E:{_number(r.total_electricity)}" for r in rooms
        )
        summary += f". Room distribution -> {rooms_txt}"
    return summary


def summarize_bill(bill: BillingRecord | None) -> str:
    if bill is None:
        return ""
    return (
        f"Current bill total {_number(bill.total_amount)} "
        f"(water {_number(bill.water_cost)} + electricity {_number(bill.electricity_cost)}) "
        f"period {bill.period_start.isoformat()} to {bill.period_end.isoformat()}"
    )


def summarize_devices(devices: list[ConnectedDevice]) -> str:
    if not devices:
        return ""
    active = sum(1 for d in devices if d.is_active)
    return f"{len(devices)} devices connected; active {active}"


class ContextAggregator:
    """Gathers the data sources concurrently into a ``ContextSummary``.

    A failing source only blanks its own summary; ``build_context_summaries``
    never raises for source errors.
    """

    def __init__(self, source: UsageDataSource):
        self._source = source

    @property
    def source(self) -> UsageDataSource:
        return self._source

    async def build_context_summaries(self) -> ContextSummary:
        weekly, rooms, bill, devices = await asyncio.gather(
            self._query("weekly usage", self._source.fetch_weekly_usage),
            self._query("room distribution", self._source.fetch_room_distribution),
            self._query("current bill", self._source.fetch_current_bill),
            self._query("devices", self._source.fetch_devices),
        )

        # A row that cannot be summarized blanks only its own field
        return ContextSummary(
            usage_summary=self._summarize("usage", summarize_usage, weekly or [], rooms or []),
            billing_summary=self._summarize("billing", summarize_bill, bill),
            device_summary=self._summarize("devices", summarize_devices, devices or []),
        )

    @staticmethod
    async def _query(name: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await fetch()
        except Exception as e:
            logger.warning("Context source %r failed: %s", name, e)
            return None

    @staticmethod
    def _summarize(name: str, summarize: Callable[..., str], *args: Any) -> str:
        try:
            return summarize(*args)
        except Exception as e:
            logger.warning("Could not summarize %s data: %s", name, e)
            return ""
