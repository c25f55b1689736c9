"""In-memory usage data source.

Serves records handed to it at construction. Used for the dashboard's
demonstration data and in tests.
"""

from .base import UsageDataSource
from .models import BillingRecord, ConnectedDevice, RoomUsage, WeeklyUsagePoint


class InMemoryUsageSource(UsageDataSource):
    """Usage data source backed by plain lists."""

    def __init__(
        self,
        weekly: list[WeeklyUsagePoint] | None = None,
        rooms: list[RoomUsage] | None = None,
        bill: BillingRecord | None = None,
        devices: list[ConnectedDevice] | None = None,
    ):
        self._weekly = list(weekly or [])
        self._rooms = list(rooms or [])
        self._bill = bill
        self._devices = list(devices or [])

    async def fetch_weekly_usage(self) -> list[WeeklyUsagePoint]:
        return list(self._weekly)

    async def fetch_room_distribution(self) -> list[RoomUsage]:
        return list(self._rooms)

    async def fetch_current_bill(self) -> BillingRecord | None:
        return self._bill

    async def fetch_devices(self) -> list[ConnectedDevice]:
        return list(self._devices)

    @property
    def source_type(self) -> str:
        return "memory"
