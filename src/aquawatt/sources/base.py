"""Abstract base class for usage data sources.

This module defines the read-only queries the assistant consumes.
The abstraction hides:
- Where readings live (hosted database, REST API, in-memory demo data)
- Authentication of the current user
- Aggregation of raw readings into daily and per-room totals
"""

from abc import ABC, abstractmethod

from .models import BillingRecord, ConnectedDevice, RoomUsage, WeeklyUsagePoint


class UsageDataSource(ABC):
    """Abstract usage data source.

    Every query is side-effect free. Implementations may raise or return
    empty results; callers must not assume success.
    """

    @abstractmethod
    async def fetch_weekly_usage(self) -> list[WeeklyUsagePoint]:
        """Daily water/electricity totals for the last seven days, oldest first."""

    @abstractmethod
    async def fetch_room_distribution(self) -> list[RoomUsage]:
        """Per-room totals over the last 30 days."""

    @abstractmethod
    async def fetch_current_bill(self) -> BillingRecord | None:
        """Most recent billing period, or None if the user has no bills."""

    @abstractmethod
    async def fetch_devices(self) -> list[ConnectedDevice]:
        """All devices registered to the user."""

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Get the source type identifier."""
