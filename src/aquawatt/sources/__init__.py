"""Usage data sources consumed by the assistant.

Read-only queries for weekly usage, room distribution, billing and devices.
"""

from .base import UsageDataSource
from .factory import create_usage_source
from .in_memory import InMemoryUsageSource
from .models import BillingRecord, ConnectedDevice, RoomUsage, WeeklyUsagePoint

__all__ = [
    "UsageDataSource",
    "InMemoryUsageSource",
    "create_usage_source",
    "BillingRecord",
    "ConnectedDevice",
    "RoomUsage",
    "WeeklyUsagePoint",
]
