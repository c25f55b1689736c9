"""Demonstration data shown when the dashboard has no live readings."""

from datetime import date, timedelta

from .in_memory import InMemoryUsageSource
from .models import BillingRecord, ConnectedDevice, RoomUsage, WeeklyUsagePoint

# Daily baselines, oldest day first; weekends run higher
DEMO_WATER = (45, 38, 42, 50, 48, 65, 58)
DEMO_ELECTRICITY = (12, 10, 11, 13, 14, 18, 16)

DEMO_ROOMS = (
    ("Kitchen", 120.5, 85.2),
    ("Bathroom", 95.8, 12.4),
    ("Living Room", 15.2, 156.7),
    ("Bedroom", 8.5, 78.9),
    ("Garden", 180.3, 25.1),
)

DEMO_DEVICES = (
    ("dev-1", "Kitchen water meter", "water", "Kitchen", True),
    ("dev-2", "Bathroom flow sensor", "water", "Bathroom", True),
    ("dev-3", "Main electricity meter", "electricity", None, True),
    ("dev-4", "Garden sprinkler valve", "water", "Garden", False),
    ("dev-5", "Bedroom smart plug", "electricity", "Bedroom", False),
)


def demo_weekly_usage(today: date | None = None) -> list[WeeklyUsagePoint]:
    """Seven days ending today, labelled with short weekday names."""
    today = today or date.today()
    points = []
    for offset, (water, electricity) in enumerate(zip(DEMO_WATER, DEMO_ELECTRICITY)):
        day = today - timedelta(days=len(DEMO_WATER) - 1 - offset)
        points.append(WeeklyUsagePoint(label=day.strftime("%a"), water=water, electricity=electricity))
    return points


def demo_bill(today: date | None = None) -> BillingRecord:
    """Bill for the calendar month containing ``today``."""
    today = today or date.today()
    start = today.replace(day=1)
    end = (start + timedelta(days=32)).replace(day=1) - timedelta(days=1)
    return BillingRecord(
        id="bill-demo",
        period_start=start,
        period_end=end,
        water_usage=420.3,
        electricity_usage=386.3,
        water_cost=37.83,
        electricity_cost=57.95,
        total_amount=95.78,
        status="pending",
        due_date=end + timedelta(days=14),
    )


def create_demo_source(today: date | None = None) -> InMemoryUsageSource:
    """Build an in-memory source filled with the demonstration data."""
    return InMemoryUsageSource(
        weekly=demo_weekly_usage(today),
        rooms=[
            RoomUsage(room=room, total_water=water, total_electricity=electricity)
            for room, water, electricity in DEMO_ROOMS
        ],
        bill=demo_bill(today),
        devices=[
            ConnectedDevice(id=id_, name=name, device_type=kind, room=room, is_active=active)
            for id_, name, kind, room, active in DEMO_DEVICES
        ],
    )
