"""Unit tests for the usage data sources."""
from datetime import date

import pytest
from pydantic import ValidationError

from aquawatt.sources import (
    InMemoryUsageSource,
    UsageDataSource,
    WeeklyUsagePoint,
    create_usage_source,
)


class TestUsageDataSource:
    """Tests for the abstract UsageDataSource interface."""

    def test_source_is_abstract(self):
        """Test that UsageDataSource cannot be instantiated directly."""
        with pytest.raises(TypeError):
            UsageDataSource()  # type: ignore


class TestDemoSource:
    """Tests for the demonstration data."""

    @pytest.mark.asyncio
    async def test_weekly_labels_end_today(self):
        """Test seven points labelled with weekdays ending on the given day."""
        source = create_usage_source("demo", today=date(2025, 3, 9))  # a Sunday

        weekly = await source.fetch_weekly_usage()

        assert [p.label for p in weekly] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert weekly[0].water == 45
        assert weekly[-1].electricity == 16

    @pytest.mark.asyncio
    async def test_bill_covers_current_month(self):
        """Test that the demo bill spans the month of the given day."""
        source = create_usage_source("demo", today=date(2024, 2, 10))

        bill = await source.fetch_current_bill()

        assert bill.period_start == date(2024, 2, 1)
        assert bill.period_end == date(2024, 2, 29)
        assert bill.total_amount == pytest.approx(bill.water_cost + bill.electricity_cost)

    @pytest.mark.asyncio
    async def test_rooms_and_devices(self):
        """Test the fixed room and device lists."""
        source = create_usage_source("demo")

        rooms = await source.fetch_room_distribution()
        devices = await source.fetch_devices()

        assert [r.room for r in rooms] == ["Kitchen", "Bathroom", "Living Room", "Bedroom", "Garden"]
        assert len(devices) == 5
        assert sum(d.is_active for d in devices) == 3


class TestInMemorySource:
    """Tests for InMemoryUsageSource."""

    @pytest.mark.asyncio
    async def test_empty_by_default(self):
        """Test that an empty source returns empty results."""
        source = InMemoryUsageSource()

        assert await source.fetch_weekly_usage() == []
        assert await source.fetch_room_distribution() == []
        assert await source.fetch_current_bill() is None
        assert await source.fetch_devices() == []
        assert source.source_type == "memory"

    @pytest.mark.asyncio
    async def test_results_are_copies(self):
        """Test that callers cannot mutate the stored records."""
        source = InMemoryUsageSource(weekly=[WeeklyUsagePoint(label="Mon", water=1, electricity=1)])

        (await source.fetch_weekly_usage()).clear()

        assert len(await source.fetch_weekly_usage()) == 1


class TestModels:
    """Tests for source record validation."""

    def test_negative_usage_rejected(self):
        """Test that negative readings fail validation."""
        with pytest.raises(ValidationError):
            WeeklyUsagePoint(label="Mon", water=-1, electricity=0)


class TestSourceFactory:
    """Tests for create_usage_source."""

    def test_memory_source(self):
        """Test creating an in-memory source via the factory."""
        assert isinstance(create_usage_source("memory"), InMemoryUsageSource)

    def test_unsupported_source(self):
        """Test that an unknown source raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported usage source"):
            create_usage_source("supabase")
