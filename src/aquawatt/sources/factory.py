"""Factory for creating usage data sources."""

from typing import Any

from .base import UsageDataSource


def create_usage_source(source: str = "demo", **kwargs: Any) -> UsageDataSource:
    """Create a usage data source.

    Args:
        source: Source type ("demo" or "memory")
        **kwargs: Source-specific configuration
            For demo:
                - today: date | None (anchors weekday labels and bill period)
            For memory:
                - weekly, rooms, bill, devices (see InMemoryUsageSource)

    Returns:
        UsageDataSource instance

    Raises:
        ValueError: If source type is not supported
    """
    if source == "demo":
        from .demo import create_demo_source
        return create_demo_source(**kwargs)

    elif source == "memory":
        from .in_memory import InMemoryUsageSource
        return InMemoryUsageSource(**kwargs)

    raise ValueError(
        f"Unsupported usage source: {source}. "
        f"Supported sources: demo, memory"
    )
