from typing import Any

from ..sources import UsageDataSource, create_usage_source
from .config import AssistantConfig
from .context import ContextAggregator
from .engine import StreamingReplyEngine


def create_reply_engine(
    config: AssistantConfig | None = None,
    source: str | UsageDataSource = "demo",
    **source_config: Any,
) -> StreamingReplyEngine:
    """Create a reply engine wired to a usage data source.

    This factory function hides how the engine's collaborators are assembled.

    Args:
        config: Assistant configuration (default: no credentials, fallback replies)
        source: Usage data source instance, or a source type for
            ``create_usage_source`` ('demo', 'memory')
        **source_config: Source-specific configuration when ``source`` is a type

    Returns:
        Initialized reply engine

    Raises:
        ValueError: If the source or provider type is not supported

    Examples:
        >>> engine = create_reply_engine(AssistantConfig(api_key="sk-..."))

        >>> engine = create_reply_engine(source="memory", weekly=[], devices=[])
    """
    if isinstance(source, str):
        source = create_usage_source(source, **source_config)
    return StreamingReplyEngine(
        config=config or AssistantConfig(),
        aggregator=ContextAggregator(source),
    )
