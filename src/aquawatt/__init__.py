"""
AquaWatt assistant: the streaming reply engine behind the dashboard's chat widget.

Each subpackage hides one design decision: where usage data comes from
(``sources``), how a completion is carried over the network (``llm``), and
how a user turn becomes a sequence of chunk events (``assistant``).
"""

__version__ = "0.1.0"

from .assistant import (
    AssistantConfig,
    ChatSession,
    ContextSummary,
    StreamingReplyEngine,
    create_reply_engine,
)
from .llm import ChatMessage, Role, StreamChunk
from .sources import UsageDataSource, create_usage_source

__all__ = [
    "AssistantConfig",
    "ChatMessage",
    "ChatSession",
    "ContextSummary",
    "Role",
    "StreamChunk",
    "StreamingReplyEngine",
    "UsageDataSource",
    "create_reply_engine",
    "create_usage_source",
]
