from .base import CompletionTransport
from .decoder import LineDecoder, LineKind, ParsedLine, parse_event_line
from .errors import (
    AssistantError,
    ChunkCallbackError,
    CompletionTransportError,
    MessageFrozenError,
    TurnInProgressError,
)
from .factory import PROVIDER_DEFAULTS, create_completion_transport
from .models import ChatMessage, Role, StreamChunk
from .providers import OpenAICompatibleTransport

__all__ = [
    "CompletionTransport",
    "create_completion_transport",
    "PROVIDER_DEFAULTS",
    "OpenAICompatibleTransport",
    "ChatMessage",
    "Role",
    "StreamChunk",
    "LineDecoder",
    "LineKind",
    "ParsedLine",
    "parse_event_line",
    "AssistantError",
    "ChunkCallbackError",
    "CompletionTransportError",
    "MessageFrozenError",
    "TurnInProgressError",
]
