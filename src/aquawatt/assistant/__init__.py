"""Conversational assistant: context, commands, fallback and streaming replies."""

from .commands import HELP_TEXT, Command, CommandRouter
from .config import ERROR_PREFIX, AssistantConfig
from .context import ContextAggregator, ContextSummary
from .engine import StreamingReplyEngine, TurnHandle
from .factory import create_reply_engine
from .fallback import heuristic_reply
from .session import WELCOME_MESSAGE, ChatSession

__all__ = [
    "AssistantConfig",
    "ChatSession",
    "Command",
    "CommandRouter",
    "ContextAggregator",
    "ContextSummary",
    "StreamingReplyEngine",
    "TurnHandle",
    "create_reply_engine",
    "heuristic_reply",
    "ERROR_PREFIX",
    "HELP_TEXT",
    "WELCOME_MESSAGE",
]
