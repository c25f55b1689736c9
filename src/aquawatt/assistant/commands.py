"""Slash commands answered from context without a network call."""

import inspect
from collections.abc import Awaitable, Callable
from enum import Enum

from ..llm.models import StreamChunk
from .context import ContextSummary

ChunkCallback = Callable[[StreamChunk], Awaitable[None] | None]

HELP_TEXT = "Commands: /usage /devices /billing /help. Ask natural questions for AI assistance."


class Command(str, Enum):
    """Recognized command prefixes."""

    USAGE = "/usage"
    DEVICES = "/devices"
    BILLING = "/billing"
    HELP = "/help"


# Reply used when the command's summary is empty
NO_DATA_REPLIES = {
    Command.USAGE: "No usage data.",
    Command.DEVICES: "No device data.",
    Command.BILLING: "No billing data.",
}


async def emit(on_chunk: ChunkCallback, chunk: StreamChunk) -> None:
    """Deliver a chunk to a plain or coroutine callback."""
    result = on_chunk(chunk)
    if inspect.isawaitable(result):
        await result


class CommandRouter:
    """Detects command prefixes and answers them from the context summaries."""

    def match(self, user_input: str) -> Command | None:
        """Return the command whose prefix starts the input, if any.

        Unknown slash-prefixed input (e.g. ``/weather``) is not a command.
        """
        text = user_input.strip().lower()
        for command in Command:
            if text.startswith(command.value):
                return command
        return None

    def reply_for(self, command: Command, context: ContextSummary) -> str:
        if command is Command.HELP:
            return HELP_TEXT
        summary = {
            Command.USAGE: context.usage_summary,
            Command.DEVICES: context.device_summary,
            Command.BILLING: context.billing_summary,
        }[command]
        return summary or NO_DATA_REPLIES[command]

    async def dispatch(self, command: Command, context: ContextSummary, on_chunk: ChunkCallback) -> None:
        """Emit the command's reply followed by the terminal chunk."""
        await emit(on_chunk, StreamChunk.text(self.reply_for(command, context)))
        await emit(on_chunk, StreamChunk.terminal())
