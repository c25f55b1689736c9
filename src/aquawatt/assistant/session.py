"""Caller-side chat log that applies engine chunks to an assistant message.

Session-only: nothing is persisted and the log is lost when the object is.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..llm.errors import MessageFrozenError, TurnInProgressError
from ..llm.models import ChatMessage, Role, StreamChunk
from .commands import ChunkCallback, emit

if TYPE_CHECKING:
    from .engine import StreamingReplyEngine

WELCOME_MESSAGE = "Hi! I'm your AquaWatt AI assistant. Ask about /usage /devices /billing or type /help."


class ChatSession:
    """Ordered message log for one conversation.

    The assistant placeholder of the current turn is appended to only while
    the turn is open; the terminal chunk closes the turn and freezes it.
    """

    def __init__(self, welcome: str | None = WELCOME_MESSAGE):
        self._welcome = welcome
        self._messages: list[ChatMessage] = []
        self._active: ChatMessage | None = None
        self.clear()

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def streaming(self) -> bool:
        """True between ``begin_turn`` and the terminal chunk."""
        return self._active is not None

    def begin_turn(self, user_input: str) -> ChatMessage:
        """Append the user message and an empty assistant placeholder.

        Returns:
            The assistant placeholder that the turn's chunks will fill

        Raises:
            TurnInProgressError: If the previous turn has not completed
            ValueError: If the input is blank
        """
        if self._active is not None:
            raise TurnInProgressError("Wait for the current reply to finish before sending")
        text = user_input.strip()
        if not text:
            raise ValueError("Message is empty")

        self._messages.append(ChatMessage(role=Role.USER, content=text))
        self._active = ChatMessage(role=Role.ASSISTANT)
        self._messages.append(self._active)
        return self._active

    def apply_chunk(self, chunk: StreamChunk) -> None:
        """Append a chunk to the open assistant message, closing it on done."""
        if self._active is None:
            raise MessageFrozenError("No reply is streaming")
        if chunk.content:
            self._active.content += chunk.content
        if chunk.done:
            self._active = None

    async def send(
        self,
        engine: "StreamingReplyEngine",
        user_input: str,
        on_chunk: ChunkCallback | None = None,
    ) -> ChatMessage:
        """Run one turn through ``engine`` and return the completed reply.

        Args:
            engine: Reply engine to run the turn
            user_input: The user's message
            on_chunk: Optional extra callback, e.g. to render chunks as they arrive
        """
        history: Sequence[ChatMessage] = self.messages
        reply = self.begin_turn(user_input)

        async def handle(chunk: StreamChunk) -> None:
            self.apply_chunk(chunk)
            if on_chunk is not None:
                await emit(on_chunk, chunk)

        try:
            await engine.stream_reply(history, user_input.strip(), handle)
        finally:
            self._active = None
        return reply

    def clear(self) -> None:
        """Drop every message except the welcome message."""
        if self._active is not None:
            raise TurnInProgressError("Cannot clear while a reply is streaming")
        self._messages = []
        if self._welcome:
            self._messages.append(ChatMessage(id="welcome", role=Role.ASSISTANT, content=self._welcome))
