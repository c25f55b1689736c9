"""Streaming reply engine for the AquaWatt assistant.

One call to ``StreamingReplyEngine.stream_reply`` is one user turn: it
builds the data context, answers slash commands locally, otherwise streams
a completion (or a heuristic reply when no provider is configured), and
always finishes with exactly one terminal chunk.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from typing import Any

from ..llm import (
    ChunkCallbackError,
    CompletionTransport,
    LineDecoder,
    LineKind,
    create_completion_transport,
    parse_event_line,
)
from ..llm.models import ChatMessage, StreamChunk
from ..prompts import get_system_prompt
from .commands import ChunkCallback, CommandRouter, emit
from .config import ERROR_PREFIX, AssistantConfig
from .context import ContextAggregator, ContextSummary
from .fallback import heuristic_reply

logger = logging.getLogger(__name__)

# Returned by _next_read when the abort event wins the race against a read
_ABORTED = object()


class _TurnEmitter:
    """Chunk callback wrapper that enforces a single terminal chunk per turn."""

    def __init__(self, on_chunk: ChunkCallback):
        self._on_chunk = on_chunk
        self.finished = False

    async def __call__(self, chunk: StreamChunk) -> None:
        if self.finished:
            logger.debug("Dropping chunk after terminal chunk: %r", chunk)
            return
        if chunk.done:
            self.finished = True
        try:
            await emit(self._on_chunk, chunk)
        except Exception as e:
            raise ChunkCallbackError(f"Chunk callback failed: {e}") from e

    async def finish(self) -> None:
        if not self.finished:
            await self(StreamChunk.terminal())


class TurnHandle:
    """Handle on a turn started with ``StreamingReplyEngine.start_turn``.

    Usage:
        handle = engine.start_turn(history, "how much water did I use?", on_chunk)
        ...
        handle.abort()       # e.g. the chat view was closed
        await handle.wait()  # returns once the terminal chunk was emitted
    """

    def __init__(self, task: "asyncio.Task[None]", emitter: _TurnEmitter):
        self._task = task
        self._emitter = emitter

    @property
    def done(self) -> bool:
        return self._task.done()

    def abort(self) -> None:
        """Cancel the turn, closing any in-flight response."""
        self._task.cancel()

    async def wait(self) -> None:
        """Wait for the turn to complete; an aborted turn completes normally."""
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
            # A turn cancelled before its first step never reached stream_reply
            await self._emitter.finish()


class StreamingReplyEngine:
    """Produces chunk events for one user turn at a time.

    Hidden design decisions:
    - Command routing versus completion
    - Fallback selection when no credential is configured
    - Request construction (system instruction, bounded history)
    - Incremental decoding of the event stream
    - Conversion of every failure into a visible error chunk
    """

    def __init__(
        self,
        config: AssistantConfig,
        aggregator: ContextAggregator,
        transport: CompletionTransport | None = None,
        router: CommandRouter | None = None,
    ):
        """Initialize the engine.

        Args:
            config: Assistant configuration
            aggregator: Builds the per-turn context summaries
            transport: Completion transport; created from ``config`` when omitted
                and credentials are configured. None selects the fallback path.
            router: Command router (default: ``CommandRouter()``)
        """
        if transport is None and config.has_credentials:
            transport = create_completion_transport(
                config.provider,
                api_key=config.api_key,
                model=config.model,
                base_url=config.base_url,
                timeout=config.timeout,
            )
        self._config = config
        self._aggregator = aggregator
        self._transport = transport
        self._router = router or CommandRouter()

    @property
    def config(self) -> AssistantConfig:
        return self._config

    @property
    def uses_fallback(self) -> bool:
        """True when replies come from the heuristic generator."""
        return self._transport is None

    async def stream_reply(
        self,
        history: Sequence[ChatMessage],
        user_input: str,
        on_chunk: ChunkCallback,
        abort: asyncio.Event | None = None,
    ) -> None:
        """Run one turn, delivering chunks to ``on_chunk``.

        Completion is signalled by the terminal chunk, which is emitted
        exactly once whatever happens. Errors are reported as a content
        chunk and never raised, except errors raised by ``on_chunk`` itself:
        those propagate as ``ChunkCallbackError`` without further chunks.

        Args:
            history: Prior messages of the session (oldest first)
            user_input: The new user message
            on_chunk: Plain or coroutine callback receiving each chunk
            abort: Optional event; once set, the pending read is abandoned
        """
        await self._run_guarded(history, user_input, _TurnEmitter(on_chunk), abort)

    async def _run_guarded(
        self,
        history: Sequence[ChatMessage],
        user_input: str,
        emitter: _TurnEmitter,
        abort: asyncio.Event | None,
    ) -> None:
        try:
            await self._run_turn(history, user_input, emitter, abort)
        except asyncio.CancelledError:
            logger.info("Assistant turn aborted")
            await emitter.finish()
            raise
        except ChunkCallbackError:
            raise
        except Exception as e:
            logger.warning("Assistant turn failed: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))
            if not emitter.finished:
                await emitter(StreamChunk.text(ERROR_PREFIX + (str(e) or type(e).__name__)))
        await emitter.finish()

    def start_turn(
        self,
        history: Sequence[ChatMessage],
        user_input: str,
        on_chunk: ChunkCallback,
    ) -> TurnHandle:
        """Run ``stream_reply`` as a task and return an abortable handle."""
        emitter = _TurnEmitter(on_chunk)
        task = asyncio.create_task(self._run_guarded(list(history), user_input, emitter, None))
        return TurnHandle(task, emitter)

    def build_request(
        self,
        history: Sequence[ChatMessage],
        user_input: str,
        context: ContextSummary,
    ) -> dict[str, Any]:
        """Build the completion request body for a turn."""
        limit = self._config.history_limit
        recent = list(history)[-limit:] if limit else []

        messages = [{"role": "system", "content": get_system_prompt(context.to_prompt_context())}]
        messages.extend(message.to_wire() for message in recent)
        messages.append({"role": "user", "content": user_input})

        model = self._config.model or (self._transport.model if self._transport else None)
        return {
            "model": model,
            "messages": messages,
            "temperature": self._config.temperature,
            "stream": True,
        }

    async def _run_turn(
        self,
        history: Sequence[ChatMessage],
        user_input: str,
        emitter: _TurnEmitter,
        abort: asyncio.Event | None,
    ) -> None:
        context = await self._aggregator.build_context_summaries()

        command = self._router.match(user_input)
        if command is not None:
            logger.debug("Dispatching command %s", command.value)
            await self._router.dispatch(command, context, emitter)
            return

        if self._transport is None:
            await emitter(StreamChunk.text(heuristic_reply(user_input, context)))
            await emitter.finish()
            return

        await self._stream_completion(self.build_request(history, user_input, context), emitter, abort)

    async def _stream_completion(
        self,
        payload: dict[str, Any],
        emitter: _TurnEmitter,
        abort: asyncio.Event | None,
    ) -> None:
        def aborted() -> bool:
            if abort is not None and abort.is_set():
                logger.info("Assistant turn aborted by caller")
                return True
            return False

        if aborted():
            await emitter.finish()
            return

        decoder = LineDecoder()
        async with aclosing(self._transport.stream(payload)) as reads:
            while True:
                data = await self._next_read(reads, abort)
                if data is _ABORTED or aborted():
                    await emitter.finish()
                    return
                if data is None:
                    break
                for line in decoder.feed(data):
                    if await self._dispatch_line(line, emitter):
                        return

        # End of stream without the sentinel; the unterminated tail is still a line
        for line in decoder.flush():
            if await self._dispatch_line(line, emitter):
                return
        await emitter.finish()

    @staticmethod
    async def _next_read(reads: AsyncIterator[bytes], abort: asyncio.Event | None) -> Any:
        """Next body read, None at end of stream, or _ABORTED if ``abort`` is set first.

        The losing read is cancelled and awaited, so the stream can be closed.
        """
        if abort is None:
            return await anext(reads, None)
        read = asyncio.ensure_future(anext(reads, None))
        waiter = asyncio.ensure_future(abort.wait())
        try:
            await asyncio.wait({read, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not read.done():
                read.cancel()
                await asyncio.wait({read})
        if read.cancelled():
            return _ABORTED
        return read.result()

    @staticmethod
    async def _dispatch_line(line: str, emitter: _TurnEmitter) -> bool:
        """Handle one complete line; return True once the sentinel is seen."""
        parsed = parse_event_line(line)
        if parsed.kind is LineKind.DONE:
            await emitter.finish()
            return True
        if parsed.kind is LineKind.DELTA:
            await emitter(StreamChunk.text(parsed.content))
        return False

    async def close(self) -> None:
        """Close the completion transport, if any."""
        if self._transport is not None:
            await self._transport.close()

    async def __aenter__(self) -> "StreamingReplyEngine":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
