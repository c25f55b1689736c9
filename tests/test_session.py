"""Unit tests for the caller-side chat session."""
import pytest
from conftest import FakeTransport, make_engine, sse_body

from aquawatt.assistant import WELCOME_MESSAGE, ChatSession
from aquawatt.assistant.fallback import GREETING_REPLY
from aquawatt.llm import MessageFrozenError, Role, StreamChunk, TurnInProgressError


class TestChatSession:
    """Tests for ChatSession."""

    def test_starts_with_welcome_message(self):
        """Test that a new session holds only the welcome message."""
        session = ChatSession()

        assert len(session.messages) == 1
        assert session.messages[0].role == Role.ASSISTANT
        assert session.messages[0].content == WELCOME_MESSAGE
        assert not session.streaming

    def test_without_welcome_message(self):
        """Test that the welcome message can be disabled."""
        assert ChatSession(welcome=None).messages == []

    def test_begin_turn_appends_pair(self):
        """Test that a turn adds the user message and an empty placeholder."""
        session = ChatSession()

        reply = session.begin_turn("  how much water?  ")

        user, assistant = session.messages[-2:]
        assert user.role == Role.USER
        assert user.content == "how much water?"
        assert assistant is reply
        assert assistant.content == ""
        assert session.streaming
        assert user.id != assistant.id

    def test_blank_input_rejected(self):
        """Test that blank input does not open a turn."""
        session = ChatSession()

        with pytest.raises(ValueError):
            session.begin_turn("   ")
        assert not session.streaming

    def test_second_turn_while_streaming(self):
        """Test that overlapping turns are refused."""
        session = ChatSession()
        session.begin_turn("first")

        with pytest.raises(TurnInProgressError):
            session.begin_turn("second")

    def test_chunks_append_then_freeze(self):
        """Test that content accumulates until the terminal chunk."""
        session = ChatSession()
        reply = session.begin_turn("question")

        session.apply_chunk(StreamChunk.text("Hello "))
        session.apply_chunk(StreamChunk.text("world"))
        session.apply_chunk(StreamChunk.terminal())

        assert reply.content == "Hello world"
        assert not session.streaming
        with pytest.raises(MessageFrozenError):
            session.apply_chunk(StreamChunk.text("late"))
        assert reply.content == "Hello world"

    def test_clear_keeps_welcome(self):
        """Test that clearing drops the conversation but keeps the welcome."""
        session = ChatSession()
        session.begin_turn("question")
        session.apply_chunk(StreamChunk.terminal())

        session.clear()

        assert [m.content for m in session.messages] == [WELCOME_MESSAGE]

    def test_clear_while_streaming(self):
        """Test that clearing mid-turn is refused."""
        session = ChatSession()
        session.begin_turn("question")

        with pytest.raises(TurnInProgressError):
            session.clear()

    @pytest.mark.asyncio
    async def test_send_with_fallback_engine(self, offline_engine, recorder):
        """Test a full turn through an engine without credentials."""
        session = ChatSession()

        reply = await session.send(offline_engine, "hello there", recorder)

        assert reply.content == GREETING_REPLY
        assert session.messages[-1] is reply
        assert not session.streaming
        recorder.assert_well_formed()

    @pytest.mark.asyncio
    async def test_send_passes_prior_history(self, sample_source):
        """Test that the engine sees the log as it was before the new message."""
        transport = FakeTransport(reads=[sse_body("First answer.")])
        engine = make_engine(sample_source, transport, api_key="sk-test")
        session = ChatSession()

        await session.send(engine, "first question")
        transport.reads = [sse_body("Second answer.")]
        reply = await session.send(engine, "second question")

        second_messages = transport.payloads[1]["messages"]
        assert [m["content"] for m in second_messages[1:]] == [
            WELCOME_MESSAGE,
            "first question",
            "First answer.",
            "second question",
        ]
        assert reply.content == "Second answer."
