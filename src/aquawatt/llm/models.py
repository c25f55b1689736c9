from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Role of a chat message sender."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """A single message in a chat session.

    Assistant messages are filled incrementally while their turn streams,
    so the model is mutable; freezing after the terminal chunk is the
    session's responsibility.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique message id")
    role: Role = Field(description="Role of the message sender")
    content: str = Field(default="", description="Message text")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_wire(self) -> dict[str, str]:
        """Convert to the {role, content} shape used in completion requests."""
        return {"role": self.role.value, "content": self.content}


class StreamChunk(BaseModel):
    """One event of a streaming reply: a content delta or the terminal marker."""

    model_config = ConfigDict(frozen=True)

    content: str | None = Field(default=None, description="Incremental text fragment")
    done: bool = Field(default=False, description="True for the terminal chunk")

    @classmethod
    def text(cls, content: str) -> "StreamChunk":
        return cls(content=content)

    @classmethod
    def terminal(cls) -> "StreamChunk":
        return cls(done=True)
