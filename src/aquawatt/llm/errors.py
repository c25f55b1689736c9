class AssistantError(Exception):
    """Base class for assistant errors."""


class CompletionTransportError(AssistantError):
    """The completion endpoint answered with a non-success status."""

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        message = f"HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class TurnInProgressError(AssistantError):
    """A new turn was started before the previous one completed."""


class MessageFrozenError(AssistantError):
    """Content was appended to a message whose turn has completed."""


class ChunkCallbackError(AssistantError):
    """The caller's chunk callback raised; the original error is the cause."""
