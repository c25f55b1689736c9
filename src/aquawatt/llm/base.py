from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any


class CompletionTransport(ABC):
    """Abstract base class for chat completion transports.

    This module hides the design decision of how the single chunked
    completion exchange is carried out. Implementations must handle:
    - API client setup and authentication
    - Endpoint addressing
    - Mapping error statuses to exceptions

    Decoding of the body is not the transport's concern: ``stream`` yields
    raw bytes exactly as they are read from the network.

    Supports async context manager protocol for proper resource cleanup:
        async with transport:
            async for data in transport.stream(payload):
                ...
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model requested when the payload does not name one."""

    @abstractmethod
    def stream(self, payload: dict[str, Any]) -> AsyncIterator[bytes]:
        """Send a streaming completion request and yield body reads.

        Args:
            payload: JSON request body ({model, messages, temperature, stream})

        Returns:
            Async iterator over raw response body reads. Closing the
            iterator early (``aclose``) must release the underlying response.

        Raises:
            CompletionTransportError: If the endpoint answers with an error status
            httpx.HTTPError: On connection or read failures
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "CompletionTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
