import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from ..base import CompletionTransport
from ..errors import CompletionTransportError

logger = logging.getLogger(__name__)

# Characters of an error body kept in the exception message
_ERROR_DETAIL_LIMIT = 200


class OpenAICompatibleTransport(CompletionTransport):
    """Streaming transport for OpenAI-compatible chat completion APIs.

    Hidden design decisions:
    - HTTP client initialization and connection reuse
    - Bearer token authentication
    - Endpoint path (``/chat/completions`` under the base URL)
    - Conversion of error statuses into ``CompletionTransportError``
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the transport.

        Args:
            api_key: Provider API key
            model: Default model to request
            base_url: API base URL (without the ``/chat/completions`` suffix)
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (not closed by ``close``)
        """
        self._api_key = api_key
        self._model = model
        self._url = base_url.rstrip("/") + "/chat/completions"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def url(self) -> str:
        return self._url

    async def stream(self, payload: dict[str, Any]) -> AsyncIterator[bytes]:
        """POST the payload and yield body reads as they arrive."""
        body = {"model": self._model, **payload, "stream": True}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

        logger.debug("POST %s model=%s messages=%d", self._url, body["model"], len(body.get("messages", [])))

        async with self._client.stream("POST", self._url, json=body, headers=headers) as response:
            if response.is_error:
                detail = (await response.aread()).decode("utf-8", errors="replace")
                raise CompletionTransportError(response.status_code, detail[:_ERROR_DETAIL_LIMIT].strip())

            async for data in response.aiter_bytes():
                yield data

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
