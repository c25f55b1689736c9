from typing import Any

from .base import CompletionTransport
from .providers import OpenAICompatibleTransport

# Base URL and default model per supported provider
PROVIDER_DEFAULTS: dict[str, dict[str, str]] = {
    "openai": {
        "base_url": "https://api.openai.com/v1",
        "model": "gpt-4o-mini",
    },
    "deepseek": {
        "base_url": "https://api.deepseek.com",
        "model": "deepseek-chat",
    },
}


def create_completion_transport(provider: str, **config: Any) -> CompletionTransport:
    """Create a completion transport instance.

    This factory function hides the instantiation logic for different providers.
    Both supported providers speak the OpenAI chat completion protocol and
    differ only in base URL and default model.

    Args:
        provider: Provider type ('openai', 'deepseek')
        **config: Transport configuration
            - api_key: str (required)
            - model: str | None (default: provider's default model)
            - base_url: str | None (default: provider's API URL)
            - timeout: float (default: 60.0)
            - client: httpx.AsyncClient | None

    Returns:
        Initialized completion transport

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> transport = create_completion_transport(
        ...     "deepseek",
        ...     api_key="sk-...",
        ... )
    """
    provider_lower = provider.lower()
    defaults = PROVIDER_DEFAULTS.get(provider_lower)
    if defaults is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(repr(p) for p in PROVIDER_DEFAULTS)}"
        )

    if not config.get("api_key"):
        raise TypeError(f"{provider_lower} provider requires 'api_key' in config")

    options = {key: value for key, value in config.items() if value is not None}
    for key, value in defaults.items():
        options.setdefault(key, value)
    return OpenAICompatibleTransport(**options)
