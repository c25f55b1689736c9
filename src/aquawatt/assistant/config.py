"""Assistant configuration.

The engine receives an ``AssistantConfig`` at construction and never reads
the process environment itself; ``from_env`` is for the CLI layer.
"""

import os

from pydantic import BaseModel, ConfigDict, Field

# Environment variable holding the API key, per provider
API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
}

# Prefix of the user-visible chunk emitted when a turn fails
ERROR_PREFIX = "Error fetching AI response: "


class AssistantConfig(BaseModel):
    """Configuration for the streaming reply engine.

    An absent ``api_key`` is not an error: it selects the heuristic
    fallback instead of the live provider.
    """

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="openai", description="Completion provider: 'openai' or 'deepseek'")
    api_key: str | None = Field(default=None, description="Provider API key")
    model: str | None = Field(default=None, description="Model name (None uses provider's default)")
    base_url: str | None = Field(default=None, description="API base URL (None uses provider's default)")
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    history_limit: int = Field(default=8, ge=0, description="Prior messages sent with each request")
    timeout: float = Field(default=60.0, gt=0, description="HTTP timeout in seconds")

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "AssistantConfig":
        """Build configuration from environment variables.

        Environment variables:
            LLM_PROVIDER: Provider type (openai, deepseek; default: openai)
            OPENAI_API_KEY / DEEPSEEK_API_KEY: API key for the chosen provider
            AQUAWATT_MODEL: Model override
            AQUAWATT_BASE_URL: Base URL override
            AQUAWATT_TEMPERATURE: Sampling temperature (default: 0.4)
        """
        provider = os.getenv("LLM_PROVIDER", "openai").lower()
        key_var = API_KEY_ENV.get(provider, "OPENAI_API_KEY")
        return cls(
            provider=provider,
            api_key=os.getenv(key_var) or None,
            model=os.getenv("AQUAWATT_MODEL") or None,
            base_url=os.getenv("AQUAWATT_BASE_URL") or None,
            temperature=float(os.getenv("AQUAWATT_TEMPERATURE", "0.4")),
        )
