from .openai_compat import OpenAICompatibleTransport

__all__ = [
    "OpenAICompatibleTransport",
]
