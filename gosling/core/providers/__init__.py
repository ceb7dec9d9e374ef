"""Provider request handler registry."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Type

from gosling.core.config import ModelProvider
from gosling.core.errors import MissingProviderHandlerError
from gosling.core.providers.base import ProviderHandler, RequestShape
from gosling.core.providers.gemini import GeminiProviderHandler
from gosling.core.providers.openai import OpenAIProviderHandler
from gosling.core.providers.openrouter import OpenRouterProviderHandler

_HANDLER_CLASSES: Dict[ModelProvider, Type[ProviderHandler]] = {
    cls.provider: cls
    for cls in (OpenAIProviderHandler, GeminiProviderHandler, OpenRouterProviderHandler)
}

# A provider without a handler is a build defect; refuse to import.
_unhandled = [provider for provider in ModelProvider if provider not in _HANDLER_CLASSES]
if _unhandled:
    raise MissingProviderHandlerError(_unhandled)

PROVIDER_HANDLERS: Mapping[ModelProvider, ProviderHandler] = MappingProxyType(
    {provider: cls() for provider, cls in _HANDLER_CLASSES.items()}
)


def get_provider_handler(provider: ModelProvider) -> ProviderHandler:
    """Return the shared request handler for ``provider``."""
    try:
        return PROVIDER_HANDLERS[provider]
    except KeyError:
        raise MissingProviderHandlerError([provider]) from None


__all__ = [
    "GeminiProviderHandler",
    "OpenAIProviderHandler",
    "OpenRouterProviderHandler",
    "PROVIDER_HANDLERS",
    "ProviderHandler",
    "RequestShape",
    "get_provider_handler",
]
