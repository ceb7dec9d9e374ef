"""OpenRouter request handler.

OpenRouter fronts many vendors (Anthropic, Meta, Mistral, Cohere, ...) behind a
single OpenAI-compatible endpoint. The vendor is selected by the ``model`` field
of the request body, so the URL never depends on the model.
"""

from __future__ import annotations

from typing import Dict

from gosling.core.config import ModelProvider
from gosling.core.providers.base import ProviderHandler, bearer_headers

OPENROUTER_CHAT_COMPLETIONS_URL = "https://openrouter.ai/api/v1/chat/completions"

# Attribution headers requested by OpenRouter for app rankings.
OPENROUTER_REFERER = "https://goose-mobile.app"
OPENROUTER_TITLE = "Goose Mobile"

_TOOL_CALLING_PREFIXES = (
    "anthropic/claude-",
    "openai/gpt-4",
    "openai/gpt-3.5",
    "meta-llama/llama-3.1",
    "mistralai/",
    "cohere/command-r",
)


class OpenRouterProviderHandler(ProviderHandler):
    provider = ModelProvider.OPENROUTER

    def get_api_url(self, model_identifier: str, api_key: str) -> str:
        return OPENROUTER_CHAT_COMPLETIONS_URL

    def get_headers(self, api_key: str) -> Dict[str, str]:
        headers = bearer_headers(api_key)
        headers["HTTP-Referer"] = OPENROUTER_REFERER
        headers["X-Title"] = OPENROUTER_TITLE
        return headers

    @staticmethod
    def supports_tool_calling(model_identifier: str) -> bool:
        """Whether the routed model is known to accept tool definitions.

        Unknown vendors are treated as unsupported.
        """
        return model_identifier.startswith(_TOOL_CALLING_PREFIXES)
