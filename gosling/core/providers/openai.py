"""OpenAI chat completions request handler."""

from __future__ import annotations

from typing import Dict

from gosling.core.config import ModelProvider
from gosling.core.providers.base import ProviderHandler, bearer_headers

OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIProviderHandler(ProviderHandler):
    """Direct OpenAI API. The model is named in the request body, not the URL."""

    provider = ModelProvider.OPENAI

    def get_api_url(self, model_identifier: str, api_key: str) -> str:
        return OPENAI_CHAT_COMPLETIONS_URL

    def get_headers(self, api_key: str) -> Dict[str, str]:
        return bearer_headers(api_key)
