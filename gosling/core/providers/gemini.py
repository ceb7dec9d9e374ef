"""Gemini generateContent request handler."""

from __future__ import annotations

from typing import Dict

import httpx

from gosling.core.config import ModelProvider
from gosling.core.providers.base import ProviderHandler

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


class GeminiProviderHandler(ProviderHandler):
    """Google Gemini REST API.

    The model is part of the path and the API key travels as the ``key``
    query parameter, so no authorization header is sent.
    """

    provider = ModelProvider.GEMINI

    def get_api_url(self, model_identifier: str, api_key: str) -> str:
        # The key is query-encoded so "&" or "#" cannot split it.
        url = httpx.URL(
            f"{GEMINI_API_BASE}/models/{model_identifier}:generateContent",
            params={"key": api_key},
        )
        return str(url)

    def get_headers(self, api_key: str) -> Dict[str, str]:
        return {}
