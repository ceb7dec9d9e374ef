"""Shared abstractions for provider request handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping

import httpx

from gosling.core.config import ModelProvider
from gosling.utils.log import REDACTED

_SECRET_HEADERS = {"authorization"}
_SECRET_QUERY_PARAMS = ("key",)


@dataclass(frozen=True)
class RequestShape:
    """Endpoint and headers for one outbound model call."""

    url: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def to_httpx_request(self, body: Dict[str, Any]) -> httpx.Request:
        """Attach a JSON body and return an unsent POST request."""
        return httpx.Request("POST", self.url, headers=dict(self.headers), json=body)

    def redacted_headers(self) -> Dict[str, str]:
        redacted: Dict[str, str] = {}
        for name, value in self.headers.items():
            if name.lower() not in _SECRET_HEADERS:
                redacted[name] = value
            elif value.startswith("Bearer "):
                redacted[name] = f"Bearer {REDACTED}"
            else:
                redacted[name] = REDACTED
        return redacted

    def redacted_url(self) -> str:
        url = httpx.URL(self.url)
        for param in _SECRET_QUERY_PARAMS:
            if param in url.params:
                url = url.copy_set_param(param, REDACTED)
        return str(url)


class ProviderHandler(ABC):
    """Builds provider-specific request URLs and headers.

    Handlers are stateless. They build strings only and never validate the
    credential; a bad key surfaces when the transport makes the call.
    """

    provider: ClassVar[ModelProvider]

    @abstractmethod
    def get_api_url(self, model_identifier: str, api_key: str) -> str:
        """Return the endpoint for ``model_identifier``."""

    @abstractmethod
    def get_headers(self, api_key: str) -> Dict[str, str]:
        """Return the HTTP headers for a request authenticated with ``api_key``."""

    def build_request_shape(self, model_identifier: str, api_key: str) -> RequestShape:
        return RequestShape(
            url=self.get_api_url(model_identifier, api_key),
            headers=self.get_headers(api_key),
        )


def bearer_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}
