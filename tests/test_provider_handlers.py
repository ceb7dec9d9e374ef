"""Tests for provider request handlers."""

import json

import httpx
import pytest

from gosling.core.config import ModelProvider
from gosling.core.models import default_registry
from gosling.core.providers import (
    PROVIDER_HANDLERS,
    GeminiProviderHandler,
    OpenAIProviderHandler,
    OpenRouterProviderHandler,
    get_provider_handler,
)
from gosling.core.providers.base import RequestShape

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


def test_openrouter_url_and_headers():
    handler = OpenRouterProviderHandler()

    assert handler.get_api_url("anthropic/claude-3.5-sonnet", "test-key") == OPENROUTER_URL

    headers = handler.get_headers("test-key")
    assert headers["Authorization"] == "Bearer test-key"
    assert "HTTP-Referer" in headers
    assert "X-Title" in headers


def test_openrouter_url_is_constant_across_models_and_keys():
    handler = OpenRouterProviderHandler()
    for model in default_registry().get_models_for_provider(ModelProvider.OPENROUTER):
        assert handler.get_api_url(model.identifier, "test-key") == OPENROUTER_URL
        assert handler.get_api_url(model.identifier, "") == OPENROUTER_URL


def test_openrouter_attribution_headers_are_constant():
    handler = OpenRouterProviderHandler()
    first = handler.get_headers("key-one")
    second = handler.get_headers("key-two")

    assert first["HTTP-Referer"] == second["HTTP-Referer"] == "https://goose-mobile.app"
    assert first["X-Title"] == second["X-Title"] == "Goose Mobile"


@pytest.mark.parametrize(
    "identifier, expected",
    [
        ("anthropic/claude-3.5-sonnet", True),
        ("meta-llama/llama-3.1-8b-instruct", True),
        ("mistralai/mistral-large", True),
        ("cohere/command-r-plus", True),
        ("openai/gpt-4o", True),
        ("google/gemma-2-9b-it", False),
        ("cohere/command", False),
    ],
)
def test_openrouter_tool_calling_support(identifier, expected):
    assert OpenRouterProviderHandler.supports_tool_calling(identifier) is expected


def test_openai_url_and_headers():
    handler = OpenAIProviderHandler()

    assert handler.get_api_url("gpt-4o", "sk-test") == "https://api.openai.com/v1/chat/completions"
    assert handler.get_headers("sk-test") == {"Authorization": "Bearer sk-test"}


def test_gemini_embeds_model_and_key_in_url():
    handler = GeminiProviderHandler()

    url = handler.get_api_url("gemini-2.0-flash", "g-key")
    assert url == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.0-flash:generateContent?key=g-key"
    )
    assert handler.get_headers("g-key") == {}


@pytest.mark.parametrize("handler_cls", [OpenAIProviderHandler, OpenRouterProviderHandler])
def test_empty_key_does_not_fail(handler_cls):
    handler = handler_cls()
    assert handler.get_headers("")["Authorization"] == "Bearer "
    assert handler.get_api_url("any", "")


def test_gemini_empty_key_does_not_fail():
    handler = GeminiProviderHandler()

    assert handler.get_api_url("gemini-2.0-flash", "").endswith(":generateContent?key=")
    assert handler.get_headers("") == {}


@pytest.mark.parametrize("api_key", ["abc&leak=secret-part", "abc#leaked-tail"])
def test_gemini_key_with_reserved_characters_stays_whole(api_key):
    shape = GeminiProviderHandler().build_request_shape("gemini-2.0-flash", api_key)

    assert httpx.URL(shape.url).params["key"] == api_key
    redacted = shape.redacted_url()
    assert "secret-part" not in redacted
    assert "leaked-tail" not in redacted
    assert httpx.URL(redacted).params["key"] == "***"


def test_every_provider_has_a_handler():
    assert set(PROVIDER_HANDLERS) == set(ModelProvider)
    for provider, handler in PROVIDER_HANDLERS.items():
        assert handler.provider == provider
        assert get_provider_handler(provider) is handler


def test_build_request_shape_combines_url_and_headers():
    shape = OpenRouterProviderHandler().build_request_shape("mistralai/mistral-large", "k")

    assert shape.url == OPENROUTER_URL
    assert shape.headers["Authorization"] == "Bearer k"


def test_request_shape_builds_unsent_httpx_request():
    shape = OpenAIProviderHandler().build_request_shape("gpt-4o", "sk-test")
    request = shape.to_httpx_request({"model": "gpt-4o", "messages": []})

    assert request.method == "POST"
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert json.loads(request.content) == {"model": "gpt-4o", "messages": []}


def test_request_shape_redacts_credentials():
    openrouter = OpenRouterProviderHandler().build_request_shape("cohere/command-r-plus", "secret")
    redacted = openrouter.redacted_headers()
    assert redacted["Authorization"] == "Bearer ***"
    assert redacted["X-Title"] == "Goose Mobile"

    gemini = GeminiProviderHandler().build_request_shape("gemini-2.0-flash", "secret")
    assert "secret" not in gemini.redacted_url()
    assert "gemini-2.0-flash:generateContent" in gemini.redacted_url()


def test_redaction_leaves_plain_urls_alone():
    shape = RequestShape(url=OPENROUTER_URL, headers={})
    assert shape.redacted_url() == OPENROUTER_URL
    assert shape.redacted_headers() == {}
