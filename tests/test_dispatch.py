"""Tests for the dispatch facade."""

import pytest

from gosling.core.config import ModelProvider
from gosling.core.dispatch import ModelDispatcher, get_dispatcher
from gosling.core.errors import ConfigurationError, MissingProviderHandlerError, ModelNotFoundError
from gosling.core.models import AiModel, ModelRegistry, default_registry
from gosling.core.providers import (
    GeminiProviderHandler,
    OpenAIProviderHandler,
    OpenRouterProviderHandler,
)


def test_build_request_for_openrouter_model():
    shape = get_dispatcher().build_request("meta-llama/llama-3.1-70b-instruct", "test-key")

    assert shape.url == "https://openrouter.ai/api/v1/chat/completions"
    assert shape.headers["Authorization"] == "Bearer test-key"
    assert set(shape.headers) == {"Authorization", "HTTP-Referer", "X-Title"}


def test_build_request_for_gemini_model():
    shape = get_dispatcher().build_request("gemini-2.0-flash-lite", "g-key")

    assert shape.url.endswith("/models/gemini-2.0-flash-lite:generateContent?key=g-key")
    assert dict(shape.headers) == {}


def test_build_request_for_unknown_model_raises_not_found():
    with pytest.raises(ModelNotFoundError):
        get_dispatcher().build_request("anthropic/claude-2", "test-key")


@pytest.mark.parametrize(
    "identifier, handler_cls",
    [
        ("gpt-4o-mini", OpenAIProviderHandler),
        ("gemini-2.0-flash", GeminiProviderHandler),
        ("cohere/command-r-plus", OpenRouterProviderHandler),
    ],
)
def test_handler_for_model_matches_provider(identifier, handler_cls):
    assert isinstance(get_dispatcher().handler_for_model(identifier), handler_cls)


def test_listing_passes_through_registry():
    dispatcher = get_dispatcher()
    registry = default_registry()

    assert dispatcher.all_models() == registry.all_models()
    assert dispatcher.get_providers() == registry.get_providers()
    assert dispatcher.get_models_for_provider(ModelProvider.GEMINI) == (
        registry.get_models_for_provider(ModelProvider.GEMINI)
    )
    assert dispatcher.resolve("gpt-4o") == registry.from_identifier("gpt-4o")


def test_missing_handler_fails_at_construction():
    with pytest.raises(MissingProviderHandlerError) as exc_info:
        ModelDispatcher(
            default_registry(), handlers={ModelProvider.OPENAI: OpenAIProviderHandler()}
        )

    assert exc_info.value.providers == (ModelProvider.GEMINI, ModelProvider.OPENROUTER)
    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.error_code == "configuration_error"


def test_partial_table_is_enough_for_partial_registry():
    registry = ModelRegistry(
        [AiModel(display_name="GPT-4o", identifier="gpt-4o", provider=ModelProvider.OPENAI)]
    )
    dispatcher = ModelDispatcher(registry, handlers={ModelProvider.OPENAI: OpenAIProviderHandler()})

    assert dispatcher.build_request("gpt-4o", "k").headers == {"Authorization": "Bearer k"}
    with pytest.raises(MissingProviderHandlerError):
        dispatcher.handler_for(ModelProvider.GEMINI)


def test_default_dispatcher_is_shared():
    assert get_dispatcher() is get_dispatcher()
    assert get_dispatcher().registry is default_registry()
