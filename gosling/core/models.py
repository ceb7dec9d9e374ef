"""Catalog of selectable models and the providers that serve them."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Iterable, Iterator, Tuple

from pydantic import BaseModel, ConfigDict

from gosling.core.config import ModelProvider
from gosling.core.errors import ConfigurationError, DuplicateModelError, ModelNotFoundError
from gosling.utils.log import get_logger

logger = get_logger()


class AiModel(BaseModel):
    """A selectable model, tagged with the provider that serves it."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    identifier: str
    provider: ModelProvider


AVAILABLE_MODELS: Tuple[AiModel, ...] = (
    AiModel(display_name="GPT-4.1", identifier="gpt-4.1", provider=ModelProvider.OPENAI),
    AiModel(display_name="GPT-4o", identifier="gpt-4o", provider=ModelProvider.OPENAI),
    AiModel(display_name="GPT-4o mini", identifier="gpt-4o-mini", provider=ModelProvider.OPENAI),
    AiModel(display_name="O3 Mini", identifier="o3-mini", provider=ModelProvider.OPENAI),
    AiModel(display_name="O3 Small", identifier="o3-small", provider=ModelProvider.OPENAI),
    AiModel(display_name="O3 Medium", identifier="o3-medium", provider=ModelProvider.OPENAI),
    AiModel(display_name="O3 Large", identifier="o3-large", provider=ModelProvider.OPENAI),
    AiModel(
        display_name="Gemini Flash", identifier="gemini-2.0-flash", provider=ModelProvider.GEMINI
    ),
    AiModel(
        display_name="Gemini Flash light",
        identifier="gemini-2.0-flash-lite",
        provider=ModelProvider.GEMINI,
    ),
    # Routed through OpenRouter; identifiers are "<vendor>/<model>".
    AiModel(
        display_name="Claude 4 Sonnet",
        identifier="anthropic/claude-sonnet-4",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Claude 4 Opus",
        identifier="anthropic/claude-opus-4",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Claude 3.5 Sonnet",
        identifier="anthropic/claude-3.5-sonnet",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Claude 3 Haiku",
        identifier="anthropic/claude-3-haiku",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Claude 3 Opus",
        identifier="anthropic/claude-3-opus",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Llama 3.1 70B",
        identifier="meta-llama/llama-3.1-70b-instruct",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Llama 3.1 8B",
        identifier="meta-llama/llama-3.1-8b-instruct",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Mistral Large",
        identifier="mistralai/mistral-large",
        provider=ModelProvider.OPENROUTER,
    ),
    AiModel(
        display_name="Cohere Command R+",
        identifier="cohere/command-r-plus",
        provider=ModelProvider.OPENROUTER,
    ),
)


class ModelRegistry:
    """Immutable, ordered catalog of models with exact identifier lookup."""

    def __init__(self, models: Iterable[AiModel]) -> None:
        entries = tuple(models)
        index: Dict[str, AiModel] = {}
        for model in entries:
            if model.identifier in index:
                raise DuplicateModelError(model.identifier)
            index[model.identifier] = model

        providers: Dict[ModelProvider, None] = {}
        for model in entries:
            providers.setdefault(model.provider, None)

        self._models = entries
        self._index = index
        self._providers = tuple(providers)
        logger.debug(
            "[models] Registry built",
            extra={
                "model_count": len(entries),
                "providers": [p.value for p in self._providers],
            },
        )

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[AiModel]:
        return iter(self._models)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index

    def all_models(self) -> Tuple[AiModel, ...]:
        return self._models

    def get_models_for_provider(self, provider: ModelProvider) -> Tuple[AiModel, ...]:
        """Models served by ``provider``, in registry order."""
        return tuple(model for model in self._models if model.provider == provider)

    def get_providers(self) -> Tuple[ModelProvider, ...]:
        """Distinct providers present in the registry, in first-seen order."""
        return self._providers

    def from_identifier(self, identifier: str) -> AiModel:
        """Return the model whose identifier matches exactly.

        Matching is case-sensitive with no normalization; an unknown
        identifier raises ModelNotFoundError instead of picking a default.
        """
        try:
            return self._index[identifier]
        except KeyError:
            raise ModelNotFoundError(identifier) from None

    def default_model(self) -> AiModel:
        """The model used when nothing has been configured yet."""
        if not self._models:
            raise ConfigurationError("registry is empty")
        return self._models[0]


@lru_cache(maxsize=1)
def default_registry() -> ModelRegistry:
    """Registry over AVAILABLE_MODELS, built once per process."""
    return ModelRegistry(AVAILABLE_MODELS)
