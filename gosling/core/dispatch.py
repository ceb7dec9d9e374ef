"""Resolve a model identifier into the request shape for its provider."""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from gosling.core.config import ModelProvider
from gosling.core.errors import MissingProviderHandlerError
from gosling.core.models import AiModel, ModelRegistry, default_registry
from gosling.core.providers import PROVIDER_HANDLERS, ProviderHandler, RequestShape
from gosling.utils.log import get_logger

logger = get_logger()


class ModelDispatcher:
    """Lookup surface over a registry and a provider-to-handler table.

    The handler table must cover every provider in the registry; a gap is a
    build defect and raises MissingProviderHandlerError at construction.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        handlers: Optional[Mapping[ModelProvider, ProviderHandler]] = None,
    ) -> None:
        table = dict(PROVIDER_HANDLERS if handlers is None else handlers)
        missing = [provider for provider in registry.get_providers() if provider not in table]
        if missing:
            logger.error(
                "[dispatch] Registry provider has no request handler",
                extra={"providers": [p.value for p in missing]},
            )
            raise MissingProviderHandlerError(missing)

        self.registry = registry
        self._handlers: Mapping[ModelProvider, ProviderHandler] = MappingProxyType(table)

    def all_models(self) -> Tuple[AiModel, ...]:
        return self.registry.all_models()

    def get_models_for_provider(self, provider: ModelProvider) -> Tuple[AiModel, ...]:
        return self.registry.get_models_for_provider(provider)

    def get_providers(self) -> Tuple[ModelProvider, ...]:
        return self.registry.get_providers()

    def resolve(self, identifier: str) -> AiModel:
        return self.registry.from_identifier(identifier)

    def handler_for(self, provider: ModelProvider) -> ProviderHandler:
        try:
            return self._handlers[provider]
        except KeyError:
            raise MissingProviderHandlerError([provider]) from None

    def handler_for_model(self, identifier: str) -> ProviderHandler:
        return self.handler_for(self.resolve(identifier).provider)

    def build_request(self, identifier: str, api_key: str) -> RequestShape:
        """Build URL and headers for ``identifier``.

        Raises ModelNotFoundError when the identifier is not in the registry.
        """
        model = self.resolve(identifier)
        shape = self.handler_for(model.provider).build_request_shape(model.identifier, api_key)
        logger.debug(
            "[dispatch] Built request shape",
            extra={
                "model": model.identifier,
                "provider": model.provider.value,
                "url": shape.redacted_url(),
            },
        )
        return shape


@lru_cache(maxsize=1)
def get_dispatcher() -> ModelDispatcher:
    """Dispatcher over the default registry and handlers."""
    return ModelDispatcher(default_registry())
