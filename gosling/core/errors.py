"""Typed failures raised by the model registry and dispatch layer."""

from __future__ import annotations

from typing import Iterable, Tuple


class GoslingError(Exception):
    """Base error with a stable error code."""

    def __init__(self, error_code: str, message: str) -> None:
        super().__init__(message)
        self.error_code = error_code


class ModelNotFoundError(GoslingError, LookupError):
    """No registry entry matches the requested identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__("model_not_found", f"Model not found: {identifier!r}")
        self.identifier = identifier


class ConfigurationError(GoslingError):
    """The registry and handler table disagree. Not recoverable at run time."""

    def __init__(self, message: str) -> None:
        super().__init__("configuration_error", message)


class DuplicateModelError(ConfigurationError):
    """Two registry entries share an identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Duplicate model identifier in registry: {identifier!r}")
        self.identifier = identifier


class MissingProviderHandlerError(ConfigurationError):
    """A provider has models but no request handler."""

    def __init__(self, providers: Iterable[object]) -> None:
        self.providers: Tuple[object, ...] = tuple(providers)
        names = ", ".join(str(getattr(p, "value", p)) for p in self.providers)
        super().__init__(f"No request handler registered for provider(s): {names}")
