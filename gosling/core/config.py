"""Configuration management for Gosling.

This module defines the closed set of model providers and the settings store
that persists the chosen model and the per-provider API keys.
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

from pydantic import BaseModel, Field

from gosling.core.errors import ModelNotFoundError
from gosling.utils.log import get_logger

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from gosling.core.models import AiModel, ModelRegistry


logger = get_logger()


class ModelProvider(str, Enum):
    """Backend services a model can belong to."""

    OPENAI = "openai"
    GEMINI = "gemini"
    OPENROUTER = "openrouter"

    @classmethod
    def _missing_(cls, value: object) -> Optional["ModelProvider"]:
        """Accept enum names (``"OPENAI"``) as written by older settings files."""
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


def api_key_env_candidates(provider: ModelProvider) -> list[str]:
    """Environment variables to check for an API key for a provider."""
    if provider == ModelProvider.GEMINI:
        return ["GEMINI_API_KEY", "GOOGLE_API_KEY"]
    if provider == ModelProvider.OPENROUTER:
        return ["OPENROUTER_API_KEY"]
    return ["OPENAI_API_KEY"]


def default_settings_path() -> Path:
    override = os.getenv("GOSLING_CONFIG_PATH")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".gosling.json"


class GoslingSettings(BaseModel):
    """User settings stored in ~/.gosling.json"""

    # Unset means "use the registry default".
    llm_model: Optional[str] = None
    api_keys: Dict[ModelProvider, str] = Field(default_factory=dict)


class ConfigManager:
    """Loads, caches and saves the settings file."""

    def __init__(self, settings_path: Optional[Path] = None) -> None:
        self.settings_path = settings_path or default_settings_path()
        self._settings: Optional[GoslingSettings] = None

    def get_settings(self) -> GoslingSettings:
        """Load and return settings."""
        if self._settings is None:
            if self.settings_path.exists():
                try:
                    data = json.loads(self.settings_path.read_text(encoding="utf-8"))
                    self._settings = GoslingSettings(**data)
                    logger.debug(
                        "[config] Loaded settings",
                        extra={
                            "path": str(self.settings_path),
                            "llm_model": self._settings.llm_model,
                            "key_count": len(self._settings.api_keys),
                        },
                    )
                except (
                    json.JSONDecodeError,
                    OSError,
                    UnicodeDecodeError,
                    ValueError,
                    TypeError,
                ) as e:
                    logger.warning(
                        "Error loading settings: %s: %s",
                        type(e).__name__,
                        e,
                        extra={"path": str(self.settings_path)},
                    )
                    self._settings = GoslingSettings()
            else:
                self._settings = GoslingSettings()
                logger.debug(
                    "[config] Settings not found; using defaults",
                    extra={"path": str(self.settings_path)},
                )
        return self._settings

    def save_settings(self, settings: GoslingSettings) -> None:
        """Save settings. The cached copy changes only once the file is written."""
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        self.settings_path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        self._settings = settings
        logger.debug(
            "[config] Saved settings",
            extra={
                "path": str(self.settings_path),
                "llm_model": settings.llm_model,
                "providers_with_keys": sorted(p.value for p in settings.api_keys),
            },
        )

    def get_api_key(self, provider: ModelProvider) -> Optional[str]:
        """Get the API key for a provider, environment first."""
        for env_var in api_key_env_candidates(provider):
            value = os.environ.get(env_var)
            if value:
                return value

        stored = self.get_settings().api_keys.get(provider)
        return stored or None

    def set_api_key(self, provider: ModelProvider, value: str) -> GoslingSettings:
        settings = self.get_settings().model_copy(deep=True)
        if value:
            settings.api_keys[provider] = value
        else:
            settings.api_keys.pop(provider, None)
        self.save_settings(settings)
        return settings

    def set_llm_model(
        self, identifier: str, registry: Optional["ModelRegistry"] = None
    ) -> GoslingSettings:
        """Persist the chosen model; unknown identifiers raise ModelNotFoundError."""
        if registry is None:
            from gosling.core.models import default_registry

            registry = default_registry()
        registry.from_identifier(identifier)

        settings = self.get_settings().model_copy(deep=True)
        settings.llm_model = identifier
        self.save_settings(settings)
        return settings

    def resolve_llm_model(self, registry: Optional["ModelRegistry"] = None) -> "AiModel":
        """Return the configured model, falling back to the registry default.

        An identifier that is no longer in the registry (e.g. a model removed
        in a newer build) is reported and replaced by the default rather than
        failing startup.
        """
        if registry is None:
            from gosling.core.models import default_registry

            registry = default_registry()

        identifier = self.get_settings().llm_model
        if identifier is None:
            return registry.default_model()
        try:
            return registry.from_identifier(identifier)
        except ModelNotFoundError:
            fallback = registry.default_model()
            logger.warning(
                "[config] Configured model is unknown; using default",
                extra={"llm_model": identifier, "fallback": fallback.identifier},
            )
            return fallback


# Global instance
config_manager = ConfigManager()


def get_settings() -> GoslingSettings:
    """Get the current settings."""
    return config_manager.get_settings()


def save_settings(settings: GoslingSettings) -> None:
    """Save settings."""
    config_manager.save_settings(settings)


def get_api_key(provider: ModelProvider) -> Optional[str]:
    """Convenience wrapper to fetch the API key for a provider."""
    return config_manager.get_api_key(provider)


def set_api_key(provider: ModelProvider, value: str) -> GoslingSettings:
    """Store (or clear, when empty) the API key for a provider."""
    return config_manager.set_api_key(provider, value)


def set_llm_model(identifier: str, registry: Optional["ModelRegistry"] = None) -> GoslingSettings:
    """Persist the chosen model identifier."""
    return config_manager.set_llm_model(identifier, registry)


def resolve_llm_model(registry: Optional["ModelRegistry"] = None) -> "AiModel":
    """Configured model, or the registry default."""
    return config_manager.resolve_llm_model(registry)
