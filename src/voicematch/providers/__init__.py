"""Provider abstraction for voice design services.

This module provides a registry pattern for managing voice design
providers, allowing runtime selection by configured name.
"""

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .base import VoiceDesignProvider

from .elevenlabs import ElevenLabsVoiceDesigner

__all__ = ["ProviderRegistry"]


class ProviderRegistry:
    """Registry for managing voice design providers."""

    _providers: ClassVar[dict[str, type["VoiceDesignProvider"]]] = {}

    @classmethod
    def register(cls, name: str, provider_class: type["VoiceDesignProvider"]) -> None:
        """Register a voice design provider.

        Args:
            name: Name to register the provider under
            provider_class: Provider class that implements VoiceDesignProvider
        """
        cls._providers[name] = provider_class

    @classmethod
    def get(cls, name: str) -> type["VoiceDesignProvider"]:
        """Get a provider class by name.

        Args:
            name: Name of the provider to retrieve

        Returns:
            Provider class

        Raises:
            KeyError: If provider name not found
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys()) if cls._providers else "none"
            raise KeyError(
                f"Provider '{name}' not found. Available providers: {available}"
            )
        return cls._providers[name]

    @classmethod
    def available(cls) -> list[str]:
        """Names of all registered providers."""
        return sorted(cls._providers)


# Register providers
ProviderRegistry.register("elevenlabs", ElevenLabsVoiceDesigner)
