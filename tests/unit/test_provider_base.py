"""Unit tests for VoiceDesignProvider abstract base class."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from voicematch.generation.models import GeneratedCandidate
from voicematch.providers.base import VoiceDesignProvider


class DesignOnlyProvider(VoiceDesignProvider):
    """Provider implementing only the required operation."""

    async def create_previews(
        self,
        voice_description: str,
        sample_text: str,
        count: int = 3,
        language: str | None = None,
    ) -> list[GeneratedCandidate]:
        return [GeneratedCandidate(id="p1", audio=b"audio", description=voice_description)]


class TestVoiceDesignProviderAbstractClass:
    """Test VoiceDesignProvider abstract base class behavior."""

    def test_cannot_instantiate_abstract_class(self) -> None:
        """Test that VoiceDesignProvider cannot be instantiated directly."""
        with pytest.raises(TypeError) as exc_info:
            VoiceDesignProvider()

        error_msg = str(exc_info.value)
        assert "abstract" in error_msg.lower()
        assert "create_previews" in error_msg

    def test_only_create_previews_is_abstract(self) -> None:
        """Test that rendering is optional for providers."""
        assert VoiceDesignProvider.__abstractmethods__ == frozenset({"create_previews"})

    @pytest.mark.asyncio
    async def test_complete_implementation_works(self) -> None:
        """Test that implementing create_previews allows instantiation."""
        previews = await DesignOnlyProvider().create_previews("a calm narrator", "Hello")

        assert previews[0].usable
        assert previews[0].description == "a calm narrator"

    @pytest.mark.asyncio
    async def test_synthesize_defaults_to_not_implemented(self) -> None:
        """Test the default for design-only providers."""
        with pytest.raises(NotImplementedError, match="DesignOnlyProvider"):
            await DesignOnlyProvider().synthesize("Hello", "voice")
