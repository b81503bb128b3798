"""Abstract base class for voice design providers.

This module defines the single operation the generation orchestrator
relies on. Providers own all transport concerns, including retries.
"""

from abc import ABC, abstractmethod

from ..generation.models import GeneratedCandidate
from ..tts.models import SynthesisSettings


class VoiceDesignProvider(ABC):
    """Abstract base class for descriptive-text-to-voice providers.

    Each returned candidate either carries an audio payload or names a
    failure reason ("content_policy", "quota", "transient",
    "missing_audio"). Request-level failures raise ProviderError.
    """

    @abstractmethod
    async def create_previews(
        self,
        voice_description: str,
        sample_text: str,
        count: int = 3,
        language: str | None = None,
    ) -> list[GeneratedCandidate]:
        """Generate up to count preview voices.

        Args:
            voice_description: Description of the voice to design
            sample_text: Text spoken in each preview
            count: Maximum number of previews wanted
            language: Target language code, if any

        Returns:
            Preview candidates, possibly fewer than count

        Raises:
            ProviderError: If the request as a whole fails
        """
        pass

    async def synthesize(
        self,
        text: str,
        voice_id: str,
        settings: SynthesisSettings | None = None,
    ) -> bytes:
        """Render speech with an existing voice.

        Providers that only design voices leave this unimplemented.

        Raises:
            NotImplementedError: If the provider cannot render speech
        """
        raise NotImplementedError(f"{type(self).__name__} does not render speech")
