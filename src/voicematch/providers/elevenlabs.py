"""ElevenLabs voice design provider implementation."""

import asyncio
import base64
import binascii
import logging
import os
import re

from elevenlabs.client import ElevenLabs

from ..errors import ProviderAuthError, ProviderError
from ..generation.models import GeneratedCandidate
from ..tts.models import SynthesisSettings
from .base import VoiceDesignProvider
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_DESIGN_MODEL = "eleven_multilingual_ttv_v2"
DEFAULT_TTS_MODEL = "eleven_multilingual_v2"

_POLICY_MARKERS = ("policy", "safety", "moderation", "blocked", "terms of service", "prohibited")


def classify_error(e: Exception, context: str) -> ProviderError:
    """Map an SDK or transport exception to a classified ProviderError.

    The status code is read from the exception when the SDK provides one
    and otherwise parsed from its message.

    Args:
        e: Exception raised by the ElevenLabs client
        context: Prefix for the error message

    Returns:
        ProviderAuthError for authentication failures, otherwise a
        ProviderError whose kind is content_policy, quota, transient or unknown
    """
    text = f"{e} {getattr(e, 'body', '') or ''}".lower()
    status = getattr(e, "status_code", None)
    if not isinstance(status, int):
        found = re.search(r"\b([45]\d\d)\b", text)
        status = int(found.group(1)) if found else None

    if "quota" in text or "insufficient credits" in text:
        return ProviderError(f"Quota exhausted: {e}", "quota", status, e)
    if status == 401 or "unauthorized" in text:
        return ProviderAuthError(f"Authentication failed: {e}", e)
    if status == 429:
        return ProviderError(f"Rate limit exceeded: {e}", "transient", 429, e)
    if status is not None and status >= 500:
        return ProviderError(f"Server error: {e}", "transient", status, e)
    if status in (400, 403, 422) and any(m in text for m in _POLICY_MARKERS):
        return ProviderError(f"Content policy rejection: {e}", "content_policy", status, e)
    if (
        isinstance(e, TimeoutError | ConnectionError)
        or "timeout" in type(e).__name__.lower()
        or "timed out" in text
    ):
        return ProviderError(f"Request timed out: {e}", "transient", status, e)
    return ProviderError(f"{context}: {e}", "unknown", status, e)


class ElevenLabsVoiceDesigner(VoiceDesignProvider):
    """ElevenLabs voice design provider.

    Designs preview voices from a text description and renders speech with
    existing voices. Every request goes through the retry policy.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_id: str = DEFAULT_DESIGN_MODEL,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize ElevenLabs provider.

        Args:
            api_key: ElevenLabs API key. If not provided, reads from
                    ELEVENLABS_API_KEY environment variable.
            model_id: Voice design model ID
            retry_policy: Retry policy for transient failures

        Raises:
            ProviderAuthError: If API key is not provided or invalid.
        """
        self._api_key = api_key or os.getenv("ELEVENLABS_API_KEY")
        if not self._api_key:
            raise ProviderAuthError(
                "ElevenLabs API key not found. Set ELEVENLABS_API_KEY environment "
                "variable or provide api_key parameter."
            )

        try:
            self._client = ElevenLabs(api_key=self._api_key)
        except Exception as e:
            raise ProviderAuthError(
                f"Failed to initialize ElevenLabs client: {e}", e
            ) from e

        self.model_id = model_id
        self.retry_policy = retry_policy or RetryPolicy()

    @property
    def retry_attempt_count(self) -> int:
        """Number of retries performed by this client."""
        return self.retry_policy.retry_attempt_count

    async def create_previews(
        self,
        voice_description: str,
        sample_text: str,
        count: int = 3,
        language: str | None = None,
    ) -> list[GeneratedCandidate]:
        """Design preview voices from a description.

        Args:
            voice_description: Description of the voice to design
            sample_text: Text spoken in each preview
            count: Maximum number of previews to return
            language: Target language code. Not sent to the API, which has
                no language field. The caller selects sample_text in this
                language and the multilingual model speaks it.

        Returns:
            Candidates in provider order; previews without decodable audio
            are returned with failure_reason "missing_audio"

        Raises:
            ProviderError: If the request fails after retries
            ValueError: If the description is empty
        """
        if not voice_description or not voice_description.strip():
            raise ValueError("Voice description cannot be empty")

        def _sync_design():
            return self._client.text_to_voice.design(
                voice_description=voice_description,
                model_id=self.model_id,
                text=sample_text,
            )

        async def _attempt():
            try:
                # Run synchronous ElevenLabs client in thread to avoid blocking event loop
                return await asyncio.to_thread(_sync_design)
            except Exception as e:
                raise classify_error(e, "Voice design failed") from e

        logger.debug(
            f"Requesting {count} previews (model={self.model_id}, language={language})"
        )
        response = await self.retry_policy.run(_attempt)

        candidates = []
        for index, preview in enumerate((response.previews or [])[:count], start=1):
            voice_id = getattr(preview, "generated_voice_id", None) or f"preview-{index}"
            audio = _decode_audio(getattr(preview, "audio_base_64", None))
            candidates.append(
                GeneratedCandidate(
                    id=voice_id,
                    audio=audio,
                    description=voice_description,
                    media_type=getattr(preview, "media_type", None) or "audio/mpeg",
                    failure_reason=None if audio else "missing_audio",
                )
            )
        return candidates

    async def synthesize(
        self,
        text: str,
        voice_id: str,
        settings: SynthesisSettings | None = None,
        model_id: str = DEFAULT_TTS_MODEL,
    ) -> bytes:
        """Render speech with an existing voice.

        Args:
            text: Text to convert to speech
            voice_id: Provider voice ID to use for synthesis
            settings: Stability and expressiveness from the settings optimizer
            model_id: ElevenLabs text-to-speech model ID

        Returns:
            Audio data as bytes (MP3 format)

        Raises:
            ProviderError: If the request fails after retries
            ValueError: If text or voice_id is empty
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")
        if not voice_id:
            raise ValueError("Voice ID cannot be empty")

        settings = settings or SynthesisSettings()

        def _sync_convert() -> bytes:
            audio_generator = self._client.text_to_speech.convert(
                text=text.strip(),
                voice_id=voice_id,
                model_id=model_id,
                voice_settings=settings.to_provider_dict(),
            )
            # Collect all audio chunks
            return b"".join(audio_generator)

        async def _attempt() -> bytes:
            try:
                return await asyncio.to_thread(_sync_convert)
            except Exception as e:
                raise classify_error(e, "Speech synthesis failed") from e

        audio_bytes = await self.retry_policy.run(_attempt)
        if not audio_bytes:
            raise ProviderError("No audio data received from API", "unknown")
        return audio_bytes


def _decode_audio(encoded: str | None) -> bytes | None:
    if not encoded:
        return None
    try:
        return base64.b64decode(encoded, validate=True) or None
    except (binascii.Error, ValueError):
        logger.debug("Discarding preview with undecodable audio payload")
        return None
