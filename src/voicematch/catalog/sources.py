"""Catalog sources that supply the voice roster.

A source lists every voice and fetches one by id. Sources are read once by
the CatalogRepository and only re-read on an explicit reload.
"""

import asyncio
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from elevenlabs.client import ElevenLabs

from ..description.rules import (
    ACCENT_RULES,
    AGE_RULES,
    CHARACTER_RULES,
    TAG_RULES,
    TONE_RULES,
    Matched,
    all_matches,
    first_match,
)
from ..errors import ProviderAuthError
from ..providers.elevenlabs import classify_error
from .models import CatalogVoice

logger = logging.getLogger(__name__)


class CatalogSource(ABC):
    """Abstract base class for catalog rosters."""

    @abstractmethod
    async def list_voices(self) -> list[CatalogVoice]:
        """Return every voice in the roster, in roster order."""
        pass

    @abstractmethod
    async def get_voice(self, voice_id: str) -> CatalogVoice | None:
        """Return the voice with the given id, or None if absent."""
        pass


class InMemoryCatalogSource(CatalogSource):
    """Catalog source backed by a fixed list of voices."""

    def __init__(self, voices: list[CatalogVoice]) -> None:
        self._voices = list(voices)

    async def list_voices(self) -> list[CatalogVoice]:
        return list(self._voices)

    async def get_voice(self, voice_id: str) -> CatalogVoice | None:
        return next((v for v in self._voices if v.id == voice_id), None)


class FileCatalogSource(CatalogSource):
    """Catalog source reading a JSON roster file.

    The file holds a list of entries with keys id, name, gender, accent,
    ageGroup, tags, tone, qualityTier, providerRef and description.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> list[CatalogVoice]:
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid catalog roster {self.path}: {e}") from e
        if not isinstance(data, list):
            raise ValueError(f"Catalog roster {self.path} must contain a JSON list")
        return [CatalogVoice.from_dict(entry) for entry in data]

    async def list_voices(self) -> list[CatalogVoice]:
        voices = await asyncio.to_thread(self._read)
        logger.debug(f"Read {len(voices)} voices from {self.path}")
        return voices

    async def get_voice(self, voice_id: str) -> CatalogVoice | None:
        voices = await self.list_voices()
        return next((v for v in voices if v.id == voice_id), None)


def _normalize_accent(label: str) -> str | None:
    """Map a provider accent label onto the parser's accent vocabulary."""
    label = label.strip()
    if not label:
        return None
    outcome = first_match(ACCENT_RULES, label)
    if isinstance(outcome, Matched):
        return outcome.value
    return " ".join(word.capitalize() for word in label.split())


def _normalize_age(label: str, text: str) -> str:
    label = label.lower()
    if "young" in label:
        return "young"
    if "middle" in label:
        return "middle-aged"
    if "old" in label or "elder" in label:
        return "older"
    outcome = first_match(AGE_RULES, text)
    return outcome.value if isinstance(outcome, Matched) else "unspecified"


def voice_from_labels(
    voice_id: str,
    name: str,
    labels: dict | None,
    description: str | None = None,
) -> CatalogVoice:
    """Build a CatalogVoice from provider labels and descriptive text.

    Gender, accent and age come from labels when present. Tone, timbre tags
    and character archetype are extracted from the name and description
    with the same rule tables the description parser uses, so catalog
    vocabulary lines up with parsed requests.
    """
    labels = labels or {}
    text = " ".join(filter(None, [name, description, labels.get("description")]))

    gender = (labels.get("gender") or "").lower()
    if gender not in ("male", "female", "neutral"):
        gender = "unspecified"

    tags = set(all_matches(TAG_RULES, text))
    character = first_match(CHARACTER_RULES, text)
    if isinstance(character, Matched):
        tags.add(character.value)

    return CatalogVoice(
        id=voice_id,
        name=name,
        gender=gender,
        accent=_normalize_accent(labels.get("accent") or ""),
        age_group=_normalize_age(labels.get("age") or "", text),
        tags=frozenset(tags),
        tone=frozenset(all_matches(TONE_RULES, text)),
        quality_tier="high",
        provider_ref=voice_id,
        description=description or labels.get("description"),
    )


class ElevenLabsCatalogSource(CatalogSource):
    """Catalog source listing the voices available to an ElevenLabs account."""

    def __init__(self, api_key: str | None = None) -> None:
        """Initialize the ElevenLabs catalog source.

        Args:
            api_key: ElevenLabs API key. If not provided, reads from
                    ELEVENLABS_API_KEY environment variable.

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

    async def list_voices(self) -> list[CatalogVoice]:
        """Fetch and map all account voices.

        Raises:
            ProviderError: If the API call fails
        """

        def _sync_get_voices() -> list[CatalogVoice]:
            response = self._client.voices.get_all()
            return [
                voice_from_labels(
                    voice.voice_id,
                    voice.name,
                    voice.labels,
                    getattr(voice, "description", None),
                )
                for voice in response.voices
            ]

        try:
            voices = await asyncio.to_thread(_sync_get_voices)
        except Exception as e:
            raise classify_error(e, "Failed to list voices") from e

        logger.debug(f"Loaded {len(voices)} voices from ElevenLabs")
        return voices

    async def get_voice(self, voice_id: str) -> CatalogVoice | None:
        voices = await self.list_voices()
        return next((v for v in voices if v.id == voice_id), None)
