"""Lazily loaded, read-mostly catalog repository."""

import asyncio
import logging

from .models import CatalogVoice
from .sources import CatalogSource

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Holds the catalog roster for the process lifetime.

    The roster is read from its source on the first ensure_loaded() call.
    Later calls return immediately; concurrent first calls are serialized
    so the source is read exactly once. reload() re-reads the source.

    Example:
        repository = CatalogRepository(FileCatalogSource("voices.json"))
        await repository.ensure_loaded()
        voice = repository.get("rachel")
    """

    def __init__(self, source: CatalogSource) -> None:
        self.source = source
        self._voices: list[CatalogVoice] | None = None
        self._by_id: dict[str, CatalogVoice] = {}
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._voices is not None

    @property
    def voices(self) -> list[CatalogVoice]:
        """Loaded voices in roster order.

        Raises:
            RuntimeError: If ensure_loaded() has not completed
        """
        if self._voices is None:
            raise RuntimeError("Catalog not loaded. Call ensure_loaded() first.")
        return self._voices

    async def ensure_loaded(self) -> list[CatalogVoice]:
        """Load the roster if it has not been loaded yet.

        Returns:
            Loaded voices in roster order
        """
        if self._voices is not None:
            return self._voices

        async with self._lock:
            if self._voices is None:
                await self._load()
        return self._voices

    async def reload(self) -> list[CatalogVoice]:
        """Re-read the roster from the source, replacing the loaded voices."""
        async with self._lock:
            await self._load()
        return self._voices

    async def _load(self) -> None:
        voices = await self.source.list_voices()
        self._by_id = {voice.id: voice for voice in voices}
        self._voices = voices
        logger.debug(f"Catalog loaded with {len(voices)} voices")

    def get(self, voice_id: str) -> CatalogVoice | None:
        """Look up a loaded voice by id."""
        return self._by_id.get(voice_id)
