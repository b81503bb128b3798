"""Result cache manager for generated voice candidates.

Wraps a CacheStore so that identical descriptions in the same language
reuse the top-ranked generated candidate instead of calling the voice
design provider again. The cache is an optimisation: a failing store
degrades to a miss on read and to a logged warning on write.
"""

import asyncio
import logging
from datetime import datetime

from ..description.models import VoiceDescription
from ..ranking.scorer import ScoredCandidate
from .models import CacheEntry, CacheStore

logger = logging.getLogger(__name__)


class ResultCache:
    """Content-addressed cache of generated candidates.

    Keys are VoiceDescription.content_hash, so the key is computed once
    per request and never by this class.

    Example:
        cache = ResultCache(MemoryCacheStore())

        candidate = await cache.get(description)
        if candidate is None:
            candidate = ...  # generate and rank
            await cache.set(description, candidate)
    """

    def __init__(self, store: CacheStore):
        """Initialize result cache over a store.

        Args:
            store: Backend holding cache entries
        """
        self.store = store

    async def get(self, description: VoiceDescription) -> ScoredCandidate | None:
        """Look up the cached candidate for a description.

        Args:
            description: Validated request description

        Returns:
            Cached candidate, or None on a miss or a store failure
        """
        try:
            entry = await asyncio.to_thread(self.store.get, description.content_hash)
        except Exception as e:
            logger.warning(f"Cache read failed, treating as miss: {e}")
            return None

        if entry is None:
            logger.debug(f"Cache miss for {description.content_hash[:12]}")
            return None

        logger.debug(
            f"Cache hit for {description.content_hash[:12]} "
            f"(stored {entry.created_at.isoformat(timespec='seconds')})"
        )
        return entry.candidate

    async def set(self, description: VoiceDescription, candidate: ScoredCandidate) -> bool:
        """Store the top candidate for a description.

        Args:
            description: Validated request description
            candidate: Top-ranked candidate to reuse for this description

        Returns:
            True if the entry was written, False if the store failed
        """
        entry = CacheEntry(
            content_hash=description.content_hash,
            candidate=candidate,
            created_at=datetime.now(),
        )
        try:
            await asyncio.to_thread(self.store.set, entry)
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")
            return False

        logger.debug(f"Cached {candidate.id} under {description.content_hash[:12]}")
        return True
