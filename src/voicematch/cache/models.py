"""Data models for cache storage."""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime

from ..ranking.scorer import ScoredCandidate


@dataclass
class CacheEntry:
    """Cache entry holding the top-ranked candidate for a description.

    Attributes:
        content_hash: Hash of the normalized description and language
        candidate: Top-ranked candidate from a generation fallback
        created_at: When this entry was written
    """

    content_hash: str
    candidate: ScoredCandidate
    created_at: datetime


class CacheStore(ABC):
    """Key-value store for cache entries, keyed by content hash."""

    @abstractmethod
    def get(self, content_hash: str) -> CacheEntry | None:
        """Return the live entry for a hash, or None."""
        pass

    @abstractmethod
    def set(self, entry: CacheEntry) -> None:
        """Store an entry, replacing any existing entry for the same hash."""
        pass


def candidate_to_dict(candidate: ScoredCandidate) -> dict:
    """Serialize a candidate's metadata. The audio payload is stored separately."""
    data = asdict(candidate)
    data.pop("audio")
    data["tags"] = list(candidate.tags)
    return data


def candidate_from_dict(data: dict, audio: bytes | None = None) -> ScoredCandidate:
    """Rebuild a candidate from serialized metadata and its audio payload."""
    fields = dict(data)
    fields["tags"] = tuple(fields.get("tags", ()))
    return ScoredCandidate(**fields, audio=audio)
