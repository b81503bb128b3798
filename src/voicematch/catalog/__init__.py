"""Voice catalog: roster sources, lazy repository and weighted matcher."""

from .matcher import MIN_CONFIDENCE, TOP_K, CatalogMatcher, MatchResult, MatchWeights
from .models import CatalogVoice
from .repository import CatalogRepository
from .sources import (
    CatalogSource,
    ElevenLabsCatalogSource,
    FileCatalogSource,
    InMemoryCatalogSource,
)

__all__ = [
    "MIN_CONFIDENCE",
    "TOP_K",
    "CatalogMatcher",
    "CatalogRepository",
    "CatalogSource",
    "CatalogVoice",
    "ElevenLabsCatalogSource",
    "FileCatalogSource",
    "InMemoryCatalogSource",
    "MatchResult",
    "MatchWeights",
]
