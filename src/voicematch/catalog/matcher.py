"""Weighted catalog matching with a confidence gate.

Every catalog voice is scored against the parsed attributes. Known
conflicts in gender, accent or age subtract a penalty. If even the
best voice scores below the confidence threshold, the matcher returns no
results, which tells the caller to fall back to generation.
"""

import logging
import re
from dataclasses import dataclass, field, fields, replace

from ..description.models import UNSPECIFIED, AttributeSet
from .models import CatalogVoice
from .repository import CatalogRepository

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 50.0
TOP_K = 10

# Accents that are close enough to substitute for each other
REGIONAL_ACCENT_GROUPS: dict[str, set[str]] = {
    "eastern european": {
        "russian", "ukrainian", "polish", "czech", "hungarian",
        "romanian", "bulgarian", "serbian", "croatian",
    },
    "british isles": {
        "british", "english", "irish", "scottish", "welsh", "cockney",
        "yorkshire", "liverpool", "manchester",
    },
    "latin american": {
        "latin american", "spanish", "mexican", "mexican-american",
        "argentinian", "colombian",
    },
    "north american": {
        "american", "canadian", "northern american", "southern american",
        "texan", "californian", "new york", "boston",
    },
    "african": {"african", "nigerian", "south african", "african-american"},
    "scandinavian": {"swedish", "norwegian", "danish"},
    "east asian": {"chinese", "japanese", "korean"},
    "south asian": {"indian", "pakistani", "bangladeshi", "sri lankan", "indian-american"},
    "middle eastern": {"arabic", "middle eastern"},
}

# Pairs that share words or regions but must never be treated as compatible
ACCENT_EXCLUSIONS: dict[str, set[str]] = {
    "south african": {"southern american", "southern", "american"},
    "southern american": {"south african", "african", "nigerian"},
    "southern": {"south african", "african", "nigerian", "african-american"},
    "latin american": {"american", "northern american", "southern american"},
    "russian": {"british", "irish", "scottish", "welsh", "english"},
    "ukrainian": {"british", "irish", "scottish", "welsh", "english"},
}

ACCENT_ALIASES = {
    "us southern": "southern american",
    "us-southern": "southern american",
    "uk": "british",
    "us": "american",
    "latino": "latin american",
    "latina": "latin american",
}

STOPWORDS = {
    "the", "and", "with", "for", "voice", "accent", "tone", "sounding",
    "sounds", "like", "who", "that", "has", "very", "speaking", "speaks",
}


@dataclass(frozen=True)
class MatchWeights:
    """Named scoring weights for catalog matching.

    Attributes:
        gender: Exact gender match
        accent: Exact accent match
        accent_regional: Accent from the same regional group
        age: Age group match
        character: Requested archetype present in the voice's tags
        character_description: Archetype only mentioned in the voice's description
        tag: Each overlapping timbre tag, up to max_tag_matches
        tone: Each overlapping tone tag, up to max_tag_matches
        name_bonus: Description keyword in the voice name, applied only
            when no exact criterion matched
        max_score: Upper clamp for a voice's total
        gender_mismatch: Subtracted when the voice has the opposite gender.
            Neutral voices are never penalized.
        accent_mismatch: Subtracted when an accent was requested and the
            voice's accent is neither exact nor regional, or missing
        age_mismatch: Subtracted when both age groups are known and differ
    """

    gender: float = 30.0
    accent: float = 30.0
    accent_regional: float = 15.0
    age: float = 20.0
    character: float = 40.0
    character_description: float = 25.0
    tag: float = 8.0
    tone: float = 6.0
    max_tag_matches: int = 3
    name_bonus: float = 5.0
    max_score: float = 100.0
    gender_mismatch: float = 100.0
    accent_mismatch: float = 30.0
    age_mismatch: float = 20.0

    def __post_init__(self) -> None:
        """Validate weights.

        The name bonus is withdrawn once an exact criterion matches, so it
        must not exceed any exact weight or a correct signal could lower a
        score.
        """
        if isinstance(self.max_tag_matches, bool) or not isinstance(self.max_tag_matches, int):
            raise ValueError(
                f"max_tag_matches must be an integer, got {self.max_tag_matches!r}"
            )
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{f.name} must be a number, got {value!r}")
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative")
        exact = min(self.gender, self.accent, self.age, self.character)
        if self.name_bonus > exact:
            raise ValueError(
                f"name_bonus ({self.name_bonus}) must not exceed the smallest "
                f"exact-match weight ({exact})"
            )
        if self.accent_regional > self.accent:
            raise ValueError("accent_regional must not exceed accent")
        if self.max_score <= 0:
            raise ValueError("max_score must be positive")


@dataclass(frozen=True)
class MatchBreakdown:
    """Which criteria contributed to a voice's score."""

    gender: bool = False
    accent: str | None = None
    age: bool = False
    character: str | None = None
    tags: tuple[str, ...] = ()
    tones: tuple[str, ...] = ()
    name: bool = False
    mismatches: tuple[str, ...] = ()

    @property
    def exact(self) -> bool:
        return (
            self.gender
            or self.accent == "exact"
            or self.age
            or self.character == "tag"
        )

    def to_dict(self) -> dict:
        return {
            "gender": self.gender,
            "accent": self.accent,
            "age": self.age,
            "character": self.character,
            "tags": list(self.tags),
            "tones": list(self.tones),
            "name": self.name,
            "mismatches": list(self.mismatches),
        }


@dataclass(frozen=True)
class MatchResult:
    """A scored catalog voice."""

    voice: CatalogVoice
    score: float
    breakdown: MatchBreakdown = field(default_factory=MatchBreakdown)


def normalize_accent(accent: str) -> str:
    key = accent.strip().lower()
    return ACCENT_ALIASES.get(key, key)


def accents_excluded(first: str, second: str) -> bool:
    return second in ACCENT_EXCLUSIONS.get(first, set()) or first in ACCENT_EXCLUSIONS.get(
        second, set()
    )


def accent_match(requested: str, offered: str | None) -> str | None:
    """Compare accents.

    Returns:
        "exact", "regional" or None
    """
    if not offered:
        return None
    wanted = normalize_accent(requested)
    have = normalize_accent(offered)
    if wanted == have:
        return "exact"
    if accents_excluded(wanted, have):
        return None

    # "Indian" is satisfied regionally by "Indian-American"
    wanted_words = set(re.split(r"[- ]+", wanted))
    have_words = set(re.split(r"[- ]+", have))
    if wanted_words <= have_words or have_words <= wanted_words:
        return "regional"

    for group in REGIONAL_ACCENT_GROUPS.values():
        if wanted in group and have in group:
            return "regional"
    return None


def description_keywords(text: str) -> set[str]:
    """Extract name-matchable keywords from raw description text."""
    words = re.findall(r"[a-z]+", text.lower())
    return {w for w in words if len(w) >= 3 and w not in STOPWORDS}


class CatalogMatcher:
    """Scores catalog voices against parsed attributes.

    Args:
        repository: Catalog repository, loaded on first use
        weights: Scoring weights
        min_confidence: Best score required to trust the catalog
        top_k: Maximum number of results returned
    """

    def __init__(
        self,
        repository: CatalogRepository,
        weights: MatchWeights | None = None,
        min_confidence: float = MIN_CONFIDENCE,
        top_k: int = TOP_K,
    ) -> None:
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        self.repository = repository
        self.weights = weights or MatchWeights()
        self.min_confidence = min_confidence
        self.top_k = top_k

    def score_voice(
        self, voice: CatalogVoice, attributes: AttributeSet, keywords: set[str]
    ) -> MatchResult:
        """Score a single voice. Pure with respect to its inputs."""
        w = self.weights
        score = 0.0
        mismatches: list[str] = []

        gender = attributes.gender != UNSPECIFIED and voice.gender == attributes.gender
        if gender:
            score += w.gender
        elif attributes.gender != UNSPECIFIED and voice.gender not in (UNSPECIFIED, "neutral"):
            score -= w.gender_mismatch
            mismatches.append("gender")

        accent = accent_match(attributes.accent, voice.accent) if attributes.accent else None
        if accent == "exact":
            score += w.accent
        elif accent == "regional":
            score += w.accent_regional
        elif attributes.accent:
            score -= w.accent_mismatch
            mismatches.append("accent")

        age = attributes.age_group != UNSPECIFIED and voice.age_group == attributes.age_group
        if age:
            score += w.age
        elif attributes.age_group != UNSPECIFIED and voice.age_group != UNSPECIFIED:
            score -= w.age_mismatch
            mismatches.append("age")

        character = None
        if attributes.character:
            if attributes.character in voice.tags:
                character = "tag"
                score += w.character
            elif voice.description and re.search(
                rf"\b{re.escape(attributes.character)}\b", voice.description, re.IGNORECASE
            ):
                character = "description"
                score += w.character_description

        tags = tuple(sorted(attributes.tags & voice.tags))[: w.max_tag_matches]
        tones = tuple(sorted(attributes.tones & voice.tone))[: w.max_tag_matches]
        score += w.tag * len(tags) + w.tone * len(tones)

        breakdown = MatchBreakdown(
            gender=gender,
            accent=accent,
            age=age,
            character=character,
            tags=tags,
            tones=tones,
            mismatches=tuple(mismatches),
        )

        if not breakdown.exact:
            name_words = set(re.findall(r"[a-z]+", voice.name.lower()))
            if keywords & name_words:
                score += w.name_bonus
                breakdown = replace(breakdown, name=True)

        return MatchResult(voice=voice, score=min(score, w.max_score), breakdown=breakdown)

    def rank(self, attributes: AttributeSet, raw_text: str) -> list[MatchResult]:
        """Score every loaded voice and return the top K, ungated.

        Voices left at or below zero after mismatch penalties are dropped.
        Ties keep high-tier voices first, then roster order.
        """
        keywords = description_keywords(raw_text)
        results = [
            self.score_voice(voice, attributes, keywords)
            for voice in self.repository.voices
        ]
        results = [r for r in results if r.score > 0]
        results.sort(
            key=lambda r: (-r.score, 0 if r.voice.quality_tier == "high" else 1)
        )
        return results[: self.top_k]

    async def match(self, attributes: AttributeSet, raw_text: str) -> list[MatchResult]:
        """Return confident catalog matches.

        Args:
            attributes: Parsed description attributes
            raw_text: Original description, used for the name bonus

        Returns:
            Up to top_k results sorted by score, or an empty list when the
            best score is below min_confidence
        """
        await self.repository.ensure_loaded()
        results = self.rank(attributes, raw_text)

        best = results[0].score if results else 0.0
        if best < self.min_confidence:
            logger.debug(
                f"Best catalog score {best} below {self.min_confidence}, no confident match"
            )
            return []

        logger.debug(f"Catalog matched {len(results)} voices, best score {best}")
        return results
