"""Quality scoring and ranking for catalog matches and generated previews.

Scores are heuristic. Generated previews are judged by payload size;
catalog voices are pre-vetted and start from a fixed high baseline, with
their coverage blended with the matcher score. Both kinds get the same
description-length adjustment and share one 0-100 scale.
"""

import logging
from dataclasses import dataclass, field

from ..catalog.matcher import MatchResult
from ..description.models import AttributeSet
from ..generation.models import GeneratedCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QualityWeights:
    """Named scoring weights for quality ranking.

    Attributes:
        baseline: Starting clarity and naturalness for generated previews
        size_bands: (minimum bytes, clarity bonus, naturalness bonus), largest first
        catalog_high: Clarity and naturalness for high-tier catalog voices
        catalog_standard: Clarity and naturalness for standard-tier catalog voices
        coverage_base: Coverage with no attribute specified
        coverage_per_attribute: Coverage added per specified attribute category
        length_bands: (min chars, max chars, bonus), best band first
        clarity_share: Weight of clarity in the overall score
        naturalness_share: Weight of naturalness in the overall score
        coverage_share: Weight of coverage in the overall score
    """

    baseline: float = 50.0
    size_bands: tuple[tuple[int, float, float], ...] = (
        (100_000, 30.0, 25.0),
        (50_000, 20.0, 15.0),
        (20_000, 10.0, 10.0),
    )
    catalog_high: float = 95.0
    catalog_standard: float = 85.0
    coverage_base: float = 40.0
    coverage_per_attribute: float = 12.0
    length_bands: tuple[tuple[int, int, float], ...] = (
        (50, 200, 10.0),
        (30, 300, 8.0),
        (20, 1000, 5.0),
    )
    clarity_share: float = 0.35
    naturalness_share: float = 0.35
    coverage_share: float = 0.3

    def __post_init__(self) -> None:
        total = self.clarity_share + self.naturalness_share + self.coverage_share
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"score shares must sum to 1.0, got {total}")


@dataclass(frozen=True)
class ScoredCandidate:
    """A ranked candidate of either kind, ready for the response.

    Args:
        id: Catalog voice id or generated voice id
        name: Display name
        source: "catalog" or "generated"
        gender: Voice gender (requested gender for generated voices)
        accent: Voice accent (requested accent for generated voices)
        age_group: Voice age group (requested age for generated voices)
        tags: Descriptive tags
        overall: Overall quality score, 0-100
        clarity: Clarity sub-score, 0-100
        naturalness: Naturalness sub-score, 0-100
        coverage: Attribute-coverage sub-score, 0-100
        audio: Preview payload, generated candidates only
        media_type: MIME type of the audio payload
        match_score: Catalog matcher score, catalog candidates only
        provider_ref: Provider voice reference for later rendering
    """

    id: str
    name: str
    source: str
    gender: str
    accent: str | None
    age_group: str
    tags: tuple[str, ...] = ()
    overall: float = 0.0
    clarity: float = 0.0
    naturalness: float = 0.0
    coverage: float = 0.0
    audio: bytes | None = field(default=None, repr=False)
    media_type: str | None = None
    match_score: float | None = None
    provider_ref: str | None = None


def _bounded(value: float) -> float:
    return round(max(0.0, min(100.0, value)), 2)


class QualityScorer:
    """Scores and ranks candidate voices.

    Args:
        weights: Quality scoring weights
    """

    def __init__(self, weights: QualityWeights | None = None) -> None:
        self.weights = weights or QualityWeights()

    def coverage(self, attributes: AttributeSet) -> float:
        w = self.weights
        return _bounded(w.coverage_base + w.coverage_per_attribute * attributes.specified_count)

    def length_bonus(self, text: str) -> float:
        length = len(text.strip())
        for low, high, bonus in self.weights.length_bands:
            if low <= length <= high:
                return bonus
        return 0.0

    def _overall(self, clarity: float, naturalness: float, coverage: float, text: str) -> float:
        w = self.weights
        combined = (
            clarity * w.clarity_share
            + naturalness * w.naturalness_share
            + coverage * w.coverage_share
        )
        return _bounded(combined + self.length_bonus(text))

    def score_match(
        self, result: MatchResult, attributes: AttributeSet, text: str
    ) -> ScoredCandidate:
        """Score a catalog match."""
        voice = result.voice
        w = self.weights
        baseline = w.catalog_high if voice.quality_tier == "high" else w.catalog_standard
        # A catalog voice covers the request as well as it matched it
        coverage = _bounded((self.coverage(attributes) + result.score) / 2)
        return ScoredCandidate(
            id=voice.id,
            name=voice.name,
            source="catalog",
            gender=voice.gender,
            accent=voice.accent,
            age_group=voice.age_group,
            tags=tuple(sorted(voice.tags | voice.tone)),
            overall=self._overall(baseline, baseline, coverage, text),
            clarity=baseline,
            naturalness=baseline,
            coverage=coverage,
            match_score=result.score,
            provider_ref=voice.provider_ref or voice.id,
        )

    def score_generated(
        self, candidate: GeneratedCandidate, attributes: AttributeSet, text: str
    ) -> ScoredCandidate:
        """Score a generated preview from its payload size."""
        w = self.weights
        clarity = naturalness = w.baseline
        size = len(candidate.audio or b"")
        for minimum, clarity_bonus, naturalness_bonus in w.size_bands:
            if size > minimum:
                clarity += clarity_bonus
                naturalness += naturalness_bonus
                break
        clarity, naturalness = _bounded(clarity), _bounded(naturalness)
        coverage = self.coverage(attributes)
        return ScoredCandidate(
            id=candidate.id,
            name=candidate.name or candidate.id,
            source="generated",
            gender=attributes.gender,
            accent=attributes.accent,
            age_group=attributes.age_group,
            tags=tuple(sorted(attributes.tags | attributes.tones)),
            overall=self._overall(clarity, naturalness, coverage, text),
            clarity=clarity,
            naturalness=naturalness,
            coverage=coverage,
            audio=candidate.audio,
            media_type=candidate.media_type,
            provider_ref=candidate.id,
        )

    @staticmethod
    def rank(candidates: list[ScoredCandidate]) -> list[ScoredCandidate]:
        """Sort by overall score, descending.

        The sort is stable: equal scores keep their incoming order.
        """
        return sorted(candidates, key=lambda c: c.overall, reverse=True)
