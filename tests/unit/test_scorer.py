"""Unit tests for quality scoring and ranking."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from voicematch.catalog.matcher import MatchResult
from voicematch.catalog.models import CatalogVoice
from voicematch.description.models import AttributeSet
from voicematch.generation.models import GeneratedCandidate
from voicematch.ranking.scorer import QualityScorer, QualityWeights, ScoredCandidate

TEXT = "young female with British accent, clear and professional tone"


def scored(id: str, overall: float) -> ScoredCandidate:
    return ScoredCandidate(
        id=id,
        name=id,
        source="generated",
        gender="unspecified",
        accent=None,
        age_group="unspecified",
        overall=overall,
    )


class TestQualityWeights:
    """Test weight validation."""

    def test_shares_must_sum_to_one(self) -> None:
        """Test that score shares are validated."""
        with pytest.raises(ValueError, match="sum to 1.0"):
            QualityWeights(clarity_share=0.5, naturalness_share=0.5, coverage_share=0.5)


class TestQualityScorer:
    """Test sub-scores and overall scores."""

    def setup_method(self) -> None:
        self.scorer = QualityScorer()

    def test_coverage_grows_with_specified_attributes(self) -> None:
        """Test the attribute-coverage bonus."""
        sparse = self.scorer.coverage(AttributeSet())
        rich = self.scorer.coverage(
            AttributeSet(gender="female", accent="British", age_group="young")
        )

        assert sparse == 40.0
        assert rich == 76.0

    @pytest.mark.parametrize(
        "length,bonus",
        [(10, 0.0), (25, 5.0), (40, 8.0), (100, 10.0), (250, 8.0), (600, 5.0)],
    )
    def test_length_bonus_bands(self, length: int, bonus: float) -> None:
        """Test the description-length sweet spot."""
        assert self.scorer.length_bonus("a" * length) == bonus

    def test_generated_score_follows_payload_size(self) -> None:
        """Test that larger previews score higher clarity and naturalness."""
        attributes = AttributeSet(gender="female")
        small = self.scorer.score_generated(
            GeneratedCandidate(id="s", audio=b"x" * 1000, description="d"), attributes, TEXT
        )
        large = self.scorer.score_generated(
            GeneratedCandidate(id="l", audio=b"x" * 150_000, description="d"), attributes, TEXT
        )

        assert small.clarity == 50.0
        assert large.clarity == 80.0
        assert large.naturalness == 75.0
        assert large.overall > small.overall
        assert large.source == "generated"
        assert large.gender == "female"
        assert large.audio is not None

    def test_catalog_score_uses_tier_baseline(self) -> None:
        """Test the fixed high baseline for pre-vetted catalog voices."""
        voice = CatalogVoice(id="v", name="V", gender="female", quality_tier="high")
        candidate = self.scorer.score_match(
            MatchResult(voice=voice, score=80.0), AttributeSet(gender="female"), TEXT
        )

        assert candidate.clarity == 95.0
        assert candidate.naturalness == 95.0
        assert candidate.match_score == 80.0
        assert candidate.audio is None
        assert candidate.provider_ref == "v"
        assert 0.0 <= candidate.overall <= 100.0

    def test_catalog_better_match_outranks_better_tier(self) -> None:
        """Test that a much stronger match is not overridden by quality tier."""
        attributes = AttributeSet(gender="female", accent="British")
        strong = self.scorer.score_match(
            MatchResult(CatalogVoice(id="a", name="A"), 100.0), attributes, TEXT
        )
        weak = self.scorer.score_match(
            MatchResult(CatalogVoice(id="b", name="B", quality_tier="high"), 40.0),
            attributes,
            TEXT,
        )

        assert self.scorer.rank([weak, strong])[0].id == "a"

    def test_overall_is_bounded(self) -> None:
        """Test the 0-100 scale."""
        candidate = self.scorer.score_generated(
            GeneratedCandidate(id="x", audio=b"x" * 200_000, description="d"),
            AttributeSet(
                gender="male",
                accent="Irish",
                age_group="older",
                tones=frozenset({"calm"}),
                character="pirate",
                tags=frozenset({"deep"}),
            ),
            TEXT,
        )

        assert 0.0 <= candidate.overall <= 100.0


class TestRanking:
    """Test deterministic ordering."""

    def test_sorts_descending(self) -> None:
        """Test ordering by overall score."""
        ranked = QualityScorer.rank([scored("a", 10), scored("b", 90), scored("c", 50)])

        assert [c.id for c in ranked] == ["b", "c", "a"]

    def test_ties_keep_original_order(self) -> None:
        """Test that equal scores retain their incoming relative order."""
        candidates = [scored("first", 70), scored("top", 90), scored("second", 70)]

        ranked = QualityScorer.rank(candidates)

        assert [c.id for c in ranked] == ["top", "first", "second"]
        assert [c.id for c in QualityScorer.rank(list(reversed(candidates)))] == [
            "top",
            "second",
            "first",
        ]
