"""Unit tests for catalog matching and the confidence gate."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from voicematch.catalog.matcher import (
    MIN_CONFIDENCE,
    CatalogMatcher,
    MatchWeights,
    accent_match,
    description_keywords,
)
from voicematch.catalog.models import CatalogVoice
from voicematch.catalog.repository import CatalogRepository
from voicematch.catalog.sources import InMemoryCatalogSource
from voicematch.description.models import AttributeSet
from voicematch.description.parser import parse_description

CATALOG_DESCRIPTION = "young female with British accent, clear and professional tone"


def make_matcher(voices: list[CatalogVoice], **kwargs) -> CatalogMatcher:
    return CatalogMatcher(CatalogRepository(InMemoryCatalogSource(voices)), **kwargs)


async def loaded_matcher(voices: list[CatalogVoice], **kwargs) -> CatalogMatcher:
    matcher = make_matcher(voices, **kwargs)
    await matcher.repository.ensure_loaded()
    return matcher


class TestMatchWeights:
    """Test weight validation."""

    def test_defaults_are_valid(self) -> None:
        """Test that default weights construct."""
        weights = MatchWeights()
        assert weights.gender == 30.0
        assert weights.max_score == 100.0
        assert weights.gender_mismatch > weights.max_score

    def test_rejects_negative_weight(self) -> None:
        """Test that negative weights are refused."""
        with pytest.raises(ValueError, match="tag must be non-negative"):
            MatchWeights(tag=-1.0)

    def test_rejects_negative_penalty(self) -> None:
        """Test that penalties are given as positive magnitudes."""
        with pytest.raises(ValueError, match="age_mismatch must be non-negative"):
            MatchWeights(age_mismatch=-20.0)

    def test_rejects_name_bonus_above_exact_weight(self) -> None:
        """Test that the name bonus cannot outweigh an exact criterion."""
        with pytest.raises(ValueError, match="name_bonus"):
            MatchWeights(age=4.0, name_bonus=5.0)

    def test_rejects_regional_above_exact_accent(self) -> None:
        """Test that a regional accent cannot outscore an exact one."""
        with pytest.raises(ValueError, match="accent_regional"):
            MatchWeights(accent=10.0, accent_regional=20.0)

    @pytest.mark.parametrize("value", [2.0, "2", True])
    def test_max_tag_matches_must_be_integer(self, value) -> None:
        """Test that the tag cap is a whole count."""
        with pytest.raises(ValueError, match="max_tag_matches must be an integer"):
            MatchWeights(max_tag_matches=value)

    def test_integer_weights_are_accepted(self) -> None:
        """Test that TOML integers work for float weights."""
        weights = MatchWeights(gender=40, max_tag_matches=2)

        assert weights.gender == 40
        assert weights.max_tag_matches == 2


class TestAccentMatch:
    """Test accent compatibility."""

    @pytest.mark.parametrize(
        "requested,offered,expected",
        [
            ("British", "british", "exact"),
            ("UK", "British", "exact"),
            ("Scottish", "British", "regional"),
            ("Russian", "Polish", "regional"),
            ("Indian", "Indian-American", "regional"),
            ("South African", "Southern American", None),
            ("Latin American", "American", None),
            ("Russian", "British", None),
            ("French", "Japanese", None),
            ("British", None, None),
        ],
    )
    def test_accent_match(
        self, requested: str, offered: str | None, expected: str | None
    ) -> None:
        """Test exact, regional and excluded accent pairs."""
        assert accent_match(requested, offered) == expected


class TestCatalogMatcher:
    """Test scoring, ranking and gating."""

    @pytest.mark.asyncio
    async def test_exact_match_is_sole_result(self, catalog_voices) -> None:
        """Test that a fully matching voice ranks first and conflicting voices drop out."""
        matcher = await loaded_matcher(catalog_voices)
        attributes = parse_description(CATALOG_DESCRIPTION)

        results = matcher.rank(attributes, "young female British")

        assert [r.voice.id for r in results] == ["alice"]
        assert results[0].score >= MIN_CONFIDENCE
        breakdown = results[0].breakdown
        assert breakdown.gender and breakdown.age
        assert breakdown.accent == "exact"
        assert breakdown.tones == ("clear", "professional")
        assert breakdown.mismatches == ()

    def test_score_is_clamped(self) -> None:
        """Test that totals never exceed max_score."""
        voice = CatalogVoice(
            id="v",
            name="Pirate Pete",
            gender="male",
            accent="Irish",
            age_group="older",
            tags=frozenset({"pirate", "raspy", "deep", "powerful"}),
            tone=frozenset({"dramatic"}),
        )
        matcher = make_matcher([voice])
        attributes = parse_description(
            "old male pirate with an Irish accent, raspy deep powerful and dramatic"
        )

        result = matcher.score_voice(voice, attributes, set())

        assert result.score == 100.0

    @pytest.mark.asyncio
    async def test_zero_scores_are_dropped(self, catalog_voices) -> None:
        """Test that voices with no signal are never returned."""
        matcher = await loaded_matcher(catalog_voices)

        assert matcher.rank(AttributeSet(), "zzz") == []

    def test_rank_requires_loaded_repository(self, catalog_voices) -> None:
        """Test that ranking an unloaded catalog fails loudly."""
        matcher = make_matcher(catalog_voices)

        with pytest.raises(RuntimeError):
            matcher.rank(AttributeSet(gender="male"), "")

    def test_name_bonus_only_without_exact_match(self) -> None:
        """Test that a name hit is rewarded only when nothing exact matched."""
        voice = CatalogVoice(id="n", name="Narrator Nell", gender="female")
        matcher = make_matcher([voice])
        keywords = description_keywords("a narrator voice")

        unmatched = matcher.score_voice(voice, AttributeSet(), keywords)
        matched = matcher.score_voice(voice, AttributeSet(gender="female"), keywords)

        assert unmatched.score == 5.0
        assert unmatched.breakdown.name is True
        assert matched.score == 30.0
        assert matched.breakdown.name is False

    @pytest.mark.parametrize(
        "base,extra",
        [
            (AttributeSet(), AttributeSet(gender="female")),
            (AttributeSet(gender="female"), AttributeSet(gender="female", accent="British")),
            (
                AttributeSet(accent="Scottish"),
                AttributeSet(accent="Scottish", age_group="young"),
            ),
            (
                AttributeSet(gender="female"),
                AttributeSet(gender="female", tones=frozenset({"clear"})),
            ),
            (
                AttributeSet(),
                AttributeSet(tags=frozenset({"bright"})),
            ),
        ],
    )
    def test_additional_correct_signal_never_lowers_score(
        self, catalog_voices, base: AttributeSet, extra: AttributeSet
    ) -> None:
        """Test monotonicity for every voice when one correct signal is added."""
        matcher = make_matcher(catalog_voices)
        alice = catalog_voices[0]
        keywords = description_keywords("alice voice")

        before = matcher.score_voice(alice, base, keywords).score
        after = matcher.score_voice(alice, extra, keywords).score

        assert after >= before

    @pytest.mark.asyncio
    async def test_tie_prefers_high_quality_tier(self) -> None:
        """Test that equal scores list high-tier voices first."""
        standard = CatalogVoice(id="s", name="S", gender="male")
        high = CatalogVoice(id="h", name="H", gender="male", quality_tier="high")
        matcher = await loaded_matcher([standard, high])

        results = matcher.rank(AttributeSet(gender="male"), "")

        assert [r.voice.id for r in results] == ["h", "s"]

    @pytest.mark.asyncio
    async def test_top_k_limits_results(self) -> None:
        """Test that only the top K results are retained."""
        voices = [CatalogVoice(id=f"v{i}", name=f"V{i}", gender="male") for i in range(5)]
        matcher = await loaded_matcher(voices, top_k=2)

        assert len(matcher.rank(AttributeSet(gender="male"), "")) == 2

    @pytest.mark.asyncio
    async def test_match_returns_empty_below_gate(self, catalog_voices) -> None:
        """Test that a weak best score yields no matches."""
        matcher = make_matcher(catalog_voices)
        attributes = parse_description("sarcastic alien overlord")

        assert await matcher.match(attributes, "sarcastic alien overlord") == []

    @pytest.mark.asyncio
    async def test_match_returns_results_above_gate(self, catalog_voices) -> None:
        """Test that a confident catalog match is returned."""
        matcher = make_matcher(catalog_voices)

        results = await matcher.match(parse_description(CATALOG_DESCRIPTION), CATALOG_DESCRIPTION)

        assert [r.voice.id for r in results] == ["alice"]

    @pytest.mark.asyncio
    async def test_custom_gate(self, catalog_voices) -> None:
        """Test that min_confidence is configurable."""
        matcher = make_matcher(catalog_voices, min_confidence=0.0)
        attributes = parse_description("sarcastic deep overlord")

        results = await matcher.match(attributes, "sarcastic deep overlord")

        assert [r.voice.id for r in results] == ["brian"]


class TestMismatchPenalties:
    """Test that conflicting attributes push voices down or out."""

    def test_opposite_gender_is_penalized(self, catalog_voices) -> None:
        """Test the gender penalty on an otherwise strong voice."""
        matcher = make_matcher(catalog_voices)
        george = catalog_voices[1]

        result = matcher.score_voice(george, parse_description(CATALOG_DESCRIPTION), set())

        assert result.score < 0
        assert "gender" in result.breakdown.mismatches
        assert result.breakdown.to_dict()["mismatches"] == ["gender", "age"]

    def test_neutral_voice_has_no_gender_penalty(self) -> None:
        """Test that neutral voices are never treated as the opposite gender."""
        voice = CatalogVoice(id="x", name="X", gender="neutral", accent="British")
        matcher = make_matcher([voice])

        result = matcher.score_voice(
            voice, AttributeSet(gender="female", accent="British"), set()
        )

        assert result.score == 30.0
        assert result.breakdown.mismatches == ()

    def test_missing_voice_accent_is_penalized(self) -> None:
        """Test that a requested accent counts against a voice without one."""
        voice = CatalogVoice(id="x", name="X", gender="female")
        matcher = make_matcher([voice])

        result = matcher.score_voice(
            voice, AttributeSet(gender="female", accent="Russian"), set()
        )

        assert result.score == 0.0
        assert result.breakdown.mismatches == ("accent",)

    def test_unknown_voice_age_is_not_penalized(self) -> None:
        """Test that only known, differing age groups count as a mismatch."""
        voice = CatalogVoice(id="x", name="X", gender="female")
        matcher = make_matcher([voice])

        result = matcher.score_voice(
            voice, AttributeSet(gender="female", age_group="older"), set()
        )

        assert result.score == 30.0
        assert result.breakdown.mismatches == ()

    @pytest.mark.asyncio
    async def test_conflicting_accent_falls_below_gate(self) -> None:
        """Test that a wrong accent keeps an otherwise matching voice out."""
        voice = CatalogVoice(
            id="emma", name="Emma", gender="female", accent="British", age_group="young"
        )
        matcher = make_matcher([voice])
        text = "young female with a Russian accent please"
        attributes = parse_description(text)

        scored = matcher.score_voice(voice, attributes, description_keywords(text))

        assert attributes.accent == "Russian"
        assert scored.breakdown.mismatches == ("accent",)
        assert scored.score < MIN_CONFIDENCE
        assert await matcher.match(attributes, text) == []

    @pytest.mark.asyncio
    async def test_penalties_are_configurable(self, catalog_voices) -> None:
        """Test that zeroed penalties restore purely additive scoring."""
        weights = MatchWeights(gender_mismatch=0.0, accent_mismatch=0.0, age_mismatch=0.0)
        matcher = await loaded_matcher(catalog_voices, weights=weights)

        results = matcher.rank(parse_description(CATALOG_DESCRIPTION), "")

        assert results[0].voice.id == "alice"
        assert {r.voice.id for r in results} == {"alice", "george", "aria"}
