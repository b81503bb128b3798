"""Synthesis settings derived from description text or personality traits.

Expressive and character voices get lower stability and more style,
professional voices get higher stability, and casual voices sit in
between. An energy adjustment is applied last, then both values are
clamped to [0.1, 1.0] and rounded to two decimals. Every input yields a
valid pair.
"""

import re

from .models import SynthesisSettings

MIN_VALUE = 0.1
MAX_VALUE = 1.0

DEFAULT_PAIR = (0.6, 0.3)

# Category -> (stability, expressiveness), checked in this order
CATEGORY_PAIRS = {
    "expressive": (0.35, 0.6),
    "professional": (0.75, 0.15),
    "casual": (0.55, 0.3),
    "natural": (0.65, 0.25),
}

CATEGORY_KEYWORDS = {
    "expressive": (
        "pirate", "sarcastic", "energetic", "excited", "dramatic", "character",
        "detective", "sassy", "theatrical", "wizard", "villain",
    ),
    "professional": ("professional", "business", "corporate", "formal", "polished"),
    "casual": ("casual", "laid-back", "laid back", "relaxed", "nonchalant", "chill"),
    "natural": ("natural", "authentic", "real", "conversational"),
}

# Trait -> (stability, expressiveness); later traits in this order win
TRAIT_PAIRS = [
    (("professional", "confident"), (0.7, 0.2)),
    (("witty", "sassy"), (0.4, 0.5)),
    (("blunt", "rude"), (0.6, 0.3)),
    (("sarcastic",), (0.35, 0.6)),
]

HIGH_ENERGY = ("high energy", "high-energy", "intense", "hyper", "excited", "energetic")
LOW_ENERGY = ("low energy", "low-energy", "mellow", "sleepy", "subdued", "calm")

ENERGY_STEP = 0.1
ENERGY_FLOOR = 0.3
ENERGY_CEILING = 0.8


def _contains(text: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


def _category(text: str) -> str | None:
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(_contains(text, k) for k in keywords):
            return category
    return None


def _energy(text: str) -> str | None:
    if any(_contains(text, k) for k in HIGH_ENERGY):
        return "high"
    if any(_contains(text, k) for k in LOW_ENERGY):
        return "low"
    return None


def _clamp(value: float) -> float:
    return round(max(MIN_VALUE, min(MAX_VALUE, value)), 2)


def optimize_settings(
    text: str | None = None, traits: list[str] | None = None
) -> SynthesisSettings:
    """Derive stability and expressiveness for rendering a voice.

    Args:
        text: Free-text description; used when no traits are given
        traits: Explicit personality traits (e.g. "Professional", "Sarcastic")

    Returns:
        SynthesisSettings with both values in [0.1, 1.0]
    """
    stability, expressiveness = DEFAULT_PAIR

    if traits:
        lowered = {t.strip().lower() for t in traits}
        for names, pair in TRAIT_PAIRS:
            if lowered & set(names):
                stability, expressiveness = pair
        signal = " ".join(sorted(lowered))
    else:
        signal = (text or "").lower()
        category = _category(signal)
        if category:
            stability, expressiveness = CATEGORY_PAIRS[category]

    energy = _energy(signal)
    if energy == "high":
        stability = max(ENERGY_FLOOR, stability - ENERGY_STEP)
    elif energy == "low":
        stability = min(ENERGY_CEILING, stability + ENERGY_STEP)

    return SynthesisSettings(
        stability=_clamp(stability), expressiveness=_clamp(expressiveness)
    )
