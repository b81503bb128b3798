"""Improvement hints for voice descriptions."""

import re
from dataclasses import dataclass, field

from .models import UNSPECIFIED, AttributeSet

VAGUE_TERMS = ("nice", "good", "okay", "fine", "normal", "regular")

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


@dataclass(frozen=True)
class Hint:
    """A single suggestion for improving a description."""

    priority: str
    message: str
    suggestion: str
    example: str | None = None


@dataclass
class DescriptionReport:
    """Result of analyzing a description.

    Args:
        score: Completeness score from 0 to 100
        hints: Suggestions sorted by priority (high first)
        missing: Attribute categories the description did not specify
    """

    score: int
    hints: list[Hint] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def analyze_description(text: str, attributes: AttributeSet) -> DescriptionReport:
    """Score a description's completeness and suggest improvements.

    Args:
        text: Description text
        attributes: Attributes parsed from the same text

    Returns:
        DescriptionReport with hints ordered by priority
    """
    trimmed = text.strip()
    hints: list[Hint] = []
    missing: list[str] = []
    score = 100

    if attributes.accent is None:
        missing.append("accent")
        score -= 20
        hints.append(
            Hint(
                "high",
                "Add an accent",
                'Include an accent like "British", "American" or "Indian"',
                "young female with British accent",
            )
        )
    if attributes.gender == UNSPECIFIED:
        missing.append("gender")
        score -= 20
        hints.append(
            Hint(
                "high",
                "Specify gender",
                'Add a gender like "male", "female", "man" or "woman"',
                "young female with British accent",
            )
        )
    if attributes.age_group == UNSPECIFIED:
        missing.append("age")
        score -= 15
        hints.append(
            Hint(
                "medium",
                "Add an age group",
                'Include an age like "young", "middle-aged", "older" or a specific age',
                "middle-aged male with American accent",
            )
        )

    if len(trimmed) < 30:
        score -= 15
        hints.append(
            Hint(
                "medium",
                "Add more details",
                "Describe more characteristics for better results",
                "young female with British accent, clear and professional tone",
            )
        )
    elif len(trimmed) > 500:
        score -= 10
        hints.append(
            Hint(
                "low",
                "Description is quite long",
                "Focus on the most important characteristics",
            )
        )

    lowered = trimmed.lower()
    if any(re.search(rf"\b{term}\b", lowered) for term in VAGUE_TERMS):
        score -= 10
        hints.append(
            Hint(
                "medium",
                "Use more specific terms",
                'Replace vague words like "nice" or "good" with specific characteristics',
                'Instead of "nice voice", try "warm and friendly voice"',
            )
        )

    hints.sort(key=lambda hint: PRIORITY_ORDER[hint.priority])
    return DescriptionReport(score=max(0, score), hints=hints, missing=missing)
