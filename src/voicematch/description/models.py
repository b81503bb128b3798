"""Data models for voice descriptions and extracted attributes."""

import hashlib
from dataclasses import dataclass, field

from ..errors import ValidationError

MIN_DESCRIPTION_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 1000

UNSPECIFIED = "unspecified"
GENDERS = ("male", "female", "neutral", UNSPECIFIED)
AGE_GROUPS = ("young", "middle-aged", "older", UNSPECIFIED)


def validate_description(text: str | None) -> str:
    """Check a raw description against the accepted length window.

    Length is measured on the text with surrounding whitespace removed.

    Args:
        text: Raw description from the caller

    Returns:
        The description unchanged

    Raises:
        ValidationError: If the description is missing or outside 20-1000 characters
    """
    if text is None or not text.strip():
        raise ValidationError("Description is required")

    length = len(text.strip())
    if length < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
        )
    if length > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )
    return text


def normalize_text(text: str) -> str:
    """Collapse whitespace and casefold text for content addressing."""
    return " ".join(text.split()).casefold()


def content_hash(normalized: str, language: str | None = None) -> str:
    """Compute the cache key for a normalized description.

    Args:
        normalized: Output of normalize_text()
        language: Target language code, if it affects rendered audio

    Returns:
        Hex SHA-256 digest
    """
    key = f"{normalized}:{language.lower()}" if language else normalized
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class VoiceDescription:
    """A validated request description and its derived forms.

    Args:
        raw: Text as submitted by the caller
        sanitized: Text after content-policy substitutions
        normalized: Whitespace-collapsed, casefolded sanitized text
        language: Optional target language code
        content_hash: Stable hash of normalized text and language
    """

    raw: str
    sanitized: str
    normalized: str
    language: str | None
    content_hash: str

    @classmethod
    def build(
        cls, raw: str, sanitized: str, language: str | None = None
    ) -> "VoiceDescription":
        """Derive normalized text and hash from raw and sanitized text."""
        normalized = normalize_text(sanitized)
        return cls(
            raw=raw,
            sanitized=sanitized,
            normalized=normalized,
            language=language,
            content_hash=content_hash(normalized, language),
        )


@dataclass(frozen=True)
class AttributeSet:
    """Structured voice attributes extracted from a description.

    Categories the parser could not identify stay unspecified.

    Args:
        gender: male, female, neutral or unspecified
        accent: Accent label, or None when not mentioned
        age_group: young, middle-aged, older or unspecified
        tones: Tone and energy tags (e.g. "professional", "calm")
        character: Character archetype (e.g. "pirate"), or None
        tags: Free-form timbre and identity tags (e.g. "deep", "raspy")
    """

    gender: str = UNSPECIFIED
    accent: str | None = None
    age_group: str = UNSPECIFIED
    tones: frozenset[str] = field(default_factory=frozenset)
    character: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate enumerated fields."""
        if self.gender not in GENDERS:
            raise ValueError(f"gender must be one of {GENDERS}, got {self.gender!r}")
        if self.age_group not in AGE_GROUPS:
            raise ValueError(
                f"age_group must be one of {AGE_GROUPS}, got {self.age_group!r}"
            )

    @property
    def specified_count(self) -> int:
        """Number of categories the description explicitly specified."""
        return sum(
            [
                self.gender != UNSPECIFIED,
                self.accent is not None,
                self.age_group != UNSPECIFIED,
                self.character is not None,
                bool(self.tones),
                bool(self.tags),
            ]
        )

    def to_dict(self) -> dict:
        """Serialize attributes for logging and JSON output."""
        return {
            "gender": self.gender,
            "accent": self.accent,
            "ageGroup": self.age_group,
            "tones": sorted(self.tones),
            "character": self.character,
            "tags": sorted(self.tags),
        }
