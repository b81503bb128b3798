"""Catalog voice data models with validation."""

from dataclasses import dataclass, field

from ..description.models import AGE_GROUPS, GENDERS

QUALITY_TIERS = ("standard", "high")


@dataclass(frozen=True)
class CatalogVoice:
    """A ready-to-use voice from the catalog roster.

    Args:
        id: Unique identifier for the voice
        name: Human-readable name of the voice
        gender: male, female, neutral or unspecified
        accent: Accent label, or None if unknown
        age_group: young, middle-aged, older or unspecified
        tags: Timbre, identity and archetype tags
        tone: Tone tags (e.g. "professional", "calm")
        quality_tier: "standard" or "high"
        provider_ref: Opaque provider-specific voice identifier
        description: Optional free-text description from the roster
    """

    id: str
    name: str
    gender: str = "unspecified"
    accent: str | None = None
    age_group: str = "unspecified"
    tags: frozenset[str] = field(default_factory=frozenset)
    tone: frozenset[str] = field(default_factory=frozenset)
    quality_tier: str = "standard"
    provider_ref: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate voice information."""
        if not self.id or not self.id.strip():
            raise ValueError("id cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError("name cannot be empty")
        if self.gender not in GENDERS:
            raise ValueError(f"gender must be one of {GENDERS}, got {self.gender!r}")
        if self.age_group not in AGE_GROUPS:
            raise ValueError(
                f"age_group must be one of {AGE_GROUPS}, got {self.age_group!r}"
            )
        if self.quality_tier not in QUALITY_TIERS:
            raise ValueError(
                f"quality_tier must be one of {QUALITY_TIERS}, got {self.quality_tier!r}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogVoice":
        """Create a voice from a roster entry using camelCase keys."""
        return cls(
            id=data["id"],
            name=data["name"],
            gender=data.get("gender") or "unspecified",
            accent=data.get("accent") or None,
            age_group=data.get("ageGroup") or "unspecified",
            tags=frozenset(tag.lower() for tag in data.get("tags", [])),
            tone=frozenset(tone.lower() for tone in data.get("tone", [])),
            quality_tier=data.get("qualityTier", "standard"),
            provider_ref=data.get("providerRef"),
            description=data.get("description"),
        )

    def to_dict(self) -> dict:
        """Serialize to a roster entry."""
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender,
            "accent": self.accent,
            "ageGroup": self.age_group,
            "tags": sorted(self.tags),
            "tone": sorted(self.tone),
            "qualityTier": self.quality_tier,
            "providerRef": self.provider_ref,
            "description": self.description,
        }
