"""TTS data models with validation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SynthesisSettings:
    """Voice rendering settings.

    Args:
        stability: Delivery consistency (0.0-1.0); lower is more varied
        expressiveness: Style exaggeration (0.0-1.0)
        similarity_boost: Adherence to the original voice (0.0-1.0)
        use_speaker_boost: Whether to use speaker boost
    """

    stability: float = 0.6
    expressiveness: float = 0.3
    similarity_boost: float = 0.75
    use_speaker_boost: bool = True

    def __post_init__(self) -> None:
        """Validate voice settings."""
        if not 0.0 <= self.stability <= 1.0:
            raise ValueError("stability must be between 0.0 and 1.0")
        if not 0.0 <= self.expressiveness <= 1.0:
            raise ValueError("expressiveness must be between 0.0 and 1.0")
        if not 0.0 <= self.similarity_boost <= 1.0:
            raise ValueError("similarity_boost must be between 0.0 and 1.0")

    def to_provider_dict(self) -> dict:
        """Map onto the ElevenLabs voice_settings payload."""
        return {
            "stability": self.stability,
            "similarity_boost": self.similarity_boost,
            "style": self.expressiveness,
            "use_speaker_boost": self.use_speaker_boost,
        }
