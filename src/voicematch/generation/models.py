"""Data models for generated voice candidates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratedCandidate:
    """A preview voice produced by a voice design provider.

    Args:
        id: Provider-issued ephemeral voice id
        audio: Preview audio payload, or None when the provider returned none
        description: Voice description the preview was generated from
        name: Display name assigned by the orchestrator
        media_type: MIME type of the audio payload
        failure_reason: Provider-reported reason the payload is missing,
            one of "content_policy", "quota", "transient", "missing_audio"
    """

    id: str
    audio: bytes | None
    description: str
    name: str = ""
    media_type: str = "audio/mpeg"
    failure_reason: str | None = None

    @property
    def usable(self) -> bool:
        """Whether the candidate carries a playable payload."""
        return bool(self.audio) and self.failure_reason is None
