"""Normalization of parsed attributes into a generation request."""

import logging
from dataclasses import dataclass

from .models import UNSPECIFIED, AttributeSet
from .samples import sample_utterance

logger = logging.getLogger(__name__)

# Provider bounds for the voice_description field
MIN_PROVIDER_DESCRIPTION = 20
MAX_PROVIDER_DESCRIPTION = 1000

AGE_PHRASES = {
    "young": "young adult",
    "middle-aged": "middle-aged adult",
    "older": "elderly",
}


@dataclass(frozen=True)
class GenerationRequest:
    """Request shape sent to a voice design provider.

    Args:
        canonical: Template description built only from known attributes
        voice_description: Text sent to the provider (canonical plus sanitized text)
        sample_text: Utterance the provider speaks for each preview
        language: Target language code, if any
    """

    canonical: str
    voice_description: str
    sample_text: str
    language: str | None = None


def canonical_description(attributes: AttributeSet) -> str:
    """Fill the description template with the attributes that are known.

    Unspecified categories are omitted, never guessed. Returns an empty
    string when nothing is known.
    """
    subject: list[str] = []
    if attributes.age_group != UNSPECIFIED:
        subject.append(AGE_PHRASES[attributes.age_group])
    if attributes.gender != UNSPECIFIED:
        subject.append(attributes.gender)

    parts: list[str] = []
    if subject or attributes.accent:
        head = " ".join(subject + ["voice"])
        if attributes.accent:
            head += f" with a {attributes.accent} accent"
        parts.append(head)
    if attributes.tones:
        parts.append(f"{' and '.join(sorted(attributes.tones))} tone")
    if attributes.tags:
        parts.append(f"{' and '.join(sorted(attributes.tags))} timbre")
    if attributes.character:
        parts.append(f"speaking like a {attributes.character}")

    if not parts:
        return ""
    text = ", ".join(parts)
    return text[0].upper() + text[1:]


def build_generation_request(
    attributes: AttributeSet, sanitized: str, language: str | None = None
) -> GenerationRequest:
    """Build the provider request from attributes and sanitized text.

    Args:
        attributes: Parsed attributes
        sanitized: Sanitized description text
        language: Target language code

    Returns:
        GenerationRequest with a bounded voice description and padded sample text
    """
    canonical = canonical_description(attributes)
    stripped = sanitized.strip()
    voice_description = f"{canonical}. {stripped}" if canonical else stripped
    if len(voice_description) < MIN_PROVIDER_DESCRIPTION:
        voice_description = f"{voice_description} with a natural speaking style"
    voice_description = voice_description[:MAX_PROVIDER_DESCRIPTION]

    request = GenerationRequest(
        canonical=canonical,
        voice_description=voice_description,
        sample_text=sample_utterance(attributes, language),
        language=language,
    )
    logger.debug(f"Generation request description: {request.voice_description!r}")
    return request
