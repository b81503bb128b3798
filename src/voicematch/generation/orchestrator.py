"""Generation fallback orchestration.

Runs only when the catalog has no confident match. Sends the normalized
request to the voice design provider once, drops previews without a
usable payload, and translates provider failures into the error taxonomy.
Retrying is the provider client's concern, never this module's.
"""

import logging
from dataclasses import replace

from ..description.normalizer import GenerationRequest
from ..errors import (
    ContentPolicyBlocked,
    NoUsableCandidate,
    ProviderAuthError,
    ProviderError,
    ProviderUnavailable,
)
from ..providers.base import VoiceDesignProvider
from .models import GeneratedCandidate

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_COUNT = 3


def _display_name(character: str | None, index: int) -> str:
    if character:
        return f"{character.capitalize()} {index}"
    return f"Voice {index}"


class GenerationOrchestrator:
    """Requests and filters generated voice candidates.

    Args:
        provider: Voice design provider client
        candidate_count: Number of previews to request (N)
    """

    def __init__(
        self,
        provider: VoiceDesignProvider,
        candidate_count: int = DEFAULT_CANDIDATE_COUNT,
    ) -> None:
        if candidate_count < 1:
            raise ValueError("candidate_count must be at least 1")
        self.provider = provider
        self.candidate_count = candidate_count

    async def generate(
        self,
        request: GenerationRequest,
        suggestions: list[str] | None = None,
        character: str | None = None,
    ) -> list[GeneratedCandidate]:
        """Generate usable candidates for a normalized request.

        Args:
            request: Normalized provider request
            suggestions: Sanitizer substitution notes, attached to a
                content-policy failure
            character: Archetype used for display names, if any

        Returns:
            Usable candidates in provider order, named "Voice N" or
            "<Character> N"

        Raises:
            ContentPolicyBlocked: If the provider refused the description
            ProviderUnavailable: On transient or quota failures
            NoUsableCandidate: If no preview carried a usable payload
            ProviderAuthError: If the provider rejected the credentials
        """
        try:
            candidates = await self.provider.create_previews(
                request.voice_description,
                request.sample_text,
                self.candidate_count,
                request.language,
            )
        except ProviderAuthError:
            raise
        except ProviderError as e:
            raise self._translate(e, suggestions) from e

        usable = [c for c in candidates if c.usable]
        dropped = len(candidates) - len(usable)
        if dropped:
            logger.debug(f"Dropped {dropped} of {len(candidates)} previews without usable audio")

        if not usable:
            reasons = {c.failure_reason for c in candidates}
            if candidates and reasons == {"content_policy"}:
                raise ContentPolicyBlocked(
                    "The voice provider rejected this description", suggestions
                )
            raise NoUsableCandidate("Generation produced no usable voice preview")

        return [
            replace(candidate, name=_display_name(character, index))
            for index, candidate in enumerate(usable, start=1)
        ]

    @staticmethod
    def _translate(error: ProviderError, suggestions: list[str] | None) -> Exception:
        if error.kind == "content_policy":
            return ContentPolicyBlocked(
                "The voice provider rejected this description", suggestions, error
            )
        if error.kind == "quota":
            return ProviderUnavailable(
                "Voice provider quota exhausted",
                retryable=False,
                reason="quota",
                status_code=error.status_code,
                original_error=error,
            )
        if error.kind == "transient":
            return ProviderUnavailable(
                "Voice provider is temporarily unavailable",
                retryable=True,
                reason="transient",
                status_code=error.status_code,
                original_error=error,
            )
        return ProviderUnavailable(
            f"Voice provider request failed: {error}",
            retryable=False,
            reason=error.kind,
            status_code=error.status_code,
            original_error=error,
        )
