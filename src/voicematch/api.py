"""High-level API for voicematch library usage."""

from .config import load_config
from .core import VoiceFinder, create_finder


async def find_voices(
    description: str,
    language: str | None = None,
    cache: bool = True,
    finder: VoiceFinder | None = None,
) -> list[dict]:
    """Find voices matching a free-text description.

    Args:
        description: Voice description, 20-1000 characters
        language: Optional target language code
        cache: Whether to use the result cache
        finder: Preconfigured finder; built from the config file if omitted

    Returns:
        Ranked list of {id, name, gender, accent, ageGroup, score, tags,
        audio?} dicts; audio is base64 and present for generated voices only

    Raises:
        ValidationError: If the description is missing or out of bounds
        ContentPolicyBlocked: If the provider refused the description
        ProviderUnavailable: On transient or quota provider failures
        NoUsableCandidate: If generation produced nothing usable
        ProviderAuthError: If the API key is not configured
    """
    if finder is None:
        finder = create_finder(load_config(), use_cache=cache)

    result = await finder.find(description, language)
    return result.to_response()
