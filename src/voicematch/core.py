"""Core functionality for voicematch - turns a description into ranked voices."""

import base64
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .cache import get_cache_dir
from .cache.manager import ResultCache
from .cache.memory import MemoryCacheStore
from .cache.storage import SQLiteCacheStore
from .catalog.matcher import CatalogMatcher, MatchWeights
from .catalog.models import CatalogVoice
from .catalog.repository import CatalogRepository
from .catalog.sources import CatalogSource, ElevenLabsCatalogSource, FileCatalogSource
from .config import VoiceMatchConfig
from .description.advisor import Hint, analyze_description
from .description.models import AttributeSet, VoiceDescription, validate_description
from .description.normalizer import build_generation_request
from .description.parser import DescriptionParser
from .description.sanitizer import sanitize
from .generation.orchestrator import DEFAULT_CANDIDATE_COUNT, GenerationOrchestrator
from .providers import ProviderRegistry
from .providers.base import VoiceDesignProvider
from .providers.retry import RetryPolicy
from .ranking.scorer import QualityScorer, ScoredCandidate
from .tts.models import SynthesisSettings
from .tts.settings import optimize_settings

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Ranked candidates for one description.

    Args:
        source: "catalog", "generated" or "cache"
        candidates: Candidates sorted by overall score, best first
        attributes: Attributes parsed from the sanitized description
        description: The validated description and its cache key
        hints: Improvement hints, attached when generation was needed
        notes: Sanitizer substitution notes
    """

    source: str
    candidates: list[ScoredCandidate]
    attributes: AttributeSet
    description: VoiceDescription
    hints: list[Hint] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def top(self) -> ScoredCandidate:
        return self.candidates[0]

    def to_response(self) -> list[dict]:
        """Render candidates as the public response list.

        Audio is included, base64-encoded, only for generated candidates.
        """
        response = []
        for candidate in self.candidates:
            item = {
                "id": candidate.id,
                "name": candidate.name,
                "gender": candidate.gender,
                "accent": candidate.accent,
                "ageGroup": candidate.age_group,
                "score": candidate.overall,
                "tags": list(candidate.tags),
            }
            if candidate.source == "generated" and candidate.audio:
                item["audio"] = base64.b64encode(candidate.audio).decode("ascii")
            response.append(item)
        return response


class VoiceFinder:
    """Matches descriptions against the catalog and generates voices on a miss.

    Flow per request: validate, sanitize, parse, look up the cache, match the
    catalog, and only when no catalog voice is confident, generate previews
    and cache the top-ranked one.

    Args:
        repository: Catalog repository, loaded on first use
        provider: Voice design provider client
        matcher: Catalog matcher (defaults to one over repository)
        scorer: Quality scorer
        cache: Result cache, or None to disable caching
        parser: Description parser
        replacements: Sanitizer trigger/replacement table
        candidate_count: Number of previews requested on generation
    """

    def __init__(
        self,
        repository: CatalogRepository,
        provider: VoiceDesignProvider,
        matcher: CatalogMatcher | None = None,
        scorer: QualityScorer | None = None,
        cache: ResultCache | None = None,
        parser: DescriptionParser | None = None,
        replacements: dict[str, str] | None = None,
        candidate_count: int = DEFAULT_CANDIDATE_COUNT,
    ) -> None:
        self.repository = repository
        self.provider = provider
        self.matcher = matcher or CatalogMatcher(repository)
        self.scorer = scorer or QualityScorer()
        self.cache = cache
        self.parser = parser or DescriptionParser()
        self.replacements = replacements or {}
        self.orchestrator = GenerationOrchestrator(provider, candidate_count)

    async def find(self, description: str, language: str | None = None) -> SearchResult:
        """Find ranked voice candidates for a description.

        Args:
            description: Free-text voice description, 20-1000 characters
            language: Optional target language code

        Returns:
            SearchResult with at least one candidate

        Raises:
            ValidationError: If the description is missing or out of bounds
            ContentPolicyBlocked: If the provider refused the description
            ProviderUnavailable: On transient or quota provider failures
            NoUsableCandidate: If generation produced nothing usable
            ProviderAuthError: If the provider rejected the credentials
        """
        validate_description(description)

        cleaned = sanitize(description, self.replacements)
        if cleaned.was_modified:
            logger.debug(f"Sanitized description: {cleaned.notes}")

        request = VoiceDescription.build(description, cleaned.sanitized, language)
        attributes = self.parser.parse(cleaned.sanitized)

        if self.cache is not None:
            cached = await self.cache.get(request)
            if cached is not None:
                return SearchResult(
                    "cache", [cached], attributes, request, notes=cleaned.notes
                )

        matches = await self.matcher.match(attributes, description)
        if matches:
            ranked = self.scorer.rank(
                [
                    self.scorer.score_match(m, attributes, cleaned.sanitized)
                    for m in matches
                ]
            )
            logger.debug(f"Catalog returned {len(ranked)} confident matches")
            return SearchResult(
                "catalog", ranked, attributes, request, notes=cleaned.notes
            )

        generation_request = build_generation_request(
            attributes, cleaned.sanitized, language
        )
        generated = await self.orchestrator.generate(
            generation_request,
            suggestions=cleaned.notes,
            character=attributes.character,
        )
        ranked = self.scorer.rank(
            [
                self.scorer.score_generated(c, attributes, cleaned.sanitized)
                for c in generated
            ]
        )
        logger.debug(f"Generated {len(ranked)} usable candidates")

        if self.cache is not None:
            await self.cache.set(request, ranked[0])

        report = analyze_description(cleaned.sanitized, attributes)
        return SearchResult(
            "generated",
            ranked,
            attributes,
            request,
            hints=report.hints,
            notes=cleaned.notes,
        )

    async def list_voices(self) -> list[CatalogVoice]:
        """Return the loaded catalog roster."""
        return await self.repository.ensure_loaded()

    async def render(
        self,
        voice_id: str,
        text: str,
        traits: list[str] | None = None,
    ) -> tuple[bytes, SynthesisSettings]:
        """Render speech with a catalog or provider voice.

        Catalog ids are resolved to their provider reference; any other id
        is passed to the provider unchanged.

        Args:
            voice_id: Catalog voice id or provider voice id
            text: Text to speak
            traits: Personality traits for the settings optimizer; the
                text itself is used when none are given

        Returns:
            Audio bytes and the settings used to render them
        """
        await self.repository.ensure_loaded()
        voice = self.repository.get(voice_id)
        provider_voice_id = (voice.provider_ref or voice.id) if voice else voice_id

        settings = optimize_settings(text=text, traits=traits)
        logger.debug(
            f"Rendering with {provider_voice_id} (stability={settings.stability}, "
            f"expressiveness={settings.expressiveness})"
        )
        audio = await self.provider.synthesize(text, provider_voice_id, settings)
        return audio, settings


def create_catalog_source(config: VoiceMatchConfig) -> CatalogSource:
    """Build the configured catalog source.

    Raises:
        ValueError: If the source is unknown or a file source has no roster
    """
    source = config.catalog.source
    if source == "elevenlabs":
        return ElevenLabsCatalogSource()
    if source == "file":
        if config.catalog.roster is None:
            raise ValueError("catalog.roster is required when catalog.source = 'file'")
        return FileCatalogSource(config.catalog.roster)
    raise ValueError(f"Unknown catalog source '{source}'. Use 'elevenlabs' or 'file'.")


def create_cache(config: VoiceMatchConfig, cache_dir: Path | None = None) -> ResultCache:
    """Build the configured result cache.

    Raises:
        ValueError: If the backend is unknown
    """
    settings = config.cache
    ttl_seconds = settings.ttl_hours * 3600 if settings.ttl_hours else None
    if settings.backend == "sqlite":
        store = SQLiteCacheStore(
            cache_dir or get_cache_dir(),
            max_entries=settings.max_entries,
            ttl_seconds=ttl_seconds,
        )
    elif settings.backend == "memory":
        store = MemoryCacheStore(max_entries=settings.max_entries, ttl_seconds=ttl_seconds)
    else:
        raise ValueError(
            f"Unknown cache backend '{settings.backend}'. Use 'sqlite' or 'memory'."
        )
    return ResultCache(store)


def create_finder(
    config: VoiceMatchConfig,
    use_cache: bool = True,
    cache_dir: Path | None = None,
) -> VoiceFinder:
    """Assemble a VoiceFinder from configuration.

    Args:
        config: Loaded configuration
        use_cache: Whether to use the result cache when it is enabled
        cache_dir: Cache directory override for the SQLite backend

    Raises:
        KeyError: If the provider name is not registered
        ValueError: If a configured value is invalid
        ProviderAuthError: If the provider API key is missing
    """
    provider_class = ProviderRegistry.get(config.provider.name)
    provider = provider_class(
        model_id=config.provider.model,
        retry_policy=RetryPolicy(
            max_attempts=config.provider.max_attempts,
            base_delay=config.provider.backoff_base,
            max_delay=config.provider.backoff_max,
        ),
    )

    try:
        weights = MatchWeights(**config.matching.weights)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid matching.weights: {e}") from e

    repository = CatalogRepository(create_catalog_source(config))
    matcher = CatalogMatcher(
        repository,
        weights=weights,
        min_confidence=config.matching.min_confidence,
        top_k=config.matching.top_k,
    )
    cache = (
        create_cache(config, cache_dir) if use_cache and config.cache.enabled else None
    )

    return VoiceFinder(
        repository,
        provider,
        matcher=matcher,
        cache=cache,
        replacements=config.replacements,
        candidate_count=config.provider.previews,
    )
