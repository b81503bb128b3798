"""Configuration management for voicematch.

Loads configuration from ~/.config/voicematch/config.toml.
Priority chain: CLI flags > env vars > config file.
"""

import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "voicematch"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG = """\
# voicematch configuration

[provider]
# Voice design provider used when the catalog has no confident match
name = "elevenlabs"

# Voice design model
model = "eleven_multilingual_ttv_v2"

# Number of preview voices requested per generation
previews = 3

# Retry policy for transient provider failures
max_attempts = 3
backoff_base = 0.5
backoff_max = 8.0

[catalog]
# Catalog source: "elevenlabs" (account voices) or "file" (JSON roster)
source = "elevenlabs"

# Path to the JSON roster when source = "file"
# roster = "~/.config/voicematch/voices.json"

[matching]
# Best catalog score (0-100) required to skip generation
min_confidence = 50.0

# Maximum number of catalog matches returned
top_k = 10

# Override individual matcher weights
# [matching.weights]
# gender = 30.0
# accent = 30.0
# max_tag_matches = 3

[cache]
# Reuse generated voices for repeated descriptions
enabled = true

# Backend: "sqlite" (persistent) or "memory" (per process)
backend = "sqlite"

max_entries = 500
ttl_hours = 168

[sanitizer.replacements]
# Words rewritten before a description is sent to the provider
# "sexy" = "alluring"

# API keys are read from environment variables, not this file:
#   ELEVENLABS_API_KEY  - ElevenLabs provider and catalog
"""


@dataclass(frozen=True)
class ProviderConfig:
    """Voice design provider configuration."""

    name: str
    model: str
    previews: int
    max_attempts: int
    backoff_base: float
    backoff_max: float


@dataclass(frozen=True)
class CatalogConfig:
    """Catalog source configuration."""

    source: str
    roster: Path | None


@dataclass(frozen=True)
class MatchingConfig:
    """Catalog matcher configuration."""

    min_confidence: float
    top_k: int
    weights: dict[str, float | int] = field(default_factory=dict)


@dataclass(frozen=True)
class CacheConfig:
    """Result cache configuration."""

    enabled: bool
    backend: str
    max_entries: int
    ttl_hours: float | None


@dataclass(frozen=True)
class VoiceMatchConfig:
    """Top-level voicematch configuration."""

    provider: ProviderConfig
    catalog: CatalogConfig
    matching: MatchingConfig
    cache: CacheConfig
    replacements: dict[str, str] = field(default_factory=dict)


_cached_config: VoiceMatchConfig | None = None


def generate_config() -> Path:
    """Generate default config file at ~/.config/voicematch/config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(DEFAULT_CONFIG)
    return CONFIG_PATH


def load_config() -> VoiceMatchConfig:
    """Load configuration from config file with env var overrides.

    On first run, generates the config file and exits so the user
    can review it before proceeding.

    Returns:
        Loaded and validated VoiceMatchConfig.

    Raises:
        SystemExit: If config is missing (after generating) or invalid.
    """
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    if not CONFIG_PATH.exists():
        path = generate_config()
        print(
            f"No config found. Generated {path}. Review it and run again.",
            file=sys.stderr,
        )
        raise SystemExit(1)

    with open(CONFIG_PATH, "rb") as f:
        data = tomllib.load(f)

    provider = data.get("provider", {})
    catalog = data.get("catalog", {})
    matching = data.get("matching", {})
    cache = data.get("cache", {})
    sanitizer = data.get("sanitizer", {})

    # Validate required fields
    missing = []
    if "name" not in provider:
        missing.append("provider.name")
    if "source" not in catalog:
        missing.append("catalog.source")
    if "enabled" not in cache:
        missing.append("cache.enabled")

    if missing:
        print(
            f"Missing required config values: {', '.join(missing)}",
            file=sys.stderr,
        )
        print(f"Edit {CONFIG_PATH} or delete it to regenerate.", file=sys.stderr)
        raise SystemExit(1)

    # Env vars override config file values
    roster = os.getenv("VOICEMATCH_CATALOG_ROSTER", catalog.get("roster", ""))
    ttl_hours = cache.get("ttl_hours", 168)

    _cached_config = VoiceMatchConfig(
        provider=ProviderConfig(
            name=os.getenv("VOICEMATCH_PROVIDER", provider["name"]),
            model=os.getenv(
                "VOICEMATCH_MODEL", provider.get("model", "eleven_multilingual_ttv_v2")
            ),
            previews=int(provider.get("previews", 3)),
            max_attempts=int(provider.get("max_attempts", 3)),
            backoff_base=float(provider.get("backoff_base", 0.5)),
            backoff_max=float(provider.get("backoff_max", 8.0)),
        ),
        catalog=CatalogConfig(
            source=os.getenv("VOICEMATCH_CATALOG_SOURCE", catalog["source"]),
            roster=Path(roster).expanduser() if roster else None,
        ),
        matching=MatchingConfig(
            min_confidence=float(matching.get("min_confidence", 50.0)),
            top_k=int(matching.get("top_k", 10)),
            weights=dict(matching.get("weights", {})),
        ),
        cache=CacheConfig(
            enabled=cache["enabled"],
            backend=os.getenv("VOICEMATCH_CACHE_BACKEND", cache.get("backend", "sqlite")),
            max_entries=int(cache.get("max_entries", 500)),
            ttl_hours=float(ttl_hours) if ttl_hours else None,
        ),
        replacements={str(k): str(v) for k, v in sanitizer.get("replacements", {}).items()},
    )

    return _cached_config
