"""Pytest configuration and fixtures for voicematch tests."""

import sys
from pathlib import Path

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from voicematch import config as config_module
from voicematch.catalog.models import CatalogVoice
from voicematch.generation.models import GeneratedCandidate
from voicematch.providers.base import VoiceDesignProvider
from voicematch.tts.models import SynthesisSettings

# Preview payloads sized to land in distinct quality bands
LARGE_AUDIO = b"\xff\xfb" * 60_000
MEDIUM_AUDIO = b"\xff\xfb" * 30_000
SMALL_AUDIO = b"\xff\xfb" * 5_000


@pytest.fixture(autouse=True)
def isolate_user_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect config and cache directories to a per-test location."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(config_module, "CONFIG_DIR", home / ".config" / "voicematch")
    monkeypatch.setattr(
        config_module, "CONFIG_PATH", home / ".config" / "voicematch" / "config.toml"
    )
    monkeypatch.setattr(config_module, "_cached_config", None)
    for name in (
        "VOICEMATCH_PROVIDER",
        "VOICEMATCH_MODEL",
        "VOICEMATCH_CATALOG_SOURCE",
        "VOICEMATCH_CATALOG_ROSTER",
        "VOICEMATCH_CACHE_BACKEND",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


class FakeVoiceDesigner(VoiceDesignProvider):
    """Scripted voice design provider that records every call."""

    def __init__(
        self,
        previews: list[GeneratedCandidate] | None = None,
        error: Exception | None = None,
        speech: bytes = b"rendered-speech",
    ) -> None:
        self.previews = previews if previews is not None else default_previews()
        self.error = error
        self.speech = speech
        self.calls: list[dict] = []
        self.synthesize_calls: list[dict] = []

    async def create_previews(
        self,
        voice_description: str,
        sample_text: str,
        count: int = 3,
        language: str | None = None,
    ) -> list[GeneratedCandidate]:
        self.calls.append(
            {
                "voice_description": voice_description,
                "sample_text": sample_text,
                "count": count,
                "language": language,
            }
        )
        if self.error is not None:
            raise self.error
        return self.previews[:count]

    async def synthesize(
        self,
        text: str,
        voice_id: str,
        settings: SynthesisSettings | None = None,
    ) -> bytes:
        self.synthesize_calls.append(
            {"text": text, "voice_id": voice_id, "settings": settings}
        )
        return self.speech


def default_previews() -> list[GeneratedCandidate]:
    return [
        GeneratedCandidate(id="gen-small", audio=SMALL_AUDIO, description="d"),
        GeneratedCandidate(id="gen-large", audio=LARGE_AUDIO, description="d"),
        GeneratedCandidate(id="gen-medium", audio=MEDIUM_AUDIO, description="d"),
    ]


@pytest.fixture
def catalog_voices() -> list[CatalogVoice]:
    """A small roster covering the common attribute combinations."""
    return [
        CatalogVoice(
            id="alice",
            name="Alice",
            gender="female",
            accent="British",
            age_group="young",
            tags=frozenset({"bright"}),
            tone=frozenset({"professional", "clear"}),
            quality_tier="high",
            provider_ref="el-alice",
        ),
        CatalogVoice(
            id="george",
            name="George",
            gender="male",
            accent="British",
            age_group="middle-aged",
            tags=frozenset({"raspy"}),
            tone=frozenset({"warm"}),
            quality_tier="high",
            provider_ref="el-george",
        ),
        CatalogVoice(
            id="brian",
            name="Brian",
            gender="male",
            accent="American",
            age_group="middle-aged",
            tags=frozenset({"deep"}),
            tone=frozenset({"calm"}),
        ),
        CatalogVoice(
            id="aria",
            name="Aria",
            gender="female",
            accent="American",
            age_group="middle-aged",
            tags=frozenset({"smooth"}),
            tone=frozenset({"friendly"}),
        ),
    ]


@pytest.fixture
def fake_provider() -> FakeVoiceDesigner:
    return FakeVoiceDesigner()


@pytest.fixture
def provider_factory() -> type[FakeVoiceDesigner]:
    """The fake provider class, for tests that script previews or errors."""
    return FakeVoiceDesigner
