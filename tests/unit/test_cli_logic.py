"""Unit tests for CLI logic functions."""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from voicematch.cli import app, exit_code_for, format_candidate, process_text_input
from voicematch.core import SearchResult
from voicematch.description.models import AttributeSet, VoiceDescription
from voicematch.errors import (
    ContentPolicyBlocked,
    NoUsableCandidate,
    ProviderUnavailable,
    ValidationError,
)
from voicematch.ranking.scorer import ScoredCandidate
from voicematch.tts.models import SynthesisSettings

runner = CliRunner()

DESCRIPTION = "a deep raspy pirate narrator voice"


def candidate(source: str = "generated", audio: bytes | None = b"mp3") -> ScoredCandidate:
    return ScoredCandidate(
        id="gen-1",
        name="Pirate 1",
        source=source,
        gender="male",
        accent=None,
        age_group="unspecified",
        tags=("deep", "raspy"),
        overall=78.25,
        audio=audio,
        media_type="audio/mpeg",
    )


def result(source: str = "generated", audio: bytes | None = b"mp3") -> SearchResult:
    return SearchResult(
        source=source,
        candidates=[candidate(source, audio)],
        attributes=AttributeSet(gender="male"),
        description=VoiceDescription.build(DESCRIPTION, DESCRIPTION),
        notes=['Replaced "sexy" with "alluring"'],
    )


def test_process_text_input_with_valid_text() -> None:
    """Test that process_text_input returns stripped text."""
    assert process_text_input("  a calm narrator  \n") == "a calm narrator"


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_process_text_input_without_text_raises_value_error(text: str | None) -> None:
    """Test that missing input is rejected."""
    with pytest.raises(ValueError, match="No description provided"):
        process_text_input(text)


def test_format_candidate() -> None:
    """Test the one-line candidate summary."""
    assert format_candidate(candidate()) == (
        " 78.25  gen-1  Pirate 1  male/unspecified/unspecified  deep, raspy"
    )


@pytest.mark.parametrize(
    "error,code",
    [
        (ValidationError("too short"), 2),
        (ProviderUnavailable("busy", retryable=True), 75),
        (ProviderUnavailable("quota", retryable=False, reason="quota"), 1),
        (NoUsableCandidate("nothing"), 1),
        (ContentPolicyBlocked("blocked"), 1),
    ],
)
def test_exit_code_for(error: Exception, code: int) -> None:
    """Test exit status mapping."""
    assert exit_code_for(error) == code


class TestFindCommand:
    """Test the find command with a stubbed finder."""

    def setup_method(self) -> None:
        self.finder = MagicMock()
        self.finder.find = AsyncMock(return_value=result())
        self.config_patcher = patch("voicematch.cli.load_config")
        self.finder_patcher = patch("voicematch.cli.create_finder", return_value=self.finder)
        self.config_patcher.start()
        self.mock_create_finder = self.finder_patcher.start()

    def teardown_method(self) -> None:
        self.finder_patcher.stop()
        self.config_patcher.stop()

    def test_prints_ranked_candidates(self) -> None:
        """Test plain output and the language option."""
        outcome = runner.invoke(app, [DESCRIPTION, "--language", "es"])

        assert outcome.exit_code == 0
        assert "gen-1  Pirate 1" in outcome.output
        assert "Note: Replaced" in outcome.output
        self.finder.find.assert_awaited_once_with(DESCRIPTION, "es")

    def test_json_output(self) -> None:
        """Test the JSON response shape."""
        outcome = runner.invoke(app, [DESCRIPTION, "--json"])

        assert outcome.exit_code == 0
        payload = json.loads(outcome.stdout)
        assert payload[0]["id"] == "gen-1"
        assert payload[0]["ageGroup"] == "unspecified"
        assert payload[0]["audio"] == "bXAz"

    def test_reads_description_from_stdin(self) -> None:
        """Test piped input."""
        outcome = runner.invoke(app, [], input=f"  {DESCRIPTION}\n")

        assert outcome.exit_code == 0
        self.finder.find.assert_awaited_once_with(DESCRIPTION, None)

    def test_reads_description_from_file(self, tmp_path: Path) -> None:
        """Test the --file option."""
        source = tmp_path / "description.txt"
        source.write_text(DESCRIPTION)

        outcome = runner.invoke(app, ["--file", str(source)])

        assert outcome.exit_code == 0
        self.finder.find.assert_awaited_once_with(DESCRIPTION, None)

    def test_no_cache_flag(self) -> None:
        """Test that --no-cache reaches the finder factory."""
        runner.invoke(app, [DESCRIPTION, "--no-cache"])

        assert self.mock_create_finder.call_args.kwargs["use_cache"] is False

    def test_validation_error_exits_2(self) -> None:
        """Test the validation exit status."""
        self.finder.find.side_effect = ValidationError(
            "Description must be at least 20 characters"
        )

        outcome = runner.invoke(app, ["too short"])

        assert outcome.exit_code == 2
        assert "at least 20 characters" in outcome.output

    def test_retryable_provider_failure_exits_75(self) -> None:
        """Test the temporary-failure exit status."""
        self.finder.find.side_effect = ProviderUnavailable("Provider busy", retryable=True)

        outcome = runner.invoke(app, [DESCRIPTION])

        assert outcome.exit_code == 75

    def test_content_policy_prints_suggestions(self) -> None:
        """Test that sanitizer notes are offered as suggestions."""
        self.finder.find.side_effect = ContentPolicyBlocked(
            "Description was blocked", suggestions=["Try a less explicit wording"]
        )

        outcome = runner.invoke(app, [DESCRIPTION])

        assert outcome.exit_code == 1
        assert "Suggestion: Try a less explicit wording" in outcome.output

    def test_unexpected_error_is_hidden(self) -> None:
        """Test the generic message without --debug."""
        self.finder.find.side_effect = KeyError("boom")

        outcome = runner.invoke(app, [DESCRIPTION])

        assert outcome.exit_code == 1
        assert "An unexpected error occurred" in outcome.output

    def test_save_dir_writes_previews(self, tmp_path: Path) -> None:
        """Test preview audition to disk."""
        outcome = runner.invoke(app, [DESCRIPTION, "--save-dir", str(tmp_path)])

        assert outcome.exit_code == 0
        assert (tmp_path / "1-pirate-1.mp3").read_bytes() == b"mp3"

    def test_play_catalog_voice_has_nothing_to_play(self) -> None:
        """Test --play when the top candidate carries no audio."""
        self.finder.find.return_value = result("catalog", None)

        outcome = runner.invoke(app, [DESCRIPTION, "--play"])

        assert outcome.exit_code == 0
        assert "nothing to play" in outcome.output

    def test_list_voices(self, catalog_voices) -> None:
        """Test the --list-voices listing."""
        self.finder.list_voices = AsyncMock(return_value=catalog_voices)

        outcome = runner.invoke(app, ["--list-voices"])

        assert outcome.exit_code == 0
        assert "Alice: alice" in outcome.output
        self.finder.find.assert_not_called()

    def test_render_saves_audio(self, tmp_path: Path) -> None:
        """Test speaking text with a catalog voice."""
        self.finder.render = AsyncMock(return_value=(b"speech", SynthesisSettings()))
        target = tmp_path / "out.mp3"

        outcome = runner.invoke(
            app, ["Hello there", "--render", "alice", "--trait", "Witty", "-o", str(target)]
        )

        assert outcome.exit_code == 0
        assert target.read_bytes() == b"speech"
        self.finder.render.assert_awaited_once_with("alice", "Hello there", ["Witty"])
