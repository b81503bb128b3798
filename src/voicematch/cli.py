"""Typer CLI definition for voicematch."""

import asyncio
import json
import logging
import sys
from pathlib import Path

import typer

from .audio.player import AudioPlayer
from .config import load_config
from .core import SearchResult, create_finder
from .errors import (
    ContentPolicyBlocked,
    ProviderUnavailable,
    ValidationError,
    VoiceMatchError,
)
from .ranking.scorer import ScoredCandidate

app = typer.Typer(help="Find or generate a voice from a free-text description")

EXIT_VALIDATION = 2
EXIT_TEMPFAIL = 75


def process_text_input(text: str | None) -> str:
    """Process text input and return the description to search for.

    Args:
        text: Optional text from the CLI argument, a file or stdin

    Returns:
        The text with surrounding whitespace removed

    Raises:
        ValueError: If no text is provided
    """
    if text is None or not text.strip():
        raise ValueError("No description provided")

    return text.strip()


def format_candidate(candidate: ScoredCandidate) -> str:
    """One output line: score, id, name, gender/accent/age and tags."""
    profile = f"{candidate.gender}/{candidate.accent or 'unspecified'}/{candidate.age_group}"
    return (
        f"{candidate.overall:6.2f}  {candidate.id}  {candidate.name}  "
        f"{profile}  {', '.join(candidate.tags)}"
    ).rstrip()


def exit_code_for(error: Exception) -> int:
    """Exit status for a failed search."""
    if isinstance(error, ValidationError):
        return EXIT_VALIDATION
    if isinstance(error, ProviderUnavailable) and error.retryable:
        return EXIT_TEMPFAIL
    return 1


def report_error(message: str, error: Exception, debug: bool, code: int = 1) -> None:
    """Print an error in normal or debug form and exit."""
    if debug:
        typer.echo(f"Debug - {message}: {error!r}", err=True)
    else:
        typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code) from None


def print_result(result: SearchResult, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(result.to_response(), indent=2))
        return

    for candidate in result.candidates:
        typer.echo(format_candidate(candidate))
    for note in result.notes:
        typer.echo(f"Note: {note}", err=True)
    for hint in result.hints:
        typer.echo(f"Hint: {hint.message}. {hint.suggestion}", err=True)


@app.command()
def find(
    text: str | None = typer.Argument(
        None, help="Voice description, or the text to speak with --render"
    ),
    file: Path | None = typer.Option(
        None, "-f", "--file", help="Read the description from file"
    ),
    language: str | None = typer.Option(
        None, "-l", "--language", help="Target language code (e.g. en, es, fr)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Disable the result cache"),
    save_dir: Path | None = typer.Option(
        None, "--save-dir", help="Save generated preview audio to this directory"
    ),
    play: bool = typer.Option(False, "--play", help="Play the top generated preview"),
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose error messages and pipeline activity"
    ),
    list_voices: bool = typer.Option(
        False, "--list-voices", help="List catalog voices and exit"
    ),
    render: str | None = typer.Option(
        None, "--render", metavar="VOICE_ID", help="Speak TEXT with this voice and exit"
    ),
    trait: list[str] | None = typer.Option(
        None, "--trait", help="Personality trait for --render (repeatable)"
    ),
    output: Path | None = typer.Option(
        None, "-o", "--output", help="Save rendered audio to file instead of playing"
    ),
) -> None:
    """Find a catalog voice matching a description, or generate new ones."""
    # Configure logging for debug mode
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    config = load_config()

    try:
        finder = create_finder(config, use_cache=not no_cache)
    except (VoiceMatchError, KeyError, ValueError) as e:
        report_error("Setup failed", e, debug)

    # Handle --list-voices flag
    if list_voices:
        try:
            voices = asyncio.run(finder.list_voices())
        except Exception as e:
            if debug:
                typer.echo(f"Debug - Failed to list voices: {e!r}", err=True)
            else:
                typer.echo(f"Error: Failed to list voices: {e}", err=True)
            raise typer.Exit(1) from None
        for voice in voices:
            typer.echo(f"{voice.name}: {voice.id}")
        raise typer.Exit(0)

    # Get text from argument, file, or stdin (in priority order)
    if text is None:
        if file:
            try:
                text = file.read_text()
            except FileNotFoundError as e:
                report_error(f"File not found: {file}", e, debug)
            except PermissionError as e:
                report_error(f"Permission denied: {file}", e, debug)
            except UnicodeDecodeError as e:
                report_error(f"Decode error: {file}", e, debug)
        elif not sys.stdin.isatty():
            text = sys.stdin.read()

    try:
        text = process_text_input(text)
    except ValueError as e:
        report_error("Input error", e, debug)

    if render:
        try:
            audio, _ = asyncio.run(finder.render(render, text, trait or None))
            player = AudioPlayer()
            if output:
                player.save_to_file(audio, output)
                typer.echo(f"Audio saved to {output}")
            else:
                player.play_bytes(audio)
        except VoiceMatchError as e:
            report_error("Render failed", e, debug, exit_code_for(e))
        except (OSError, RuntimeError, ValueError, NotImplementedError) as e:
            report_error("Render failed", e, debug)
        raise typer.Exit(0)

    try:
        result = asyncio.run(finder.find(text, language))
    except ContentPolicyBlocked as e:
        for suggestion in e.suggestions:
            typer.echo(f"Suggestion: {suggestion}", err=True)
        report_error("Content policy", e, debug)
    except VoiceMatchError as e:
        report_error("Search failed", e, debug, exit_code_for(e))
    except Exception as e:
        if debug:
            typer.echo(f"Debug - Unexpected error: {e!r}", err=True)
        else:
            typer.echo("Error: An unexpected error occurred", err=True)
        raise typer.Exit(1) from None

    print_result(result, as_json)

    # Audition generated previews
    try:
        player = AudioPlayer()
        if save_dir:
            for path in player.save_previews(result.candidates, save_dir):
                typer.echo(f"Preview saved to {path}", err=True)
        if play:
            if result.top.audio:
                player.play_bytes(result.top.audio)
            else:
                typer.echo("Top candidate is a catalog voice; nothing to play", err=True)
    except (OSError, RuntimeError) as e:
        report_error("Audition failed", e, debug)
