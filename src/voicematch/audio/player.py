"""Preview audition using pygame for playback."""

# ruff: noqa: E402
import os

# Hide pygame's welcome message, must be set before pygame is imported
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import warnings

# pygame emits a pkg_resources deprecation warning on import
warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")

import asyncio
import io
import re
from pathlib import Path

import pygame

from ..ranking.scorer import ScoredCandidate

EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/ogg": ".ogg",
}


def preview_filename(candidate: ScoredCandidate, rank: int) -> str:
    """File name for a saved preview, e.g. "1-pirate-1.mp3"."""
    slug = re.sub(r"[^a-z0-9]+", "-", candidate.name.lower()).strip("-") or "voice"
    extension = EXTENSIONS.get(candidate.media_type or "audio/mpeg", ".mp3")
    return f"{rank}-{slug}{extension}"


class AudioPlayer:
    """Plays and saves candidate preview audio.

    The mixer is initialized on first playback, so saving previews works
    on machines without an audio device.
    """

    def __init__(self) -> None:
        self._mixer_ready = False

    def _ensure_mixer(self) -> None:
        if self._mixer_ready:
            return
        try:
            pygame.mixer.init()
        except pygame.error as e:
            raise RuntimeError(f"Failed to initialize pygame audio mixer: {e}") from e
        self._mixer_ready = True

    def play_bytes(self, audio_data: bytes) -> None:
        """Play audio from bytes through system speakers (blocking).

        Args:
            audio_data: Audio data in MP3 or WAV format.

        Raises:
            ValueError: If no audio data provided.
            RuntimeError: If audio playback fails.
        """
        if not audio_data:
            raise ValueError("No audio data provided")

        self._ensure_mixer()
        try:
            pygame.mixer.music.load(io.BytesIO(audio_data))
            pygame.mixer.music.play()

            # Wait for playback to complete
            while pygame.mixer.music.get_busy():
                pygame.time.Clock().tick(10)

        except pygame.error as e:
            raise RuntimeError(f"Failed to play audio: {e}") from e

    async def play_bytes_async(self, audio_data: bytes) -> None:
        """Play audio from bytes without blocking the event loop.

        Raises:
            ValueError: If no audio data provided.
            RuntimeError: If audio playback fails.
        """
        if not audio_data:
            raise ValueError("No audio data provided")
        await asyncio.to_thread(self.play_bytes, audio_data)

    def save_to_file(self, audio_data: bytes, filepath: str | Path) -> Path:
        """Save audio bytes to a file.

        Args:
            audio_data: Audio data to save.
            filepath: Path where the audio file should be saved.

        Returns:
            The written path.

        Raises:
            ValueError: If no audio data provided.
            OSError: If file cannot be written.
        """
        if not audio_data:
            raise ValueError("No audio data provided")

        filepath = Path(filepath)
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            filepath.write_bytes(audio_data)
        except OSError as e:
            raise OSError(f"Failed to save audio to {filepath}: {e}") from e
        return filepath

    def save_previews(
        self, candidates: list[ScoredCandidate], directory: str | Path
    ) -> list[Path]:
        """Save every candidate that carries preview audio.

        Files are named by rank and display name. Catalog candidates carry
        no audio and are skipped.

        Args:
            candidates: Ranked candidates, best first
            directory: Destination directory, created if missing

        Returns:
            Paths written, in rank order
        """
        directory = Path(directory)
        saved = []
        for rank, candidate in enumerate(candidates, start=1):
            if not candidate.audio:
                continue
            saved.append(
                self.save_to_file(
                    candidate.audio, directory / preview_filename(candidate, rank)
                )
            )
        return saved
