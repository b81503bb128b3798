"""Result cache for voicematch searches."""

from pathlib import Path


def get_cache_dir() -> Path:
    """Get or create the voicematch cache directory.

    Creates ~/.cache/voicematch/ and ~/.cache/voicematch/audio/ directories
    if they don't exist.

    Returns:
        Path to the cache directory
    """
    cache_dir = Path.home() / ".cache" / "voicematch"
    cache_dir.mkdir(parents=True, exist_ok=True)

    # Create audio subdirectory for preview payloads
    audio_dir = cache_dir / "audio"
    audio_dir.mkdir(exist_ok=True)

    return cache_dir
