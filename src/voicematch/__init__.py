"""voicematch - find or generate a voice from a free-text description."""

__version__ = "0.1.0"
__all__ = ["find_voices"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "find_voices":
        from .api import find_voices

        return find_voices
    raise AttributeError(f"module 'voicematch' has no attribute {name!r}")
