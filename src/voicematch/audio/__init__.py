"""Preview audition for voicematch.

Plays or saves candidate preview audio using pygame.
"""

from .player import AudioPlayer

__all__ = ["AudioPlayer"]
