"""User interface components."""

from .audio import AudioManager, SoundEvent
from .high_scores import HighScoreStore
from .text import ScoreDisplay

__all__ = [
    "AudioManager",
    "HighScoreStore",
    "ScoreDisplay",
    "SoundEvent",
]
