"""
Audio manager for Neon Missile Defense.

Implements the audio bridge on top of pygame.mixer.  Every cue is
fire-and-forget: a missing mixer, a missing sound file or a playback
error silently results in no sound.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

logger = logging.getLogger(__name__)


class SoundEvent(Enum):
    """Audio cues raised by the simulation."""
    NEW_MISSION = auto()
    PLAYER_LAUNCH = auto()
    ENEMY_LAUNCH = auto()
    INTERCEPT = auto()
    ENEMY_IMPACT = auto()
    STRUCTURE_DESTROYED = auto()
    WAVE_START = auto()
    WAVE_CLEAR = auto()
    NO_AMMO = auto()
    GAME_OVER = auto()


# Map each event to its .wav file name inside data/sfx/
_SOUND_FILES: dict[SoundEvent, str] = {
    SoundEvent.NEW_MISSION: "new_mission.wav",
    SoundEvent.PLAYER_LAUNCH: "player_launch.wav",
    SoundEvent.ENEMY_LAUNCH: "enemy_launch.wav",
    SoundEvent.INTERCEPT: "intercept.wav",
    SoundEvent.ENEMY_IMPACT: "enemy_impact.wav",
    SoundEvent.STRUCTURE_DESTROYED: "structure_destroyed.wav",
    SoundEvent.WAVE_START: "wave_start.wav",
    SoundEvent.WAVE_CLEAR: "wave_clear.wav",
    SoundEvent.NO_AMMO: "no_ammo.wav",
    SoundEvent.GAME_OVER: "game_over.wav",
}

# SDL drivers tried in order when the default one is unavailable
_FALLBACK_DRIVERS: list[Any] = [None, "pulseaudio", "alsa", "dsp", "dummy"]


@dataclass
class AudioManager:
    """Loads and plays sound effects.

    Falls back to silent operation when the mixer is unavailable or
    individual sound files are missing.
    """

    sfx_dir: str = os.path.join("data", "sfx")
    enabled: bool = True
    muted: bool = False

    # Internal state
    _initialized: bool = field(default=False, repr=False)
    _sounds: dict[SoundEvent, Any] = field(default_factory=dict, repr=False)

    def init(self) -> bool:
        """Initialise the mixer and load available sound files.

        Returns True if the mixer was initialised successfully.
        """
        if not self.enabled:
            return False

        try:
            import pygame.mixer
        except ImportError:
            logger.info("pygame.mixer unavailable, audio disabled")
            return False

        if not pygame.mixer.get_init() and not self._init_mixer(pygame.mixer):
            self._initialized = False
            return False

        self._initialized = True
        self._load_sounds()
        return True

    @staticmethod
    def _init_mixer(mixer: Any) -> bool:
        """Try each SDL audio driver until one initialises."""
        original_driver = os.environ.get("SDL_AUDIODRIVER")
        for driver in _FALLBACK_DRIVERS:
            try:
                if driver is not None:
                    os.environ["SDL_AUDIODRIVER"] = driver
                mixer.init()
                return True
            except Exception:
                continue
        # Leave the environment as we found it when nothing worked
        if original_driver is not None:
            os.environ["SDL_AUDIODRIVER"] = original_driver
        else:
            os.environ.pop("SDL_AUDIODRIVER", None)
        logger.info("no SDL audio driver could be initialised")
        return False

    def _load_sounds(self) -> None:
        """Attempt to load each configured sound file."""
        if not self._initialized:
            return
        try:
            import pygame.mixer
        except ImportError:
            return

        for event, filename in _SOUND_FILES.items():
            path = os.path.join(self.sfx_dir, filename)
            if os.path.isfile(path):
                try:
                    self._sounds[event] = pygame.mixer.Sound(path)
                except Exception:
                    logger.debug("could not load %s", path, exc_info=True)

    def play(self, event: SoundEvent, **params: Any) -> None:
        """Play the sound associated with *event*, if available.

        *params* (``wave``, ``bonus``) are accepted for every cue; the
        sample-based mixer does not vary playback with them.
        """
        if not self._initialized or not self.enabled or self.muted:
            return
        sound = self._sounds.get(event)
        if sound is not None:
            try:
                sound.play()
            except Exception:
                logger.debug("playback of %s failed", event, exc_info=True)

    def set_muted(self, muted: bool) -> None:
        self.muted = muted

    def shutdown(self) -> None:
        """Release mixer resources."""
        if self._initialized:
            try:
                import pygame.mixer
                pygame.mixer.quit()
            except Exception:
                pass
            self._initialized = False
            self._sounds.clear()
