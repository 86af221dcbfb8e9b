"""
Collaborator contracts for the simulation core.

The core talks to rendering, audio, persistence and the HUD only through
these interfaces.  Each base class is a working no-op so a headless game
(tests, bots) needs no presentation layer at all.  Every call the core
makes goes through :func:`safe_call`, so a failing collaborator can never
interrupt a tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class VisualKind(Enum):
    """Presentation category requested when an entity is created."""
    CITY = auto()
    BASE = auto()
    ENEMY_MISSILE = auto()
    SPLIT_MISSILE = auto()        # enemy warhead that will fragment
    PLAYER_MISSILE = auto()
    WARHEAD_EXPLOSION = auto()
    DEFENSE_EXPLOSION = auto()


def safe_call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call a collaborator, logging and discarding any exception."""
    try:
        return fn(*args, **kwargs)
    except Exception:
        logger.warning("collaborator call %r failed", fn, exc_info=True)
        return None


# ── Render ─────────────────────────────────────────────────────────────────


class RenderBridge:
    """Receives entity lifecycle notifications.

    ``on_entity_created`` may return an opaque handle; the registry
    stores it on ``entity.visual`` and never looks at it again.
    """

    def on_entity_created(self, entity: Any, visual_kind: VisualKind) -> Any:
        return None

    def on_entity_updated(self, entity: Any) -> None:
        pass

    def on_entity_removed(self, entity: Any) -> None:
        pass


# ── Audio ──────────────────────────────────────────────────────────────────


class SilentAudio:
    """Audio bridge that ignores every cue."""

    def play(self, event: Any, **params: Any) -> None:
        pass


# ── Persistence ────────────────────────────────────────────────────────────


class NullHighScoreStore:
    """Persistence bridge that remembers nothing."""

    def load_high_score(self) -> int:
        return 0

    def save_high_score(self, score: int) -> None:
        pass


# ── HUD ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HudSnapshot:
    """Read-only view of the values the HUD displays."""
    score: int
    high_score: int
    wave: int
    alive_city_count: int
    status_message: str


HudListener = Optional[Callable[[HudSnapshot], None]]
