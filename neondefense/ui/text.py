"""
Score tracking and HUD text for Neon Missile Defense.

``ScoreDisplay`` accumulates the mission score and the all-time high score.
When a new high score is reached it notifies ``on_new_high_score`` so the
caller can persist it; that callback is fire-and-forget.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from neondefense.bridges import safe_call


@dataclass
class ScoreDisplay:
    """Tracks and formats the player score and high score for HUD display."""

    player_score: int = 0
    high_score: int = 0
    on_new_high_score: Optional[Callable[[int], None]] = field(
        default=None, repr=False, compare=False,
    )

    def add(self, points: int) -> bool:
        """Add *points* to the player score.

        Returns True if the high score was raised.  Negative amounts are
        ignored; the score never goes down within a mission.
        """
        if points <= 0:
            return False
        self.player_score += points
        if self.player_score > self.high_score:
            self.high_score = self.player_score
            if self.on_new_high_score is not None:
                safe_call(self.on_new_high_score, self.high_score)
            return True
        return False

    def reset(self) -> None:
        """Reset player score (high score persists)."""
        self.player_score = 0

    def format_score(self) -> str:
        return f"SCORE: {self.player_score:,}"

    def format_high_score(self) -> str:
        return f"HIGH: {self.high_score:,}"
