"""
High-score persistence for Neon Missile Defense.

Stores the single best score as ``{"high_score": N}`` in a JSON file.
Reads fall back to 0 and writes are best-effort: persistence problems
never reach gameplay.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

from neondefense.config import DEFAULT_SCORES_FILE

logger = logging.getLogger(__name__)


def _parse_score(data: object) -> int:
    """Extract a non-negative score from decoded JSON."""
    if isinstance(data, dict):
        data = data.get("high_score", 0)
    score = int(str(data).strip())
    return max(score, 0)


@dataclass
class HighScoreStore:
    """Persistence bridge backed by a JSON file."""

    filepath: str = DEFAULT_SCORES_FILE

    def load_high_score(self) -> int:
        """Return the saved high score, or 0 if it cannot be read."""
        if not os.path.isfile(self.filepath):
            return 0
        try:
            with open(self.filepath, "r") as fh:
                return _parse_score(json.load(fh))
        except Exception:
            logger.warning("ignoring unreadable high-score file %s", self.filepath)
            return 0

    def save_high_score(self, score: int) -> None:
        """Persist *score*; failures are logged and ignored."""
        try:
            with open(self.filepath, "w") as fh:
                json.dump({"high_score": int(score)}, fh)
        except (OSError, TypeError, ValueError):
            logger.warning("could not save high score to %s", self.filepath)
