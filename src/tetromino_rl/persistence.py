from __future__ import annotations

import json
import logging
import os
from typing import Optional


logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "lumina-high-score"
DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".tetromino_rl", "highscore.json")


class HighScoreStore:
    """Best score kept as a single value in a small JSON file."""

    def __init__(self, path: Optional[str] = None, key: str = HIGH_SCORE_KEY) -> None:
        self.path = path or DEFAULT_PATH
        self.key = key

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
            return max(0, int(data.get(self.key, 0)))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("could not read high score from %s: %s", self.path, exc)
            return 0

    def save(self, value: int) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump({self.key: int(value)}, fh)

    def submit(self, score: int) -> bool:
        """Store ``score`` if it beats the saved best. Returns True when stored."""
        if score <= self.load():
            return False
        self.save(score)
        logger.info("new high score %d", score)
        return True
