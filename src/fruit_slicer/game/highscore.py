# src/fruit_slicer/game/highscore.py
#
# Single numeric high score, kept under one key.

import json
import logging
import os

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"


class MemoryHighScoreStore:
    def __init__(self, value: int = 0):
        self.value = int(value)

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = int(value)


class JsonHighScoreStore:
    """
    {"highScore": <int>} in a small JSON file. A missing or unreadable file
    reads as 0.
    """

    def __init__(self, path: str):
        self.path = path

    def read(self) -> int:
        if not os.path.isfile(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return int(data.get(HIGH_SCORE_KEY, 0))
        except (OSError, ValueError, AttributeError, TypeError) as e:
            logger.warning("ignoring unreadable high score file %s: %s", self.path, e)
            return 0

    def write(self, value: int) -> None:
        """Best effort: a file that cannot be written only costs the record."""
        folder = os.path.dirname(self.path)
        try:
            if folder and not os.path.exists(folder):
                os.makedirs(folder)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({HIGH_SCORE_KEY: int(value)}, f)
        except OSError as e:
            logger.warning("could not save high score to %s: %s", self.path, e)
