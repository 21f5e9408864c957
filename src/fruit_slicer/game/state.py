# src/fruit_slicer/game/state.py

from enum import Enum, auto


class Phase(Enum):
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class ObjectKind(Enum):
    FRUIT = auto()
    BOMB = auto()


class SliceDirection(Enum):
    VERTICAL = auto()
    HORIZONTAL = auto()
