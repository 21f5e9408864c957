# src/fruit_slicer/game/geometry.py

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __str__(self) -> str:
        return f"Point({self.x}, {self.y})"


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def __str__(self) -> str:
        return f"Size({self.width}x{self.height})"


@dataclass
class Velocity:
    vx: float
    vy: float

    def __str__(self) -> str:
        return f"Velocity[{self.vx},{self.vy}]"
