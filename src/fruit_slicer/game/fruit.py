# src/fruit_slicer/game/fruit.py

from typing import Any, Optional

from .collision import point_in_box
from .geometry import Point, Size, Velocity
from .state import ObjectKind


class FlyingObject:
    """
    A fruit or a bomb crossing the board.

    Position is the top-left corner of the sprite box. Velocity and gravity
    are per tick; gravity is fixed at spawn time so a difficulty change does
    not alter objects already in flight.
    """

    def __init__(self, position: Point, velocity: Velocity, gravity: float,
                 size: Size, kind: ObjectKind = ObjectKind.FRUIT,
                 sprite_path: str = "", sliced: bool = False):
        self.x = float(position.x)
        self.y = float(position.y)
        self.velocity = Velocity(float(velocity.vx), float(velocity.vy))
        self.gravity = float(gravity)
        self.size = size
        self.kind = kind
        self.sprite_path = sprite_path
        self.sprite: Optional[Any] = None
        self.sliced = bool(sliced)

    def __repr__(self) -> str:
        state = "sliced" if self.sliced else "whole"
        return f"<{self.kind.name.lower()} {self.sprite_path!r} at ({self.x:.1f}, {self.y:.1f}) {state}>"

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_bomb(self) -> bool:
        return self.kind is ObjectKind.BOMB

    @property
    def is_fruit(self) -> bool:
        return not self.is_bomb

    def is_hazard(self) -> bool:
        return self.is_bomb

    def slice(self) -> None:
        self.sliced = True

    def integrate(self) -> None:
        # one simulation tick
        self.x += self.velocity.vx
        self.velocity.vy += self.gravity
        self.y += self.velocity.vy

    def contains(self, point: Point) -> bool:
        return point_in_box(point, self.position, self.size)

    def is_below(self, height: float) -> bool:
        return self.y > height

    def is_out_of_bounds(self, width: float, height: float) -> bool:
        return (self.is_below(height) or
                self.x > width or
                self.x < -self.size.width)
