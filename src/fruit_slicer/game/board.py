# src/fruit_slicer/game/board.py
#
# Owns the objects in flight.
# Responsibilities:
# - spawn fruits / bombs on a solved trajectory
# - insert an object only once its sprite has loaded (and the board was not
#   cleared in the meantime)
# - advance objects each tick, drop the ones that left the canvas, report misses
# - pointer hit test and the slice transition (fruit -> two falling halves)
#
# Rendering and sprite loading are delegated: the board only calls
# loader.load(path) -> Future and surface.draw_image(...).

import logging
import os
import random
from concurrent.futures import Future
from typing import Callable, List, Optional, Tuple

from .collision import slice_direction
from .errors import InvalidParameters, NotFound, ResourceLoadFailure
from .fruit import FlyingObject
from .geometry import Point, Size, Velocity
from .kinematics import solve_trajectory
from .spawner import Spawner
from .state import ObjectKind, SliceDirection

logger = logging.getLogger(__name__)

BOMB_REASON = "You've sliced a bomb"


def sliced_sprite_paths(path: str, direction: SliceDirection) -> Tuple[str, str]:
    """
    "images/apple.png" -> ("images/apple_v1.png", "images/apple_v2.png") for a
    vertical cut, "_h1" / "_h2" for a horizontal one.
    """
    stem, ext = os.path.splitext(path)
    suffix = "_v" if direction is SliceDirection.VERTICAL else "_h"
    return f"{stem}{suffix}1{ext}", f"{stem}{suffix}2{ext}"


class Board:
    def __init__(
        self,
        width: int,
        height: int,
        loader,
        spawner: Spawner,
        on_miss: Callable[[], None],
        on_hazard: Callable[[str], None],
        on_score: Callable[[], None],
        object_size: Size = Size(90, 90),
        step_ms: float = 20.0,
        rng: Optional[random.Random] = None,
    ):
        self.width = width
        self.height = height
        self.loader = loader
        self.spawner = spawner
        self.on_miss = on_miss
        self.on_hazard = on_hazard
        self.on_score = on_score
        self.object_size = object_size
        self.step_ms = float(step_ms)
        self.rng = rng or random.Random()

        self._objects: List[FlyingObject] = []
        self._pending: List[Tuple[Future, FlyingObject, int]] = []
        self.generation = 0

    @property
    def objects(self) -> Tuple[FlyingObject, ...]:
        return tuple(self._objects)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, obj) -> bool:
        return any(o is obj for o in self._objects)

    # ------------------------------------------------------------------
    # spawning
    # ------------------------------------------------------------------
    def add(self, obj: FlyingObject) -> None:
        """Queue an object; it joins the board once its sprite is loaded."""
        future = self.loader.load(obj.sprite_path)
        self._pending.append((future, obj, self.generation))

    def spawn(self, kind: ObjectKind, gravity: float, flight_duration: float) -> FlyingObject:
        """
        Builds an object on a fresh trajectory and asks for its sprite.
        The object joins the board on the next insert_loaded().
        """
        trajectory = solve_trajectory(
            self.width, self.height, self.object_size, gravity,
            flight_duration, self.step_ms, self.rng,
        )
        obj = FlyingObject(
            trajectory.position,
            trajectory.velocity,
            trajectory.gravity,
            self.object_size,
            kind=kind,
            sprite_path=self.spawner.sprite_for(kind),
        )
        self.add(obj)
        logger.debug("spawned %r (peak %.1f, %d+%d ticks)", obj,
                     trajectory.peak_height, trajectory.rising_ticks, trajectory.falling_ticks)
        return obj

    def spawn_wave(self, count: int, gravity: float, flight_duration: float) -> List[FlyingObject]:
        spawned = []
        for kind in self.spawner.next_wave(count):
            try:
                spawned.append(self.spawn(kind, gravity, flight_duration))
            except InvalidParameters as e:
                logger.warning("skipping %s spawn: %s", kind.name.lower(), e)
        return spawned

    def insert_loaded(self) -> int:
        """Move objects whose sprite finished loading onto the board."""
        if not self._pending:
            return 0

        inserted = 0
        still_pending = []
        for future, obj, generation in self._pending:
            if not future.done():
                still_pending.append((future, obj, generation))
                continue
            if generation != self.generation:
                # requested before the last clear()
                continue

            error = future.exception()
            if isinstance(error, ResourceLoadFailure):
                logger.debug("dropping %r: %s", obj, error)
                continue
            if error is not None:
                logger.warning("dropping %r, sprite decode failed: %r", obj, error)
                continue

            obj.sprite = future.result()
            self._objects.append(obj)
            inserted += 1

        self._pending = still_pending
        return inserted

    def clear(self) -> None:
        self._objects = []
        self._pending = []
        self.generation += 1

    # ------------------------------------------------------------------
    # simulation
    # ------------------------------------------------------------------
    def tick(self) -> None:
        self.insert_loaded()
        if not self._objects:
            return

        keep: List[FlyingObject] = []
        missed = 0
        for obj in self._objects:
            obj.integrate()

            if obj.is_out_of_bounds(self.width, self.height):
                if obj.is_below(self.height) and not obj.sliced and obj.is_fruit:
                    missed += 1
                continue
            keep.append(obj)

        self._objects = keep
        for _ in range(missed):
            self.on_miss()

    # ------------------------------------------------------------------
    # slicing
    # ------------------------------------------------------------------
    def hit_test(self, position: Point, previous: Optional[Point] = None) -> List[FlyingObject]:
        """
        Slices every whole object under the pointer. The cut axis comes from
        the pointer movement (previous -> position).
        Returns the objects that got sliced, in encounter order.
        """
        self.insert_loaded()
        direction = slice_direction(previous or position, position)

        hits = []
        for obj in list(self._objects):
            if obj.sliced or obj not in self:
                continue
            if not obj.contains(position):
                continue
            self.slice(obj, direction)
            hits.append(obj)
        return hits

    def slice(self, obj: FlyingObject, direction: SliceDirection) -> List[FlyingObject]:
        """
        Bomb: hazard callback, nothing spawned.
        Fruit: score callback, the fruit is replaced by two sliced halves.
        """
        if obj not in self:
            raise NotFound(f"{obj!r} is not on the board")
        if obj.sliced:
            return []

        obj.slice()
        if obj.is_hazard():
            logger.info("bomb sliced at (%.0f, %.0f)", obj.x, obj.y)
            self.on_hazard(BOMB_REASON)
            return []

        self.on_score()
        halves = self._halves(obj, direction)
        self._objects = [o for o in self._objects if o is not obj]
        for half in halves:
            self.add(half)
        return halves

    def _halves(self, obj: FlyingObject, direction: SliceDirection) -> List[FlyingObject]:
        w, h = obj.size.width, obj.size.height
        if direction is SliceDirection.HORIZONTAL:
            size = Size(w, h / 2)
            second = Point(obj.x, obj.y + size.height)
        else:
            size = Size(w / 2, h)
            second = Point(obj.x + size.width, obj.y)

        path_one, path_two = sliced_sprite_paths(obj.sprite_path, direction)
        speed = abs(obj.velocity.vx)

        # half one drifts left, half two right; both start a fresh fall
        one = FlyingObject(obj.position, Velocity(-speed, 0.0), obj.gravity, size,
                           kind=obj.kind, sprite_path=path_one, sliced=True)
        two = FlyingObject(second, Velocity(speed, 0.0), obj.gravity, size,
                           kind=obj.kind, sprite_path=path_two, sliced=True)
        return [one, two]

    def draw(self, surface) -> None:
        for obj in self._objects:
            if obj.sprite is None:
                continue
            surface.draw_image(obj.sprite, obj.x, obj.y, obj.size.width, obj.size.height)
