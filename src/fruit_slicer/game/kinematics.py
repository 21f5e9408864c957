# src/fruit_slicer/game/kinematics.py
#
# Closed-form projectile solver for spawned objects.
#
# Units: positions in px, time in ms, velocities in px/tick, gravity in
# px/tick^2. One tick is the fixed simulation step (FRUIT_MOVE_INTERVAL_MS).
#
# The object starts at the floor (y = height), rises to a random peak in the
# upper half of the canvas and falls back, the whole flight taking roughly
# `flight_duration` ms.

import math
import random
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidParameters
from .geometry import Point, Size, Velocity

MARGIN = 0.05


@dataclass(frozen=True)
class Trajectory:
    position: Point
    velocity: Velocity
    gravity: float
    peak_height: float
    rising_ticks: int
    falling_ticks: int

    @property
    def total_ticks(self) -> int:
        return self.rising_ticks + self.falling_ticks


def _check_timing(flight_duration: float, step: float) -> None:
    if not flight_duration > 0:
        raise InvalidParameters(f"flight duration must be > 0, got {flight_duration}")
    if not step > 0:
        raise InvalidParameters(f"simulation step must be > 0, got {step}")


def _check_canvas(width: float, height: float) -> None:
    if not (width > 0 and height > 0):
        raise InvalidParameters(f"canvas must be non-empty, got {width}x{height}")


def calculate_gravity(height: float, flight_duration: float, step: float) -> float:
    """
    Gravity such that a free-falling object crosses the whole canvas height
    in half of the flight duration: g = 2 * S / t^2, t in ticks.
    """
    if not height > 0:
        raise InvalidParameters(f"canvas height must be > 0, got {height}")
    _check_timing(flight_duration, step)
    ticks = flight_duration / 2 / step
    return (height * 2) / ticks / ticks


def random_position(width: float, height: float, object_width: float,
                    rng: Optional[random.Random] = None) -> Point:
    """Random spawn point on the floor, 5% margin left and right."""
    _check_canvas(width, height)
    rng = rng or random.Random()

    span = width * (1 - 2 * MARGIN) - object_width
    if span < 0:
        raise InvalidParameters(
            f"canvas width {width} too narrow for an object of width {object_width}"
        )
    x = math.floor(width * MARGIN + rng.random() * span)
    return Point(x, height)


def random_peak_height(height: float, rng: Optional[random.Random] = None) -> float:
    rng = rng or random.Random()
    return (height / 2) * (MARGIN + rng.random() * (1 - MARGIN))


def solve_velocity(start: Point, width: float, height: float, gravity: float,
                   flight_duration: float, step: float, peak_height: float):
    """
    Initial velocity reaching `peak_height` after the rising phase.

    Returns (velocity, rising_ticks, falling_ticks).
    """
    _check_canvas(width, height)
    _check_timing(flight_duration, step)
    if not gravity > 0:
        raise InvalidParameters(f"gravity must be > 0, got {gravity}")

    # distance travelled before the object starts to fall
    distance_y = height - peak_height
    # free fall time from the peak, rounded half up
    falling = int(math.floor(math.sqrt((distance_y * 2) / gravity) + 0.5))
    rising = flight_duration / step - falling
    if rising <= 0:
        raise InvalidParameters(
            f"no rising time left (flight {flight_duration}ms, falling {falling} ticks)"
        )

    vy = -(distance_y + (gravity * rising * rising) / 2) / rising
    distance_x = width / 2 - start.x
    vx = ((distance_x * 2) / flight_duration) * step
    return Velocity(vx, vy), int(round(rising)), falling


def solve_trajectory(width: float, height: float, object_size: Size, gravity: float,
                     flight_duration: float, step: float,
                     rng: Optional[random.Random] = None) -> Trajectory:
    rng = rng or random.Random()
    position = random_position(width, height, object_size.width, rng)
    peak = random_peak_height(height, rng)
    velocity, rising, falling = solve_velocity(
        position, width, height, gravity, flight_duration, step, peak
    )
    return Trajectory(position, velocity, gravity, peak, rising, falling)
