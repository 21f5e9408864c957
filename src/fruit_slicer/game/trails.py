from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from .geometry import Point


@dataclass
class TrailPoint:
    x: float
    y: float
    t: float


class Trails:
    """Recent pointer samples: the blade trail and the last swipe segment."""

    def __init__(self, max_len=12, ttl_s=0.25):
        self.max_len = int(max_len)
        self.ttl_s = float(ttl_s)
        self.data: Deque[TrailPoint] = deque(maxlen=self.max_len)

    def reset(self):
        self.data.clear()

    def update(self, x: float, y: float, t: float) -> None:
        self.data.append(TrailPoint(float(x), float(y), float(t)))

    def last_segment(self) -> Optional[Tuple[Point, Point]]:
        """
        (previous, current) pointer positions, or None before the second sample.
        """
        if len(self.data) < 2:
            return None
        p0, p1 = self.data[-2], self.data[-1]
        return Point(p0.x, p0.y), Point(p1.x, p1.y)

    def get(self, now: Optional[float] = None) -> List[Tuple[int, int]]:
        pts = list(self.data)
        if now is not None:
            pts = [p for p in pts if (now - p.t) <= self.ttl_s]
        return [(int(p.x), int(p.y)) for p in pts]
