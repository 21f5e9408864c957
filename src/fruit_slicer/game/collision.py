from .geometry import Point, Size
from .state import SliceDirection


def point_in_box(p: Point, top_left: Point, size: Size) -> bool:
    # boundary counts as inside
    return (top_left.x <= p.x <= top_left.x + size.width and
            top_left.y <= p.y <= top_left.y + size.height)


def slice_direction(p1: Point, p2: Point) -> SliceDirection:
    dx = abs(p2.x - p1.x)
    dy = abs(p2.y - p1.y)

    if dx > dy:
        return SliceDirection.HORIZONTAL
    return SliceDirection.VERTICAL
