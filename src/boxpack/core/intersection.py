"""
Overlap test between two placed, axis-aligned boxes.

Two boxes intersect only if their projections overlap on all three axis
pairs (width/height, height/depth, width/depth).  A projection pair
overlaps when, on both of its axes, half the summed extents exceed the
distance between the box centres by more than INTERSECT_TOLERANCE.

The tolerance is absolute (same units as the input dimensions), so boxes
that merely touch, or overlap by less than 0.01, are not intersecting.
"""

from boxpack.core.geometry import Axis, Dimension, Pivot

INTERSECT_TOLERANCE = 0.01

_AXIS_PAIRS = (
    (Axis.WIDTH, Axis.HEIGHT),
    (Axis.HEIGHT, Axis.DEPTH),
    (Axis.WIDTH, Axis.DEPTH),
)


def rect_intersect(
    p1: Pivot, d1: Dimension, p2: Pivot, d2: Dimension,
    x: Axis, y: Axis,
    tolerance: float = INTERSECT_TOLERANCE,
) -> bool:
    """Whether the projections of two boxes onto the (x, y) plane overlap."""
    cx1 = p1[x] + d1[x] / 2
    cy1 = p1[y] + d1[y] / 2
    cx2 = p2[x] + d2[x] / 2
    cy2 = p2[y] + d2[y] / 2

    ix = abs(cx1 - cx2)
    iy = abs(cy1 - cy2)

    return (
        (d1[x] + d2[x]) / 2 - ix > tolerance
        and (d1[y] + d2[y]) / 2 - iy > tolerance
    )


def boxes_intersect(
    p1: Pivot, d1: Dimension, p2: Pivot, d2: Dimension,
    tolerance: float = INTERSECT_TOLERANCE,
) -> bool:
    """Whether two placed boxes overlap by more than *tolerance*."""
    return all(
        rect_intersect(p1, d1, p2, d2, x, y, tolerance)
        for x, y in _AXIS_PAIRS
    )
