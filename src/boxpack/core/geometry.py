"""
Geometry primitives — pivots, dimensions and the six axis-aligned rotations.

All rotations are orthogonal permutations of an item's intrinsic
(width, height, depth).  The letter order of a RotationType names which
intrinsic extent lands on the x, y and z axis respectively:

    WHD → (w, h, d)     HWD → (h, w, d)     HDW → (h, d, w)
    DHW → (d, h, w)     DWH → (d, w, h)     WDH → (w, d, h)
"""

from enum import IntEnum
from typing import NamedTuple


class Axis(IntEnum):
    """Index of a spatial axis inside a Pivot or Dimension."""
    WIDTH = 0
    HEIGHT = 1
    DEPTH = 2


class RotationType(IntEnum):
    """The six axis-aligned orientations, in the order placement tries them."""
    WHD = 0
    HWD = 1
    HDW = 2
    DHW = 3
    DWH = 4
    WDH = 5

    def __str__(self) -> str:
        letters = self.name.lower()
        return f"RotationType_{self.name} ({','.join(letters)})"


class Pivot(NamedTuple):
    """Minimum corner of a placed item in its bin's local frame."""
    x: float
    y: float
    z: float

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"


class Dimension(NamedTuple):
    """Extent of a box along the x, y and z axes."""
    x: float
    y: float
    z: float

    @property
    def volume(self) -> float:
        return self.x * self.y * self.z


START_POSITION = Pivot(0.0, 0.0, 0.0)

# (source index for x, y, z) into the intrinsic (w, h, d) triple.
_ROTATION_TABLE = {
    RotationType.WHD: (0, 1, 2),
    RotationType.HWD: (1, 0, 2),
    RotationType.HDW: (1, 2, 0),
    RotationType.DHW: (2, 1, 0),
    RotationType.DWH: (2, 0, 1),
    RotationType.WDH: (0, 2, 1),
}


def rotate(width: float, height: float, depth: float,
           rotation: RotationType) -> Dimension:
    """Effective extent of a (width, height, depth) box under *rotation*."""
    dims = (width, height, depth)
    ix, iy, iz = _ROTATION_TABLE[RotationType(rotation)]
    return Dimension(dims[ix], dims[iy], dims[iz])


def adjacent_pivot(position: Pivot, extent: Dimension, axis: Axis) -> Pivot:
    """Pivot touching the far face of a placed box along *axis*."""
    coords = list(position)
    coords[axis] += extent[axis]
    return Pivot(*coords)
