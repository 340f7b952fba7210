"""Data model, geometry and validation for 3D bin packing."""

from .errors import (
    InvalidBinsVolumeError,
    NoBinsError,
    NoItemsError,
    PackingError,
    UnfitItemsExistError,
)
from .geometry import START_POSITION, Axis, Dimension, Pivot, RotationType, rotate
from .intersection import INTERSECT_TOLERANCE, boxes_intersect, rect_intersect
from .models import Bin, Item, RotationPolicy, new_bin, new_item

__all__ = [
    # Geometry
    "Axis",
    "Dimension",
    "Pivot",
    "RotationType",
    "START_POSITION",
    "rotate",
    "INTERSECT_TOLERANCE",
    "boxes_intersect",
    "rect_intersect",
    # Model
    "Bin",
    "Item",
    "RotationPolicy",
    "new_bin",
    "new_item",
    # Errors
    "PackingError",
    "NoBinsError",
    "NoItemsError",
    "InvalidBinsVolumeError",
    "UnfitItemsExistError",
]
