"""
boxpack — heuristic 3D bin packing.

Public API:
    from boxpack import Bin, Item, Packer
    packer = Packer(fewest_boxes=True)
    packer.add_bin(Bin("crate", 100, 80, 60, 200))
    packer.add_item(Item("box", 20, 20, 20, 2))
    packer.pack()
"""

from boxpack.algorithms.packer import Packer
from boxpack.config import ExperimentConfig, PackerConfig, load_config
from boxpack.core import (
    INTERSECT_TOLERANCE,
    START_POSITION,
    Axis,
    Bin,
    Dimension,
    InvalidBinsVolumeError,
    Item,
    NoBinsError,
    NoItemsError,
    PackingError,
    Pivot,
    RotationPolicy,
    RotationType,
    UnfitItemsExistError,
    new_bin,
    new_item,
    rotate,
)

__version__ = "0.1.0"

__all__ = [
    "Packer",
    "PackerConfig",
    "ExperimentConfig",
    "load_config",
    "Axis",
    "Bin",
    "Dimension",
    "Item",
    "Pivot",
    "RotationPolicy",
    "RotationType",
    "START_POSITION",
    "INTERSECT_TOLERANCE",
    "rotate",
    "new_bin",
    "new_item",
    "PackingError",
    "NoBinsError",
    "NoItemsError",
    "InvalidBinsVolumeError",
    "UnfitItemsExistError",
]
