"""
Core data model — items to be packed and the bins that hold them.

Item
    A rectangular solid with intrinsic (width, height, depth) and weight.
    Its placement state (rotation_type, position) is only meaningful once a
    Bin has committed it.

Bin
    An axis-aligned container with its corner at the origin.  It owns the
    ordered list of items placed inside it; insertion order is placement
    order and drives pivot generation in the packer.

Placement is split into a pure query and a mutation:

    found = bin.try_place(item, pivot)      # never mutates anything
    if found is not None:
        bin.commit(item, *found, pivot)

``Bin.put_item`` wraps both steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from boxpack.core.geometry import (
    START_POSITION,
    Dimension,
    Pivot,
    RotationType,
    rotate,
)
from boxpack.core.intersection import boxes_intersect


class RotationPolicy(str, Enum):
    """How Bin.try_place resolves rotation against the overlap test."""

    # Only the first in-bounds rotation is checked for overlap.
    FIRST_FIT = "first_fit"
    # Every in-bounds rotation is checked; the first overlap-free one wins.
    ANY_FIT = "any_fit"


def _check_non_negative(owner: str, **values: float) -> None:
    for key, value in values.items():
        if value < 0:
            raise ValueError(f"{owner}: {key} must be non-negative, got {value}")


# ─────────────────────────────────────────────────────────────────────────────
# Item
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(eq=False)
class Item:
    """
    A box waiting to be packed, or already packed inside a bin.

    Attributes:
        name:          Label used in reports and diagnostics.
        width/height/depth: Intrinsic extents.
        weight:        Tracked for reporting and the optional weight rule.
        rotation_type: Orientation chosen at commit time.
        position:      Minimum corner chosen at commit time.

    Items compare by identity: two items with identical fields are still
    two separate boxes.
    """
    name: str
    width: float
    height: float
    depth: float
    weight: float = 0.0
    rotation_type: RotationType = RotationType.WHD
    position: Pivot = START_POSITION

    def __post_init__(self) -> None:
        _check_non_negative(
            f"Item {self.name!r}", width=self.width, height=self.height,
            depth=self.depth, weight=self.weight,
        )

    @property
    def volume(self) -> float:
        """Intrinsic volume; the same under every rotation."""
        return self.width * self.height * self.depth

    @property
    def dimension(self) -> Dimension:
        """Effective extent under the current rotation_type."""
        return self.dimension_for(self.rotation_type)

    def dimension_for(self, rotation: RotationType) -> Dimension:
        return rotate(self.width, self.height, self.depth, rotation)

    def intersect(self, other: "Item") -> bool:
        """Whether this placed item overlaps another placed item."""
        return boxes_intersect(
            self.position, self.dimension, other.position, other.dimension,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "dims": [self.width, self.height, self.depth],
            "weight": self.weight,
            "position": list(self.position),
            "rotation": self.rotation_type.name,
            "placed_dims": list(self.dimension),
        }

    def __str__(self) -> str:
        return (
            f"{self.name}({self.width:g}x{self.height:g}x{self.depth:g}, "
            f"weight: {self.weight:g}) pos({self.position!s}) "
            f"rt({self.rotation_type!s})"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Bin
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(eq=False)
class Bin:
    """
    A container that items are packed into.

    Attributes:
        name:       Label used in reports.
        width/height/depth: Extents along x, y and z.
        max_weight: Weight capacity (only enforced when requested).
        items:      Packed occupants, in placement order.
    """
    name: str
    width: float
    height: float
    depth: float
    max_weight: float = 0.0
    items: List[Item] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_non_negative(
            f"Bin {self.name!r}", width=self.width, height=self.height,
            depth=self.depth, max_weight=self.max_weight,
        )

    # ── Volume & weight ──────────────────────────────────────────────────

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def used_volume(self) -> float:
        return sum(item.volume for item in self.items)

    @property
    def available_volume(self) -> float:
        return self.volume - self.used_volume

    @property
    def volume_utilization(self) -> float:
        """Percentage of the bin's volume consumed by its items."""
        if self.volume == 0:
            return 0.0
        return self.used_volume * 100.0 / self.volume

    @property
    def used_weight(self) -> float:
        return sum(item.weight for item in self.items)

    @property
    def available_weight(self) -> float:
        return self.max_weight - self.used_weight

    # ── Placement ────────────────────────────────────────────────────────

    def fits_within(self, pivot: Pivot, dim: Dimension) -> bool:
        """Whether a box of extent *dim* at *pivot* stays inside the bin."""
        return (
            self.width >= pivot[0] + dim[0]
            and self.height >= pivot[1] + dim[1]
            and self.depth >= pivot[2] + dim[2]
        )

    def overlaps(self, pivot: Pivot, dim: Dimension) -> bool:
        """Whether a box at *pivot* would intersect any current occupant."""
        return any(
            boxes_intersect(pivot, dim, other.position, other.dimension)
            for other in self.items
        )

    def try_place(
        self,
        item: Item,
        pivot: Pivot,
        rotation_policy: RotationPolicy = RotationPolicy.FIRST_FIT,
        enforce_max_weight: bool = False,
    ) -> Optional[Tuple[RotationType, Dimension]]:
        """
        Find a rotation that places *item* at *pivot*, without mutating.

        Rotations are tried in RotationType order.  Under FIRST_FIT only the
        first rotation that fits the bin bounds is checked against the
        occupants; under ANY_FIT the search continues past overlapping
        rotations.

        Returns:
            (rotation, effective dimension), or None if the item cannot go
            at *pivot*.
        """
        pivot = Pivot(*pivot)
        if enforce_max_weight and self.used_weight + item.weight > self.max_weight:
            return None

        for rotation in RotationType:
            dim = item.dimension_for(rotation)
            if not self.fits_within(pivot, dim):
                continue
            if not self.overlaps(pivot, dim):
                return rotation, dim
            if rotation_policy is RotationPolicy.FIRST_FIT:
                return None
        return None

    def commit(self, item: Item, rotation: RotationType, pivot: Pivot) -> None:
        """Record the placement on *item* and append it to the occupants."""
        item.rotation_type = rotation
        item.position = Pivot(*pivot)
        self.items.append(item)

    def put_item(
        self,
        item: Item,
        pivot: Pivot,
        rotation_policy: RotationPolicy = RotationPolicy.FIRST_FIT,
        enforce_max_weight: bool = False,
    ) -> bool:
        """Place *item* at *pivot* if possible.  Returns True on success."""
        found = self.try_place(item, pivot, rotation_policy, enforce_max_weight)
        if found is None:
            return False
        self.commit(item, found[0], pivot)
        return True

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "dims": [self.width, self.height, self.depth],
            "max_weight": self.max_weight,
            "utilization_pct": round(self.volume_utilization, 4),
            "items": [item.to_dict() for item in self.items],
        }

    def __str__(self) -> str:
        return (
            f"{self.name}({self.width:g}x{self.height:g}x{self.depth:g}, "
            f"max_weight:{self.max_weight:g})"
        )


def new_bin(name: str, width: float, height: float, depth: float,
            max_weight: float) -> Bin:
    return Bin(name, width, height, depth, max_weight)


def new_item(name: str, width: float, height: float, depth: float,
             weight: float) -> Item:
    return Item(name, width, height, depth, weight)
