"""
Packing validator — pure-function checks of a finished packing.

Checks:
  1. Bounds       — every packed item lies inside its bin
  2. Overlap      — no two items in the same bin intersect
  3. Conservation — every input item is packed exactly once or listed unfit

Each check raises a ValidationError subclass on the first violation;
``validate_packing`` runs all of them and returns True.
"""

from typing import Iterable, Optional, Sequence

from boxpack.core.intersection import INTERSECT_TOLERANCE
from boxpack.core.models import Bin, Item


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class ValidationError(Exception):
    """Base class for packing validation errors."""


class OutOfBoundsError(ValidationError):
    """A packed item extends outside its bin."""


class OverlapError(ValidationError):
    """Two packed items in the same bin intersect."""


class ConservationError(ValidationError):
    """An item was lost, duplicated, or both packed and unfit."""


# ─────────────────────────────────────────────────────────────────────────────
# Checks
# ─────────────────────────────────────────────────────────────────────────────

def check_bounds(bin: Bin) -> None:
    for item in bin.items:
        pos, dim = item.position, item.dimension
        if min(pos) < 0:
            raise OutOfBoundsError(
                f"{item.name} in {bin.name}: negative coordinate {tuple(pos)}"
            )
        if not bin.fits_within(pos, dim):
            raise OutOfBoundsError(
                f"{item.name} in {bin.name}: extent {tuple(dim)} at "
                f"{tuple(pos)} exceeds {bin.width}x{bin.height}x{bin.depth}"
            )


def check_overlap(bin: Bin) -> None:
    items = bin.items
    for i, first in enumerate(items):
        for second in items[i + 1:]:
            if first.intersect(second):
                raise OverlapError(
                    f"{first.name} and {second.name} in {bin.name} overlap "
                    f"by more than {INTERSECT_TOLERANCE}"
                )


def check_conservation(
    bins: Iterable[Bin],
    unfit_items: Sequence[Item],
    all_items: Optional[Sequence[Item]] = None,
) -> None:
    """
    Every item ends up in exactly one place.

    Args:
        bins:        Bins after packing.
        unfit_items: Items the packer could not place.
        all_items:   Items originally registered; when given, each must be
                     accounted for.
    """
    seen = {}
    for bin in bins:
        for item in bin.items:
            if id(item) in seen:
                raise ConservationError(
                    f"{item.name} packed twice ({seen[id(item)]} and {bin.name})"
                )
            seen[id(item)] = bin.name
    for item in unfit_items:
        if id(item) in seen:
            raise ConservationError(
                f"{item.name} is unfit but also packed in {seen[id(item)]}"
            )
        seen[id(item)] = "<unfit>"

    if all_items is not None:
        missing = [item.name for item in all_items if id(item) not in seen]
        if missing:
            raise ConservationError(f"items dropped: {', '.join(missing)}")
        if len(seen) != len(all_items):
            raise ConservationError(
                f"{len(seen)} items accounted for, {len(all_items)} registered"
            )


def validate_packing(
    bins: Iterable[Bin],
    unfit_items: Sequence[Item] = (),
    all_items: Optional[Sequence[Item]] = None,
) -> bool:
    """
    Validate a finished packing.

    Raises:
        OutOfBoundsError:  an item sticks out of its bin.
        OverlapError:      two items in one bin intersect.
        ConservationError: items are missing or duplicated.
    """
    bins = list(bins)
    for bin in bins:
        check_bounds(bin)
        check_overlap(bin)
    check_conservation(bins, unfit_items, all_items)
    return True
