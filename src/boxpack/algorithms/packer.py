"""
3D bin packer — first-fit-decreasing with bin escalation.

Usage:
    packer = Packer()
    packer.add_bin(Bin("small", 10, 10, 10, 100))
    packer.add_item(Item("a", 5, 5, 5, 1), Item("b", 5, 5, 5, 1))
    packer.pack()                 # raises a PackingError subclass on failure
    for bin in packer.bins:
        for item in bin.items:    # placed with rotation_type and position
            ...

Flow of Packer.pack():
  1. Validate: sort bins ascending / items descending by volume on local
     copies, reject empty input and infeasible volumes.
  2. Fewest-boxes pass (optional): try to put everything into the smallest
     bin that could hold it, then fill bins whose available volume is just
     below what is still needed.
  3. Greedy pass: find a bin for the largest pending item and pack as many
     following items into it as possible.
  4. Items that fit nowhere end up in unfit_items.

Placement inside a bin starts at the origin; later items are tried at the
far face of every occupant along +width, then +height, then +depth.  When
no pivot works the item escalates to a bin with strictly more available
volume.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from boxpack.core.errors import (
    InvalidBinsVolumeError,
    NoBinsError,
    NoItemsError,
    UnfitItemsExistError,
)
from boxpack.core.geometry import (
    START_POSITION,
    Axis,
    Pivot,
    RotationType,
    adjacent_pivot,
)
from boxpack.core.models import Bin, Item, RotationPolicy

if TYPE_CHECKING:
    from boxpack.config import PackerConfig

logger = logging.getLogger(__name__)


def _total_volume(items: Sequence[Item]) -> float:
    return sum(item.volume for item in items)


class Packer:
    """
    Packs registered items into registered bins.

    Attributes:
        fewest_boxes:       Run the fewest-boxes pass before the greedy pass.
        rotation_policy:    How rotations are resolved against overlap.
        enforce_max_weight: Reject placements that exceed a bin's max_weight.
        bins:               Registered bins, in registration order.
        items:              Registered items, in registration order.
        unfit_items:        Items that could not be packed by the last pack().

    A Packer is not re-entrant: bins and items carry placement state.
    """

    def __init__(
        self,
        fewest_boxes: bool = False,
        rotation_policy: RotationPolicy = RotationPolicy.FIRST_FIT,
        enforce_max_weight: bool = False,
    ) -> None:
        self.fewest_boxes = fewest_boxes
        self.rotation_policy = RotationPolicy(rotation_policy)
        self.enforce_max_weight = enforce_max_weight
        self.bins: List[Bin] = []
        self.items: List[Item] = []
        self.unfit_items: List[Item] = []
        # Bins ascending by volume; the order every scan walks.
        self._bins: List[Bin] = []

    @classmethod
    def from_config(cls, config: "PackerConfig") -> "Packer":
        return cls(
            fewest_boxes=config.fewest_boxes,
            rotation_policy=config.rotation_policy,
            enforce_max_weight=config.enforce_max_weight,
        )

    # ── Registration ─────────────────────────────────────────────────────

    def add_bin(self, *bins: Bin) -> None:
        """
        Register bins.

        The volume-sorted scan order is kept current here, so
        get_bigger_bin_than and find_fitted_bin also work before pack().
        """
        self.bins.extend(bins)
        self._bins = sorted(self.bins, key=lambda b: b.volume)

    def add_item(self, *items: Item) -> None:
        self.items.extend(items)

    # ── Packing ──────────────────────────────────────────────────────────

    def pack(self) -> None:
        """
        Pack all registered items.

        Raises:
            NoBinsError:            no bins registered.
            NoItemsError:           no items registered.
            InvalidBinsVolumeError: the largest item exceeds the largest bin,
                                    or total item volume exceeds total bin
                                    volume.  Nothing is placed.
            UnfitItemsExistError:   some items fit in no bin; everything else
                                    stays packed and inspectable.

        Calling pack() again starts over: bins are emptied and items lose
        the placement of the previous run.
        """
        self._reset()
        self._bins = sorted(self.bins, key=lambda b: b.volume)
        pending = sorted(self.items, key=lambda i: i.volume, reverse=True)

        if not self._bins:
            raise NoBinsError()
        if not pending:
            raise NoItemsError()
        self._check_volumes(pending)

        logger.info(
            "Packing %d items into %d bins (fewest_boxes=%s, rotation=%s)",
            len(pending), len(self._bins), self.fewest_boxes,
            self.rotation_policy.value,
        )

        if self.fewest_boxes:
            pending = self._pack_fewest_boxes(pending)

        while pending:
            bin = self.find_fitted_bin(pending[0])
            if bin is None:
                self._unfit_item(pending)
                continue
            pending = self.pack_to_bin(bin, pending)

        used = sum(1 for b in self._bins if b.items)
        logger.info(
            "Packed %d items into %d bins, %d unfit",
            len(self.items) - len(self.unfit_items), used, len(self.unfit_items),
        )
        if self.unfit_items:
            raise UnfitItemsExistError(self.unfit_items)

    def _reset(self) -> None:
        self.unfit_items = []
        for bin in self.bins:
            bin.items.clear()
        for item in self.items:
            item.rotation_type = RotationType.WHD
            item.position = START_POSITION

    def _check_volumes(self, pending: Sequence[Item]) -> None:
        largest_item = pending[0]
        largest_bin = self._bins[-1]
        if largest_bin.volume < largest_item.volume:
            raise InvalidBinsVolumeError(
                f"item {largest_item.name} ({largest_item.volume:g}) is larger "
                f"than the largest bin {largest_bin.name} ({largest_bin.volume:g})"
            )

        item_volume = _total_volume(pending)
        bin_volume = sum(b.volume for b in self._bins)
        if bin_volume < item_volume:
            raise InvalidBinsVolumeError(
                f"total item volume {item_volume:g} exceeds "
                f"total bin volume {bin_volume:g}"
            )

    def _pack_fewest_boxes(self, pending: List[Item]) -> List[Item]:
        """Volume-driven pass that tries to keep the number of bins low."""
        # A single bin that might hold everything that is left?  Rescanned
        # while a round places something: a bin passed over can qualify
        # once the need drops.
        progress = True
        while pending and progress:
            progress = False
            for bin in self._bins:
                if not pending:
                    break
                if bin.volume >= _total_volume(pending):
                    logger.debug("Fewest boxes: trying all %d items in %s",
                                 len(pending), bin.name)
                    before = len(pending)
                    pending = self.pack_to_bin(bin, pending)
                    progress = progress or len(pending) < before

        # Otherwise fill the bin whose free volume is closest below the need.
        while pending:
            need = _total_volume(pending)
            found = 0.0
            target: Optional[Bin] = None
            for bin in self._bins:
                available = bin.available_volume
                if found <= available < need:
                    target = bin
                    found = available
            if target is None:
                break

            before = len(pending)
            logger.debug("Fewest boxes: filling %s (available %g, need %g)",
                         target.name, found, need)
            pending = self.pack_to_bin(target, pending)
            if len(pending) >= before:
                break
        return pending

    def _unfit_item(self, pending: List[Item]) -> None:
        item = pending.pop(0)
        logger.debug("No bin fits %s", item.name)
        self.unfit_items.append(item)

    # ── Placement ────────────────────────────────────────────────────────

    def _put(self, bin: Bin, item: Item, pivot: Pivot) -> bool:
        return bin.put_item(
            item, pivot, self.rotation_policy, self.enforce_max_weight,
        )

    def _put_at_pivots(self, bin: Bin, item: Item) -> bool:
        """
        Try the far face of every occupant, axis by axis.

        The order is axis-major: the +width face of every occupant comes
        before any +height face, and those before any +depth face.  It is
        not occupant by occupant.
        """
        for axis in Axis:
            for occupant in list(bin.items):
                pivot = adjacent_pivot(occupant.position, occupant.dimension, axis)
                if self._put(bin, item, pivot):
                    return True
        return False

    def _put_anywhere(self, bin: Bin, item: Item) -> bool:
        if not bin.items:
            return self._put(bin, item, START_POSITION)
        return self._put_at_pivots(bin, item)

    def _escalate(self, bin: Bin, item: Item) -> Optional[Bin]:
        """Walk towards bins with more available volume until *item* fits."""
        candidate = self.get_bigger_bin_than(bin)
        while candidate is not None:
            if self._put_anywhere(candidate, item):
                logger.debug("Escalated %s from %s to %s",
                             item.name, bin.name, candidate.name)
                return candidate
            candidate = self.get_bigger_bin_than(candidate)
        return None

    def pack_to_bin(self, bin: Bin, items: Sequence[Item]) -> List[Item]:
        """
        Pack *items* into *bin*, escalating to bigger bins when needed.

        The first item goes to the origin of *bin* (or of the first bigger
        bin that accepts it there); each later item goes to the first free
        pivot of the current bin, or escalates.

        Returns:
            Items that could not be placed anywhere along the way.
        """
        if not items:
            return []
        first = items[0]

        if not any(occupant is first for occupant in bin.items):
            current: Optional[Bin] = bin
            while current is not None and not self._put(current, first, START_POSITION):
                current = self.get_bigger_bin_than(current)
            if current is None:
                logger.debug("%s fits at the origin of no bin from %s on",
                             first.name, bin.name)
                return list(items)
            bin = current

        unpacked: List[Item] = []
        for item in items[1:]:
            if self._put_at_pivots(bin, item):
                continue
            escalated = self._escalate(bin, item)
            if escalated is None:
                unpacked.append(item)
            else:
                bin = escalated
        return unpacked

    def get_bigger_bin_than(self, bin: Bin) -> Optional[Bin]:
        """First bin, by ascending volume, with more available volume than *bin*."""
        volume = bin.available_volume
        for other in self._bins:
            if other.available_volume > volume:
                return other
        return None

    def find_fitted_bin(self, item: Item) -> Optional[Bin]:
        """
        First bin, by ascending volume, that accepts *item* at its origin.

        On an empty bin this is only a probe and nothing is placed.  On a
        bin that already has occupants the trial placement is kept.
        """
        for bin in self._bins:
            found = bin.try_place(
                item, START_POSITION, self.rotation_policy, self.enforce_max_weight,
            )
            if found is None:
                continue
            if bin.items:
                bin.commit(item, found[0], START_POSITION)
            return bin
        return None
