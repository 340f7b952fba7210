"""Packing errors raised by Packer.pack()."""

from typing import List, Sequence


class PackingError(Exception):
    """Base class for packing errors."""


class NoBinsError(PackingError):
    """The packer has no bins registered."""

    def __init__(self) -> None:
        super().__init__("no bins in packer")


class NoItemsError(PackingError):
    """The packer has no items registered."""

    def __init__(self) -> None:
        super().__init__("no items in packer")


class InvalidBinsVolumeError(PackingError):
    """The items cannot possibly fit: too large, or too much volume in total."""

    def __init__(self, reason: str = "") -> None:
        message = "invalid bins volume"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnfitItemsExistError(PackingError):
    """
    Packing completed but some items fit in no bin.

    The items that were packed stay inside their bins; the rest are listed
    on ``unfit_items`` (and on the packer).
    """

    def __init__(self, unfit_items: Sequence) -> None:
        self.unfit_items: List = list(unfit_items)
        names = ", ".join(item.name for item in self.unfit_items)
        super().__init__(
            f"unfit items existing ({len(self.unfit_items)}): {names}"
        )
