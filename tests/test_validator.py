"""Tests for the post-packing validator."""

import pytest

from boxpack.core.geometry import START_POSITION, Pivot, RotationType
from boxpack.core.models import Bin, Item
from boxpack.core.validator import (
    ConservationError,
    OutOfBoundsError,
    OverlapError,
    check_bounds,
    check_conservation,
    check_overlap,
    validate_packing,
)


def placed(name, dims, position, rotation=RotationType.WHD):
    item = Item(name, *dims, 0)
    item.position = Pivot(*position)
    item.rotation_type = rotation
    return item


class TestBounds:
    def test_inside(self, cube_bin):
        cube_bin.items.append(placed("a", (10, 10, 10), (0, 0, 0)))
        check_bounds(cube_bin)

    def test_sticks_out(self, cube_bin):
        cube_bin.items.append(placed("a", (5, 5, 5), (6, 0, 0)))
        with pytest.raises(OutOfBoundsError, match="a in cube"):
            check_bounds(cube_bin)

    def test_rotation_is_taken_into_account(self, cube_bin):
        # HWD turns the 12-unit width into height.
        cube_bin.items.append(placed("a", (12, 1, 1), (0, 0, 0), RotationType.HWD))
        with pytest.raises(OutOfBoundsError):
            check_bounds(cube_bin)

    def test_negative_coordinate(self, cube_bin):
        cube_bin.items.append(placed("a", (1, 1, 1), (-1, 0, 0)))
        with pytest.raises(OutOfBoundsError, match="negative"):
            check_bounds(cube_bin)


class TestOverlap:
    def test_adjacent_items(self, cube_bin):
        cube_bin.items += [placed("a", (5, 5, 5), (0, 0, 0)), placed("b", (5, 5, 5), (5, 0, 0))]
        check_overlap(cube_bin)

    def test_overlapping_items(self, cube_bin):
        cube_bin.items += [placed("a", (5, 5, 5), (0, 0, 0)), placed("b", (5, 5, 5), (4, 0, 0))]
        with pytest.raises(OverlapError, match="a and b"):
            check_overlap(cube_bin)


class TestConservation:
    def test_all_accounted_for(self, cube_bin):
        a, b = Item("a", 1, 1, 1, 0), Item("b", 1, 1, 1, 0)
        cube_bin.put_item(a, START_POSITION)
        check_conservation([cube_bin], [b], [a, b])

    def test_dropped_item(self, cube_bin):
        a, b = Item("a", 1, 1, 1, 0), Item("b", 1, 1, 1, 0)
        cube_bin.put_item(a, START_POSITION)
        with pytest.raises(ConservationError, match="dropped: b"):
            check_conservation([cube_bin], [], [a, b])

    def test_packed_and_unfit(self, cube_bin):
        a = Item("a", 1, 1, 1, 0)
        cube_bin.put_item(a, START_POSITION)
        with pytest.raises(ConservationError, match="unfit"):
            check_conservation([cube_bin], [a])

    def test_packed_twice(self):
        a = Item("a", 1, 1, 1, 0)
        first, second = Bin("x", 1, 1, 1, 0), Bin("y", 1, 1, 1, 0)
        first.put_item(a, START_POSITION)
        second.put_item(a, START_POSITION)
        with pytest.raises(ConservationError, match="twice"):
            check_conservation([first, second], [])


def test_validate_packing_returns_true(cube_bin):
    cube_bin.put_item(Item("a", 2, 2, 2, 0), START_POSITION)
    assert validate_packing([cube_bin]) is True
