"""Tests for Item and Bin: volumes, placement queries and commits."""

import pytest

from boxpack.core.geometry import START_POSITION, Dimension, Pivot, RotationType
from boxpack.core.models import Bin, Item, RotationPolicy, new_bin, new_item


class TestItem:
    def test_volume_is_rotation_invariant(self):
        item = Item("a", 2, 3, 4, 1)
        assert item.volume == 24
        item.rotation_type = RotationType.DWH
        assert item.volume == 24
        assert item.dimension == Dimension(4, 2, 3)

    def test_negative_dimension_rejected(self):
        with pytest.raises(ValueError, match="width"):
            Item("bad", -1, 1, 1, 1)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError, match="weight"):
            Item("bad", 1, 1, 1, -0.5)

    def test_items_compare_by_identity(self):
        a = Item("same", 1, 1, 1, 1)
        b = Item("same", 1, 1, 1, 1)
        assert a != b
        assert a == a

    def test_str(self):
        item = Item("a", 2, 3, 4, 5)
        assert str(item) == "a(2x3x4, weight: 5) pos(0.0,0.0,0.0) rt(RotationType_WHD (w,h,d))"

    def test_new_item(self):
        item = new_item("a", 1, 2, 3, 4)
        assert (item.width, item.height, item.depth, item.weight) == (1, 2, 3, 4)


class TestBinVolumes:
    def test_empty_bin(self, cube_bin):
        assert cube_bin.volume == 1000
        assert cube_bin.used_volume == 0
        assert cube_bin.available_volume == 1000
        assert cube_bin.volume_utilization == 0.0

    def test_after_placement(self, cube_bin):
        assert cube_bin.put_item(Item("a", 5, 10, 10, 3), START_POSITION)
        assert cube_bin.used_volume == 500
        assert cube_bin.available_volume == 500
        assert cube_bin.volume_utilization == pytest.approx(50.0)
        assert cube_bin.used_weight == 3
        assert cube_bin.available_weight == 97

    def test_zero_volume_utilization(self):
        assert Bin("flat", 10, 10, 0, 1).volume_utilization == 0.0

    def test_str(self):
        assert str(new_bin("b", 1, 2, 3.5, 10)) == "b(1x2x3.5, max_weight:10)"


class TestTryPlace:
    def test_first_rotation_that_fits_is_chosen(self):
        bin = Bin("tall", 2, 10, 2, 0)
        item = Item("stick", 10, 2, 2, 0)
        found = bin.try_place(item, START_POSITION)
        assert found is not None
        rotation, dim = found
        # WHD does not fit (width 10 > 2); HWD puts the 10 on the y axis.
        assert rotation is RotationType.HWD
        assert dim == Dimension(2, 10, 2)

    def test_try_place_does_not_mutate(self, cube_bin):
        item = Item("a", 10, 1, 1, 0)
        item.rotation_type = RotationType.WDH
        cube_bin.try_place(item, Pivot(0, 0, 0))
        assert item.rotation_type is RotationType.WDH
        assert cube_bin.items == []

    def test_out_of_bounds_pivot(self, cube_bin):
        assert cube_bin.try_place(Item("a", 1, 1, 1, 0), Pivot(9.5, 0, 0)) is None

    def test_containment_is_inclusive(self, cube_bin):
        assert cube_bin.try_place(Item("a", 1, 1, 1, 0), Pivot(9, 9, 9)) is not None

    def test_too_large_item(self, cube_bin):
        assert cube_bin.try_place(Item("a", 11, 1, 1, 0), START_POSITION) is None

    def test_overlap_rejected(self, cube_bin):
        assert cube_bin.put_item(Item("a", 5, 5, 5, 0), START_POSITION)
        assert cube_bin.try_place(Item("b", 5, 5, 5, 0), Pivot(2, 2, 2)) is None

    def test_first_fit_does_not_try_other_rotations(self):
        bin = Bin("b", 10, 10, 2, 0)
        bin.put_item(Item("blocker", 10, 6, 2, 0), START_POSITION)
        item = Item("plank", 8, 4, 2, 0)
        # WHD (8, 4, 2) at y=4 is in bounds but overlaps the blocker.
        assert bin.try_place(item, Pivot(0, 4, 0)) is None

    def test_first_fit_versus_any_fit(self):
        other = Bin("c", 10, 10, 10, 0)
        other.put_item(Item("floor", 10, 10, 1, 0), Pivot(0, 0, 9))
        box = Item("box", 1, 1, 10, 0)
        # WHD (1, 1, 10) fits the bounds at the origin but crosses the floor
        # slab at z=9; HWD (1, 1, 10) is the same; HDW (1, 10, 1) is clear.
        assert other.try_place(box, START_POSITION) is None
        found = other.try_place(box, START_POSITION, RotationPolicy.ANY_FIT)
        assert found is not None
        assert found[0] is RotationType.HDW
        assert found[1] == Dimension(1, 10, 1)

    def test_weight_rule_is_opt_in(self):
        bin = Bin("light", 10, 10, 10, 5)
        heavy = Item("heavy", 1, 1, 1, 6)
        assert bin.try_place(heavy, START_POSITION) is not None
        assert bin.try_place(heavy, START_POSITION, enforce_max_weight=True) is None

    def test_weight_rule_counts_occupants(self):
        bin = Bin("b", 10, 10, 10, 5)
        assert bin.put_item(Item("a", 1, 1, 1, 3), START_POSITION, enforce_max_weight=True)
        assert not bin.put_item(Item("b", 1, 1, 1, 3), Pivot(1, 0, 0), enforce_max_weight=True)
        assert bin.put_item(Item("c", 1, 1, 1, 2), Pivot(1, 0, 0), enforce_max_weight=True)


class TestPutItem:
    def test_commit_records_state(self, cube_bin):
        item = Item("a", 2, 3, 4, 0)
        assert cube_bin.put_item(item, Pivot(1, 1, 1))
        assert item.position == Pivot(1, 1, 1)
        assert item.rotation_type is RotationType.WHD
        assert cube_bin.items == [item]

    def test_failed_put_leaves_no_trace(self, cube_bin):
        first = Item("a", 10, 10, 10, 0)
        assert cube_bin.put_item(first, START_POSITION)
        second = Item("b", 1, 1, 1, 0)
        second.rotation_type = RotationType.DHW
        assert not cube_bin.put_item(second, START_POSITION)
        assert second.rotation_type is RotationType.DHW
        assert cube_bin.items == [first]

    def test_placement_order_is_kept(self, cube_bin):
        a, b = Item("a", 5, 5, 5, 0), Item("b", 5, 5, 5, 0)
        cube_bin.put_item(a, START_POSITION)
        cube_bin.put_item(b, Pivot(5, 0, 0))
        assert cube_bin.items == [a, b]

    def test_plain_tuple_pivot(self, cube_bin):
        a, b = Item("a", 5, 5, 5, 0), Item("b", 5, 5, 5, 0)
        assert cube_bin.put_item(a, (0, 0, 0))
        assert not cube_bin.put_item(b, (2, 0, 0))
        assert not cube_bin.put_item(b, (6, 0, 0))
        assert cube_bin.put_item(b, (5, 0, 0))
        assert isinstance(b.position, Pivot)
        assert str(b.position) == "5,0,0"
        assert cube_bin.fits_within((5, 5, 5), (5, 5, 5))

    def test_to_dict(self, cube_bin):
        item = Item("a", 2, 3, 4, 1)
        cube_bin.put_item(item, START_POSITION)
        d = cube_bin.to_dict()
        assert d["name"] == "cube"
        assert d["items"][0]["position"] == [0.0, 0.0, 0.0]
        assert d["items"][0]["rotation"] == "WHD"
