"""Tests for dataset construction and configuration loading."""

import pydantic
import pytest

from boxpack.config import (
    ExperimentConfig,
    PackerConfig,
    load_config,
)
from boxpack.core.models import RotationPolicy
from boxpack.runner.dataset import (
    bins_from_dicts,
    generate_items,
    items_from_dicts,
    load_manifest,
)

MANIFEST = """\
bins:
  - {name: crate, width: 100, height: 80, depth: 60, max_weight: 200}
  - {name: box, width: 30, height: 30, depth: 30}
items:
  - {name: brick, width: 20, height: 10, depth: 5, weight: 2, count: 3}
  - {name: lamp, width: 40, height: 40, depth: 70, weight: 8}
"""


class TestBuilders:
    def test_bins_from_dicts(self):
        bins = bins_from_dicts([{"name": "b", "width": 1, "height": 2, "depth": 3}])
        assert len(bins) == 1
        assert (bins[0].volume, bins[0].max_weight, bins[0].items) == (6, 0.0, [])

    def test_items_from_dicts_expands_count(self):
        items = items_from_dicts([
            {"name": "brick", "width": 1, "height": 1, "depth": 1, "count": 3},
            {"name": "lamp", "width": 2, "height": 2, "depth": 2},
        ])
        assert [i.name for i in items] == ["brick-1", "brick-2", "brick-3", "lamp"]
        assert items[0] is not items[1]

    def test_negative_dimension_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            bins_from_dicts([{"name": "b", "width": -1, "height": 1, "depth": 1}])

    def test_missing_field_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            items_from_dicts([{"name": "i", "width": 1, "height": 1}])

    def test_load_manifest(self, tmp_path):
        path = tmp_path / "manifest.yaml"
        path.write_text(MANIFEST)
        bins, items = load_manifest(path)

        assert [b.name for b in bins] == ["crate", "box"]
        assert bins[0].max_weight == 200
        assert len(items) == 4
        assert items[-1].name == "lamp"
        assert items[-1].weight == 8


class TestGenerateItems:
    def test_count_and_ranges(self):
        items = generate_items(50, seed=0, min_dim=5, max_dim=10, min_weight=1, max_weight=2)
        assert len(items) == 50
        for item in items:
            assert 5 <= item.width <= 10
            assert 5 <= item.height <= 10
            assert 5 <= item.depth <= 10
            assert 1 <= item.weight <= 2
            assert isinstance(item.width, float)

    def test_seed_is_reproducible(self):
        a = generate_items(10, seed=123)
        b = generate_items(10, seed=123)
        assert [(i.width, i.height, i.depth, i.weight) for i in a] == \
            [(i.width, i.height, i.depth, i.weight) for i in b]

    def test_names(self):
        items = generate_items(3, seed=1, prefix="box")
        assert [i.name for i in items] == ["box-0", "box-1", "box-2"]

    def test_invalid_range(self):
        with pytest.raises(ValueError, match="min_dim"):
            generate_items(3, min_dim=10, max_dim=5)


class TestConfig:
    def test_defaults(self):
        cfg = ExperimentConfig()
        assert cfg.strategies == ["greedy", "fewest_boxes"]
        assert cfg.packer == PackerConfig()
        assert len(cfg.bins) == 2

    def test_load_config(self, tmp_path):
        path = tmp_path / "exp.yaml"
        path.write_text(
            "num_datasets: 2\n"
            "items_per_dataset: 5\n"
            "strategies: [greedy]\n"
            "packer:\n"
            "  rotation_policy: any_fit\n"
            "  enforce_max_weight: true\n"
            "bins:\n"
            "  - {name: only, width: 50, height: 50, depth: 50}\n"
        )
        cfg = load_config(path)
        assert cfg.num_datasets == 2
        assert cfg.packer.rotation_policy is RotationPolicy.ANY_FIT
        assert cfg.packer.enforce_max_weight is True
        assert [b.name for b in cfg.bins] == ["only"]

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ExperimentConfig()

    def test_unknown_strategy(self):
        with pytest.raises(pydantic.ValidationError, match="Unknown strategies"):
            ExperimentConfig(strategies=["best_guess"])

    def test_inverted_dim_range(self):
        with pytest.raises(pydantic.ValidationError):
            ExperimentConfig(min_dim=60, max_dim=50)
