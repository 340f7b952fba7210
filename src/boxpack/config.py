"""
Configuration models for the packer and the experiment runner.

All settings are pydantic models so that YAML files are validated on load:

    cfg = load_config("experiment.yaml")
    packer = Packer.from_config(cfg.packer)

Classes:
    PackerConfig     — strategy switches for a single Packer
    BinSpec          — one bin as written in a config or manifest file
    ItemSpec         — one item (optionally repeated ``count`` times)
    Manifest         — bins + items for a single packing run
    ExperimentConfig — all tuneable parameters for an experiment run
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, model_validator

from boxpack.core.models import RotationPolicy

STRATEGIES = ("greedy", "fewest_boxes")


class PackerConfig(BaseModel):
    """Switches passed straight to Packer."""

    fewest_boxes: bool = False
    rotation_policy: RotationPolicy = RotationPolicy.FIRST_FIT
    enforce_max_weight: bool = False


class BinSpec(BaseModel):
    name: str
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    depth: float = Field(ge=0)
    max_weight: float = Field(default=0.0, ge=0)


class ItemSpec(BaseModel):
    name: str
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    depth: float = Field(ge=0)
    weight: float = Field(default=0.0, ge=0)
    count: int = Field(default=1, ge=1)


class Manifest(BaseModel):
    bins: List[BinSpec] = Field(default_factory=list)
    items: List[ItemSpec] = Field(default_factory=list)


def _default_bins() -> List[BinSpec]:
    return [
        BinSpec(name="small", width=100.0, height=100.0, depth=100.0, max_weight=500.0),
        BinSpec(name="large", width=200.0, height=100.0, depth=100.0, max_weight=1000.0),
    ]


class ExperimentConfig(BaseModel):
    """
    All tuneable parameters for one experiment run.

    Each dataset is a fresh batch of random items; every strategy packs
    the same batch into a fresh copy of ``bins``.
    """

    bins: List[BinSpec] = Field(default_factory=_default_bins)
    num_datasets: int = Field(default=10, ge=1)
    items_per_dataset: int = Field(default=30, ge=1)
    min_dim: float = Field(default=10.0, gt=0)
    max_dim: float = Field(default=50.0, gt=0)
    min_weight: float = Field(default=0.5, ge=0)
    max_weight: float = Field(default=20.0, ge=0)
    seed: int = 0
    strategies: List[str] = Field(default_factory=lambda: list(STRATEGIES))
    packer: PackerConfig = Field(default_factory=PackerConfig)
    results_dir: str = "results"
    send_telegram: bool = False

    @model_validator(mode="after")
    def _check_ranges(self) -> "ExperimentConfig":
        if self.min_dim > self.max_dim:
            raise ValueError(f"min_dim ({self.min_dim}) > max_dim ({self.max_dim})")
        if self.min_weight > self.max_weight:
            raise ValueError(
                f"min_weight ({self.min_weight}) > max_weight ({self.max_weight})"
            )
        unknown = [s for s in self.strategies if s not in STRATEGIES]
        if unknown:
            raise ValueError(
                f"Unknown strategies: {unknown}. Available: {list(STRATEGIES)}"
            )
        return self


def _read_yaml(path: Path | str) -> dict:
    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def load_config(path: Path | str) -> ExperimentConfig:
    """Load and validate an ExperimentConfig from a YAML file."""
    return ExperimentConfig.model_validate(_read_yaml(path))


def load_manifest_spec(path: Path | str) -> Manifest:
    """Load and validate a bins/items manifest from a YAML (or JSON) file."""
    return Manifest.model_validate(_read_yaml(path))
