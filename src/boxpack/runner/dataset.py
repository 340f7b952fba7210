"""Dataset construction for packing runs.

Turns caller data (dicts, YAML manifests) into Bin and Item objects, and
generates random item batches for experiments.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import numpy as np

from boxpack.config import BinSpec, ItemSpec, load_manifest_spec
from boxpack.core.models import Bin, Item


def bins_from_specs(specs: Iterable[BinSpec]) -> list[Bin]:
    """Fresh Bin objects (no occupants) for each spec."""
    return [
        Bin(s.name, s.width, s.height, s.depth, s.max_weight) for s in specs
    ]


def items_from_specs(specs: Iterable[ItemSpec]) -> list[Item]:
    """
    Item objects for each spec, expanding ``count`` into numbered copies.

    An item with count=3 and name "crate" becomes "crate-1", "crate-2" and
    "crate-3"; count=1 keeps the name as is.
    """
    items = []
    for s in specs:
        for n in range(s.count):
            name = s.name if s.count == 1 else f"{s.name}-{n + 1}"
            items.append(Item(name, s.width, s.height, s.depth, s.weight))
    return items


def bins_from_dicts(data: Iterable[Mapping[str, Any]]) -> list[Bin]:
    """
    Build bins from plain mappings.

    Raises:
        pydantic.ValidationError: if a mapping is missing fields or has
            negative dimensions.
    """
    return bins_from_specs(BinSpec.model_validate(d) for d in data)


def items_from_dicts(data: Iterable[Mapping[str, Any]]) -> list[Item]:
    """Build items from plain mappings (see ``items_from_specs``)."""
    return items_from_specs(ItemSpec.model_validate(d) for d in data)


def load_manifest(path: Path | str) -> tuple[list[Bin], list[Item]]:
    """
    Load bins and items from a YAML manifest.

    Example manifest::

        bins:
          - {name: crate, width: 100, height: 80, depth: 60, max_weight: 200}
        items:
          - {name: box, width: 20, height: 20, depth: 20, weight: 2, count: 4}
    """
    manifest = load_manifest_spec(path)
    return bins_from_specs(manifest.bins), items_from_specs(manifest.items)


def generate_items(
    count: int = 30,
    seed: int | None = None,
    min_dim: float = 10.0,
    max_dim: float = 50.0,
    min_weight: float = 0.5,
    max_weight: float = 20.0,
    prefix: str = "item",
) -> list[Item]:
    """
    Generate random items for experimentation.

    Args:
        count: Number of items to generate
        seed: Random seed for reproducibility (default: None)
        min_dim, max_dim: Range of each dimension
        min_weight, max_weight: Range of the weight
        prefix: Name prefix; items are named "<prefix>-<index>"

    Returns:
        List of Item objects, dimensions and weights rounded to 0.1
    """
    if min_dim > max_dim:
        raise ValueError(f"min_dim ({min_dim}) > max_dim ({max_dim})")
    if min_weight > max_weight:
        raise ValueError(f"min_weight ({min_weight}) > max_weight ({max_weight})")

    rng = np.random.default_rng(seed)
    dims = np.round(rng.uniform(min_dim, max_dim, size=(count, 3)), 1)
    weights = np.round(rng.uniform(min_weight, max_weight, size=count), 1)

    return [
        Item(
            f"{prefix}-{i}",
            float(dims[i, 0]),
            float(dims[i, 1]),
            float(dims[i, 2]),
            float(weights[i]),
        )
        for i in range(count)
    ]
