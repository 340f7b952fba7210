"""
Shared test fixtures for the packing tests.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from boxpack.core.models import Bin, Item


@pytest.fixture
def cube_bin():
    """An empty 10x10x10 bin."""
    return Bin("cube", 10, 10, 10, 100)


@pytest.fixture
def three_bins():
    """Small, medium and large cubes, registered out of volume order."""
    return [
        Bin("large", 20, 20, 20, 1000),
        Bin("small", 5, 5, 5, 100),
        Bin("medium", 10, 10, 10, 500),
    ]


@pytest.fixture
def eight_cubes():
    """Eight 5x5x5 items: exactly the volume of a 10x10x10 bin."""
    return [Item(f"cube-{i}", 5, 5, 5, 1) for i in range(8)]
