"""Shared fixtures for the tilepack test suite."""

import os
import sys

import pytest

# Ensure the src/ layout is importable without an install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tilepack.algorithms.packer import Packer
from tilepack.config import LayoutConfig, PackerConfig


@pytest.fixture
def packer():
    """Empty 100×100 canvas, default ordering, no center."""
    return Packer(100, 100)


@pytest.fixture
def centered_packer():
    """100×100 canvas centered at (50, 50), filling outward."""
    return Packer(100, 100, "centeredOutCorners", center=(50, 50))


@pytest.fixture
def small_layout_config():
    """100-wide canvas starting 100 tall, growing in 50-unit steps."""
    return LayoutConfig(packer=PackerConfig(width=100, height=100), grow_step=50)

