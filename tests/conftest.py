"""
Pytest configuration and shared fixtures for the Sample Grid test suite.
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from sample_grid.config import set_global_seed


@pytest.fixture(scope="session")
def global_test_seed():
    """Set global random seed for all tests to ensure reproducibility."""
    seed = 42
    set_global_seed(seed)
    return seed


@pytest.fixture
def rng():
    """Dedicated generator so sampling tests do not depend on test order."""
    return np.random.default_rng(1234)


@pytest.fixture
def corridor_map():
    """Small map with two vertical walls and a single obstacle in the corner."""
    return ".....\n@@.@.\n.@.@.\n.@.@.\n.....\n....@\n"


@pytest.fixture
def corner_map():
    """Map with one obstacle in the top-left corner."""
    return "@....\n.....\n.....\n.....\n"


@pytest.fixture
def wedge_map():
    """Map whose left side is blocked in a wedge shape (used for blur fixtures)."""
    return "@....\n@@...\n@@@..\n@@@..\n@@...\n"


@pytest.fixture
def map_file(tmp_path, corridor_map):
    """Corridor map written to disk."""
    path = tmp_path / "corridor.map"
    path.write_text(corridor_map)
    return path


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "visual: marks tests that generate visual output"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark integration and plotting tests."""
    for item in items:
        if "integration" in item.nodeid or "end_to_end" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        if "plot" in item.nodeid:
            item.add_marker(pytest.mark.visual)
