"""
Pytest configuration and shared fixtures for clustering tests.

This file provides:
- Small hand-checked 1-D point sets
- Generated 2-D blob data
- Distance functions
"""

from typing import List, Tuple

import numpy as np
import pytest

from src.spatial import Point


# ==============================================================================
# Distance Functions
# ==============================================================================

def absolute_distance(a: float, b: float) -> float:
    """Distance between two 1-D points."""
    return abs(a - b)


@pytest.fixture
def distance_1d():
    return absolute_distance


# ==============================================================================
# Point Sets
# ==============================================================================

@pytest.fixture
def line_points() -> List[float]:
    """Two groups on a line: {0, 1, 2} and {9, 10}."""
    return [0, 1, 2, 9, 10]


@pytest.fixture
def isolated_points() -> List[float]:
    """Points far apart from each other."""
    return [0, 10, 20]


@pytest.fixture
def two_blobs() -> List[Tuple[float, float]]:
    """
    Two well-separated 2-D blobs of 30 points each plus two far outliers.

    Values are tuples so they can be hashed for the indexed strategy.
    """
    rng = np.random.default_rng(7)
    blob_a = rng.normal(loc=(0.0, 0.0), scale=0.3, size=(30, 2))
    blob_b = rng.normal(loc=(10.0, 10.0), scale=0.3, size=(30, 2))
    outliers = np.array([[5.0, -20.0], [-20.0, 5.0]])
    data = np.vstack([blob_a, blob_b, outliers])
    return [tuple(float(c) for c in row) for row in data]


@pytest.fixture
def grid_points() -> List[Point]:
    """A 5x5 unit grid of Point values next to a 3x3 grid offset by 20."""
    near = [Point.of(x, y) for x in range(5) for y in range(5)]
    far = [Point.of(20 + x, 20 + y) for x in range(3) for y in range(3)]
    return near + far
