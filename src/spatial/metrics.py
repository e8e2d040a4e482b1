"""Euclidean distance helpers over point coordinates."""

from __future__ import annotations

import math
from typing import Any

from .points import coordinates_of


def squared_distance(a: Any, b: Any) -> float:
    """Squared Euclidean distance between two points of equal dimension."""
    ca = coordinates_of(a)
    cb = coordinates_of(b)
    if len(ca) != len(cb):
        raise ValueError(
            f"Dimension mismatch: {len(ca)}-D point {a!r} vs {len(cb)}-D point {b!r}"
        )

    total = 0.0
    for x, y in zip(ca, cb):
        dx = x - y
        total += dx * dx
    return total


def euclidean_distance(a: Any, b: Any) -> float:
    """
    Euclidean distance between two points.

    Distance-consistent with :class:`src.spatial.kdtree.KDTreeIndex`, so the
    exhaustive and indexed clustering paths agree when this is used as the
    distance function.
    """
    return math.sqrt(squared_distance(a, b))
