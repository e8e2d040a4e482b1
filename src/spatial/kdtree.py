"""
KD-tree spatial index for radius queries.

Wraps :class:`scipy.spatial.KDTree` behind the small interface the clustering
engine consumes:

- ``KDTreeIndex.build(values)``: build once over the full collection
- ``index.query(center, radius)``: stored values strictly closer than
  ``radius`` to ``center`` (Euclidean)

Scipy's ball query is inclusive (``<=``); results are re-checked against the
exact distance so a point at exactly ``radius`` is not returned.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, List, Sequence, TypeVar

import numpy as np
from scipy.spatial import KDTree

from .points import coordinate_matrix, coordinates_of


logger = logging.getLogger(__name__)

V = TypeVar("V")


class KDTreeIndex(Generic[V]):
    """Immutable KD-tree over a fixed collection of values."""

    def __init__(self, values: Sequence[V], leafsize: int = 16):
        """
        Build the tree.

        Args:
            values: Values exposing coordinates (see ``coordinates_of``)
            leafsize: Scipy KD-tree leaf size

        Raises:
            ValueError: If values have mixed dimensionality
        """
        self._values: List[V] = list(values)
        self._data = coordinate_matrix(self._values)
        self._tree = KDTree(self._data, leafsize=leafsize) if len(self._values) else None

        logger.debug(f"Built KD-tree over {len(self._values)} points ({self.dimensions} dimensions)")

    @classmethod
    def build(cls, values: Sequence[V], leafsize: int = 16) -> "KDTreeIndex[V]":
        """Build an index over ``values``."""
        return cls(values, leafsize=leafsize)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def dimensions(self) -> int:
        return int(self._data.shape[1]) if len(self._values) else 0

    @property
    def values(self) -> List[V]:
        return list(self._values)

    def query_positions(self, center: Any, radius: float) -> List[int]:
        """
        Positions of stored values strictly within ``radius`` of ``center``.

        Returns:
            Ascending list of positions into the values the index was built on
        """
        if self._tree is None:
            return []

        point = np.asarray(coordinates_of(center), dtype=float)
        if point.shape[0] != self.dimensions:
            raise ValueError(
                f"Query point has {point.shape[0]} dimensions, index has {self.dimensions}"
            )

        candidates = np.asarray(self._tree.query_ball_point(point, radius), dtype=int)
        if candidates.size == 0:
            return []

        # Ball query is inclusive; keep the strict interior only
        dists = np.linalg.norm(self._data[candidates] - point, axis=1)
        inside = np.sort(candidates[dists < radius])
        return inside.tolist()

    def query(self, center: Any, radius: float) -> List[V]:
        """All stored values strictly closer than ``radius`` to ``center``."""
        return [self._values[i] for i in self.query_positions(center, radius)]
