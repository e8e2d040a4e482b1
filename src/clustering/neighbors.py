"""
Neighbor query providers.

Both providers answer the same question, "which positions lie strictly within
epsilon of the point at position p", so the label propagation engine never
needs to know which one it is talking to:

- ``ExhaustiveNeighbors``: evaluates a caller-supplied distance function
  against every point (O(n) per query)
- ``IndexedNeighbors``: asks a pre-built spatial index and maps the returned
  values back to positions through a lookup built once per run

For a distance-consistent index the two return identical membership.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, Hashable, List, Optional, Protocol, Sequence

from .config import NeighborStrategy
from .errors import MissingIndexError


DistanceFunction = Callable[[Any, Any], float]


class NeighborQuery(Protocol):
    """Anything that can list the neighbors of a position."""

    def neighbors(self, position: int) -> List[int]:
        ...


class SpatialIndex(Protocol):
    """Radius query interface of a spatial index."""

    def query(self, center: Any, radius: float) -> Sequence[Any]:
        ...


class ExhaustiveNeighbors:
    """Pairwise scan with a caller-supplied distance function."""

    strategy = NeighborStrategy.EXHAUSTIVE

    def __init__(
        self,
        values: Sequence[Any],
        epsilon: float,
        distance_function: DistanceFunction,
    ):
        self.values = values
        self.epsilon = epsilon
        self.distance_function = distance_function

    def neighbors(self, position: int) -> List[int]:
        """
        Positions ``j`` with ``distance(values[position], values[j]) < epsilon``.

        The point itself is included. Exceptions raised by the distance
        function propagate unchanged.
        """
        point = self.values[position]
        distance = self.distance_function
        eps = self.epsilon
        return [j for j, other in enumerate(self.values) if distance(point, other) < eps]


class IndexedNeighbors:
    """Radius queries against a pre-built spatial index."""

    strategy = NeighborStrategy.INDEXED

    def __init__(self, values: Sequence[Hashable], epsilon: float, index: SpatialIndex):
        self.values = values
        self.epsilon = epsilon
        self.index = index
        self._positions = build_position_lookup(values)

    def neighbors(self, position: int) -> List[int]:
        """
        Positions of the values the index reports within epsilon.

        Equal values share every position they occupy; values the index
        returns that are not part of this run are ignored.
        """
        found = set()
        for value in self.index.query(self.values[position], self.epsilon):
            found.update(self._positions.get(value, ()))
        return sorted(found)


def build_position_lookup(values: Sequence[Hashable]) -> Dict[Hashable, List[int]]:
    """
    Map each distinct value to the positions it occupies.

    Raises:
        TypeError: If a value is not hashable
    """
    lookup: Dict[Hashable, List[int]] = defaultdict(list)
    for i, value in enumerate(values):
        lookup[value].append(i)
    return dict(lookup)


def make_neighbor_query(
    strategy: NeighborStrategy,
    values: Sequence[Any],
    epsilon: float,
    distance_function: Optional[DistanceFunction] = None,
    index: Optional[SpatialIndex] = None,
) -> NeighborQuery:
    """
    Build the neighbor provider for ``strategy``.

    Raises:
        ValueError: Exhaustive strategy without a distance function
        MissingIndexError: Indexed strategy without an index
    """
    if strategy is NeighborStrategy.EXHAUSTIVE:
        if distance_function is None:
            raise ValueError("The exhaustive strategy requires a distance function")
        return ExhaustiveNeighbors(values, epsilon, distance_function)

    if strategy is NeighborStrategy.INDEXED:
        if index is None:
            raise MissingIndexError(
                "The indexed strategy requires a spatial index built over the values. "
                "Build one first (e.g. DBSCAN.build_index() or KDTreeIndex.build(values))."
            )
        return IndexedNeighbors(values, epsilon, index)

    raise ValueError(f"Unknown neighbor strategy: {strategy!r}")
