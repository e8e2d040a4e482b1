"""
Point coordinate capability.

Values handed to the indexed clustering path only need to expose a fixed
number of real coordinates. This module provides:
1. ``SupportsCoordinates`` protocol (``dimensions`` + ``coordinate(d)``)
2. ``Point``: a small hashable value type implementing it
3. ``coordinates_of``: coordinate extraction for capability objects,
   plain real scalars (1-D) and sequences of reals
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np


@runtime_checkable
class SupportsCoordinates(Protocol):
    """A value with a fixed number of real-valued coordinates."""

    @property
    def dimensions(self) -> int:
        ...

    def coordinate(self, dimension: int) -> float:
        ...


@dataclass(frozen=True)
class Point:
    """Immutable point in n-dimensional Euclidean space."""

    coords: Tuple[float, ...]
    """Coordinates, one per dimension."""

    @classmethod
    def of(cls, *coords: float) -> "Point":
        return cls(tuple(float(c) for c in coords))

    @property
    def dimensions(self) -> int:
        return len(self.coords)

    def coordinate(self, dimension: int) -> float:
        return self.coords[dimension]


def coordinates_of(value: Any) -> Tuple[float, ...]:
    """
    Extract the coordinates of ``value`` as a tuple of floats.

    Args:
        value: A ``SupportsCoordinates`` object, a real scalar (treated as a
               1-D point) or a sequence of reals

    Returns:
        Tuple of coordinates

    Raises:
        TypeError: If ``value`` exposes no coordinates
    """
    if isinstance(value, SupportsCoordinates):
        return tuple(float(value.coordinate(d)) for d in range(value.dimensions))

    if isinstance(value, numbers.Real):
        return (float(value),)

    if isinstance(value, (str, bytes)):
        raise TypeError(f"Cannot read coordinates from {type(value).__name__} value {value!r}")

    try:
        return tuple(float(c) for c in value)
    except TypeError as e:
        raise TypeError(
            f"Value {value!r} has no coordinates. Pass a real number, a sequence of "
            "reals, or an object with 'dimensions' and 'coordinate(dimension)'."
        ) from e


def coordinate_matrix(values: Sequence[Any]) -> np.ndarray:
    """
    Stack the coordinates of ``values`` into an ``(n, d)`` float array.

    Raises:
        ValueError: If the values do not all share the same dimensionality
    """
    rows = [coordinates_of(v) for v in values]
    if not rows:
        return np.empty((0, 0), dtype=float)

    dims = {len(r) for r in rows}
    if len(dims) != 1:
        raise ValueError(
            f"All points must have the same number of dimensions, got {sorted(dims)}"
        )
    return np.asarray(rows, dtype=float)
