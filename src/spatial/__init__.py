"""
src/spatial: Point coordinates, Euclidean metrics and the KD-tree index.

These are the collaborators consumed by :mod:`src.clustering`; the clustering
engine only ever calls ``KDTreeIndex.query`` and a distance function.
"""

from .kdtree import KDTreeIndex
from .metrics import euclidean_distance, squared_distance
from .points import Point, SupportsCoordinates, coordinate_matrix, coordinates_of

__all__ = [
    "KDTreeIndex",
    "Point",
    "SupportsCoordinates",
    "coordinate_matrix",
    "coordinates_of",
    "euclidean_distance",
    "squared_distance",
]
