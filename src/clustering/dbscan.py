"""
DBSCAN: density-based clustering with noise.

Groups points that have many nearby neighbors and marks points in low-density
regions as outliers (Ester, Kriegel, Sander & Xu, KDD-96).

Two entry points share one label propagation engine:

- exhaustive: ``DBSCAN(values)(epsilon, min_points, distance_function)``
  compares every pair with a caller-supplied distance function
- indexed: ``DBSCAN(values, index)(epsilon, min_points)`` answers radius
  queries from a pre-built spatial index

Usage:
    from src.clustering import DBSCAN, dbscan
    from src.spatial import euclidean_distance

    clusters, outliers = dbscan(points, 1.5, 2, euclidean_distance)

    model = DBSCAN(points)
    model.build_index()
    clusters, outliers = model(epsilon=1.5, minimum_number_of_points=2)
"""

from __future__ import annotations

import logging
from typing import Any, Generic, List, Optional, Sequence, Tuple, TypeVar

import pandas as pd

from ..spatial.kdtree import KDTreeIndex

from .assembly import (
    ClusteringDiagnostics,
    ClusteringResult,
    assemble_clusters,
    build_diagnostics,
    labels_frame,
)
from .config import DBSCANConfig, NeighborStrategy, validate_parameters
from .engine import PropagationResult, propagate_labels
from .errors import MissingIndexError
from .neighbors import DistanceFunction, SpatialIndex, make_neighbor_query


logger = logging.getLogger(__name__)

V = TypeVar("V")


class DBSCAN(Generic[V]):
    """
    Density-based clustering over a fixed collection of values.

    Attributes:
        values: The values to be clustered, in input order
        index: Optional spatial index built over ``values``; required by the
               indexed entry point
    """

    def __init__(self, values: Sequence[V], index: Optional[SpatialIndex] = None):
        self.values: List[V] = list(values)
        self.index = index

    def build_index(self, leafsize: int = 16) -> KDTreeIndex[V]:
        """Build a KD-tree over ``values`` and keep it as ``self.index``."""
        self.index = KDTreeIndex.build(self.values, leafsize=leafsize)
        return self.index

    def labels(
        self,
        epsilon: float,
        minimum_number_of_points: int,
        distance_function: Optional[DistanceFunction] = None,
    ) -> PropagationResult:
        """
        Run label propagation and return the per-point labels.

        With ``distance_function`` the exhaustive strategy is used, otherwise
        the indexed one.

        Raises:
            ConfigurationError: Invalid ``epsilon`` or ``minimum_number_of_points``
            MissingIndexError: Indexed strategy without ``self.index``
        """
        validate_parameters(epsilon, minimum_number_of_points)

        if distance_function is not None:
            strategy = NeighborStrategy.EXHAUSTIVE
        else:
            strategy = NeighborStrategy.INDEXED
            if self.index is None:
                raise MissingIndexError(
                    "No spatial index: call build_index() or pass a distance function"
                )

        query = make_neighbor_query(
            strategy,
            self.values,
            epsilon,
            distance_function=distance_function,
            index=self.index,
        )
        result = propagate_labels(len(self.values), query, minimum_number_of_points)

        logger.info(
            f"DBSCAN ({strategy.value}, eps={epsilon}, min_points={minimum_number_of_points}): "
            f"{len(self.values)} points -> {result.num_clusters} clusters, "
            f"{result.num_outliers} outliers"
        )
        return result

    def __call__(
        self,
        epsilon: float,
        minimum_number_of_points: int,
        distance_function: Optional[DistanceFunction] = None,
    ) -> ClusteringResult:
        """
        Cluster the values.

        Args:
            epsilon: Neighborhood radius; neighbors are strictly closer
            minimum_number_of_points: Neighborhood size (the point itself
                included) required for a dense region
            distance_function: Distance between two values. Omit to use
                ``self.index`` instead. Its exceptions propagate unchanged.

        Returns:
            ``(clusters, outliers)``; clusters ordered by discovery, values in
            input order
        """
        result = self.labels(epsilon, minimum_number_of_points, distance_function)
        return assemble_clusters(self.values, result.labels)

    def cluster_with_diagnostics(
        self,
        config: DBSCANConfig,
        distance_function: Optional[DistanceFunction] = None,
    ) -> Tuple[ClusteringResult, pd.DataFrame, ClusteringDiagnostics]:
        """
        Cluster according to ``config`` and report on the result.

        Returns:
            (result, labels_dataframe, diagnostics)
        """
        config.validate()
        if config.strategy is NeighborStrategy.EXHAUSTIVE:
            if distance_function is None:
                raise ValueError("The exhaustive strategy requires a distance function")
            result = self.labels(config.epsilon, config.minimum_number_of_points, distance_function)
        else:
            result = self.labels(config.epsilon, config.minimum_number_of_points)

        return (
            assemble_clusters(self.values, result.labels),
            labels_frame(self.values, result),
            build_diagnostics(self.values, result, config),
        )


def dbscan(
    values: Sequence[V],
    epsilon: float,
    minimum_number_of_points: int,
    distance_function: DistanceFunction,
) -> ClusteringResult:
    """Cluster ``values`` by comparing every pair with ``distance_function``."""
    return DBSCAN(values)(epsilon, minimum_number_of_points, distance_function)


def dbscan_indexed(
    values: Sequence[V],
    epsilon: float,
    minimum_number_of_points: int,
    index: Optional[SpatialIndex] = None,
) -> ClusteringResult:
    """
    Cluster ``values`` using radius queries on a spatial index.

    A KD-tree is built over ``values`` when no index is given.
    """
    validate_parameters(epsilon, minimum_number_of_points)
    model = DBSCAN(values, index=index)
    if model.index is None:
        model.build_index()
    return model(epsilon, minimum_number_of_points)


def run_with_config(
    values: Sequence[Any],
    config: DBSCANConfig,
    distance_function: Optional[DistanceFunction] = None,
    index: Optional[SpatialIndex] = None,
) -> Tuple[ClusteringResult, pd.DataFrame, ClusteringDiagnostics]:
    """
    Configuration-driven run with diagnostics.

    For the indexed strategy a KD-tree is built when ``index`` is None.
    """
    config.validate()
    model = DBSCAN(values, index=index)
    if config.strategy is NeighborStrategy.INDEXED and model.index is None:
        model.build_index()
    return model.cluster_with_diagnostics(config, distance_function)
