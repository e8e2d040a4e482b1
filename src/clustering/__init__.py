"""
src/clustering: DBSCAN density-based clustering.

Provides the label propagation engine, the exhaustive and indexed neighbor
query providers, cluster assembly and run diagnostics.
"""

from .assembly import (
    ClusteringDiagnostics,
    ClusteringResult,
    assemble_clusters,
    build_diagnostics,
    labels_frame,
)
from .config import DBSCANConfig, NeighborStrategy, validate_parameters
from .dbscan import DBSCAN, dbscan, dbscan_indexed, run_with_config
from .engine import PropagationResult, propagate_labels
from .errors import ConfigurationError, MissingIndexError
from .neighbors import (
    ExhaustiveNeighbors,
    IndexedNeighbors,
    build_position_lookup,
    make_neighbor_query,
)

__all__ = [
    # Entry points
    "DBSCAN",
    "dbscan",
    "dbscan_indexed",
    "run_with_config",
    
    # Configuration
    "DBSCANConfig",
    "NeighborStrategy",
    "validate_parameters",
    
    # Errors
    "ConfigurationError",
    "MissingIndexError",
    
    # Engine
    "PropagationResult",
    "propagate_labels",
    
    # Neighbor queries
    "ExhaustiveNeighbors",
    "IndexedNeighbors",
    "build_position_lookup",
    "make_neighbor_query",
    
    # Assembly
    "ClusteringDiagnostics",
    "ClusteringResult",
    "assemble_clusters",
    "build_diagnostics",
    "labels_frame",
]
