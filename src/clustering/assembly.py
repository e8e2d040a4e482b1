"""
Cluster assembly and run diagnostics.

Turns the per-point labels of a propagation run into:
1. ``ClusteringResult``: clusters ordered by label plus the outlier list
2. A labels DataFrame (``cluster`` column, -1 for outliers) for inspection
3. ``ClusteringDiagnostics`` with sizes, noise ratio, silhouette score and
   actionable suggestions

Within a cluster, and within the outlier list, values keep their original
input order.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, List, NamedTuple, Optional, Sequence, TypeVar

import numpy as np
import pandas as pd
from sklearn.metrics import silhouette_score

from ..spatial.points import coordinate_matrix

from .config import DBSCANConfig, NeighborStrategy
from .engine import PropagationResult


logger = logging.getLogger(__name__)

V = TypeVar("V")

NOISE_LABEL = -1


class ClusteringResult(NamedTuple):
    """Clusters (ascending label order) and outliers of one run."""
    clusters: List[List[Any]]
    outliers: List[Any]


def assemble_clusters(values: Sequence[V], labels: Sequence[Optional[int]]) -> ClusteringResult:
    """
    Group values by label.

    Args:
        values: Input values in their original order
        labels: Label per position (None = outlier)

    Returns:
        ClusteringResult; cluster ``k`` holds every value labeled ``k``
    """
    if len(values) != len(labels):
        raise ValueError(f"Got {len(values)} values but {len(labels)} labels")

    num_clusters = max((label for label in labels if label is not None), default=-1) + 1
    clusters: List[List[V]] = [[] for _ in range(num_clusters)]
    outliers: List[V] = []

    for value, label in zip(values, labels):
        if label is None:
            outliers.append(value)
        else:
            clusters[label].append(value)

    return ClusteringResult(clusters=clusters, outliers=outliers)


def labels_frame(values: Sequence[Any], propagation: PropagationResult) -> pd.DataFrame:
    """
    One row per input value with its cluster assignment.

    Columns: ``position``, ``value``, ``cluster`` (-1 = outlier), ``core``.
    """
    labels = [NOISE_LABEL if label is None else label for label in propagation.labels]
    core = propagation.core or [False] * len(labels)
    return pd.DataFrame({
        "position": np.arange(len(values), dtype=int),
        "value": pd.Series(list(values), dtype=object),
        "cluster": np.asarray(labels, dtype=int),
        "core": np.asarray(core, dtype=bool),
    })


@dataclass
class ClusteringDiagnostics:
    """Summary of a clustering run for quality assessment."""
    
    num_points: int
    """Total number of points provided."""
    
    num_clusters: int
    """Number of clusters found."""
    
    num_noise: int
    """Number of outliers."""
    
    num_core: int = 0
    """Number of core points."""
    
    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each cluster, in label order."""
    
    silhouette_score: Optional[float] = None
    """Silhouette score over clustered points (None if not computable)."""
    
    strategy: Optional[NeighborStrategy] = None
    """Neighbor strategy used."""
    
    epsilon: Optional[float] = None
    """Neighborhood radius used."""
    
    minimum_number_of_points: Optional[int] = None
    """Density threshold used."""
    
    suggestions: List[str] = field(default_factory=list)
    """Actionable suggestions for tuning the parameters."""

    @property
    def noise_ratio(self) -> float:
        return self.num_noise / self.num_points if self.num_points else 0.0


def _compute_cluster_quality(
    X: np.ndarray,
    labels: np.ndarray,
    num_clusters: int
) -> Optional[float]:
    """
    Compute silhouette score for cluster quality assessment.
    
    Returns None if quality cannot be computed (e.g., < 2 clusters).
    """
    if num_clusters < 2:
        return None
    
    # Only score clustered points
    mask = labels != NOISE_LABEL
    if mask.sum() <= num_clusters:
        return None
    
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        score = silhouette_score(X[mask], labels[mask])
    return float(score)


def _coordinates_or_none(values: Sequence[Any]) -> Optional[np.ndarray]:
    """Coordinate matrix of ``values``, or None when they carry no coordinates."""
    try:
        return coordinate_matrix(values)
    except (TypeError, ValueError):
        return None


def _suggest(diagnostics: ClusteringDiagnostics) -> List[str]:
    suggestions = []
    n = diagnostics.num_points
    if n == 0:
        return suggestions

    if diagnostics.num_clusters == 0:
        suggestions.append(
            f"All {n} points are outliers. Consider increasing epsilon "
            f"({diagnostics.epsilon}) or reducing minimum_number_of_points "
            f"({diagnostics.minimum_number_of_points})."
        )
    elif diagnostics.num_clusters == 1 and diagnostics.num_noise == 0 and n > 1:
        suggestions.append(
            f"All {n} points fell into a single cluster. Consider reducing epsilon "
            f"({diagnostics.epsilon}) or increasing minimum_number_of_points."
        )
    elif diagnostics.noise_ratio > 0.5:
        suggestions.append(
            f"High noise ratio ({diagnostics.num_noise}/{n} = {diagnostics.noise_ratio:.1%}). "
            "Consider increasing epsilon or reducing minimum_number_of_points."
        )

    if diagnostics.silhouette_score is not None and diagnostics.silhouette_score < 0.2:
        suggestions.append(
            f"Low silhouette score ({diagnostics.silhouette_score:.3f}). "
            "Clusters may be poorly separated."
        )
    return suggestions


def build_diagnostics(
    values: Sequence[Any],
    propagation: PropagationResult,
    config: Optional[DBSCANConfig] = None,
) -> ClusteringDiagnostics:
    """
    Summarize a propagation run.

    The silhouette score is only computed when every value exposes
    coordinates of a common dimension.
    """
    labels = np.asarray(
        [NOISE_LABEL if label is None else label for label in propagation.labels],
        dtype=int,
    )
    sizes = [int((labels == k).sum()) for k in range(propagation.num_clusters)]

    silhouette = None
    if propagation.num_clusters >= 2:
        X = _coordinates_or_none(values)
        if X is not None:
            silhouette = _compute_cluster_quality(X, labels, propagation.num_clusters)

    diagnostics = ClusteringDiagnostics(
        num_points=len(values),
        num_clusters=propagation.num_clusters,
        num_noise=propagation.num_outliers,
        num_core=sum(propagation.core),
        cluster_sizes=sizes,
        silhouette_score=silhouette,
        strategy=config.strategy if config else None,
        epsilon=config.epsilon if config else None,
        minimum_number_of_points=config.minimum_number_of_points if config else None,
    )
    diagnostics.suggestions = _suggest(diagnostics)

    for suggestion in diagnostics.suggestions:
        logger.warning(suggestion)

    return diagnostics
