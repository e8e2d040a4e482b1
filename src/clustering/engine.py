"""
Label propagation for DBSCAN.

Every point starts unlabeled. Points are scanned in input order; an unlabeled
point whose neighborhood (itself included) holds at least
``minimum_number_of_points`` positions is a core point and seeds a new
cluster. The cluster then grows breadth-first: each dequeued unlabeled point
joins the cluster, and if it is itself a core point its neighbors are queued
as well. Points never reached from a core point stay unlabeled (outliers).

Labels are 0, 1, 2, ... in the order the seeding core points are found, and a
label is never changed once assigned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .neighbors import NeighborQuery


logger = logging.getLogger(__name__)


@dataclass
class PropagationResult:
    """Final per-point state of one clustering run."""

    labels: List[Optional[int]]
    """Cluster label per input position (None = outlier)."""

    core: List[bool] = field(default_factory=list)
    """Whether each point met the density threshold when queried."""

    num_clusters: int = 0
    """Number of labels handed out."""

    @property
    def num_outliers(self) -> int:
        return sum(1 for label in self.labels if label is None)


def propagate_labels(
    count: int,
    query: NeighborQuery,
    minimum_number_of_points: int,
) -> PropagationResult:
    """
    Assign cluster labels to positions ``0 .. count-1``.

    Args:
        count: Number of points in the run
        query: Neighbor provider over the same points
        minimum_number_of_points: Neighborhood size needed for a core point

    Returns:
        PropagationResult with labels, core flags and cluster count
    """
    labels: List[Optional[int]] = [None] * count
    core = [False] * count
    current_label = 0

    for position in range(count):
        if labels[position] is not None:
            continue

        neighbors = query.neighbors(position)
        if len(neighbors) < minimum_number_of_points:
            continue

        core[position] = True
        labels[position] = current_label

        # Append-only queue drained through a head index
        queue = list(neighbors)
        head = 0
        while head < len(queue):
            candidate = queue[head]
            head += 1
            if labels[candidate] is not None:
                continue

            labels[candidate] = current_label

            expanded = query.neighbors(candidate)
            if len(expanded) >= minimum_number_of_points:
                core[candidate] = True
                queue.extend(expanded)

        if logger.isEnabledFor(logging.DEBUG):
            size = sum(1 for label in labels if label == current_label)
            logger.debug(
                f"Cluster {current_label} seeded at position {position}: "
                f"{size} points, {head} queue entries drained"
            )

        current_label += 1

    return PropagationResult(labels=labels, core=core, num_clusters=current_label)
