"""
Run configuration for DBSCAN clustering.

Parameters are validated up front so an invalid run fails before any point
is processed.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping

from .errors import ConfigurationError


class NeighborStrategy(Enum):
    """How neighbors within epsilon are looked up."""
    EXHAUSTIVE = "exhaustive"
    INDEXED = "indexed"


def validate_parameters(epsilon: float, minimum_number_of_points: int) -> None:
    """
    Check clustering parameters.

    Raises:
        ConfigurationError: If ``minimum_number_of_points`` is negative or
            ``epsilon`` is not a finite positive number
    """
    if isinstance(minimum_number_of_points, bool) or not isinstance(minimum_number_of_points, numbers.Integral):
        raise ConfigurationError(
            f"minimum_number_of_points must be an integer, got {minimum_number_of_points!r}"
        )
    if minimum_number_of_points < 0:
        raise ConfigurationError(
            f"minimum_number_of_points must be >= 0, got {minimum_number_of_points}"
        )

    try:
        eps = float(epsilon)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"epsilon must be a number, got {epsilon!r}") from e
    if not math.isfinite(eps) or eps <= 0:
        raise ConfigurationError(
            f"epsilon must be a finite number > 0, got {epsilon!r}. "
            "A non-positive radius would leave every point without neighbors."
        )


@dataclass
class DBSCANConfig:
    """Configuration for a DBSCAN run."""

    epsilon: float = 0.5
    """Neighborhood radius; neighbors are strictly closer than this."""

    minimum_number_of_points: int = 5
    """Minimum neighborhood size (counting the point itself) for a core point."""

    strategy: NeighborStrategy = NeighborStrategy.EXHAUSTIVE
    """Neighbor lookup strategy."""

    def validate(self) -> "DBSCANConfig":
        validate_parameters(self.epsilon, self.minimum_number_of_points)
        if not isinstance(self.strategy, NeighborStrategy):
            raise ConfigurationError(f"Unknown neighbor strategy {self.strategy!r}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (YAML friendly)."""
        return {
            "epsilon": self.epsilon,
            "minimum_number_of_points": self.minimum_number_of_points,
            "strategy": self.strategy.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DBSCANConfig":
        """
        Build a validated config from a mapping.

        Missing keys fall back to the dataclass defaults.

        Raises:
            ConfigurationError: On unknown strategy names or invalid values
        """
        defaults = cls()
        strategy_name = data.get("strategy", defaults.strategy.value)
        try:
            strategy = NeighborStrategy(str(strategy_name).lower())
        except ValueError as e:
            available = ", ".join(s.value for s in NeighborStrategy)
            raise ConfigurationError(
                f"Unknown neighbor strategy '{strategy_name}'. Available: {available}"
            ) from e

        config = cls(
            epsilon=data.get("epsilon", defaults.epsilon),
            minimum_number_of_points=data.get(
                "minimum_number_of_points", defaults.minimum_number_of_points
            ),
            strategy=strategy,
        )
        return config.validate()
