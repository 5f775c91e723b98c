"""
Configuration for the poll statistics engine.

This module defines the engine options (confidence level, which dimensions are
tested or weighted, weight clamping) and the static reference population
distributions used for post-stratification weighting.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from .tally import Dimension, UNSPECIFIED


# Allowed deviation of a reference distribution's sum from 1.0
DISTRIBUTION_SUM_TOLERANCE = 0.01


@dataclass
class StatsOptions:
    """
    Configuration options for a poll statistics run.

    Attributes:
        confidence_level: Confidence level for intervals and margins (default: 0.95)
        significance_dimensions: Dimensions tested for independence (default: age range, gender)
        breakdown_dimensions: Dimensions pivoted into the demographic breakdown
        excluded_groups: Groups left out of contingency tables (default: {"unspecified"})
        min_weight: Lower clamp for post-stratification weights (default: 0.2)
        max_weight: Upper clamp for post-stratification weights (default: 5.0)
    """

    confidence_level: float = 0.95
    significance_dimensions: Tuple[str, ...] = (
        Dimension.AGE_RANGE.value,
        Dimension.GENDER.value,
    )
    breakdown_dimensions: Tuple[str, ...] = (
        Dimension.AGE_RANGE.value,
        Dimension.GENDER.value,
        Dimension.COUNTRY.value,
    )
    excluded_groups: FrozenSet[str] = field(default_factory=lambda: frozenset({UNSPECIFIED}))
    min_weight: float = 0.2
    max_weight: float = 5.0

    def __post_init__(self):
        """Validate options after initialization."""
        if not 0 < self.confidence_level < 1:
            raise ValueError("confidence_level must be between 0 and 1")

        if self.min_weight <= 0:
            raise ValueError("min_weight must be positive")

        if self.max_weight < self.min_weight:
            raise ValueError("max_weight must be greater than or equal to min_weight")

        # Normalise dimension names; accepts Dimension members or strings
        self.significance_dimensions = tuple(
            Dimension.from_value(d).value for d in self.significance_dimensions
        )
        self.breakdown_dimensions = tuple(
            Dimension.from_value(d).value for d in self.breakdown_dimensions
        )
        self.excluded_groups = frozenset(self.excluded_groups)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize options to dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "confidence_level": self.confidence_level,
            "significance_dimensions": list(self.significance_dimensions),
            "breakdown_dimensions": list(self.breakdown_dimensions),
            "excluded_groups": sorted(self.excluded_groups),
            "min_weight": self.min_weight,
            "max_weight": self.max_weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StatsOptions':
        """
        Create StatsOptions from a dictionary.

        Args:
            data: Dictionary with option values

        Returns:
            New StatsOptions instance
        """
        defaults = cls()
        return cls(
            confidence_level=data.get("confidence_level", defaults.confidence_level),
            significance_dimensions=tuple(
                data.get("significance_dimensions", defaults.significance_dimensions)
            ),
            breakdown_dimensions=tuple(
                data.get("breakdown_dimensions", defaults.breakdown_dimensions)
            ),
            excluded_groups=frozenset(data.get("excluded_groups", defaults.excluded_groups)),
            min_weight=data.get("min_weight", defaults.min_weight),
            max_weight=data.get("max_weight", defaults.max_weight),
        )

    @classmethod
    def default(cls) -> 'StatsOptions':
        """Create options with default values."""
        return cls()


@dataclass
class ReferenceDistributions:
    """
    Known population proportions per demographic dimension.

    Each dimension maps group name -> population proportion; proportions are
    non-negative and sum to 1 (within ``DISTRIBUTION_SUM_TOLERANCE``).
    Only dimensions present here can be weighted.

    Attributes:
        distributions: Mapping of dimension name to {group: proportion}
    """

    distributions: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def __post_init__(self):
        normalized: Dict[str, Dict[str, float]] = {}
        for dim, groups in self.distributions.items():
            name = Dimension.from_value(dim).value
            props = {str(g): float(p) for g, p in groups.items()}
            if not props:
                raise ValueError(f"Reference distribution for '{name}' is empty")
            for g, p in props.items():
                if p < 0 or not math.isfinite(p):
                    raise ValueError(f"Invalid proportion {p} for group '{g}' in '{name}'")
            total = sum(props.values())
            if abs(total - 1.0) > DISTRIBUTION_SUM_TOLERANCE:
                raise ValueError(
                    f"Reference distribution for '{name}' sums to {total:.4f}, expected 1"
                )
            normalized[name] = props
        self.distributions = normalized

    @property
    def dimensions(self) -> List[str]:
        """Dimensions that support weighting."""
        return list(self.distributions.keys())

    def get(self, dimension: Union[Dimension, str]) -> Optional[Dict[str, float]]:
        """Return the distribution for ``dimension``, or None if not configured."""
        return self.distributions.get(Dimension.from_value(dimension).value)

    def groups(self, dimension: Union[Dimension, str]) -> List[str]:
        """Configured category set for ``dimension``."""
        dist = self.get(dimension)
        return list(dist.keys()) if dist else []

    def __contains__(self, dimension: object) -> bool:
        if isinstance(dimension, Dimension):
            dimension = dimension.value
        return dimension in self.distributions

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {dim: dict(groups) for dim, groups in self.distributions.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, float]]) -> 'ReferenceDistributions':
        return cls(distributions={dim: dict(groups) for dim, groups in data.items()})

    @classmethod
    def from_pairs(
        cls, dimension: Union[Dimension, str], pairs: Iterable[Tuple[str, float]]
    ) -> 'ReferenceDistributions':
        """Build a single-dimension configuration from (group, proportion) pairs."""
        return cls(distributions={Dimension.from_value(dimension).value: dict(pairs)})

    @classmethod
    def default(cls) -> 'ReferenceDistributions':
        """
        Shipped approximate population distributions.

        Age range and gender only; country is not weighted.
        """
        return cls(distributions={
            Dimension.AGE_RANGE.value: {
                "18-24": 0.12,
                "25-34": 0.18,
                "35-44": 0.17,
                "45-54": 0.16,
                "55-64": 0.15,
                "65+": 0.14,
                UNSPECIFIED: 0.08,
            },
            Dimension.GENDER.value: {
                "male": 0.49,
                "female": 0.49,
                "non-binary": 0.01,
                UNSPECIFIED: 0.01,
            },
        })
