"""
Result classes for poll statistics.

This module defines the output data structures of the statistics engine:
confidence intervals, sample assessments, significance tests, weighted
results and the consolidated per-poll report.
"""

import json
import math
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, List, Optional

_ONE_DECIMAL = Decimal("0.1")


def _json_safe_value(value: Any) -> Any:
    """Convert non-JSON-safe floats (nan/inf) to None."""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
    return value


def _percent(value: float) -> str:
    """Format a proportion as a one-decimal percentage string (ties round up)."""
    scaled = value * 100
    if not math.isfinite(scaled):
        return f"{scaled:.1f}"
    return str(Decimal(repr(scaled)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


@dataclass
class ConfidenceInterval:
    """
    Confidence interval for a proportion.

    Attributes:
        lower: Lower bound in [0, 1]
        upper: Upper bound in [0, 1]
        center: Interval center (Wilson-adjusted estimate) in [0, 1]
    """

    lower: float
    upper: float
    center: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lower": _json_safe_value(self.lower),
            "upper": _json_safe_value(self.upper),
            "center": _json_safe_value(self.center),
        }


class SampleAdequacy(Enum):
    """Qualitative sample adequacy tiers, best first."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    INSUFFICIENT = "insufficient"


@dataclass
class SampleAssessment:
    """
    Sample size adequacy classification.

    Attributes:
        adequacy: Adequacy tier
        label: Short human-readable label
        description: One-sentence explanation including the response count
        min_recommended: Minimum recommended total responses for the tier
    """

    adequacy: SampleAdequacy
    label: str
    description: str
    min_recommended: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "adequacy": self.adequacy.value,
            "label": self.label,
            "description": self.description,
        }


@dataclass
class SignificanceResult:
    """
    Result of a chi-squared test of independence.

    Attributes:
        statistic: Chi-squared statistic (>= 0)
        degrees_of_freedom: (rows - 1) * (cols - 1), 0 for degenerate tables
        p_value: Upper-tail probability in [0, 1]
        significant: True if p_value is below the fixed significance level
    """

    statistic: float
    degrees_of_freedom: int
    p_value: float
    significant: bool

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with statistic rounded to 3 and p-value to 4 decimals."""
        return {
            "statistic": _json_safe_value(round(float(self.statistic), 3)),
            "pValue": _json_safe_value(round(float(self.p_value), 4)),
            "significant": bool(self.significant),
        }

    @classmethod
    def degenerate(cls) -> 'SignificanceResult':
        """Result for a table with too little structure to test."""
        return cls(statistic=0.0, degrees_of_freedom=0, p_value=1.0, significant=False)


@dataclass
class WeightedResult:
    """
    Post-stratified result for a single option.

    Attributes:
        option_id: Option identifier
        raw_count: Unweighted vote count
        raw_proportion: raw_count / total raw count
        weighted_proportion: weighted count / total weighted count
        weight: Effective weight (weighted / raw), 1.0 when raw is 0
    """

    option_id: str
    raw_count: int
    raw_proportion: float
    weighted_proportion: float
    weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optionId": self.option_id,
            "rawCount": self.raw_count,
            "rawProportion": _json_safe_value(self.raw_proportion),
            "weightedProportion": _json_safe_value(self.weighted_proportion),
            "weight": _json_safe_value(self.weight),
        }


@dataclass
class OptionStats:
    """
    Per-option statistics within a poll report.

    Attributes:
        id: Option identifier
        label: Option text
        votes: Raw vote count
        proportion: votes / total votes (0 when the poll has no votes)
        confidence_interval: Wilson score interval for the proportion
        margin_of_error: Normal-approximation margin of error
    """

    id: str
    label: str
    votes: int
    proportion: float
    confidence_interval: ConfidenceInterval
    margin_of_error: float

    @property
    def percentage(self) -> str:
        return _percent(self.proportion)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "votes": self.votes,
            "proportion": _json_safe_value(self.proportion),
            "percentage": self.percentage,
            "confidenceInterval": {
                "lower": _percent(self.confidence_interval.lower),
                "upper": _percent(self.confidence_interval.upper),
            },
            "marginOfError": _percent(self.margin_of_error),
        }


@dataclass
class StatsReport:
    """
    Consolidated statistics for one poll.

    Attributes:
        total_votes: Sum of all option vote counts
        options: Per-option statistics in display order
        sample_assessment: Sample adequacy classification
        demographics: dimension -> group -> option_id -> count
        significance_tests: dimension -> chi-squared result; untested
            dimensions are absent
        weighted: "byAge"/"byGender" -> weighted results
        poll: Optional poll metadata passed through from the caller
    """

    total_votes: int = 0
    options: List[OptionStats] = field(default_factory=list)
    sample_assessment: Optional[SampleAssessment] = None
    demographics: Dict[str, Dict[str, Dict[str, int]]] = field(default_factory=dict)
    significance_tests: Dict[str, SignificanceResult] = field(default_factory=dict)
    weighted: Dict[str, List[WeightedResult]] = field(default_factory=dict)
    poll: Optional[Dict[str, Any]] = None

    def get_option(self, option_id: str) -> OptionStats:
        """
        Get statistics for an option.

        Raises:
            KeyError: If the option is not in the report
        """
        for opt in self.options:
            if opt.id == option_id:
                return opt
        raise KeyError(f"Option '{option_id}' not in report")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the report to the consolidated output structure.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data: Dict[str, Any] = {}
        if self.poll is not None:
            data["poll"] = dict(self.poll)

        data.update({
            "totalVotes": self.total_votes,
            "options": [opt.to_dict() for opt in self.options],
            "sampleAssessment": (
                self.sample_assessment.to_dict() if self.sample_assessment else None
            ),
            "demographics": {
                dim: {group: dict(counts) for group, counts in groups.items()}
                for dim, groups in self.demographics.items()
            },
            "significanceTests": {
                dim: res.to_dict() for dim, res in self.significance_tests.items()
            },
            "weighted": {
                key: [w.to_dict() for w in results]
                for key, results in self.weighted.items()
            },
        })
        return data

    def to_json(self, indent: int = 2) -> str:
        """Serialize the report to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        adequacy = self.sample_assessment.adequacy.value if self.sample_assessment else "n/a"
        return (
            f"StatsReport(votes={self.total_votes}, options={len(self.options)}, "
            f"sample={adequacy}, tests={sorted(self.significance_tests)})"
        )
