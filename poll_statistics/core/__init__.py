"""
Core module for poll statistics.

This module contains pure Python implementations with no I/O. It can be used
standalone or from any request handler that supplies poll tallies.
"""

from .models import (
    OptionTally,
    DemographicTallyRow,
    Dimension,
    UNSPECIFIED,
    StatsOptions,
    ReferenceDistributions,
)

from .results import (
    ConfidenceInterval,
    SampleAdequacy,
    SampleAssessment,
    SignificanceResult,
    WeightedResult,
    OptionStats,
    StatsReport,
)

from .statistics import (
    wilson_score,
    margin_of_error,
    assess_sample_size,
    required_sample_size,
    chi_squared,
    calculate_weights,
    weight_results,
)

from .aggregation import aggregate_poll_stats

__all__ = [
    # Models
    "OptionTally",
    "DemographicTallyRow",
    "Dimension",
    "UNSPECIFIED",
    "StatsOptions",
    "ReferenceDistributions",

    # Results
    "ConfidenceInterval",
    "SampleAdequacy",
    "SampleAssessment",
    "SignificanceResult",
    "WeightedResult",
    "OptionStats",
    "StatsReport",

    # Statistics
    "wilson_score",
    "margin_of_error",
    "assess_sample_size",
    "required_sample_size",
    "chi_squared",
    "calculate_weights",
    "weight_results",

    # Aggregation
    "aggregate_poll_stats",
]
