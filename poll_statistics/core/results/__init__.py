"""
Result classes for poll statistics.
"""

from .stats_report import (
    ConfidenceInterval,
    SampleAdequacy,
    SampleAssessment,
    SignificanceResult,
    WeightedResult,
    OptionStats,
    StatsReport,
)

__all__ = [
    "ConfidenceInterval",
    "SampleAdequacy",
    "SampleAssessment",
    "SignificanceResult",
    "WeightedResult",
    "OptionStats",
    "StatsReport",
]
