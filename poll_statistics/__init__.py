"""
Poll Statistics - statistical summaries of categorical poll results

Computes defensible statistics from raw vote tallies: Wilson confidence
intervals, sample adequacy labels, chi-squared independence tests against
demographic subgroups, and post-stratification weighted results.

Conventions:
- Proportions: floats in [0, 1]; percentages only appear in serialized reports
- Demographic dimensions: "age_range", "gender", "country"
- Missing demographic answers: the "unspecified" group
- Option IDs: String type, as issued by the storage layer
"""

__version__ = "1.0.0"

from .core.models import (
    OptionTally,
    DemographicTallyRow,
    Dimension,
    UNSPECIFIED,
    StatsOptions,
    ReferenceDistributions,
)
from .core.results import (
    ConfidenceInterval,
    SampleAdequacy,
    SampleAssessment,
    SignificanceResult,
    WeightedResult,
    StatsReport,
)
from .core.aggregation import aggregate_poll_stats

__all__ = [
    # Version
    "__version__",

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
    "StatsReport",

    # Entry point
    "aggregate_poll_stats",
]
