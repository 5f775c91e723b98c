"""Statistics utilities for poll results.

This package contains small, dependency-light statistical helpers used by the
poll statistics engine:
- Distribution functions (log-gamma, incomplete gamma, chi-square)
- Chi-squared independence test
- Wilson score intervals and margins of error
- Sample size adequacy heuristics
- Post-stratification demographic weighting

No SciPy dependency is required.
"""

from .distributions import log_gamma, gammainc_lower_reg, chi2_cdf, chi2_sf
from .tests import chi_squared, SIGNIFICANCE_LEVEL
from .confidence import wilson_score, margin_of_error, z_score
from .sample_size import assess_sample_size, required_sample_size, votes_needed
from .weighting import calculate_weights, sample_distribution, weight_results

__all__ = [
    "log_gamma",
    "gammainc_lower_reg",
    "chi2_cdf",
    "chi2_sf",
    "chi_squared",
    "SIGNIFICANCE_LEVEL",
    "wilson_score",
    "margin_of_error",
    "z_score",
    "assess_sample_size",
    "required_sample_size",
    "votes_needed",
    "calculate_weights",
    "sample_distribution",
    "weight_results",
]
