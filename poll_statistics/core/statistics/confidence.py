"""poll_statistics.core.statistics.confidence

Interval estimates for a single vote proportion.

The Wilson score interval is the displayed interval: it is asymmetric and
stays inside [0, 1] for small samples and proportions near 0 or 1. The
normal-approximation margin of error is reported alongside it for
readability; the two need not agree.
"""

from __future__ import annotations

import math

from ..results.stats_report import ConfidenceInterval

# Two-sided standard normal quantiles for the supported confidence levels
Z_SCORES = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}
DEFAULT_Z = 1.96


def z_score(confidence: float) -> float:
    """z for a confidence level; unknown levels fall back to 95%."""
    return Z_SCORES.get(confidence, DEFAULT_Z)


def wilson_score(successes: int, total: int, confidence: float = 0.95) -> ConfidenceInterval:
    """Wilson score confidence interval for successes / total.

    center = (p + z^2/2n) / (1 + z^2/n)
    half   = z / (1 + z^2/n) * sqrt(p(1-p)/n + z^2/4n^2)

    Args:
        successes: number of votes for the option (0 <= successes <= total)
        total: total votes in the poll
        confidence: 0.90, 0.95 or 0.99

    Returns:
        ConfidenceInterval; (0, 0, 0) when total is 0
    """
    if total == 0:
        return ConfidenceInterval(lower=0.0, upper=0.0, center=0.0)

    z = z_score(confidence)
    n = float(total)
    p = successes / n
    z2 = z * z

    denominator = 1.0 + z2 / n
    center = (p + z2 / (2.0 * n)) / denominator
    margin = (z / denominator) * math.sqrt(p * (1.0 - p) / n + z2 / (4.0 * n * n))

    # Clamp floating-point overshoot at the boundaries
    return ConfidenceInterval(
        lower=max(0.0, center - margin),
        upper=min(1.0, center + margin),
        center=center,
    )


def margin_of_error(proportion: float, sample_size: int, confidence: float = 0.95) -> float:
    """Normal-approximation margin of error z * sqrt(p(1-p)/n); 0 for n = 0."""
    if sample_size == 0:
        return 0.0
    z = z_score(confidence)
    return z * math.sqrt(proportion * (1.0 - proportion) / sample_size)
