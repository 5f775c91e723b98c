"""poll_statistics.core.statistics.sample_size

Sample size heuristics for poll results.

Rule of thumb: at least 5 expected per cell for the chi-squared test and at
least 30 per option for reasonable confidence intervals. Tiers are judged on
responses per option:

    >= 100  excellent
    >=  30  good
    >=  10  fair
    <   10  insufficient

These labels are informational guidance only; nothing is gated on them.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from .confidence import z_score
from ..results.stats_report import SampleAdequacy, SampleAssessment

# (minimum responses per option, tier, label, description template), most specific first
TIER_THRESHOLDS: List[Tuple[int, SampleAdequacy, str, str]] = [
    (100, SampleAdequacy.EXCELLENT, "Excellent sample",
     "{n} responses provide high-confidence results"),
    (30, SampleAdequacy.GOOD, "Good sample",
     "{n} responses provide reliable results with moderate margins"),
    (10, SampleAdequacy.FAIR, "Fair sample",
     "{n} responses - interpret with caution, wider margins of error"),
]
INSUFFICIENT_LABEL = "Insufficient sample"
INSUFFICIENT_DESCRIPTION = "Only {n} responses - results are not statistically reliable yet"


def assess_sample_size(total_responses: int, num_options: int) -> SampleAssessment:
    """Classify a poll's total responses into an adequacy tier.

    Args:
        total_responses: total votes cast
        num_options: number of poll options

    Returns:
        SampleAssessment; ``min_recommended`` is num_options times the tier
        threshold (the fair threshold for insufficient samples)
    """
    n = int(total_responses)
    if num_options <= 0:
        return SampleAssessment(
            adequacy=SampleAdequacy.INSUFFICIENT,
            label=INSUFFICIENT_LABEL,
            description=INSUFFICIENT_DESCRIPTION.format(n=n),
            min_recommended=0,
        )

    per_option = n / num_options

    for threshold, tier, label, description in TIER_THRESHOLDS:
        if per_option >= threshold:
            return SampleAssessment(
                adequacy=tier,
                label=label,
                description=description.format(n=n),
                min_recommended=num_options * threshold,
            )

    return SampleAssessment(
        adequacy=SampleAdequacy.INSUFFICIENT,
        label=INSUFFICIENT_LABEL,
        description=INSUFFICIENT_DESCRIPTION.format(n=n),
        min_recommended=num_options * TIER_THRESHOLDS[-1][0],
    )


def votes_needed(total_responses: int, num_options: int) -> int:
    """Additional responses needed to reach the next adequacy tier.

    Returns 0 once the sample is excellent or when there are no options.
    """
    if num_options <= 0:
        return 0
    per_option = total_responses / num_options
    next_threshold = None
    for threshold, _tier, _label, _description in TIER_THRESHOLDS:
        if per_option < threshold:
            next_threshold = threshold
    if next_threshold is None:
        return 0
    return max(0, num_options * next_threshold - int(total_responses))


def required_sample_size(desired_margin: float, confidence: float = 0.95) -> int:
    """Responses needed for a given margin of error (worst case p = 0.5).

    n = ceil(z^2 * 0.25 / margin^2)
    """
    if desired_margin <= 0:
        raise ValueError("desired_margin must be positive")
    z = z_score(confidence)
    return int(math.ceil((z * z * 0.25) / (desired_margin * desired_margin)))
