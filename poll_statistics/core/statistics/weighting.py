"""poll_statistics.core.statistics.weighting

Post-stratification weighting of poll results.

Self-selected poll samples over- or under-represent demographic groups. Each
group's votes are reweighted by population share / sample share, so the
weighted sample matches a known reference population along one dimension.

Weights are clamped to [min_weight, max_weight] (default [0.2, 5.0]) so that a
handful of respondents from a small group cannot dominate the result. Groups
without sample data keep a neutral weight of 1.0.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..models.options import ReferenceDistributions
from ..models.tally import DemographicTallyRow, Dimension
from ..results.stats_report import WeightedResult

logger = logging.getLogger(__name__)

MIN_WEIGHT = 0.2
MAX_WEIGHT = 5.0


def calculate_weights(
    sample_distribution: Mapping[str, float],
    population_distribution: Mapping[str, float],
    min_weight: float = MIN_WEIGHT,
    max_weight: float = MAX_WEIGHT,
) -> Dict[str, float]:
    """Post-stratification weights for a single dimension.

    w_g = clamp(pop_g / sample_g, min_weight, max_weight)  if sample_g > 0
    w_g = 1.0                                              otherwise

    Args:
        sample_distribution: group -> proportion observed in the poll
        population_distribution: group -> proportion in the population

    Returns:
        group -> weight for every group of the population distribution
    """
    weights: Dict[str, float] = {}
    for group, pop_prop in population_distribution.items():
        sample_prop = sample_distribution.get(group, 0.0)
        if sample_prop > 0:
            weights[group] = min(max(pop_prop / sample_prop, min_weight), max_weight)
        else:
            weights[group] = 1.0
    return weights


def sample_distribution(
    tally_rows: Iterable[DemographicTallyRow],
    dimension: Union[Dimension, str],
) -> Tuple[Dict[str, float], int]:
    """Empirical group proportions for ``dimension``.

    Returns:
        (group -> proportion, grand total); proportions are empty when the
        grand total is 0
    """
    dim = Dimension.from_value(dimension)
    totals: Dict[str, int] = {}
    grand_total = 0
    for row in tally_rows:
        group = row.group_for(dim)
        totals[group] = totals.get(group, 0) + row.count
        grand_total += row.count

    if grand_total == 0:
        return {}, 0
    return {group: count / grand_total for group, count in totals.items()}, grand_total


def weight_results(
    tally_rows: Iterable[DemographicTallyRow],
    dimension: Union[Dimension, str],
    reference_distributions: Optional[ReferenceDistributions] = None,
    min_weight: float = MIN_WEIGHT,
    max_weight: float = MAX_WEIGHT,
) -> List[WeightedResult]:
    """Reweight option totals against the reference population for ``dimension``.

    Args:
        tally_rows: demographic tally rows for one poll
        dimension: dimension to weight along
        reference_distributions: population configuration; defaults to
            :meth:`ReferenceDistributions.default`

    Returns:
        One WeightedResult per option, in order of first appearance. Empty if
        the poll has no demographic counts or the dimension has no
        reference distribution.
    """
    dim = Dimension.from_value(dimension)
    if reference_distributions is None:
        reference_distributions = ReferenceDistributions.default()

    population = reference_distributions.get(dim)
    if population is None:
        logger.debug("no reference distribution for %s; skipping weighting", dim.value)
        return []

    rows = list(tally_rows)
    sample, grand_total = sample_distribution(rows, dim)
    if grand_total == 0:
        return []

    weights = calculate_weights(sample, population, min_weight, max_weight)

    raw_totals: Dict[str, int] = {}
    weighted_totals: Dict[str, float] = {}
    weighted_grand_total = 0.0
    for row in rows:
        weighted = row.count * weights.get(row.group_for(dim), 1.0)
        raw_totals[row.option_id] = raw_totals.get(row.option_id, 0) + row.count
        weighted_totals[row.option_id] = weighted_totals.get(row.option_id, 0.0) + weighted
        weighted_grand_total += weighted

    results: List[WeightedResult] = []
    for option_id, raw in raw_totals.items():
        weighted = weighted_totals[option_id]
        results.append(WeightedResult(
            option_id=option_id,
            raw_count=raw,
            raw_proportion=raw / grand_total,
            weighted_proportion=(
                weighted / weighted_grand_total if weighted_grand_total > 0 else 0.0
            ),
            weight=weighted / raw if raw > 0 else 1.0,
        ))
    return results
