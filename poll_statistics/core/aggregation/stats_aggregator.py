"""
Consolidated statistics for a single poll.

Composes the statistics helpers over a poll's option totals and demographic
tally rows:

1. Option proportions, Wilson intervals and margins of error
2. Sample size assessment
3. Demographic breakdown (dimension -> group -> option -> count)
4. Chi-squared independence tests for the configured dimensions
5. Post-stratification weighted results by age range and gender

Pure transformation: no I/O, no shared state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..models.options import ReferenceDistributions, StatsOptions
from ..models.tally import DemographicTallyRow, Dimension, OptionTally, UNSPECIFIED
from ..results.stats_report import OptionStats, StatsReport
from ..statistics.confidence import margin_of_error, wilson_score
from ..statistics.sample_size import assess_sample_size
from ..statistics.tests import chi_squared
from ..statistics.weighting import weight_results

logger = logging.getLogger(__name__)

Breakdown = Dict[str, Dict[str, Dict[str, int]]]

# Report key -> weighted dimension
WEIGHTED_KEYS = (
    ("byAge", Dimension.AGE_RANGE),
    ("byGender", Dimension.GENDER),
)


def _as_option(item: Union[OptionTally, Mapping[str, Any]]) -> OptionTally:
    return item if isinstance(item, OptionTally) else OptionTally.from_dict(item)


def _as_tally(item: Union[DemographicTallyRow, Mapping[str, Any]]) -> DemographicTallyRow:
    return item if isinstance(item, DemographicTallyRow) else DemographicTallyRow.from_dict(item)


def build_demographic_breakdown(
    tally_rows: Iterable[DemographicTallyRow],
    dimensions: Sequence[Union[Dimension, str]] = (
        Dimension.AGE_RANGE, Dimension.GENDER, Dimension.COUNTRY,
    ),
) -> Breakdown:
    """Pivot tally rows into dimension -> group -> option_id -> count."""
    rows = list(tally_rows)
    breakdown: Breakdown = {}
    for dimension in dimensions:
        dim = Dimension.from_value(dimension)
        groups: Dict[str, Dict[str, int]] = {}
        for row in rows:
            counts = groups.setdefault(row.group_for(dim), {})
            counts[row.option_id] = counts.get(row.option_id, 0) + row.count
        breakdown[dim.value] = groups
    return breakdown


def build_contingency_table(
    groups: Mapping[str, Mapping[str, int]],
    option_ids: Sequence[str],
    excluded_groups: Iterable[str] = (UNSPECIFIED,),
) -> Tuple[np.ndarray, List[str]]:
    """Contingency table (options x groups) for one dimension's breakdown.

    Args:
        groups: group -> option_id -> count for a single dimension
        option_ids: row order
        excluded_groups: groups left out of the table

    Returns:
        (table, column group names)
    """
    excluded = set(excluded_groups)
    columns = [g for g in groups if g not in excluded]
    table = np.zeros((len(option_ids), len(columns)), dtype=float)
    for j, group in enumerate(columns):
        counts = groups[group]
        for i, option_id in enumerate(option_ids):
            table[i, j] = counts.get(option_id, 0)
    return table, columns


def aggregate_poll_stats(
    options: Iterable[Union[OptionTally, Mapping[str, Any]]],
    demographic_tallies: Iterable[Union[DemographicTallyRow, Mapping[str, Any]]] = (),
    reference_distributions: Optional[ReferenceDistributions] = None,
    stats_options: Optional[StatsOptions] = None,
    poll: Optional[Mapping[str, Any]] = None,
) -> StatsReport:
    """
    Compute the consolidated statistics report for one poll.

    Args:
        options: Option totals (OptionTally or storage-shaped mappings)
        demographic_tallies: Demographic tally rows for the poll
        reference_distributions: Population configuration for weighting
            (default: shipped age range / gender distributions)
        stats_options: Engine configuration (default: StatsOptions())
        poll: Optional poll metadata copied into the report

    Returns:
        StatsReport
    """
    if stats_options is None:
        stats_options = StatsOptions()
    if reference_distributions is None:
        reference_distributions = ReferenceDistributions.default()

    sorted_options = sorted((_as_option(o) for o in options), key=lambda o: o.position)
    tallies = [_as_tally(t) for t in demographic_tallies]
    total_votes = sum(o.vote_count for o in sorted_options)
    confidence = stats_options.confidence_level

    option_stats: List[OptionStats] = []
    for opt in sorted_options:
        proportion = opt.vote_count / total_votes if total_votes > 0 else 0.0
        option_stats.append(OptionStats(
            id=opt.id,
            label=opt.label,
            votes=opt.vote_count,
            proportion=proportion,
            confidence_interval=wilson_score(opt.vote_count, total_votes, confidence),
            margin_of_error=margin_of_error(proportion, total_votes, confidence),
        ))

    assessment = assess_sample_size(total_votes, len(sorted_options))

    breakdown = build_demographic_breakdown(tallies, stats_options.breakdown_dimensions)

    option_ids = [o.id for o in sorted_options]
    significance = {}
    for dim in stats_options.significance_dimensions:
        groups = breakdown.get(dim)
        if groups is None:
            groups = build_demographic_breakdown(tallies, (dim,))[dim]
        table, columns = build_contingency_table(
            groups, option_ids, stats_options.excluded_groups
        )
        if len(columns) < 2 or len(option_ids) < 2:
            logger.debug(
                "skipping significance test for %s (%d groups, %d options)",
                dim, len(columns), len(option_ids),
            )
            continue
        if table.sum() == 0:
            logger.debug("skipping significance test for %s (no counts)", dim)
            continue
        significance[dim] = chi_squared(table)

    weighted = {
        key: weight_results(
            tallies,
            dim,
            reference_distributions,
            stats_options.min_weight,
            stats_options.max_weight,
        )
        for key, dim in WEIGHTED_KEYS
    }

    return StatsReport(
        total_votes=total_votes,
        options=option_stats,
        sample_assessment=assessment,
        demographics=breakdown,
        significance_tests=significance,
        weighted=weighted,
        poll=dict(poll) if poll is not None else None,
    )
