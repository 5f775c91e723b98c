"""poll_statistics.core.statistics.tests

Chi-squared test of independence for option x demographic-group tables.

A contingency table has one row per poll option and one column per
demographic group within a single dimension. The test asks whether vote
choice is independent of group membership.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .distributions import chi2_sf
from ..results.stats_report import SignificanceResult

# Fixed significance threshold; not configurable
SIGNIFICANCE_LEVEL = 0.05


def chi_squared(observed: Union[np.ndarray, Sequence[Sequence[float]]]) -> SignificanceResult:
    """Run the chi-squared independence test on a contingency table.

    Test statistic:
        X^2 = sum_ij (O_ij - E_ij)^2 / E_ij,  E_ij = R_i * C_j / N

    Cells with zero expected count are skipped. Tables with fewer than two
    rows or columns, or no counts at all, return the degenerate result
    (statistic 0, df 0, p 1, not significant).

    Args:
        observed: rows x cols matrix of non-negative counts

    Returns:
        SignificanceResult with p-value from the chi-square survival function
    """
    table = np.atleast_2d(np.asarray(observed, dtype=float))
    if table.ndim != 2:
        return SignificanceResult.degenerate()

    rows, cols = table.shape
    if rows < 2 or cols < 2:
        return SignificanceResult.degenerate()

    row_totals = table.sum(axis=1)
    col_totals = table.sum(axis=0)
    total = float(table.sum())
    if total == 0.0:
        return SignificanceResult.degenerate()

    expected = np.outer(row_totals, col_totals) / total
    mask = expected > 0.0
    statistic = float(np.sum((table[mask] - expected[mask]) ** 2 / expected[mask]))

    dof = (rows - 1) * (cols - 1)
    p_value = float(chi2_sf(statistic, dof))

    return SignificanceResult(
        statistic=statistic,
        degrees_of_freedom=int(dof),
        p_value=p_value,
        significant=bool(p_value < SIGNIFICANCE_LEVEL),
    )
