"""poll_statistics.core.statistics.distributions

Distribution helpers (no SciPy).

Implemented:
- Log-gamma via a 6-term Lanczos series
- Regularized lower incomplete gamma P(a, x) (series / continued fraction)
- Chi-square CDF and survival function (p-value)

Chi-square:
  If X ~ ChiSquare(df), then X = 2 * Gamma(a=df/2, scale=1).
  CDF is regularized lower incomplete gamma P(a, x/2).

References (algorithms):
- Numerical Recipes style gammln / gser / gcf.
- Modified Lentz's method for the continued fraction.

Iteration caps are deliberately small: contingency tables built from poll
tallies keep the statistic in a well-behaved range, and on cap-out the current
approximation is returned instead of failing.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

logger = logging.getLogger(__name__)


# ----------------------------
# Log-gamma
# ----------------------------

_LANCZOS_COEFFICIENTS = (
    76.18009172947146,
    -86.50532032941677,
    24.01409824083091,
    -1.231739572450155,
    0.001208650973866179,
    -0.000005395239384953,
)
_LANCZOS_SERIES_BASE = 1.000000000190015
_SQRT_2PI = 2.5066282746310005


def log_gamma(x: float) -> float:
    """Natural log of the gamma function, ln(Gamma(x)), for x > 0.

    Lanczos approximation with a fixed 6-coefficient table (absolute error
    below ~2e-10 over the positive reals).
    """
    if x <= 0.0:
        raise ValueError("x must be positive")

    y = x
    tmp = x + 5.5
    tmp -= (x + 0.5) * math.log(tmp)
    ser = _LANCZOS_SERIES_BASE
    for coef in _LANCZOS_COEFFICIENTS:
        y += 1.0
        ser += coef / y
    return -tmp + math.log(_SQRT_2PI * ser / x)


# ----------------------------
# Incomplete gamma (regularized)
# ----------------------------

_DEF_EPS = 1e-10
_DEF_MAX_IT = 200
_TINY = 1e-30


def _gamma_prefactor(a: float, x: float) -> float:
    # e^{-x} x^a / Gamma(a), computed in log space
    return math.exp(-x + a * math.log(x) - log_gamma(a))


def gammainc_series(
    a: float, x: float, eps: float = _DEF_EPS, max_it: int = _DEF_MAX_IT
) -> Tuple[float, int]:
    """Series representation of P(a, x); converges fast for x < a+1.

    term_0 = 1/a, term_n = term_{n-1} * x / (a + n), summed until
    |term| < eps or ``max_it`` terms.

    Returns:
        (P(a, x), iterations used)
    """
    term = 1.0 / a
    total = term
    n = 0
    converged = False
    for n in range(1, max_it):
        term *= x / (a + n)
        total += term
        if abs(term) < eps:
            converged = True
            break

    if not converged:
        logger.debug("incomplete gamma series hit iteration cap (a=%g, x=%g)", a, x)

    return total * _gamma_prefactor(a, x), n


def gammainc_continued_fraction(
    a: float, x: float, eps: float = _DEF_EPS, max_it: int = _DEF_MAX_IT
) -> Tuple[float, int]:
    """Continued fraction for Q(a, x) = 1 - P(a, x); converges fast for x >= a+1.

    Modified Lentz's method; intermediate c/d are floor-clamped to 1e-30.

    Returns:
        (Q(a, x), iterations used)
    """
    b = x + 1.0 - a
    c = 1.0 / _TINY
    d = 1.0 / max(b, _TINY)
    h = d

    i = 0
    converged = False
    for i in range(1, max_it + 1):
        an = -float(i) * (float(i) - a)
        b += 2.0
        d = an * d + b
        if abs(d) < _TINY:
            d = _TINY
        c = b + an / c
        if abs(c) < _TINY:
            c = _TINY
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < eps:
            converged = True
            break

    if not converged:
        logger.debug("incomplete gamma continued fraction hit iteration cap (a=%g, x=%g)", a, x)

    return h * _gamma_prefactor(a, x), i


def gammainc_lower_reg(
    a: float, x: float, eps: float = _DEF_EPS, max_it: int = _DEF_MAX_IT
) -> float:
    """Regularized lower incomplete gamma P(a, x).

    Computes:
      P(a,x) = 1/Gamma(a) * integral_0^x t^{a-1} e^{-t} dt

    Uses:
      - series expansion for x < a+1
      - continued fraction for x >= a+1

    Args:
        a: shape parameter (>0)
        x: integration limit
        eps: convergence tolerance
        max_it: iteration cap

    Returns:
        P(a, x) in [0, 1]
    """
    if a <= 0.0:
        raise ValueError("a must be positive")
    if x <= 0.0:
        return 0.0

    if x < a + 1.0:
        p, _ = gammainc_series(a, x, eps, max_it)
    else:
        q, _ = gammainc_continued_fraction(a, x, eps, max_it)
        p = 1.0 - q

    # Clip due to rounding
    if p < 0.0:
        return 0.0
    if p > 1.0:
        return 1.0
    return p


# ----------------------------
# Chi-square
# ----------------------------


def chi2_cdf(x: float, df: int) -> float:
    """CDF of chi-square distribution.

    Args:
        x: value (>=0)
        df: degrees of freedom (>0)

    Returns:
        P(X <= x)
    """
    if df <= 0:
        raise ValueError("df must be positive")
    if x <= 0.0:
        return 0.0
    return gammainc_lower_reg(0.5 * float(df), 0.5 * float(x))


def chi2_sf(x: float, df: int) -> float:
    """Survival function (upper-tail p-value) of chi-square distribution.

    Returns 1.0 when there is nothing to test (x <= 0 or df <= 0).
    """
    if x <= 0.0 or df <= 0:
        return 1.0
    return 1.0 - chi2_cdf(x, df)
