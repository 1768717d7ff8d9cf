"""AUC estimates with DeLong confidence intervals and the CMC test."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy import stats

from edmstats.delong import delong_placements

NAN = math.nan


def _qnorm(p: float, mean: float, sd: float) -> float:
    """Normal quantile; a zero spread gives the mean and a negative one NaN."""
    if math.isnan(p) or math.isnan(mean) or math.isnan(sd) or sd < 0:
        return NAN
    if sd == 0:
        return mean
    return float(stats.norm.ppf(p, loc=mean, scale=sd))


def _spread(values: Sequence[float], theta: float) -> float:
    """Sum of squared deviations from ``theta`` over ``len(values) - 1``."""
    return sum((v - theta) * (v - theta) for v in values) / (len(values) - 1)


def _interval(theta: float, variance: float, level: float) -> tuple[float, float]:
    """Normal confidence bounds around ``theta``, kept inside [0, 1]."""
    sd = math.sqrt(variance) if variance >= 0 else NAN
    lower = max(0.0, _qnorm(level / 2, theta, sd))
    upper = min(1.0, _qnorm(1 - level / 2, theta, sd))
    return upper, lower


def delong_auc_confidence(
    cases: Sequence[float],
    controls: Sequence[float],
    direction: str = "<",
    level: float = 0.05,
) -> list[float]:
    """AUC of ``cases`` against ``controls`` with a DeLong interval.

    Returns ``[theta, upper, lower]``. With one case or control or fewer,
    no interval can be formed and ``[theta, 1.0, nan, nan]`` is returned.
    """
    m = len(cases)
    n = len(controls)
    placements = delong_placements(cases, controls, direction)
    theta = placements.theta
    if m <= 1 or n <= 1:
        return [theta, 1.0, NAN, NAN]

    variance = _spread(placements.x, theta) / m + _spread(placements.y, theta) / n
    upper, lower = _interval(theta, variance, level)
    return [theta, upper, lower]


def cmc_test(
    cases: Sequence[float],
    direction: str = "<",
    level: float = 0.05,
    num_samples: int = 0,
) -> list[float]:
    """Test the AUC of ``cases`` against the uniform ramp ``i / num_samples``.

    ``num_samples`` of 0 means the number of cases. Returns
    ``[theta, p_value, upper, lower]`` where the p-value is two-sided for
    AUC different from 0.5.
    """
    m = len(cases)
    if num_samples == 0:
        num_samples = m
    controls = [i / num_samples for i in range(1, m + 1)]

    placements = delong_placements(cases, controls, direction)
    theta = placements.theta
    if m <= 1:
        return [theta, 1.0, NAN, NAN]

    variance = _spread(placements.x, theta) / m + _spread(placements.y, theta) / m
    with np.errstate(all="ignore"):
        z = float(np.float64(theta - 0.5) / np.sqrt(np.float64(variance)))
    p_value = NAN if math.isnan(z) else float(2 * stats.norm.cdf(-abs(z)))
    upper, lower = _interval(theta, variance, level)
    return [theta, p_value, upper, lower]