"""DeLong placements for non-parametric ROC / AUC analysis."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import groupby


@dataclass(frozen=True)
class DeLongPlacements:
    """AUC estimate with the normalised placements of cases and controls."""

    theta: float = 0.0
    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)


def _ieee_div(numerator: float, denominator: float) -> float:
    """Divide the way IEEE floats do, giving inf or NaN for a zero divisor."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def delong_placements(
    cases: Sequence[float],
    controls: Sequence[float],
    direction: str = "<",
) -> DeLongPlacements:
    """Compute the DeLong placements and AUC of ``cases`` against ``controls``.

    With ``direction == ">"`` all values are negated first, so that controls
    are expected to score higher than cases.
    """
    m = len(cases)
    n = len(controls)
    sign = -1.0 if direction == ">" else 1.0

    combined = [(sign * value, index) for index, value in enumerate(cases)]
    combined += [(sign * value, m + index) for index, value in enumerate(controls)]
    combined.sort(key=lambda item: item[0])

    placements = [0.0] * (m + n)
    seen_cases = 0
    seen_controls = 0
    for _, tied in groupby(combined, key=lambda item: item[0]):
        indices = [index for _, index in tied]
        case_indices = [index for index in indices if index < m]
        control_indices = [index for index in indices if index >= m]
        case_count = len(case_indices)
        control_count = len(control_indices)

        for index in case_indices:
            placements[index] = seen_controls + control_count / 2.0
        for index in control_indices:
            placements[index] = seen_cases + case_count / 2.0

        seen_cases += case_count
        seen_controls += control_count

    case_placements = placements[:m]
    control_placements = placements[m:]
    x = [_ieee_div(value, float(n)) for value in case_placements]
    y = [1.0 - _ieee_div(value, float(m)) for value in control_placements]
    theta = _ieee_div(sum(case_placements), float(m) * float(n))
    return DeLongPlacements(theta=theta, x=x, y=y)