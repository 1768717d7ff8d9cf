"""Basic descriptive statistics with optional NaN removal."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from itertools import accumulate

import numpy as np

NAN = math.nan


def is_na(value: float) -> bool:
    """Return True if ``value`` is NaN."""
    return math.isnan(value)


def has_nan(values: Iterable[float]) -> bool:
    """Return True if any element of ``values`` is NaN."""
    return any(math.isnan(v) for v in values)


def count_not_nan(values: Iterable[float]) -> int:
    """Count the elements of ``values`` that are not NaN."""
    return sum(1 for v in values if not math.isnan(v))


def factorial(n: int) -> int:
    """Return n!, or 0 when it would not fit in 64 unsigned bits (n > 20)."""
    if n < 0:
        raise ValueError("n must be non-negative.")
    if n > 20:
        return 0
    return math.factorial(n)


def combine(n: int, k: int) -> int:
    """Return the binomial coefficient C(n, k); 0 when k > n."""
    if n < 0 or k < 0:
        raise ValueError("n and k must be non-negative.")
    if k > n:
        return 0
    return math.comb(n, k)


def digamma(x: float) -> float:
    """Approximate the digamma function by recurrence and asymptotic series."""
    if math.isinf(x) and x < 0:
        return NAN
    shift = 0.0
    while x <= 5:
        shift -= 1 / x
        x += 1
    b = 1 / (x * x)
    c = b * (-1 / 12.0
             + b * (1 / 120.0
             + b * (-1 / 252.0
             + b * (1 / 240.0
             + b * (-1 / 132.0
             + b * (691 / 32760.0
             + b * (-1 / 12.0
             + b * 3617 / 8160.0)))))))
    return shift + math.log(x) - 0.5 / x + c


def log_base(x: float, base: float = 10.0) -> float:
    """Logarithm of ``x`` in the given base, with IEEE results for bad input."""
    with np.errstate(all="ignore"):
        return float(np.log(np.float64(x)) / np.log(np.float64(base)))


def _valid_values(values: Iterable[float], na_rm: bool) -> list[float] | None:
    """Non-NaN values, or None if a NaN is met and ``na_rm`` is false."""
    clean = []
    for v in values:
        if math.isnan(v):
            if not na_rm:
                return None
        else:
            clean.append(v)
    return clean


def _kept(values: Iterable[float], na_rm: bool) -> list[float]:
    """Values kept for summation: all of them, or the non-NaN ones."""
    return [v for v in values if not (na_rm and math.isnan(v))]


def _check_same_size(a: Sequence[float], b: Sequence[float], message: str) -> None:
    if len(a) != len(b):
        raise ValueError(message)


def _valid_pairs(
    a: Sequence[float], b: Sequence[float], na_rm: bool
) -> list[tuple[float, float]] | None:
    """Pairs where both sides are valid, or None on NaN without ``na_rm``."""
    pairs = []
    for x, y in zip(a, b):
        if math.isnan(x) or math.isnan(y):
            if not na_rm:
                return None
        else:
            pairs.append((x, y))
    return pairs


def median(values: Iterable[float], na_rm: bool = False) -> float:
    """Median of ``values``; NaN if a NaN is present and not removed."""
    clean = _valid_values(values, na_rm)
    if not clean:
        return NAN
    clean.sort()
    half = len(clean) // 2
    if len(clean) % 2:
        return clean[half]
    return (clean[half - 1] + clean[half]) / 2.0


def mean(values: Iterable[float], na_rm: bool = False) -> float:
    """Arithmetic mean of ``values``."""
    kept = _kept(values, na_rm)
    return sum(kept) / len(kept) if kept else NAN


def minimum(values: Iterable[float], na_rm: bool = False) -> float:
    """Smallest value; NaN if empty or a NaN is present and not removed."""
    clean = _valid_values(values, na_rm)
    return min(clean) if clean else NAN


def maximum(values: Iterable[float], na_rm: bool = False) -> float:
    """Largest value; NaN if empty or a NaN is present and not removed."""
    clean = _valid_values(values, na_rm)
    return max(clean) if clean else NAN


def total(values: Iterable[float], na_rm: bool = False) -> float:
    """Sum of ``values``."""
    return sum(_kept(values, na_rm), 0.0)


def mae(a: Sequence[float], b: Sequence[float], na_rm: bool = False) -> float:
    """Mean absolute error between two equally sized sequences."""
    _check_same_size(a, b, "Input vectors must have the same size.")
    pairs = _valid_pairs(a, b, na_rm)
    if not pairs:
        return NAN
    return sum(abs(x - y) for x, y in pairs) / len(pairs)


def rmse(a: Sequence[float], b: Sequence[float], na_rm: bool = False) -> float:
    """Root mean squared error between two equally sized sequences."""
    _check_same_size(a, b, "Input vectors must have the same size.")
    pairs = _valid_pairs(a, b, na_rm)
    if not pairs:
        return NAN
    return math.sqrt(sum((x - y) ** 2 for x, y in pairs) / len(pairs))


def cumsum(values: Iterable[float]) -> list[float]:
    """Running totals of ``values``."""
    return list(accumulate(float(v) for v in values))


def abs_diff(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Element-wise absolute difference of two equally sized sequences."""
    _check_same_size(a, b, "Vectors must have the same size")
    return [abs(x - y) for x, y in zip(a, b)]


def sum_normalize(values: Sequence[float], na_rm: bool = False) -> list[float]:
    """Divide every value by the total; NaN entries stay NaN."""
    s = total(values, na_rm)
    if s == 0.0:
        raise ValueError("Sum of vector elements is zero, cannot normalize.")
    return [NAN if math.isnan(v) else v / s for v in values]


def arithmetic_seq(start: float, stop: float, length_out: int) -> list[float]:
    """Evenly spaced sequence of ``length_out`` values from start to stop."""
    if length_out < 1:
        raise ValueError("length_out must be at least 1.")
    if length_out == 1:
        return [float(start)]
    step = (stop - start) / (length_out - 1)
    return [start + i * step for i in range(length_out)]


def variance(values: Sequence[float], na_rm: bool = False) -> float:
    """Sample variance (n - 1 denominator); NaN with fewer than two values."""
    centre = mean(values, na_rm)
    kept = _kept(values, na_rm)
    if len(kept) <= 1:
        return NAN
    return sum((v - centre) * (v - centre) for v in kept) / (len(kept) - 1)


def covariance(a: Sequence[float], b: Sequence[float], na_rm: bool = False) -> float:
    """Sample covariance of two equally sized sequences."""
    _check_same_size(a, b, "Vectors must have the same size")
    mean_a = mean(a, na_rm)
    mean_b = mean(b, na_rm)
    products = [
        (x - mean_a) * (y - mean_b)
        for x, y in zip(a, b)
        if not (na_rm and (math.isnan(x) or math.isnan(y)))
    ]
    if len(products) <= 1:
        return NAN
    return sum(products) / (len(products) - 1)