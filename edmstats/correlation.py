"""Pearson, Spearman, Kendall and partial correlation with significance tests."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy import stats

NAN = math.nan


def _check_same_size(y: Sequence[float], y_hat: Sequence[float], message: str) -> None:
    if len(y) != len(y_hat):
        raise ValueError(message)


def _clean_pairs(
    y: Sequence[float], y_hat: Sequence[float], na_rm: bool
) -> tuple[np.ndarray, np.ndarray] | None:
    """Arrays of the pairs where both values are valid.

    Returns None when a NaN is met and ``na_rm`` is false.
    """
    kept_y: list[float] = []
    kept_y_hat: list[float] = []
    for a, b in zip(y, y_hat):
        if math.isnan(a) or math.isnan(b):
            if not na_rm:
                return None
        else:
            kept_y.append(a)
            kept_y_hat.append(b)
    return np.asarray(kept_y, dtype=float), np.asarray(kept_y_hat, dtype=float)


def _pearson(a: np.ndarray, b: np.ndarray) -> float:
    """Pearson correlation of two arrays; NaN when either is constant."""
    if a.size == 0:
        return NAN
    da = a - a.mean()
    db = b - b.mean()
    with np.errstate(all="ignore"):
        return float(np.sum(da * db) / np.sqrt(np.sum(da * da) * np.sum(db * db)))


def _clamp(value: float) -> float:
    """Limit to [-1, 1], leaving NaN untouched."""
    if value < -1.0:
        return -1.0
    if value > 1.0:
        return 1.0
    return value


def _clamp_nan_to_one(value: float) -> float:
    """Limit to [-1, 1]; an undefined value is reported as 1."""
    if math.isnan(value):
        return 1.0
    return max(-1.0, min(1.0, value))


def _ordinal_ranks(values: np.ndarray) -> np.ndarray:
    """1-based ranks with ties broken by position."""
    order = np.argsort(values, kind="stable")
    return np.argsort(order, kind="stable").astype(float) + 1.0


def _pinv(matrix: np.ndarray, tol: float | None = None) -> np.ndarray:
    """Moore-Penrose pseudo-inverse, dropping singular values not above ``tol``."""
    u, s, vt = np.linalg.svd(matrix, full_matrices=False)
    if tol is None:
        tol = max(matrix.shape) * (s.max() if s.size else 0.0) * np.finfo(float).eps
    s_inv = np.zeros_like(s)
    keep = s > tol
    s_inv[keep] = 1.0 / s[keep]
    return (vt.T * s_inv) @ u.T


def pearson_cor(
    y: Sequence[float], y_hat: Sequence[float], na_rm: bool = False
) -> float:
    """Pearson correlation of ``y`` and ``y_hat``, limited to [-1, 1]."""
    _check_same_size(y, y_hat, "Input vectors must have the same size.")
    clean = _clean_pairs(y, y_hat, na_rm)
    if clean is None or clean[0].size == 0:
        return NAN
    return _clamp(_pearson(*clean))


def spearman_cor(
    y: Sequence[float], y_hat: Sequence[float], na_rm: bool = False
) -> float:
    """Spearman rank correlation, using ordinal ranks for ties."""
    _check_same_size(y, y_hat, "Input vectors must have the same size.")
    clean = _clean_pairs(y, y_hat, na_rm)
    if clean is None or clean[0].size == 0:
        return NAN
    rank_y = _ordinal_ranks(clean[0])
    rank_y_hat = _ordinal_ranks(clean[1])
    return _clamp_nan_to_one(_pearson(rank_y, rank_y_hat))


def kendall_cor(
    y: Sequence[float], y_hat: Sequence[float], na_rm: bool = False
) -> float:
    """Kendall's tau-a: tied pairs count as neither concordant nor discordant."""
    _check_same_size(y, y_hat, "Input vectors must have the same size.")
    clean = _clean_pairs(y, y_hat, na_rm)
    if clean is None:
        return NAN
    a, b = clean
    n = a.size
    if n < 2:
        return NAN
    dy = np.subtract.outer(a, a)
    dyh = np.subtract.outer(b, b)
    upper = np.triu_indices(n, k=1)
    signs = (dy * dyh)[upper]
    concordant = int(np.count_nonzero(signs > 0))
    discordant = int(np.count_nonzero(signs < 0))
    tau = (concordant - discordant) / (0.5 * n * (n - 1))
    return _clamp_nan_to_one(tau)


def partial_cor(
    y: Sequence[float],
    y_hat: Sequence[float],
    controls: Sequence[Sequence[float]],
    na_rm: bool = False,
    linear: bool = False,
) -> float:
    """Correlation of ``y`` and ``y_hat`` after controlling for ``controls``.

    With ``linear`` true, both are regressed on the controls (without an
    intercept) and the residuals are correlated; otherwise the result comes
    from the pseudo-inverse of the correlation matrix.
    """
    _check_same_size(y, y_hat, "Input vectors y and y_hat must have the same size.")
    if any(len(control) != len(y) for control in controls):
        raise ValueError("All control variables must have the same size as y.")

    rows: list[tuple[float, ...]] = []
    for i, (a, b) in enumerate(zip(y, y_hat)):
        row = (a, b, *(control[i] for control in controls))
        if any(math.isnan(v) for v in row):
            if not na_rm:
                return NAN
        else:
            rows.append(row)

    if not rows:
        return NAN
    n_controls = len(controls)
    if len(rows) <= n_controls + 2:
        return NAN

    data = np.asarray(rows, dtype=float)
    clean_y = data[:, 0]
    clean_y_hat = data[:, 1]
    control_mat = data[:, 2:]

    if linear:
        if n_controls:
            projector = control_mat @ _pinv(control_mat)
            resid_y = clean_y - projector @ clean_y
            resid_y_hat = clean_y_hat - projector @ clean_y_hat
        else:
            resid_y, resid_y_hat = clean_y, clean_y_hat
        result = _pearson(resid_y, resid_y_hat)
    else:
        ordered = np.column_stack([control_mat, clean_y, clean_y_hat])
        i, j = n_controls, n_controls + 1
        with np.errstate(all="ignore"):
            corrm = np.atleast_2d(np.corrcoef(ordered, rowvar=False))
        if not np.all(np.isfinite(corrm)):
            return NAN
        try:
            precm = _pinv(corrm, 1e-10)
        except np.linalg.LinAlgError:
            return NAN
        with np.errstate(all="ignore"):
            result = float(-precm[i, j] / np.sqrt(precm[i, i] * precm[j, j]))

    return _clamp(result)


def partial_cor_trivar(
    y: Sequence[float],
    y_hat: Sequence[float],
    control: Sequence[float],
    na_rm: bool = False,
    linear: bool = False,
) -> float:
    """Partial correlation of ``y`` and ``y_hat`` given a single control."""
    return partial_cor(y, y_hat, [control], na_rm, linear)


def cor_significance(r: float, n: int, k: int = 0) -> float:
    """Two-sided p-value of a (partial) correlation ``r`` from ``n`` samples.

    ``k`` is the number of control variables; the t statistic has
    ``n - k - 2`` degrees of freedom.
    """
    df = float(n - k - 2)
    with np.errstate(all="ignore"):
        t = np.float64(r) * np.sqrt(np.float64(df) / (1.0 - np.float64(r) * r))
        pvalue = float((1.0 - stats.t.cdf(t, df)) * 2.0)
    if pvalue < 0:
        pvalue = 0.0
    if pvalue > 1.0:
        pvalue = 1.0
    return pvalue


def cor_confidence(
    r: float, n: int, k: int = 0, level: float = 0.05
) -> list[float]:
    """Fisher-z confidence interval of ``r``, returned as ``[upper, lower]``."""
    with np.errstate(all="ignore"):
        r64 = np.float64(r)
        z = 0.5 * np.log((1.0 + r64) / (1.0 - r64))
        ztheta = 1.0 / np.sqrt(np.float64(n - k - 3))
        q = stats.norm.ppf(1.0 - level / 2.0)
        upper = z + q * ztheta
        lower = z - q * ztheta
        r_upper = (np.exp(2.0 * upper) - 1.0) / (np.exp(2.0 * upper) + 1.0)
        r_lower = (np.exp(2.0 * lower) - 1.0) / (np.exp(2.0 * lower) + 1.0)
    return [float(r_upper), float(r_lower)]