"""Singular value decomposition and planar linear trend removal."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

NAN = math.nan


def svd(
    matrix: Sequence[Sequence[float]],
) -> tuple[list[list[float]], list[float], list[list[float]]]:
    """Full singular value decomposition ``matrix = u @ diag(d) @ v.T``.

    Returns ``(u, d, v)`` with ``u`` of size m x m, ``v`` of size n x n and
    the singular values ``d`` in decreasing order.
    """
    a = np.asarray(matrix, dtype=float)
    if a.ndim != 2 or a.shape[0] == 0 or a.shape[1] == 0:
        raise ValueError("Matrix must be two-dimensional and non-empty.")
    u, d, vt = np.linalg.svd(a, full_matrices=True)
    return u.tolist(), d.tolist(), vt.T.tolist()


def linear_trend_rm(
    values: Sequence[float],
    xcoord: Sequence[float],
    ycoord: Sequence[float],
    na_rm: bool = False,
) -> list[float]:
    """Residuals of ``values`` after a least-squares fit on x and y.

    The fitted plane has an intercept. Positions with a NaN in any input
    stay NaN when ``na_rm`` is true; otherwise a NaN raises ValueError.
    """
    if len(values) != len(xcoord) or len(values) != len(ycoord):
        raise ValueError("Input vectors must have the same size.")

    result = [NAN] * len(values)
    valid = []
    for index, triple in enumerate(zip(values, xcoord, ycoord)):
        if any(math.isnan(v) for v in triple):
            if not na_rm:
                raise ValueError("Input contains NA values and NA_rm is false.")
        else:
            valid.append(index)

    if not valid:
        return result

    target = np.array([values[i] for i in valid], dtype=float)
    design = np.column_stack(
        [
            np.ones(len(valid)),
            np.array([xcoord[i] for i in valid], dtype=float),
            np.array([ycoord[i] for i in valid], dtype=float),
        ]
    )
    try:
        coefficients, *_ = np.linalg.lstsq(design, target, rcond=None)
    except np.linalg.LinAlgError as exc:
        raise ValueError("Linear regression failed due to singular matrix.") from exc

    residuals = target - design @ coefficients
    for index, residual in zip(valid, residuals):
        result[index] = float(residual)
    return result