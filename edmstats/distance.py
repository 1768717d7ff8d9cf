"""Distances between vectors and rows, nearest neighbours and neighbour counts."""

from __future__ import annotations

import heapq
import math
from collections.abc import Sequence

NAN = math.nan


def _clean_pairs(
    a: Sequence[float], b: Sequence[float], na_rm: bool
) -> list[tuple[float, float]] | None:
    """Pairs where both values are valid, or None on NaN without ``na_rm``."""
    pairs = []
    for x, y in zip(a, b):
        if math.isnan(x) or math.isnan(y):
            if not na_rm:
                return None
        else:
            pairs.append((x, y))
    return pairs


def _nan_last(value: float) -> tuple[bool, float]:
    return (math.isnan(value), value)


def _kth_or_max(distances: list[float], k: int) -> float:
    """The k-th smallest distance (0-based), or the largest when k is too big."""
    if k < len(distances):
        return sorted(distances, key=_nan_last)[k]
    valid = [d for d in distances if not math.isnan(d)]
    return max(valid) if valid else NAN


def distance(
    a: Sequence[float],
    b: Sequence[float],
    l1norm: bool = False,
    na_rm: bool = False,
) -> float:
    """Manhattan (``l1norm``) or Euclidean distance between two vectors."""
    pairs = _clean_pairs(a, b, na_rm)
    if not pairs:
        return NAN
    if l1norm:
        return sum(abs(x - y) for x, y in pairs)
    return math.sqrt(sum((x - y) * (x - y) for x, y in pairs))


def chebyshev_distance(
    a: Sequence[float], b: Sequence[float], na_rm: bool = False
) -> float:
    """Largest absolute coordinate difference between two vectors."""
    pairs = _clean_pairs(a, b, na_rm)
    if not pairs:
        return NAN
    return max(0.0, *(abs(x - y) for x, y in pairs))


def k_nearest_distance(
    values: Sequence[float],
    k: int,
    l1norm: bool = False,
    na_rm: bool = False,
) -> list[float]:
    """Distance from each value to its k-th nearest value.

    The value itself is among the candidates at distance zero, so ``k = 1``
    gives the nearest other value. NaN entries give NaN.
    """
    result = [NAN] * len(values)
    for i, vi in enumerate(values):
        if math.isnan(vi):
            continue
        distances = []
        for vj in values:
            if math.isnan(vj):
                if not na_rm:
                    distances.append(NAN)
                continue
            diff = vi - vj
            distances.append(abs(diff) if l1norm else diff * diff)
        kth = _kth_or_max(distances, k)
        result[i] = kth if l1norm else math.sqrt(kth)
    return result


def mat_k_nearest_distance(
    mat: Sequence[Sequence[float]], k: int, na_rm: bool = False
) -> list[float]:
    """Chebyshev distance from each row to its (k+1)-th nearest other row."""
    result = [NAN] * len(mat)
    for i, row in enumerate(mat):
        if not na_rm and any(math.isnan(v) for v in row):
            continue
        distances: list[float] = []
        for j, other in enumerate(mat):
            if i == j:
                continue
            dist = chebyshev_distance(row, other, na_rm)
            if math.isnan(dist):
                if not na_rm:
                    distances = []
                    break
                continue
            distances.append(dist)
        if distances:
            result[i] = _kth_or_max(distances, k)
    return result


def mat_distance(
    mat: Sequence[Sequence[float]],
    l1norm: bool = False,
    na_rm: bool = False,
) -> list[list[float]]:
    """Symmetric matrix of distances between every pair of rows."""
    n = len(mat)
    result = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            result[i][j] = result[j][i] = distance(mat[i], mat[j], l1norm, na_rm)
    return result


def mat_chebyshev_distance(
    mat: Sequence[Sequence[float]], na_rm: bool = False
) -> list[list[float]]:
    """Symmetric matrix of Chebyshev distances between every pair of rows."""
    n = len(mat)
    result = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            result[i][j] = result[j][i] = chebyshev_distance(mat[i], mat[j], na_rm)
    return result


def _within(dist: float, radius: float, equal: bool) -> bool:
    return dist <= radius if equal else dist < radius


def neighbors_num(
    values: Sequence[float],
    radius: Sequence[float],
    equal: bool = False,
    l1norm: bool = False,
    na_rm: bool = False,
) -> list[int]:
    """Count, for each value, the other values within ``radius[i]`` of it.

    In one dimension both norms give the absolute difference; NaN values
    neither count nor are counted.
    """
    counts = [0] * len(values)
    for i, vi in enumerate(values):
        if math.isnan(vi):
            continue
        counts[i] = sum(
            1
            for j, vj in enumerate(values)
            if j != i and not math.isnan(vj) and _within(abs(vi - vj), radius[i], equal)
        )
    return counts


def mat_neighbors_num(
    mat: Sequence[Sequence[float]],
    radius: Sequence[float],
    equal: bool = False,
    na_rm: bool = False,
) -> list[int]:
    """Count, for each row, the other rows within Chebyshev ``radius[i]``."""
    dist = mat_chebyshev_distance(mat, na_rm)
    return [
        sum(1 for j, d in enumerate(row) if j != i and _within(d, radius[i], equal))
        for i, row in enumerate(dist)
    ]


def knn_indices(
    embedding: Sequence[Sequence[float]],
    target_idx: int,
    k: int,
    lib: Sequence[int],
) -> list[int]:
    """Indices from ``lib`` of the ``k`` rows nearest to ``embedding[target_idx]``.

    Rows that are entirely NaN are skipped; ties go to the lower index.
    """
    target = embedding[target_idx]
    candidates = []
    for i in lib:
        if i == target_idx:
            continue
        if all(math.isnan(v) for v in embedding[i]):
            continue
        dist = distance(target, embedding[i], False, True)
        if not math.isnan(dist):
            candidates.append((dist, i))
    return [i for _, i in heapq.nsmallest(k, candidates)]


def dist_knn_indices(
    dist_mat: Sequence[Sequence[float]],
    target_idx: int,
    k: int,
    lib: Sequence[int],
) -> list[int]:
    """Indices from ``lib`` of the ``k`` nearest rows by a distance matrix."""
    row = dist_mat[target_idx]
    candidates = [
        (row[i], i) for i in lib if i != target_idx and not math.isnan(row[i])
    ]
    return [i for _, i in heapq.nsmallest(k, candidates)]