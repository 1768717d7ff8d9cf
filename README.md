# edmstats

Small, NaN-aware numerical helpers for empirical dynamic modelling work:
descriptive statistics, correlation measures with significance tests and
confidence intervals, DeLong AUC estimates, distances and nearest-neighbour
lookups.

Missing values are represented as `float("nan")`. Most functions take an
`na_rm` flag. When it is true, NaN entries (or pairs and rows holding a NaN)
are dropped first. When it is false, a NaN in the input generally makes the
result NaN; `linear_trend_rm` raises `ValueError` instead.

## Installation

```
pip install edmstats
```

To run the test suite, install the test extra:

```
pip install "edmstats[test]"
pytest
```

## Modules

- `edmstats.basic`: `mean`, `median`, `variance`, `covariance` (sample
  estimates with an `n - 1` denominator), `minimum`, `maximum`, `total`,
  `mae`, `rmse`, `cumsum`, `abs_diff`, `sum_normalize`, `arithmetic_seq`,
  `factorial` (0 when `n > 20`), `combine` (binomial coefficient, 0 when
  `k > n`), `digamma`, `log_base`, and the NaN checks `is_na`, `has_nan` and
  `count_not_nan`.
- `edmstats.correlation`: `pearson_cor`, `spearman_cor` (ordinal ranks, ties
  broken by position), `kendall_cor` (tau-a), `partial_cor`,
  `partial_cor_trivar`, `cor_significance` (two-sided p-value from the t
  distribution with `n - k - 2` degrees of freedom) and `cor_confidence`
  (Fisher-z interval returned as `[upper, lower]`). `spearman_cor` and
  `kendall_cor` report 1.0 where the coefficient is undefined.
- `edmstats.delong`: `delong_placements`, which returns a frozen
  `DeLongPlacements` dataclass with fields `theta` (the AUC estimate), `x`
  (case placements) and `y` (control placements). A `direction` of `">"`
  negates all values first.
- `edmstats.auc`: `delong_auc_confidence`, returning `[theta, upper, lower]`,
  and `cmc_test`, which compares the cases with the ramp `i / num_samples`
  and returns `[theta, p_value, upper, lower]`. With one case or control or
  fewer, both return `theta`, then `1.0` and NaN bounds.
- `edmstats.linalg`: `svd`, returning `(u, d, v)` with full-size `u` and `v`,
  and `linear_trend_rm`, which returns the residuals of a least-squares plane
  with intercept fitted on x and y coordinates.
- `edmstats.distance`: `distance` (Euclidean, or Manhattan with `l1norm`),
  `chebyshev_distance`, `mat_distance`, `mat_chebyshev_distance`,
  `k_nearest_distance`, `mat_k_nearest_distance`, `neighbors_num`,
  `mat_neighbors_num`, `knn_indices` and `dist_knn_indices`.

## Example

```python
from edmstats.basic import mean, median
from edmstats.correlation import pearson_cor, cor_significance, cor_confidence
from edmstats.auc import delong_auc_confidence
from edmstats.distance import knn_indices

nan = float("nan")
values = [1.0, 2.0, nan, 4.0]

mean(values, na_rm=True)     # 2.333...
median(values, na_rm=False)  # nan

y = [1.0, 2.0, 3.0, 4.0, 5.0]
y_hat = [1.1, 1.9, 3.2, 3.8, 5.1]
r = pearson_cor(y, y_hat, na_rm=False)
p = cor_significance(r, len(y), k=0)
upper, lower = cor_confidence(r, len(y), k=0, level=0.05)

theta, ci_upper, ci_lower = delong_auc_confidence(
    [0.8, 0.9, 0.7], [0.2, 0.4, 0.3], "<", level=0.05
)

embedding = [[0.0, 0.0], [1.0, 0.0], [0.0, 2.0], [5.0, 5.0]]
knn_indices(embedding, 0, 2, [0, 1, 2, 3])  # [1, 2]
```

## Errors

`mae`, `rmse`, `abs_diff`, `covariance`, the correlation functions and
`linear_trend_rm` raise `ValueError` when their paired inputs differ in
length; `partial_cor` also does so when a control differs in length from `y`.
`sum_normalize` raises `ValueError` when the sum is zero, `arithmetic_seq`
when `length_out` is below 1, `factorial` and `combine` for negative
arguments, and `svd` for an empty or non-two-dimensional matrix. The distance
functions do not check lengths; they compare only as many positions as the
shorter input has.

## What it does not do

This is a library only: it has no command-line tool, does no file input or
output, and does not run any embedding or cross-mapping analysis itself.