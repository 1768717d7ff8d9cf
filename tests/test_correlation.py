import math

import pytest

from edmstats.correlation import (
    cor_confidence,
    cor_significance,
    kendall_cor,
    partial_cor,
    partial_cor_trivar,
    pearson_cor,
    spearman_cor,
)

NAN = math.nan

X = [1.0, 2.0, 3.5, 4.0, 6.0, 7.5, 8.0, 10.0]
Y = [2.1, 1.9, 4.0, 5.2, 5.8, 8.9, 7.7, 11.0]
Z = [0.5, 1.7, 1.1, 3.3, 2.9, 4.2, 5.1, 4.8]


def _is_nan_value(result):
    return result == pytest.approx(NAN, nan_ok=True)


# --- Pearson -------------------------------------------------------------

def test_pearson_perfect_positive():
    assert pearson_cor(X, [2 * v + 3 for v in X]) == pytest.approx(1.0)


def test_pearson_perfect_negative():
    assert pearson_cor(X, [-v for v in X]) == pytest.approx(-1.0)


def test_pearson_symmetric_and_bounded():
    r = pearson_cor(X, Y)
    assert r == pytest.approx(pearson_cor(Y, X))
    assert -1.0 <= r <= 1.0


def test_pearson_nan_without_removal():
    result = pearson_cor([1.0, NAN, 3.0], [1.0, 2.0, 3.0])
    assert result == pytest.approx(NAN, nan_ok=True)


def test_pearson_nan_removed_matches_clean():
    with_nan = pearson_cor(X + [NAN], Y + [1.0], na_rm=True)
    assert with_nan == pytest.approx(pearson_cor(X, Y))


def test_pearson_constant_is_nan():
    result = pearson_cor([1.0, 1.0, 1.0], [1.0, 2.0, 3.0])
    assert result == pytest.approx(NAN, nan_ok=True)


def test_pearson_empty_is_nan():
    result = pearson_cor([], [])
    assert result == pytest.approx(NAN, nan_ok=True)


def test_pearson_size_mismatch():
    with pytest.raises(ValueError):
        pearson_cor([1.0, 2.0], [1.0])


# --- Spearman ------------------------------------------------------------

def test_spearman_monotonic_nonlinear():
    assert spearman_cor(X, [v ** 3 for v in X]) == pytest.approx(1.0)


def test_spearman_reversed():
    assert spearman_cor(X, [math.exp(-v) for v in X]) == pytest.approx(-1.0)


def test_spearman_invariant_under_monotone_transform():
    assert spearman_cor(X, Y) == pytest.approx(spearman_cor([math.log(v) for v in X], Y))


def test_spearman_single_pair_reports_one():
    assert spearman_cor([3.0], [4.0]) == 1.0


def test_spearman_nan_handling():
    assert math.isnan(spearman_cor([1.0, NAN], [1.0, 2.0]))
    assert spearman_cor(X + [NAN], Y + [0.0], na_rm=True) == pytest.approx(
        spearman_cor(X, Y)
    )


def test_spearman_size_mismatch():
    with pytest.raises(ValueError):
        spearman_cor([1.0], [1.0, 2.0])


# --- Kendall -------------------------------------------------------------

def test_kendall_perfect():
    assert kendall_cor(X, X) == pytest.approx(1.0)
    assert kendall_cor(X, list(reversed(X))) == pytest.approx(-1.0)


def test_kendall_ties_are_ignored():
    assert kendall_cor([1.0, 2.0, 3.0], [1.0, 1.0, 2.0]) == pytest.approx(2 / 3)


def test_kendall_too_few_values():
    result = kendall_cor([1.0], [2.0])
    assert result == pytest.approx(NAN, nan_ok=True)


def test_kendall_nan_handling():
    assert math.isnan(kendall_cor([1.0, 2.0, NAN], [1.0, 2.0, 3.0]))
    assert kendall_cor([1.0, 2.0, NAN], [1.0, 2.0, 3.0], na_rm=True) == pytest.approx(1.0)


def test_kendall_symmetric():
    assert kendall_cor(X, Y) == pytest.approx(kendall_cor(Y, X))


def test_kendall_size_mismatch():
    with pytest.raises(ValueError):
        kendall_cor([1.0, 2.0], [1.0])


# --- Partial correlation ---------------------------------------------------

@pytest.mark.parametrize("linear", [False, True])
def test_partial_without_controls_equals_pearson(linear):
    assert partial_cor(X, Y, [], linear=linear) == pytest.approx(pearson_cor(X, Y))


def test_partial_matches_first_order_formula():
    rxy = pearson_cor(X, Y)
    rxz = pearson_cor(X, Z)
    ryz = pearson_cor(Y, Z)
    expected = (rxy - rxz * ryz) / math.sqrt((1 - rxz ** 2) * (1 - ryz ** 2))
    assert partial_cor(X, Y, [Z]) == pytest.approx(expected)


@pytest.mark.parametrize("linear", [False, True])
def test_partial_is_bounded(linear):
    r = partial_cor(X, Y, [Z], linear=linear)
    assert -1.0 <= r <= 1.0


def test_partial_linear_with_constant_control_equals_pearson():
    ones = [1.0] * len(X)
    assert partial_cor(X, Y, [ones], linear=True) == pytest.approx(pearson_cor(X, Y))


def test_partial_too_few_samples():
    result = partial_cor([1.0, 2.0, 3.0], [3.0, 1.0, 2.0], [[1.0, 0.0, 2.0]])
    assert result == pytest.approx(NAN, nan_ok=True)


def test_partial_nan_handling():
    z_nan = Z[:-1] + [NAN]
    assert math.isnan(partial_cor(X, Y, [z_nan]))
    assert partial_cor(X, Y, [z_nan], na_rm=True) == pytest.approx(
        partial_cor(X[:-1], Y[:-1], [Z[:-1]])
    )


def test_partial_size_errors():
    with pytest.raises(ValueError):
        partial_cor(X, Y[:-1], [Z])
    with pytest.raises(ValueError):
        partial_cor(X, Y, [Z[:-1]])


@pytest.mark.parametrize("linear", [False, True])
def test_partial_trivar_matches_partial(linear):
    assert partial_cor_trivar(X, Y, Z, linear=linear) == pytest.approx(
        partial_cor(X, Y, [Z], linear=linear)
    )


# --- Significance and confidence -------------------------------------------

def test_significance_zero_correlation():
    assert cor_significance(0.0, 20) == pytest.approx(1.0)


def test_significance_perfect_correlation():
    assert cor_significance(1.0, 20) == pytest.approx(0.0)


def test_significance_negative_correlation_is_clamped():
    assert cor_significance(-0.8, 20) == 1.0


def test_significance_decreases_with_r_and_n():
    assert cor_significance(0.6, 20) < cor_significance(0.3, 20)
    assert cor_significance(0.3, 100) < cor_significance(0.3, 20)
    assert cor_significance(0.3, 20, 3) > cor_significance(0.3, 20)


def test_confidence_contains_r():
    upper, lower = cor_confidence(0.4, 30)
    assert lower < 0.4 < upper
    assert -1.0 < lower and upper < 1.0


def test_confidence_symmetric_at_zero():
    upper, lower = cor_confidence(0.0, 25)
    assert upper == pytest.approx(-lower)


def test_confidence_narrower_with_more_samples_and_higher_level():
    up_small, low_small = cor_confidence(0.3, 20)
    up_big, low_big = cor_confidence(0.3, 200)
    assert up_big - low_big < up_small - low_small
    up_wide, low_wide = cor_confidence(0.3, 20, level=0.01)
    assert up_wide - low_wide > up_small - low_small


def test_confidence_controls_widen_interval():
    up0, low0 = cor_confidence(0.3, 20, 0)
    up2, low2 = cor_confidence(0.3, 20, 2)
    assert up2 - low2 > up0 - low0