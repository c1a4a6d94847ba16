"""
Tests for the pce module.

This module contains tests for the affine coefficients, the moments and the sampling
of random variables represented by polynomial chaos expansions.
"""

import numpy as np
import pytest
import torch

from measure_pce.basis import Basis, build_basis, canonical_bases
from measure_pce.errors import DegreeOutOfRangeError, InvalidParameterError
from measure_pce.measures import MeasureKind
from measure_pce.pce import (
    AffineKind,
    SamplingRule,
    affine_from_mean_std,
    affine_from_shape_params,
    affine_pce,
    evaluate_pce,
    mean,
    sample_measure,
    sample_pce,
    std,
    variance,
)


@pytest.fixture(params=list(MeasureKind), ids=lambda k: k.name)
def basis(request: pytest.FixtureRequest) -> Basis:
    """Return the basis of degree 6 of each canonical measure."""
    return canonical_bases(6, beta_shape=(2.0, 5.0))[request.param]


def test_end_to_end_gaussian() -> None:
    """Test the affine expansion of a normal variable with mean 2.0 and std 0.2."""
    b = build_basis("gaussian", 6)

    coeffs = affine_from_mean_std(2.0, 0.2, b)

    assert coeffs == (2.0, 0.2)
    assert mean(coeffs, b) == 2.0
    assert std(coeffs, b) == 0.2


@pytest.mark.parametrize(("mu", "sigma"), [(2.0, 0.2), (-3.5, 1.7), (0.0, 1e-3)])
def test_affine_round_trip(basis: Basis, mu: float, sigma: float) -> None:
    """Test that mean and std are recovered from the mean/std conversion."""
    coeffs = affine_from_mean_std(mu, sigma, basis)

    assert mean(coeffs, basis) == mu
    assert np.isclose(std(coeffs, basis), sigma, rtol=1e-12)


def test_degenerate_std(basis: Basis) -> None:
    """Test that a zero standard deviation gives a deterministic expansion."""
    coeffs = affine_from_mean_std(1.5, 0.0, basis)

    assert coeffs == (1.5, 0.0)
    assert std(coeffs, basis) == 0.0
    assert mean(coeffs, basis) == 1.5


def test_degenerate_std_degree_zero() -> None:
    """Test that a zero standard deviation only needs a basis of degree 0."""
    b = build_basis("logistic", 0)
    coeffs = affine_from_mean_std(1.0, 0.0, b)

    assert coeffs == (1.0, 0.0)
    assert mean(coeffs, b) == 1.0
    assert std(coeffs, b) == 0.0
    assert np.array_equal(evaluate_pce(coeffs, [-3.0, 0.0, 5.0], b), [1.0, 1.0, 1.0])

    with pytest.raises(DegreeOutOfRangeError):
        affine_from_mean_std(1.0, 0.5, b)


@pytest.mark.parametrize(("mu", "sigma"), [(1.0, -0.1), (np.nan, 1.0), (0.0, np.inf)])
def test_invalid_mean_std(mu: float, sigma: float) -> None:
    """Test that negative and non-finite moments are rejected."""
    with pytest.raises(InvalidParameterError):
        affine_from_mean_std(mu, sigma, build_basis("gaussian", 2))


def test_native_gaussian() -> None:
    """Test the native conversion of a normal variable."""
    b = build_basis("gaussian", 3)
    assert affine_from_shape_params(2.0, 0.2, b) == (2.0, 0.2)


def test_native_uniform() -> None:
    """Test the native conversion of a uniform variable on [a, b]."""
    b = build_basis("uniform", 3)
    coeffs = affine_from_shape_params(1.0, 4.0, b)

    assert coeffs == (2.5, 3.0)
    assert mean(coeffs, b) == 2.5
    assert np.isclose(std(coeffs, b), 3.0 / np.sqrt(12), rtol=1e-14)


def test_native_beta() -> None:
    """Test the native conversion of a Beta variable on [a, b]."""
    a, b, lo, hi = 2.0, 5.0, -1.0, 3.0
    basis = build_basis("beta", 3, (a, b))
    coeffs = affine_from_shape_params(lo, hi, basis)

    m = a / (a + b)
    v = a * b / ((a + b) ** 2 * (a + b + 1))

    assert np.isclose(mean(coeffs, basis), lo + (hi - lo) * m, rtol=1e-14)
    assert np.isclose(std(coeffs, basis), (hi - lo) * np.sqrt(v), rtol=1e-12)


def test_native_logistic() -> None:
    """Test the native conversion of a logistic variable."""
    b = build_basis("logistic", 3)
    coeffs = affine_from_shape_params(1.0, 0.5, b)

    assert coeffs == (1.0, 0.5)
    assert np.isclose(std(coeffs, b), 0.5 * np.pi / np.sqrt(3), rtol=1e-12)


def test_native_invalid() -> None:
    """Test that invalid native parameters are rejected."""
    with pytest.raises(InvalidParameterError):
        affine_from_shape_params(0.0, 0.0, build_basis("gaussian", 2))

    with pytest.raises(InvalidParameterError):
        affine_from_shape_params(2.0, 1.0, build_basis("uniform", 2))

    with pytest.raises(InvalidParameterError):
        affine_from_shape_params(0.0, -1.0, build_basis("logistic", 2))


def test_affine_pce_dispatch(basis: Basis) -> None:
    """Test the dispatch of `affine_pce` on the kind of conversion."""
    assert affine_pce(2.0, 0.2, basis, AffineKind.MEAN_STD) == affine_from_mean_std(
        2.0,
        0.2,
        basis,
    )
    assert affine_pce(0.0, 1.0, basis, AffineKind("native")) == (
        affine_from_shape_params(0.0, 1.0, basis)
    )
    assert affine_pce(0.0, 1.0, basis) == affine_from_shape_params(0.0, 1.0, basis)

    with pytest.raises(ValueError):
        affine_pce(0.0, 1.0, basis, "moments")  # type: ignore[arg-type]


def test_higher_order_moments() -> None:
    """Test the moments of a quadratic expansion: X = 1 + xi + 2 (xi^2 - 1)."""
    b = build_basis("gaussian", 4)
    coeffs = [1.0, 1.0, 2.0]

    assert mean(coeffs, b) == 1.0
    assert np.isclose(variance(coeffs, b), 1.0 + 4.0 * 2.0)
    assert np.isclose(std(coeffs, b), 3.0)
    assert np.isclose(std(np.array(coeffs), b), std(torch.tensor(coeffs), b))


def test_invalid_coefficients() -> None:
    """Test that empty and too long coefficient vectors are rejected."""
    b = build_basis("gaussian", 2)

    with pytest.raises(InvalidParameterError):
        mean([], b)

    with pytest.raises(DegreeOutOfRangeError):
        std([1.0, 2.0, 3.0, 4.0], b)

    assert std([1.0, 2.0, 0.0, 0.0], b) == 2.0

    with pytest.raises(InvalidParameterError):
        std([1.0, np.nan], b)


def test_evaluate_pce() -> None:
    """Test the evaluation of an expansion against its explicit polynomial."""
    b = build_basis("gaussian", 4)
    x = np.linspace(-2, 2, 9)

    assert np.allclose(evaluate_pce([0.0, 0.0, 1.0], x, b), x**2 - 1)
    assert np.allclose(evaluate_pce([2.0, 0.2], x, b), 2.0 + 0.2 * x)

    u = build_basis("uniform", 2)
    assert np.allclose(evaluate_pce([2.5, 3.0], [0.0, 1.0], u), [1.0, 4.0])


def test_sample_pce_gaussian() -> None:
    """Test that the sample moments of a normal variable match the expansion."""
    b = build_basis("gaussian", 6)
    coeffs = affine_from_mean_std(2.0, 0.2, b)

    y = sample_pce(100_000, coeffs, b, rng=1234)

    assert y.shape == (100_000,)
    assert abs(y.mean() - 2.0) < 0.01
    assert abs(y.std(ddof=1) - 0.2) < 0.01


def test_sample_pce_all_measures(basis: Basis) -> None:
    """Test the sample moments of every measure with both sampling rules."""
    coeffs = affine_from_mean_std(2.0, 0.2, basis)

    for rule in SamplingRule:
        y = sample_pce(100_000, coeffs, basis, rule=rule, rng=7)
        assert abs(y.mean() - 2.0) < 0.01
        assert abs(y.std(ddof=1) - 0.2) < 0.01


def test_sample_measure_inverse_cdf() -> None:
    """Test that inverse CDF samples stay in the support of bounded measures."""
    for b in (build_basis("uniform", 2), build_basis("beta", 2, (0.5, 2.0))):
        xi = sample_measure(10_000, b, rng=0)
        assert np.all((xi >= 0) & (xi <= 1))
        assert abs(xi.mean() - b.mean_of_measure) < 0.01


def test_sample_measure_quadrature() -> None:
    """Test that quadrature resampling draws random nodes of the rule."""
    b = build_basis("gaussian", 6)

    xi = sample_measure(50_000, b, rule=SamplingRule.QUADRATURE, rng=3)

    assert np.all(np.isin(xi, b.rule.nodes))
    assert np.unique(xi).size == b.rule.size
    assert not np.array_equal(xi[: b.rule.size], b.rule.nodes)
    assert abs(xi.mean()) < 0.02


def test_sample_reproducible() -> None:
    """Test that seeds and generators make sampling reproducible."""
    b = build_basis("logistic", 3)

    assert np.array_equal(sample_measure(100, b, rng=5), sample_measure(100, b, rng=5))
    assert not np.array_equal(
        sample_measure(100, b, rng=5),
        sample_measure(100, b, rng=6),
    )

    rng = np.random.default_rng(0)
    assert sample_pce(10, [0.0, 1.0], b, rng=rng).shape == (10,)


def test_sample_invalid_count() -> None:
    """Test that invalid sample counts are rejected and zero is allowed."""
    b = build_basis("gaussian", 2)

    assert sample_measure(0, b).shape == (0,)

    with pytest.raises(InvalidParameterError):
        sample_measure(-1, b)

    with pytest.raises(InvalidParameterError):
        sample_measure(2.5, b)  # type: ignore[arg-type]
