"""
Tests for the recurrence module.

This module contains tests for the closed-form recurrence coefficients of measure-pce.
"""

import numpy as np
import pytest

from measure_pce.errors import InvalidDegreeError, InvalidParameterError
from measure_pce.measures import Measure, MeasureKind
from measure_pce.recurrence import RecurrenceCoefficients, recurrence


def test_gaussian_recurrence() -> None:
    """Test the probabilists' Hermite coefficients alpha_k = 0, beta_k = k."""
    r = recurrence(Measure(MeasureKind.GAUSSIAN), 5)

    assert r.degree == 5
    assert len(r) == 6
    assert np.all(r.alpha == 0)
    assert np.array_equal(r.beta, [1, 1, 2, 3, 4, 5])


def test_uniform_recurrence() -> None:
    """Test the shifted Legendre coefficients."""
    r = recurrence(Measure(MeasureKind.UNIFORM01), 4)

    k = np.arange(1, 5)
    assert np.all(r.alpha == 0.5)
    assert r.beta[0] == 1.0
    assert np.allclose(r.beta[1:], k**2 / (4 * (4 * k**2 - 1)), atol=1e-15)
    assert np.isclose(r.beta[1], 1 / 12, atol=1e-15)


def test_beta_one_one_is_uniform() -> None:
    """Test that Beta(1, 1) has the recurrence of the uniform measure."""
    rb = recurrence(Measure(MeasureKind.BETA01, (1.0, 1.0)), 8)
    ru = recurrence(Measure(MeasureKind.UNIFORM01), 8)

    assert np.allclose(rb.alpha, ru.alpha, atol=1e-14)
    assert np.allclose(rb.beta, ru.beta, atol=1e-14)


@pytest.mark.parametrize(("a", "b"), [(2.0, 5.0), (0.5, 0.5), (0.3, 0.7), (3.0, 1.5)])
def test_beta_recurrence_moments(a: float, b: float) -> None:
    """Test that alpha_0 and beta_1 are the mean and variance of Beta(a, b)."""
    r = recurrence(Measure(MeasureKind.BETA01, (a, b)), 6)

    assert np.isclose(r.alpha[0], a / (a + b), atol=1e-14)
    assert np.isclose(r.beta[1], a * b / ((a + b) ** 2 * (a + b + 1)), atol=1e-14)
    assert np.all(np.isfinite(r.alpha))
    assert np.all(r.beta > 0)


def test_logistic_recurrence() -> None:
    """Test the logistic coefficients against the moments of the logistic density."""
    r = recurrence(Measure(MeasureKind.LOGISTIC), 3)

    assert np.all(r.alpha == 0)
    assert r.beta[0] == 1.0
    # Var = pi^2 / 3, and beta_2 = (E[X^4] - Var^2) / Var with E[X^4] = 7 pi^4 / 15
    assert np.isclose(r.beta[1], np.pi**2 / 3, atol=1e-14)
    assert np.isclose(r.beta[2], 16 * np.pi**2 / 15, atol=1e-13)


def test_degree_zero() -> None:
    """Test that degree 0 gives a single pair with beta_0 = 1."""
    for kind in MeasureKind:
        shape = (2.0, 3.0) if kind is MeasureKind.BETA01 else ()
        r = recurrence(Measure(kind, shape), 0)
        assert r.degree == 0
        assert r.beta[0] == 1.0


@pytest.mark.parametrize("degree", [-1, 2.5, True, "3"])
def test_invalid_degree(degree: object) -> None:
    """Test that negative and non-integer degrees are rejected."""
    with pytest.raises(InvalidDegreeError):
        recurrence(Measure(MeasureKind.GAUSSIAN), degree)  # type: ignore[arg-type]


def test_numpy_integer_degree() -> None:
    """Test that numpy integers are accepted as degrees."""
    r = recurrence(Measure(MeasureKind.GAUSSIAN), np.int64(3))
    assert r.degree == 3


@pytest.mark.parametrize("shape", [(0.0, 1.0), (1.0, -2.0), (np.inf, 1.0), (1.0,)])
def test_invalid_beta_shape(shape: tuple[float, ...]) -> None:
    """Test that invalid Beta shape parameters are rejected."""
    with pytest.raises(InvalidParameterError):
        Measure(MeasureKind.BETA01, shape)


def test_coefficients_are_read_only() -> None:
    """Test that the coefficient arrays cannot be modified."""
    r = RecurrenceCoefficients(alpha=[0.0, 0.0], beta=[1.0, 1.0])

    with pytest.raises(ValueError):
        r.alpha[0] = 1.0

    with pytest.raises(ValueError):
        RecurrenceCoefficients(alpha=[0.0], beta=[1.0, 1.0])
