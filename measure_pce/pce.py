r"""
Polynomial chaos expansion coefficients, moments and samples.

A random variable is represented with respect to a `Basis` as

.. math::
    X = \sum_{i=0}^{L} x_i \phi_i(\xi),

where :math:`\xi` is distributed according to the measure of the basis. Since
:math:`\phi_0 = 1` and the higher polynomials have zero mean, the mean of `X` is
:math:`x_0` and its variance is :math:`\sum_{i \ge 1} x_i^2 \langle \phi_i,
\phi_i \rangle`.

This module provides:
    - AffineKind: Selects how the two affine coefficients are derived.
    - SamplingRule: Selects how the measure is sampled.
    - affine_from_shape_params: Affine coefficients from native parameters.
    - affine_from_mean_std: Affine coefficients from mean and standard deviation.
    - affine_pce: Dispatch to one of the two conversions above.
    - mean, variance, std: Moments of a PCE.
    - sample_measure: Draw samples of the measure.
    - evaluate_pce: Evaluate a PCE at given points.
    - sample_pce: Draw realizations of the random variable represented by a PCE.
"""

from enum import Enum

import numpy as np

from measure_pce.basis import Basis
from measure_pce.errors import DegreeOutOfRangeError, InvalidParameterError
from measure_pce.typing import ArrayLike1DFloat, RandomState
from measure_pce.utilities import as_coefficients, as_points, make_rng


class AffineKind(Enum):
    """
    How the two parameters of an affine conversion are interpreted.

    Attributes
    ----------
    NATIVE
        The native shape parameters of the measure: mean and standard deviation
        (Gaussian), location and scale (Logistic), interval bounds (Uniform, Beta).
    MEAN_STD
        The mean and standard deviation of the random variable.
    """

    NATIVE = "native"
    MEAN_STD = "meanstd"


class SamplingRule(Enum):
    """
    How samples of a measure are drawn.

    Attributes
    ----------
    INVERSE_CDF
        Exact samples through the inverse CDF of the measure.
    QUADRATURE
        Resampling of the quadrature nodes with probabilities given by the weights.
    """

    INVERSE_CDF = "inverse_cdf"
    QUADRATURE = "quadrature"


def affine_from_shape_params(p1: float, p2: float, basis: Basis) -> tuple[float, float]:
    """
    Compute the degree-0 and degree-1 coefficients from native shape parameters.

    The random variable `X = shift + scale * xi` equals
    `shift + scale * m + scale * phi_1(xi)`, where `m` is the mean of the measure.

    Parameters
    ----------
    p1 : float
        Mean (Gaussian), location (Logistic) or lower bound (Uniform, Beta).
    p2 : float
        Standard deviation (Gaussian), scale (Logistic) or upper bound
        (Uniform, Beta).
    basis : Basis
        The basis. Must have degree at least 1.

    Returns
    -------
    tuple[float, float]
        The coefficients (x_0, x_1).

    Raises
    ------
    InvalidParameterError
        If the parameters are outside the domain of the measure.
    DegreeOutOfRangeError
        If the basis has degree 0.
    """
    shift, scale = basis.measure.to_affine(p1, p2)
    _check_affine_degree(basis)

    return shift + scale * basis.mean_of_measure, scale


def affine_from_mean_std(mean: float, std: float, basis: Basis) -> tuple[float, float]:
    """
    Compute the degree-0 and degree-1 coefficients from mean and standard deviation.

    Parameters
    ----------
    mean : float
        The mean of the random variable.
    std : float
        The standard deviation of the random variable. Zero gives a deterministic
        variable.
    basis : Basis
        The basis. Must have degree at least 1 unless `std` is zero.

    Returns
    -------
    tuple[float, float]
        The coefficients (x_0, x_1) with x_1 = std / ||phi_1||.

    Raises
    ------
    InvalidParameterError
        If `std` is negative or a parameter is not finite.
    DegreeOutOfRangeError
        If `std` is positive and the basis has degree 0.
    """
    mean, std = float(mean), float(std)

    if not (np.isfinite(mean) and np.isfinite(std)):
        raise InvalidParameterError(
            f"Mean and standard deviation must be finite, got ({mean}, {std}).",
        )
    if std < 0:
        raise InvalidParameterError(
            f"The standard deviation must be non-negative, got {std}.",
        )
    if std == 0:
        return mean, 0.0

    _check_affine_degree(basis)

    return mean, std / np.sqrt(basis.norm2(1))


def affine_pce(
    p1: float,
    p2: float,
    basis: Basis,
    kind: AffineKind = AffineKind.NATIVE,
) -> tuple[float, float]:
    """
    Compute the two affine PCE coefficients of a random variable.

    Parameters
    ----------
    p1 : float
        First parameter, see `kind`.
    p2 : float
        Second parameter, see `kind`.
    basis : Basis
        The basis.
    kind : AffineKind, optional
        Whether (p1, p2) are the native shape parameters of the measure or the mean
        and standard deviation. Defaults to `AffineKind.NATIVE`.

    Returns
    -------
    tuple[float, float]
        The coefficients (x_0, x_1).
    """
    match AffineKind(kind):
        case AffineKind.NATIVE:
            return affine_from_shape_params(p1, p2, basis)
        case AffineKind.MEAN_STD:
            return affine_from_mean_std(p1, p2, basis)


def _check_affine_degree(basis: Basis) -> None:
    if basis.degree < 1:
        raise DegreeOutOfRangeError(
            "An affine expansion needs a basis of degree at least 1.",
        )


def _check_coefficients(coeffs: ArrayLike1DFloat, basis: Basis) -> np.ndarray:
    c = as_coefficients(coeffs)
    n = basis.degree + 1

    # trailing zeros beyond the basis degree carry no information
    if c.size > n:
        if np.any(c[n:] != 0):
            raise DegreeOutOfRangeError(
                f"{c.size} coefficients need a basis of degree {c.size - 1}, "
                f"the basis has degree {basis.degree}.",
            )
        c = c[:n]

    return c


def mean(coeffs: ArrayLike1DFloat, basis: Basis) -> float:
    """
    Return the mean of the random variable represented by a PCE.

    Parameters
    ----------
    coeffs : ArrayLike1DFloat
        The PCE coefficients.
    basis : Basis
        The basis of the expansion.

    Returns
    -------
    float
        The mean, i.e. the coefficient of degree 0.
    """
    return float(_check_coefficients(coeffs, basis)[0])


def variance(coeffs: ArrayLike1DFloat, basis: Basis) -> float:
    """
    Return the variance of the random variable represented by a PCE.

    Parameters
    ----------
    coeffs : ArrayLike1DFloat
        The PCE coefficients.
    basis : Basis
        The basis of the expansion.

    Returns
    -------
    float
        The variance.
    """
    c = _check_coefficients(coeffs, basis)
    return float(np.sum(c[1:] ** 2 * basis.norms2[1 : c.size]))


def std(coeffs: ArrayLike1DFloat, basis: Basis) -> float:
    """
    Return the standard deviation of the random variable represented by a PCE.

    Parameters
    ----------
    coeffs : ArrayLike1DFloat
        The PCE coefficients.
    basis : Basis
        The basis of the expansion.

    Returns
    -------
    float
        The standard deviation.
    """
    return float(np.sqrt(variance(coeffs, basis)))


def sample_measure(
    n: int,
    basis: Basis,
    *,
    rule: SamplingRule = SamplingRule.INVERSE_CDF,
    rng: RandomState = None,
) -> np.ndarray:
    """
    Draw independent samples of the measure of a basis.

    Parameters
    ----------
    n : int
        The number of samples.
    basis : Basis
        The basis.
    rule : SamplingRule, optional
        `INVERSE_CDF` (default) draws exact samples; `QUADRATURE` resamples the
        quadrature nodes according to their weights.
    rng : int | numpy.random.Generator | None, optional
        Seed or random generator.

    Returns
    -------
    numpy.ndarray
        The samples, shape (n,).

    Raises
    ------
    InvalidParameterError
        If `n` is negative or not an integer.
    """
    if isinstance(n, bool) or not isinstance(n, int | np.integer) or n < 0:
        raise InvalidParameterError(
            f"The number of samples must be a non-negative integer, got {n!r}.",
        )

    if n == 0:
        return np.empty(0)

    generator = make_rng(rng)

    match SamplingRule(rule):
        case SamplingRule.INVERSE_CDF:
            u = generator.random(int(n))
            return np.asarray(basis.measure.distribution.inv(u), dtype=np.float64)
        case SamplingRule.QUADRATURE:
            weights = basis.rule.weights
            return generator.choice(
                basis.rule.nodes,
                size=int(n),
                p=weights / weights.sum(),
            )


def evaluate_pce(
    coeffs: ArrayLike1DFloat,
    points: ArrayLike1DFloat,
    basis: Basis,
) -> np.ndarray:
    """
    Evaluate a PCE at the given points of the measure space.

    Parameters
    ----------
    coeffs : ArrayLike1DFloat
        The PCE coefficients x_0, ..., x_L.
    points : ArrayLike1DFloat
        The points xi_j.
    basis : Basis
        The basis of the expansion.

    Returns
    -------
    numpy.ndarray
        The values sum_i x_i phi_i(xi_j), shape (N,).
    """
    c = _check_coefficients(coeffs, basis)
    x = as_points(points)

    phi = basis.evaluate_all(x)

    return c @ phi[: c.size]


def sample_pce(
    n: int,
    coeffs: ArrayLike1DFloat,
    basis: Basis,
    *,
    rule: SamplingRule = SamplingRule.INVERSE_CDF,
    rng: RandomState = None,
) -> np.ndarray:
    """
    Draw realizations of the random variable represented by a PCE.

    Parameters
    ----------
    n : int
        The number of realizations.
    coeffs : ArrayLike1DFloat
        The PCE coefficients.
    basis : Basis
        The basis of the expansion.
    rule : SamplingRule, optional
        The sampling rule of the measure. Defaults to `SamplingRule.INVERSE_CDF`.
    rng : int | numpy.random.Generator | None, optional
        Seed or random generator.

    Returns
    -------
    numpy.ndarray
        The realizations, shape (n,).
    """
    c = _check_coefficients(coeffs, basis)
    xi = sample_measure(n, basis, rule=rule, rng=rng)
    return evaluate_pce(c, xi, basis)
