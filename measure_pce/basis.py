"""
Orthogonal polynomial bases of the canonical measures.

A `Basis` bundles the recurrence coefficients of a measure, the Gauss quadrature rule
derived from them and the squared norms of the basis polynomials. All the expensive
work happens once in `build_basis`, which is memoized; the basis is immutable and can
be shared freely afterwards.

This module provides:
    - Basis: Immutable orthogonal polynomial basis.
    - build_basis: Construct (or fetch from cache) the basis of a measure.
    - evaluate: Evaluate a basis polynomial at given points.
    - norm2: Squared norm of a basis polynomial.
    - canonical_bases: Lookup table of the bases of the four canonical measures.
"""

# ruff: noqa: S301

import numbers
import pickle
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Self

import numpoly
import numpy as np

from measure_pce.errors import (
    DegenerateQuadratureError,
    DegreeOutOfRangeError,
    InvalidDegreeError,
)
from measure_pce.measures import Measure, MeasureKind
from measure_pce.quadrature import QuadratureRule, quadrature
from measure_pce.recurrence import RecurrenceCoefficients, recurrence
from measure_pce.typing import ArrayLike1DFloat, PolyExpansion
from measure_pce.utilities import as_points, check_degree

NORM_RTOL = 1e-6


@dataclass(frozen=True, eq=False)
class Basis:
    """
    Monic orthogonal polynomial basis phi_0, ..., phi_d of a measure.

    Attributes
    ----------
    measure : Measure
        The measure the polynomials are orthogonal to.
    degree : int
        The maximal degree d of the basis.
    recurrence : RecurrenceCoefficients
        The recurrence coefficients, at least d + 1 pairs.
    rule : QuadratureRule
        The Gauss quadrature rule of the measure, at least d + 1 nodes.
    norms2 : numpy.ndarray
        The squared norms <phi_k, phi_k>, k = 0, ..., d.
    """

    measure: Measure
    degree: int
    recurrence: RecurrenceCoefficients
    rule: QuadratureRule
    norms2: np.ndarray

    @property
    def kind(self) -> MeasureKind:
        """The measure kind."""
        return self.measure.kind

    @property
    def mean_of_measure(self) -> float:
        """The first moment of the measure, i.e. the mean of the canonical variable."""
        return float(self.recurrence.alpha[0])

    def _check_in_range(self, degree: int) -> int:
        if isinstance(degree, bool) or not isinstance(degree, numbers.Integral):
            raise InvalidDegreeError(f"The degree must be an integer, got {degree!r}.")
        if not 0 <= degree <= self.degree:
            raise DegreeOutOfRangeError(
                f"Degree {degree} is outside the range [0, {self.degree}] "
                "of the basis.",
            )
        return int(degree)

    def evaluate(self, degree: int, points: ArrayLike1DFloat | float) -> np.ndarray:
        """
        Evaluate the polynomial phi_degree at the given points.

        Parameters
        ----------
        degree : int
            The degree of the polynomial, 0 <= degree <= d.
        points : ArrayLike1DFloat | float
            The evaluation points.

        Returns
        -------
        numpy.ndarray
            The values, shape (N,).

        Raises
        ------
        DegreeOutOfRangeError
            If `degree` exceeds the maximal degree of the basis.
        """
        degree = self._check_in_range(degree)
        return self._forward(as_points(points), degree)[-1]

    def evaluate_all(self, points: ArrayLike1DFloat | float) -> np.ndarray:
        """
        Evaluate all polynomials phi_0, ..., phi_d at the given points.

        Parameters
        ----------
        points : ArrayLike1DFloat | float
            The evaluation points.

        Returns
        -------
        numpy.ndarray
            The values, shape (d + 1, N).
        """
        return self._forward(as_points(points), self.degree)

    def _forward(self, x: np.ndarray, degree: int) -> np.ndarray:
        """Run the three-term recurrence from phi_0 up to phi_degree."""
        alpha = self.recurrence.alpha
        beta = self.recurrence.beta

        phi = np.empty((degree + 1, x.size))
        phi[0] = 1.0
        previous = np.zeros_like(x)

        for k in range(degree):
            phi[k + 1] = (x - alpha[k]) * phi[k] - beta[k] * previous
            previous = phi[k]

        return phi

    def norm2(self, degree: int) -> float:
        """
        Return the squared norm <phi_degree, phi_degree> under the measure.

        Parameters
        ----------
        degree : int
            The degree of the polynomial, 0 <= degree <= d.

        Returns
        -------
        float
            The squared norm.
        """
        return float(self.norms2[self._check_in_range(degree)])

    def expansion(self) -> PolyExpansion:
        """
        Return the basis as a numpoly polynomial array.

        Returns
        -------
        PolyExpansion
            The polynomials phi_0, ..., phi_d in the indeterminant `q0`.
        """
        q = numpoly.variable()
        alpha = self.recurrence.alpha
        beta = self.recurrence.beta

        polynomials = [numpoly.polynomial(1.0)]
        previous = numpoly.polynomial(0.0)

        for k in range(self.degree):
            polynomials.append(
                (q - alpha[k]) * polynomials[k] - beta[k] * previous,
            )
            previous = polynomials[k]

        return PolyExpansion(numpoly.polynomial(polynomials))

    def save(self, file_path: str | Path) -> None:
        """
        Save the basis to a pickle file.

        Parameters
        ----------
        file_path : str | Path
            The path to the file.
        """
        with Path(file_path).open("wb") as f:
            pickle.dump(self, f)

    @classmethod
    def load(cls, file_path: str | Path) -> Self:
        """
        Load a basis from a pickle file.

        Parameters
        ----------
        file_path : str | Path
            The path to the file.

        Returns
        -------
        Basis
            The loaded basis.
        """
        with Path(file_path).open("rb") as f:
            basis = pickle.load(f)

        if not isinstance(basis, cls):
            raise TypeError(f"The file {file_path} does not contain a {cls.__name__}.")

        return basis

    def __setstate__(self, state: dict) -> None:
        """Restore a pickled basis with read-only arrays."""
        norms2 = np.array(state["norms2"], dtype=np.float64)
        norms2.flags.writeable = False

        for name, value in state.items():
            object.__setattr__(self, name, value)

        object.__setattr__(self, "norms2", norms2)


def build_basis(
    kind: str | MeasureKind | Measure,
    degree: int,
    shape_params: tuple[float, ...] | None = None,
    *,
    quadrature_points: int | None = None,
) -> Basis:
    """
    Build the orthogonal polynomial basis of a measure.

    Constructions are cached per (measure, degree, quadrature_points); calling the
    function twice with the same arguments returns the same `Basis` instance.

    Parameters
    ----------
    kind : str | MeasureKind | Measure
        The measure kind, its name, or a measure.
    degree : int
        The maximal degree d of the basis.
    shape_params : tuple[float, ...] | None, optional
        The shape parameters, (alpha, beta) for `BETA01`.
    quadrature_points : int | None, optional
        The number of quadrature nodes. Defaults to d + 1; must not be smaller.

    Returns
    -------
    Basis
        The basis.

    Raises
    ------
    InvalidParameterError
        If the measure kind or its shape parameters are invalid.
    InvalidDegreeError
        If `degree` is negative or not an integer, or `quadrature_points` is
        smaller than d + 1.
    DegenerateQuadratureError
        If the quadrature rule is numerically invalid.
    """
    measure = Measure.create(
        kind,
        tuple(shape_params) if shape_params is not None else None,
    )
    degree = check_degree(degree)

    if quadrature_points is None:
        quadrature_points = degree + 1

    quadrature_points = check_degree(quadrature_points)
    if quadrature_points < degree + 1:
        raise InvalidDegreeError(
            f"A basis of degree {degree} needs at least {degree + 1} quadrature "
            f"points, got {quadrature_points}.",
        )

    return _build_basis(measure, degree, quadrature_points)


@lru_cache(maxsize=128)
def _build_basis(measure: Measure, degree: int, quadrature_points: int) -> Basis:
    coefficients = recurrence(measure, quadrature_points - 1)
    rule = quadrature(coefficients)

    basis = Basis(
        measure=measure,
        degree=degree,
        recurrence=coefficients,
        rule=rule,
        norms2=np.empty(0),
    )

    # ||phi_k||^2 = beta_0 beta_1 ... beta_k for monic polynomials
    norms2 = np.cumprod(coefficients.beta[: degree + 1])

    # The rule integrates the orthonormal polynomials phi_k / ||phi_k|| to one
    psi = basis.evaluate_all(rule.nodes) / np.sqrt(norms2)[:, None]
    unit_norms = rule.integrate(psi**2)

    if not np.all(np.isfinite(unit_norms)):
        raise DegenerateQuadratureError(
            "The squared norms computed with the quadrature rule are not finite.",
        )

    mismatch = float(np.max(np.abs(unit_norms - 1.0)))
    if mismatch > NORM_RTOL:
        print(
            f"[basis] Warning: the quadrature norms of the {measure.kind.value} "
            f"basis of degree {degree} deviate from the recurrence by {mismatch:.1e}.",
        )

    norms2.flags.writeable = False
    object.__setattr__(basis, "norms2", norms2)

    return basis


def evaluate(degree: int, points: ArrayLike1DFloat | float, basis: Basis) -> np.ndarray:
    """
    Evaluate the basis polynomial phi_degree at the given points.

    See `Basis.evaluate`.
    """
    return basis.evaluate(degree, points)


def norm2(degree: int, basis: Basis) -> float:
    """
    Return the squared norm of the basis polynomial phi_degree.

    See `Basis.norm2`.
    """
    return basis.norm2(degree)


def canonical_bases(
    degree: int,
    beta_shape: tuple[float, float] = (2.0, 2.0),
) -> dict[MeasureKind, Basis]:
    """
    Build the bases of the four canonical measures.

    Parameters
    ----------
    degree : int
        The maximal degree of every basis.
    beta_shape : tuple[float, float], optional
        The shape parameters of the Beta measure. Defaults to (2, 2).

    Returns
    -------
    dict[MeasureKind, Basis]
        The bases, keyed by measure kind.
    """
    return {
        kind: build_basis(
            kind,
            degree,
            beta_shape if kind is MeasureKind.BETA01 else None,
        )
        for kind in MeasureKind
    }
