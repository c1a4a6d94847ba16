"""
Gauss quadrature rules from three-term recurrence coefficients.

The rule is computed with the Golub-Welsch algorithm: the nodes are the eigenvalues
of the symmetric tridiagonal Jacobi matrix built from the recurrence coefficients,
and the weights are `beta_0` times the squared first components of the normalized
eigenvectors. A rule with d + 1 nodes is exact for polynomials up to degree 2d + 1.

The eigen-decomposition is numerically reliable up to degree `STABLE_DEGREE`; larger
degrees are accepted with a warning.

This module provides:
    - QuadratureRule: Immutable nodes and weights of a quadrature rule.
    - quadrature: Compute the Gauss rule of a recurrence table.
"""

from dataclasses import dataclass

import numpy as np
from scipy.linalg import eigh_tridiagonal

from measure_pce.errors import DegenerateQuadratureError
from measure_pce.recurrence import RecurrenceCoefficients

STABLE_DEGREE = 30

DEFAULT_TOLERANCE = 1e-12


@dataclass(frozen=True, eq=False)
class QuadratureRule:
    """
    The nodes and weights of a quadrature rule.

    Attributes
    ----------
    nodes : numpy.ndarray
        Strictly increasing nodes, shape (n,).
    weights : numpy.ndarray
        Positive weights, shape (n,), summing to the total mass of the measure.
    """

    nodes: np.ndarray
    weights: np.ndarray

    def __post_init__(self) -> None:
        """Freeze the node and weight arrays."""
        nodes = np.array(self.nodes, dtype=np.float64)
        weights = np.array(self.weights, dtype=np.float64)

        if nodes.ndim != 1 or nodes.shape != weights.shape:
            raise ValueError("`nodes` and `weights` must be 1D arrays of equal size.")

        nodes.flags.writeable = False
        weights.flags.writeable = False
        object.__setattr__(self, "nodes", nodes)
        object.__setattr__(self, "weights", weights)

    def __setstate__(self, state: dict) -> None:
        """Restore a pickled instance and freeze its arrays again."""
        for name, value in state.items():
            object.__setattr__(self, name, value)
        self.__post_init__()

    @property
    def size(self) -> int:
        """The number of nodes."""
        return self.nodes.size

    def integrate(self, values: np.ndarray) -> np.ndarray:
        """
        Integrate function values given at the nodes.

        Parameters
        ----------
        values : numpy.ndarray
            Values at the nodes, shape (..., n).

        Returns
        -------
        numpy.ndarray
            The weighted sums over the last axis.
        """
        return np.asarray(values) @ self.weights


def quadrature(
    recurrence: RecurrenceCoefficients,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
) -> QuadratureRule:
    """
    Compute the Gauss quadrature rule of a recurrence table.

    Parameters
    ----------
    recurrence : RecurrenceCoefficients
        The coefficients (alpha_k, beta_k), k = 0, ..., d.
    tolerance : float, optional
        Relative tolerance, with respect to the spread of the nodes, under which two
        nodes are considered equal. Defaults to `DEFAULT_TOLERANCE`.

    Returns
    -------
    QuadratureRule
        The rule with d + 1 nodes, exact up to degree 2d + 1.

    Raises
    ------
    DegenerateQuadratureError
        If a coefficient beta_k is not positive, or if the computed rule has
        non-finite values, non-positive weights or coinciding nodes.
    """
    alpha = recurrence.alpha
    beta = recurrence.beta

    if not (np.all(np.isfinite(alpha)) and np.all(np.isfinite(beta))):
        raise DegenerateQuadratureError("The recurrence coefficients are not finite.")

    if np.any(beta <= 0):
        k = int(np.flatnonzero(beta <= 0)[0])
        raise DegenerateQuadratureError(
            f"The recurrence coefficient beta_{k} = {beta[k]} is not positive.",
        )

    if recurrence.degree > STABLE_DEGREE:
        print(
            f"[quadrature] Warning: degree {recurrence.degree} exceeds "
            f"{STABLE_DEGREE}, the rule may be inaccurate.",
        )

    if recurrence.degree == 0:
        nodes = alpha[:1].copy()
        weights = beta[:1].copy()
    else:
        nodes, vectors = eigh_tridiagonal(alpha, np.sqrt(beta[1:]))
        weights = beta[0] * vectors[0, :] ** 2

    _check_rule(nodes, weights, tolerance)

    return QuadratureRule(nodes=nodes, weights=weights)


def _check_rule(nodes: np.ndarray, weights: np.ndarray, tolerance: float) -> None:
    """Raise `DegenerateQuadratureError` if the rule is not a valid Gauss rule."""
    if not (np.all(np.isfinite(nodes)) and np.all(np.isfinite(weights))):
        raise DegenerateQuadratureError("The quadrature rule has non-finite values.")

    if np.any(weights <= 0):
        raise DegenerateQuadratureError(
            f"The quadrature rule has non-positive weights: {weights[weights <= 0]}.",
        )

    if nodes.size > 1:
        gaps = np.diff(nodes)
        scale = max(float(nodes[-1] - nodes[0]), 1.0)
        if np.any(gaps <= tolerance * scale):
            raise DegenerateQuadratureError(
                f"The quadrature rule has nodes closer than {tolerance * scale:.1e}.",
            )
