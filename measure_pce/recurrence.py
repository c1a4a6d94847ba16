r"""
Three-term recurrence coefficients of the canonical orthogonal polynomial families.

The monic orthogonal polynomials of a measure satisfy

.. math::
    \phi_{k+1}(t) = (t - \alpha_k) \phi_k(t) - \beta_k \phi_{k-1}(t),
    \quad \phi_{-1} = 0, \quad \phi_0 = 1,

and :math:`\beta_0` is the total mass of the measure (one for a probability
measure). The coefficients are given in closed form for every family.

This module provides:
    - RecurrenceCoefficients: Immutable table of the pairs (alpha_k, beta_k).
    - recurrence: Compute the table of a measure up to a given degree.
"""

from dataclasses import dataclass

import numpy as np

from measure_pce.measures import Measure, MeasureKind
from measure_pce.utilities import check_degree


@dataclass(frozen=True, eq=False)
class RecurrenceCoefficients:
    """
    The recurrence coefficients (alpha_k, beta_k), k = 0, ..., d.

    Attributes
    ----------
    alpha : numpy.ndarray
        The coefficients alpha_k, shape (d + 1,).
    beta : numpy.ndarray
        The coefficients beta_k, shape (d + 1,). `beta[0]` is the total mass of the
        measure.
    """

    alpha: np.ndarray
    beta: np.ndarray

    def __post_init__(self) -> None:
        """Freeze the coefficient arrays."""
        alpha = np.array(self.alpha, dtype=np.float64)
        beta = np.array(self.beta, dtype=np.float64)

        if alpha.ndim != 1 or alpha.shape != beta.shape or alpha.size == 0:
            raise ValueError(
                "`alpha` and `beta` must be non-empty 1D arrays of the same length.",
            )

        alpha.flags.writeable = False
        beta.flags.writeable = False
        object.__setattr__(self, "alpha", alpha)
        object.__setattr__(self, "beta", beta)

    def __setstate__(self, state: dict) -> None:
        """Restore a pickled instance and freeze its arrays again."""
        for name, value in state.items():
            object.__setattr__(self, name, value)
        self.__post_init__()

    @property
    def degree(self) -> int:
        """The maximal degree d of the table."""
        return self.alpha.size - 1

    def __len__(self) -> int:
        return self.alpha.size


def recurrence(measure: Measure, degree: int) -> RecurrenceCoefficients:
    """
    Compute the recurrence coefficients of a measure up to `degree`.

    Parameters
    ----------
    measure : Measure
        The measure.
    degree : int
        The maximal degree d. The table has d + 1 pairs.

    Returns
    -------
    RecurrenceCoefficients
        The coefficients (alpha_k, beta_k), k = 0, ..., d.

    Raises
    ------
    InvalidDegreeError
        If `degree` is negative or not an integer.
    """
    degree = check_degree(degree)

    k = np.arange(degree + 1, dtype=np.float64)

    match measure.kind:
        case MeasureKind.GAUSSIAN:
            alpha, beta = _hermite(k)
        case MeasureKind.UNIFORM01:
            alpha, beta = _shifted_legendre(k)
        case MeasureKind.BETA01:
            alpha, beta = _shifted_jacobi(k, *measure.shape)
        case MeasureKind.LOGISTIC:
            alpha, beta = _logistic(k)

    return RecurrenceCoefficients(alpha=alpha, beta=beta)


def _hermite(k: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Probabilists' Hermite polynomials."""
    alpha = np.zeros_like(k)
    beta = k.copy()
    beta[0] = 1.0
    return alpha, beta


def _shifted_legendre(k: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Legendre polynomials shifted to [0, 1]."""
    alpha = np.full_like(k, 0.5)
    beta = np.ones_like(k)
    kk = k[1:] ** 2
    beta[1:] = kk / (4.0 * (4.0 * kk - 1.0))
    return alpha, beta


def _shifted_jacobi(
    k: np.ndarray,
    a: float,
    b: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Jacobi polynomials shifted to [0, 1] for the Beta(a, b) density.

    The density x^(a-1) (1-x)^(b-1) on [0, 1] maps to the Jacobi weight
    (1-t)^p (1+t)^q on [-1, 1] with p = b - 1 and q = a - 1 through t = 2x - 1.
    """
    p, q = b - 1.0, a - 1.0
    s = p + q

    alpha_j = np.empty_like(k)
    beta_j = np.empty_like(k)

    alpha_j[0] = (q - p) / (s + 2.0)
    beta_j[0] = 1.0

    if k.size > 1:
        n = k[1:]
        alpha_j[1:] = (q * q - p * p) / ((2.0 * n + s) * (2.0 * n + s + 2.0))

        # k = 1 in its limiting form, finite for s = -1
        beta_j[1] = 4.0 * (1.0 + p) * (1.0 + q) / ((2.0 + s) ** 2 * (3.0 + s))

        n = k[2:]
        m = 2.0 * n + s
        beta_j[2:] = (
            4.0 * n * (n + p) * (n + q) * (n + s) / (m**2 * (m + 1.0) * (m - 1.0))
        )

    alpha = 0.5 * (1.0 + alpha_j)
    beta = 0.25 * beta_j
    beta[0] = 1.0
    return alpha, beta


def _logistic(k: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Polynomials orthogonal with respect to the standard logistic density."""
    alpha = np.zeros_like(k)
    beta = np.ones_like(k)
    n = k[1:]
    beta[1:] = n**4 * np.pi**2 / (4.0 * n**2 - 1.0)
    return alpha, beta
