"""
Define utility functions for the measure-pce package.

This module provides:
    - to_numpy: Convert tensors and array-likes to numpy arrays
    - as_points: Convert evaluation points to a one dimensional float array
    - as_coefficients: Convert a PCE coefficient vector to a float array
    - check_degree: Validate a polynomial degree
    - make_rng: Create a numpy random generator from a seed or a generator
    - torch_numpoly_call: Evaluate a polynomial expansion using PyTorch tensors
"""

import numbers

import numpy as np
import torch

from measure_pce.errors import InvalidDegreeError, InvalidParameterError
from measure_pce.typing import ArrayLike1DFloat, RandomState


def to_numpy(x: torch.Tensor | ArrayLike1DFloat | float) -> np.ndarray:
    """
    Convert an input to a NumPy array.

    If the input is a PyTorch tensor, it is first detached from the computation
    graph and moved to the CPU before being converted to a NumPy array.

    Parameters
    ----------
    x : torch.Tensor | ArrayLike1DFloat | float
        The input to be converted to a NumPy array.

    Returns
    -------
    numpy.ndarray
        The converted NumPy array.
    """
    if isinstance(x, torch.Tensor):
        return x.detach().cpu().numpy()
    return np.array(x)


def as_points(points: torch.Tensor | ArrayLike1DFloat | float) -> np.ndarray:
    """
    Convert evaluation points to a one dimensional array of floats.

    Scalars become arrays of length one.

    Parameters
    ----------
    points : torch.Tensor | ArrayLike1DFloat | float
        The points.

    Returns
    -------
    numpy.ndarray
        A float64 array of shape (N,).
    """
    x = to_numpy(points).astype(np.float64)

    if x.ndim > 1:
        raise InvalidParameterError(
            f"Points must be one dimensional, got an array of shape {x.shape}.",
        )

    return np.atleast_1d(x)


def as_coefficients(coeffs: torch.Tensor | ArrayLike1DFloat) -> np.ndarray:
    """
    Convert a PCE coefficient vector to a one dimensional array of floats.

    Parameters
    ----------
    coeffs : torch.Tensor | ArrayLike1DFloat
        The coefficients x_0, ..., x_L.

    Returns
    -------
    numpy.ndarray
        A float64 array of shape (L + 1,).
    """
    c = np.atleast_1d(to_numpy(coeffs).astype(np.float64))

    if c.ndim != 1:
        raise InvalidParameterError(
            f"Coefficients must be one dimensional, got an array of shape {c.shape}.",
        )
    if c.size == 0:
        raise InvalidParameterError("The coefficient vector is empty.")
    if not np.all(np.isfinite(c)):
        raise InvalidParameterError("The coefficient vector has non-finite entries.")

    return c


def check_degree(degree: object) -> int:
    """
    Check that `degree` is a non-negative integer and return it as an `int`.

    Parameters
    ----------
    degree : object
        The degree to check.

    Returns
    -------
    int
        The degree.

    Raises
    ------
    InvalidDegreeError
        If `degree` is a boolean, not an integer, or negative.
    """
    if isinstance(degree, bool) or not isinstance(degree, numbers.Integral):
        raise InvalidDegreeError(f"The degree must be an integer, got {degree!r}.")

    if degree < 0:
        raise InvalidDegreeError(f"The degree must be non-negative, got {degree}.")

    return int(degree)


def make_rng(rng: RandomState = None) -> np.random.Generator:
    """
    Return a numpy random generator.

    Parameters
    ----------
    rng : int | numpy.random.Generator | None
        A seed, an existing generator (returned as is) or None for fresh entropy.

    Returns
    -------
    numpy.random.Generator
        The generator.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def torch_numpoly_call(
    exponents: torch.Tensor,
    coefficients: torch.Tensor,
    x: torch.Tensor,
) -> torch.Tensor:
    """
    Compute the polynomial evaluation given exponents and coefficients.

    This function evaluates a polynomial expansion at given input points `x`,
    using specified `exponents` and `coefficients`.

    The function replicates the behavior of numpoly `call`. It uses only pytorch
    tensors in order to be executed on GPUs.

    Parameters
    ----------
    exponents : torch.Tensor
        A tensor of shape (K, D) representing the exponents of the polynomial terms.
    coefficients : torch.Tensor
        A tensor of shape (K, P) representing the coefficients of the P polynomials
        of the expansion for each of the K terms.
    x : torch.Tensor
        A tensor of shape (N, D) representing the input points where the polynomial
        is to be evaluated.

    Returns
    -------
    torch.Tensor
        A tensor of shape (N, P) representing the evaluated polynomials at each input
        point.

    Examples
    --------
    >>> import numpy as np
    >>> from measure_pce.basis import build_basis
    >>> from measure_pce.utilities import torch_numpoly_call

    >>> basis = build_basis("gaussian", 4)
    >>> expansion = basis.expansion()
    >>> x = np.linspace(-2, 2, 7)

    >>> e1 = expansion(x)

    >>> e2 = torch_numpoly_call(
    ...     torch.tensor(np.asarray(expansion.exponents, dtype=float)),
    ...     torch.tensor(np.array(expansion.coefficients), dtype=torch.float64),
    ...     torch.tensor(x[:, None], dtype=torch.float64),
    ... ).T

    >>> np.allclose(e1, e2.detach().numpy(), atol=1e-12)
    True
    """
    X_exp = x.unsqueeze(1)  # (N, 1, D)
    E = exponents.unsqueeze(0)  # (1, K, D)
    X_pow = X_exp**E  # (N, K, D)

    monomials = torch.prod(X_pow, dim=2)  # (N, K)

    return monomials @ coefficients  # (N, P)
