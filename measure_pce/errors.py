"""
Define the errors raised by the measure-pce package.

All errors derive from `ValueError`, so code that validates arguments by catching
`ValueError` keeps working.

This module provides:
    - PCEError: Base class of the package errors.
    - InvalidParameterError: Shape or moment parameters outside their domain.
    - InvalidDegreeError: Negative or non-integer polynomial degree.
    - DegreeOutOfRangeError: Degree beyond the maximum degree of a basis.
    - DegenerateQuadratureError: Numerically invalid recurrence or quadrature rule.
"""


class PCEError(ValueError):
    """Base class for all errors of the measure-pce package."""


class InvalidParameterError(PCEError):
    """Raise when a shape, moment or sampling parameter is outside its domain."""


class InvalidDegreeError(PCEError):
    """Raise when a degree is negative, not an integer, or too small for a rule."""


class DegreeOutOfRangeError(PCEError):
    """Raise when a degree exceeds the maximum degree a basis was built with."""


class DegenerateQuadratureError(PCEError):
    """
    Raise when a quadrature rule cannot be trusted.

    This happens when a recurrence coefficient `beta_k` is not positive, when a
    weight is not positive, or when two nodes coincide within tolerance. It points
    to a wrong recurrence or to a degree beyond the numerically stable range.
    """
