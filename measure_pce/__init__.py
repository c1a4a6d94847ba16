"""
Measure-PCE package.

Measure-PCE is a Python package for polynomial chaos expansions of univariate random
variables. It builds orthogonal polynomial bases for the Gaussian, Beta, Uniform and
Logistic measures from their three-term recurrences, derives Gauss quadrature rules
from them, and provides tools for computing PCE coefficients, moments and samples of
the represented random variables.
"""

from measure_pce.basis import Basis, build_basis, canonical_bases, evaluate, norm2
from measure_pce.errors import (
    DegenerateQuadratureError,
    DegreeOutOfRangeError,
    InvalidDegreeError,
    InvalidParameterError,
    PCEError,
)
from measure_pce.measures import Measure, MeasureKind
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
from measure_pce.quadrature import QuadratureRule, quadrature
from measure_pce.recurrence import RecurrenceCoefficients, recurrence

__all__ = [
    "AffineKind",
    "Basis",
    "DegenerateQuadratureError",
    "DegreeOutOfRangeError",
    "InvalidDegreeError",
    "InvalidParameterError",
    "Measure",
    "MeasureKind",
    "PCEError",
    "QuadratureRule",
    "RecurrenceCoefficients",
    "SamplingRule",
    "affine_from_mean_std",
    "affine_from_shape_params",
    "affine_pce",
    "build_basis",
    "canonical_bases",
    "evaluate",
    "evaluate_pce",
    "mean",
    "norm2",
    "quadrature",
    "recurrence",
    "sample_measure",
    "sample_pce",
    "std",
    "variance",
]
