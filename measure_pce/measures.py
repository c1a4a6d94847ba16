"""
Define the canonical probability measures of the orthogonal polynomial bases.

This module provides:
    - MeasureKind: Enumeration of the four canonical measure families.
    - Measure: Immutable measure family together with its shape parameters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self

import chaospy
import numpy as np

from measure_pce.errors import InvalidParameterError


class MeasureKind(Enum):
    """
    The canonical measure families.

    Attributes
    ----------
    GAUSSIAN
        Standard normal distribution on the real line.
    BETA01
        Beta distribution on [0, 1] with shape parameters (alpha, beta).
    UNIFORM01
        Uniform distribution on [0, 1].
    LOGISTIC
        Standard logistic distribution (location 0, scale 1).
    """

    GAUSSIAN = "gaussian"
    BETA01 = "beta01"
    UNIFORM01 = "uniform01"
    LOGISTIC = "logistic"

    @classmethod
    def from_name(cls, name: "str | MeasureKind") -> "MeasureKind":
        """
        Resolve a measure kind from its name.

        Parameters
        ----------
        name : str | MeasureKind
            Case-insensitive name, e.g. "gaussian", "normal", "beta", "uniform" or
            "logistic". A `MeasureKind` is returned unchanged.

        Returns
        -------
        MeasureKind
            The matching measure kind.

        Raises
        ------
        InvalidParameterError
            If the name does not match any measure kind.
        """
        if isinstance(name, MeasureKind):
            return name

        key = str(name).strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise InvalidParameterError(f"Unknown measure kind: {name!r}.") from None

    @property
    def n_shape_params(self) -> int:
        """Number of shape parameters of the canonical density."""
        return 2 if self is MeasureKind.BETA01 else 0


_ALIASES = {
    "gaussian": MeasureKind.GAUSSIAN,
    "normal": MeasureKind.GAUSSIAN,
    "beta": MeasureKind.BETA01,
    "beta01": MeasureKind.BETA01,
    "uniform": MeasureKind.UNIFORM01,
    "uniform01": MeasureKind.UNIFORM01,
    "logistic": MeasureKind.LOGISTIC,
}


@dataclass(frozen=True)
class Measure:
    """
    A canonical probability measure.

    Attributes
    ----------
    kind : MeasureKind
        The measure family.
    shape : tuple[float, ...]
        The shape parameters. Empty for all families except `BETA01`, which takes
        (alpha, beta) with alpha > 0 and beta > 0.
    """

    kind: MeasureKind
    shape: tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate the measure kind and its shape parameters."""
        object.__setattr__(self, "kind", MeasureKind.from_name(self.kind))

        shape = () if self.shape is None else tuple(float(s) for s in self.shape)
        object.__setattr__(self, "shape", shape)

        expected = self.kind.n_shape_params
        if len(shape) != expected:
            raise InvalidParameterError(
                f"{self.kind.name} takes {expected} shape parameters, "
                f"got {len(shape)}.",
            )

        if self.kind is MeasureKind.BETA01 and not all(
            np.isfinite(s) and s > 0 for s in shape
        ):
            raise InvalidParameterError(
                f"Beta shape parameters must be positive and finite, got {shape}.",
            )

    @classmethod
    def create(
        cls,
        kind: "str | MeasureKind | Measure",
        shape_params: tuple[float, ...] | None = None,
    ) -> Self:
        """
        Create a measure from a kind, a name or an existing measure.

        Parameters
        ----------
        kind : str | MeasureKind | Measure
            The measure kind or its name. An existing `Measure` is returned as is
            when no shape parameters are given.
        shape_params : tuple[float, ...] | None
            The shape parameters.

        Returns
        -------
        Measure
            The measure.
        """
        if isinstance(kind, Measure):
            if shape_params is None:
                return kind
            kind = kind.kind
        shape = () if shape_params is None else tuple(shape_params)
        return cls(kind=MeasureKind.from_name(kind), shape=shape)

    @property
    def distribution(self) -> chaospy.Distribution:
        """The chaospy distribution of the canonical measure."""
        match self.kind:
            case MeasureKind.GAUSSIAN:
                return chaospy.Normal(0, 1)
            case MeasureKind.BETA01:
                return chaospy.Beta(*self.shape)
            case MeasureKind.UNIFORM01:
                return chaospy.Uniform(0, 1)
            case MeasureKind.LOGISTIC:
                return chaospy.Logistic()

    def to_affine(self, p1: float, p2: float) -> tuple[float, float]:
        """
        Map the native parameters of a random variable to an affine transform.

        The random variable is `X = shift + scale * xi` where `xi` is distributed
        according to this measure.

        Parameters
        ----------
        p1 : float
            Mean (Gaussian), location (Logistic) or lower bound (Uniform, Beta).
        p2 : float
            Standard deviation (Gaussian), scale (Logistic) or upper bound
            (Uniform, Beta).

        Returns
        -------
        shift : float
            The shift of the affine transform.
        scale : float
            The scale of the affine transform.

        Raises
        ------
        InvalidParameterError
            If the parameters are not finite, if the standard deviation or scale is
            not positive, or if the lower bound is not below the upper bound.
        """
        p1, p2 = float(p1), float(p2)

        if not (np.isfinite(p1) and np.isfinite(p2)):
            raise InvalidParameterError(
                f"Parameters must be finite, got ({p1}, {p2}).",
            )

        if self.kind in (MeasureKind.GAUSSIAN, MeasureKind.LOGISTIC):
            if p2 <= 0:
                name = "scale"
                if self.kind is MeasureKind.GAUSSIAN:
                    name = "standard deviation"
                raise InvalidParameterError(f"The {name} must be positive, got {p2}.")
            return p1, p2

        if p1 >= p2:
            raise InvalidParameterError(
                f"The interval bounds must satisfy a < b, got a={p1}, b={p2}.",
            )
        return p1, p2 - p1
