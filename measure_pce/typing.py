"""Define custom types."""

from collections.abc import Sequence
from typing import NewType

import numpoly
import numpy as np
import numpy.typing as npt
import torch

ArrayLike1DFloat = (
    Sequence[float] | Sequence[np.float64] | npt.NDArray[np.float64] | torch.Tensor
)

PolyExpansion = NewType("PolyExpansion", numpoly.baseclass.ndpoly)  # type: ignore [valid-newtype]

RandomState = int | np.random.Generator | None
