import math
from typing import Sequence, Tuple

import numpy as np

from .base import ConfigurationError, Problem


class Zdt1(Problem):
    """ZDT1, the box-constrained bi-objective benchmark.

    g(x)  = 1 + 9 * sum(x[1:]) / (n - 1)
    f1(x) = x[0]
    f2(x) = g(x) * (1 - sqrt(x[0] / g(x))),  x in [0, 1]^n
    """

    name = "ZDT1"

    def __init__(self, dimension: int = 30):
        if dimension < 2:
            raise ConfigurationError("ZDT1 needs at least two decision variables")
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.zeros(self._dimension), np.ones(self._dimension)

    def _g(self, x: Sequence[float]) -> float:
        if len(x) != self._dimension:
            raise ConfigurationError(
                f"decision vector must have {self._dimension} entries, got {len(x)}"
            )
        return 1.0 + 9.0 * float(np.sum(x[1:])) / (self._dimension - 1)

    def objectives(self, x: Sequence[float]) -> Tuple[float, float]:
        g = self._g(x)
        f1 = float(x[0])
        return f1, g * (1.0 - math.sqrt(f1 / g))

    def convergence_metric(self, x: Sequence[float]) -> float:
        # Zero exactly on the Pareto front, where x[1:] are all zero.
        return self._g(x) - 1.0
