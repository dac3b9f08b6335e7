from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np


Tour = List[int]


class ConfigurationError(ValueError):
    """Raised when a problem instance or an input to it is malformed."""


def tour_length(weights: np.ndarray, tour: Sequence[int]) -> float:
    dist = 0.0
    n = len(tour)
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += weights[a, b]
    return float(dist)


class Problem(ABC):
    name: str = "base"

    @property
    @abstractmethod
    def dimension(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        raise NotImplementedError

    @abstractmethod
    def objectives(self, x: Sequence[float]) -> Tuple[float, ...]:
        raise NotImplementedError


@dataclass(frozen=True)
class SubsequenceResult:
    value: float
    saved_length: float
    start: int
    end: int
