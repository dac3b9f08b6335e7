from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from .base import ConfigurationError, Tour
from .constraints import compute_idx, full_constraints, is_permutation, permutation_constraint, walk_arcs


class Codec(ABC):
    """Chromosome layout, decoding and constraints for one encoding."""

    name: str = "base"

    @abstractmethod
    def dimension(self, n_cities: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def integer_dimension(self, n_cities: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def bounds(self, n_cities: int) -> Tuple[np.ndarray, np.ndarray]:
        raise NotImplementedError

    @abstractmethod
    def constraint_dimensions(self, n_cities: int) -> Tuple[int, int]:
        """Return ``(n_constraints, n_inequality)``; the inequalities come last."""
        raise NotImplementedError

    @abstractmethod
    def decode(self, x: Sequence[float], n_cities: int) -> Tour:
        raise NotImplementedError

    @abstractmethod
    def encode(self, tour: Sequence[int], n_cities: int) -> np.ndarray:
        raise NotImplementedError

    @abstractmethod
    def constraints(self, x: Sequence[float], n_cities: int) -> np.ndarray:
        raise NotImplementedError

    def check_tour(self, tour: Sequence[int], n_cities: int) -> None:
        if len(tour) != n_cities:
            raise ConfigurationError("tour dimension must equal city count")
        if not is_permutation(tour, n_cities):
            raise ConfigurationError(f"tour must be a permutation of 0..{n_cities - 1}")

    def check_size(self, x: Sequence[float], n_cities: int) -> None:
        expected = self.dimension(n_cities)
        if len(x) != expected:
            raise ConfigurationError(
                f"{self.name} chromosome must have {expected} entries, got {len(x)}"
            )


class FullCodec(Codec):
    name = "FULL"

    def dimension(self, n_cities: int) -> int:
        return n_cities * (n_cities - 1)

    def integer_dimension(self, n_cities: int) -> int:
        return self.dimension(n_cities)

    def bounds(self, n_cities: int) -> Tuple[np.ndarray, np.ndarray]:
        dim = self.dimension(n_cities)
        return np.zeros(dim), np.ones(dim)

    def constraint_dimensions(self, n_cities: int) -> Tuple[int, int]:
        return n_cities * (n_cities - 1) + 2, (n_cities - 1) * (n_cities - 2)

    def decode(self, x: Sequence[float], n_cities: int) -> Tour:
        self.check_size(x, n_cities)
        return [int(city) for city in walk_arcs(x, n_cities)]

    def encode(self, tour: Sequence[int], n_cities: int) -> np.ndarray:
        self.check_tour(tour, n_cities)
        x = np.zeros(self.dimension(n_cities))
        for i in range(len(tour)):
            a = int(tour[i])
            b = int(tour[(i + 1) % len(tour)])
            if a != b:
                x[compute_idx(a, b, n_cities)] = 1.0
        return x

    def constraints(self, x: Sequence[float], n_cities: int) -> np.ndarray:
        self.check_size(x, n_cities)
        return full_constraints(x, n_cities)


class RandomKeysCodec(Codec):
    name = "RANDOMKEYS"

    def dimension(self, n_cities: int) -> int:
        return n_cities

    def integer_dimension(self, n_cities: int) -> int:
        return 0

    def bounds(self, n_cities: int) -> Tuple[np.ndarray, np.ndarray]:
        return np.zeros(n_cities), np.ones(n_cities)

    def constraint_dimensions(self, n_cities: int) -> Tuple[int, int]:
        return 0, 0

    def decode(self, x: Sequence[float], n_cities: int) -> Tour:
        self.check_size(x, n_cities)
        return [int(city) for city in np.argsort(np.asarray(x, dtype=float), kind="stable")]

    def encode(
        self, tour: Sequence[int], n_cities: int, keys: Optional[Sequence[float]] = None
    ) -> np.ndarray:
        self.check_tour(tour, n_cities)
        # The i-th smallest key goes to the i-th city of the tour.
        if keys is None:
            sorted_keys = np.arange(n_cities) / n_cities
        else:
            sorted_keys = np.sort(np.asarray(keys, dtype=float))
        x = np.empty(n_cities)
        x[np.asarray(tour, dtype=int)] = sorted_keys
        return x

    def constraints(self, x: Sequence[float], n_cities: int) -> np.ndarray:
        return np.zeros(0)


class CitiesCodec(Codec):
    name = "CITIES"

    def dimension(self, n_cities: int) -> int:
        return n_cities

    def integer_dimension(self, n_cities: int) -> int:
        return n_cities

    def bounds(self, n_cities: int) -> Tuple[np.ndarray, np.ndarray]:
        return np.zeros(n_cities), np.full(n_cities, n_cities - 1, dtype=float)

    def constraint_dimensions(self, n_cities: int) -> Tuple[int, int]:
        return 1, 0

    def decode(self, x: Sequence[float], n_cities: int) -> Tour:
        """Entries are cast with ``int`` and not checked.

        A negative entry indexes from the end, so ``-1`` is scored as the last
        city. Fitness of a non-permutation means nothing; the constraint flags it.
        """
        return [int(city) for city in x]

    def encode(self, tour: Sequence[int], n_cities: int) -> np.ndarray:
        self.check_tour(tour, n_cities)
        return np.asarray(tour, dtype=float)

    def constraints(self, x: Sequence[float], n_cities: int) -> np.ndarray:
        return permutation_constraint(x, n_cities)


class Encoding(Enum):
    FULL = "full"
    RANDOMKEYS = "randomkeys"
    CITIES = "cities"

    @classmethod
    def parse(cls, value) -> "Encoding":
        if isinstance(value, Encoding):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"unknown encoding {value!r}") from None

    @property
    def codec(self) -> Codec:
        return _CODECS[self]


_CODECS = {
    Encoding.FULL: FullCodec(),
    Encoding.RANDOMKEYS: RandomKeysCodec(),
    Encoding.CITIES: CitiesCodec(),
}


def compute_dimensions(n_cities: int, encoding) -> Tuple[int, int]:
    return Encoding.parse(encoding).codec.constraint_dimensions(n_cities)
