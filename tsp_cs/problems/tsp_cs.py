import logging
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .base import ConfigurationError, Problem, SubsequenceResult, Tour, tour_length
from .encoding import Encoding
from .graph import GraphConfig
from .subsequence import find_city_subsequence


logger = logging.getLogger(__name__)

STATE_VERSION = 1


class CitySelectionTSP(Problem):
    """City-selection travelling salesman problem (TSP-CS).

    A chromosome describes a closed tour through every city. Its fitness is
    the value collected on the best stretch of that tour whose length fits in
    ``max_path_length``, negated so that lower is better. Called with no
    arguments this builds the three-city toy instance with the random-keys
    encoding.
    """

    name = "City-selection Travelling Salesman Problem (TSP-CS)"

    def __init__(
        self,
        weights=None,
        values=None,
        max_path_length: float = 1.0,
        encoding=Encoding.RANDOMKEYS,
        config: Optional[GraphConfig] = None,
    ):
        if config is None:
            if weights is None and values is None:
                config = GraphConfig.default()
            elif weights is None or values is None:
                raise ConfigurationError("weights and values must be given together")
            else:
                config = GraphConfig(weights=weights, values=values, max_path_length=max_path_length)
        self._config = config
        self._encoding = Encoding.parse(encoding)
        self._codec = self._encoding.codec
        logger.debug("built %s with %d cities, %s encoding", type(self).__name__, self.n_cities, self._codec.name)

    @property
    def config(self) -> GraphConfig:
        return self._config

    @property
    def encoding(self) -> Encoding:
        return self._encoding

    @property
    def n_cities(self) -> int:
        return self.config.n_cities

    @property
    def weights(self) -> np.ndarray:
        return self.config.weights

    @property
    def values(self) -> np.ndarray:
        return self.config.values

    @property
    def max_path_length(self) -> float:
        return self.config.max_path_length

    @property
    def min_value(self) -> float:
        return self.config.min_value

    @property
    def dimension(self) -> int:
        return self._codec.dimension(self.n_cities)

    @property
    def integer_dimension(self) -> int:
        return self._codec.integer_dimension(self.n_cities)

    @property
    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._codec.bounds(self.n_cities)

    @property
    def constraint_dimensions(self) -> Tuple[int, int]:
        return self._codec.constraint_dimensions(self.n_cities)

    def distance(self, i: int, j: int) -> float:
        return float(self.config.weights[i, j])

    def tour_length(self, tour: Sequence[int]) -> float:
        return tour_length(self.config.weights, tour)

    def decode(self, x: Sequence[float]) -> Tour:
        return self._codec.decode(x, self.n_cities)

    def encode(self, tour: Sequence[int]) -> np.ndarray:
        return self._codec.encode(tour, self.n_cities)

    def find_city_subsequence(self, tour: Sequence[int]) -> SubsequenceResult:
        return find_city_subsequence(self.config, tour)

    def evaluate_fitness(self, x: Sequence[float]) -> float:
        return self.fitness_of(self.find_city_subsequence(self.decode(x)))

    def fitness_of(self, best: SubsequenceResult) -> float:
        # A zero budget leaves nothing to save.
        residual = best.saved_length / self.max_path_length if self.max_path_length else 0.0
        return -(best.value + (1 - self.min_value) * self.n_cities + residual)

    def objectives(self, x: Sequence[float]) -> Tuple[float]:
        return (self.evaluate_fitness(x),)

    def evaluate_constraints(self, x: Sequence[float]) -> np.ndarray:
        return self._codec.constraints(x, self.n_cities)

    def feasibility(self, x: Sequence[float], tolerance: float = 0.0) -> bool:
        c = self.evaluate_constraints(x)
        _, n_inequality = self.constraint_dimensions
        n_equality = len(c) - n_inequality
        equalities = c[:n_equality]
        inequalities = c[n_equality:]
        return bool(np.all(np.abs(equalities) <= tolerance) and np.all(inequalities <= tolerance))

    def copy(self) -> "CitySelectionTSP":
        return type(self)(config=self.config, encoding=self.encoding)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CitySelectionTSP):
            return NotImplemented
        return self.encoding == other.encoding and self.config == other.config

    __hash__ = None

    def to_state(self) -> Dict:
        return {
            "version": STATE_VERSION,
            "weights": self.weights.tolist(),
            "values": self.values.tolist(),
            "max_path_length": self.max_path_length,
            "encoding": self.encoding.value,
        }

    @classmethod
    def from_state(cls, state: Dict) -> "CitySelectionTSP":
        version = state.get("version")
        if version != STATE_VERSION:
            raise ConfigurationError(f"unsupported state version {version!r}")
        return cls(
            weights=state["weights"],
            values=state["values"],
            max_path_length=state["max_path_length"],
            encoding=state["encoding"],
        )

    def human_readable_extra(self) -> str:
        lines = [
            "",
            f"\tNumber of cities: {self.n_cities}",
            f"\tEncoding: {self._codec.name}",
            f"\tCities Values: {self.values.tolist()}",
            f"\tMax path length: {self.max_path_length}",
            "\tWeight Matrix: ",
        ]
        for i, row in enumerate(self.weights):
            lines.append(f"\t\t{row.tolist()}")
            if i > 5 and i + 1 < self.n_cities:
                lines.append("\t\t...")
                break
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return f"Problem name: {self.name}{self.human_readable_extra()}"
