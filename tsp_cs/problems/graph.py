import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import networkx as nx
import numpy as np

from .base import ConfigurationError


logger = logging.getLogger(__name__)


def check_weights(matrix) -> np.ndarray:
    """Return ``matrix`` as a float array, raising if it cannot describe a TSP-CS graph.

    The graph must be fully connected without self-loops: square, zeros on the
    main diagonal and no zero or NaN entries anywhere else.
    """
    try:
        weights = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("adjacency matrix is not square") from exc
    if weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
        raise ConfigurationError("adjacency matrix is not square")
    n = weights.shape[0]
    if n == 0:
        raise ConfigurationError("adjacency matrix is empty")
    if np.any(np.diag(weights) != 0):
        raise ConfigurationError("main diagonal elements must all be zeros.")
    off_diagonal = weights[~np.eye(n, dtype=bool)]
    if np.any(np.isnan(off_diagonal)):
        raise ConfigurationError("adjacency matrix contains NaN values.")
    if np.any(off_diagonal == 0):
        raise ConfigurationError("adjacency matrix contains zero values.")
    return weights


@dataclass(frozen=True, eq=False)
class GraphConfig:
    weights: np.ndarray
    values: np.ndarray
    max_path_length: float
    min_value: float = field(init=False)

    def __post_init__(self):
        weights = check_weights(self.weights)
        values = np.array(self.values, dtype=float)
        if values.ndim != 1 or values.shape[0] != weights.shape[0]:
            raise ConfigurationError("Size of weight matrix and values vector must be equal")
        max_path_length = float(self.max_path_length)
        if math.isnan(max_path_length) or max_path_length < 0:
            raise ConfigurationError("maximum path length must be a non-negative number")
        weights.setflags(write=False)
        values.setflags(write=False)
        object.__setattr__(self, "weights", weights)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "max_path_length", max_path_length)
        object.__setattr__(self, "min_value", float(values.min()))
        logger.debug(
            "graph config: %d cities, budget %.6g, min value %.6g",
            self.n_cities,
            self.max_path_length,
            self.min_value,
        )

    @property
    def n_cities(self) -> int:
        return self.weights.shape[0]

    def __eq__(self, other) -> bool:
        if not isinstance(other, GraphConfig):
            return NotImplemented
        return (
            self.max_path_length == other.max_path_length
            and np.array_equal(self.weights, other.weights)
            and np.array_equal(self.values, other.values)
        )

    __hash__ = None

    @classmethod
    def default(cls) -> "GraphConfig":
        """Three mutually adjacent cities of value 1 with unit edges and a budget of 1."""
        weights = np.ones((3, 3)) - np.eye(3)
        return cls(weights=weights, values=np.ones(3), max_path_length=1.0)

    @classmethod
    def from_graph(
        cls,
        graph: nx.Graph,
        values: Optional[Sequence[float]] = None,
        max_path_length: float = 1.0,
    ) -> "GraphConfig":
        # Cities are numbered by sorted node label; missing edges become zeros and are rejected.
        nodes = sorted(graph.nodes())
        weights = nx.to_numpy_array(graph, nodelist=nodes, weight="weight", nonedge=0.0)
        if values is None:
            values = [graph.nodes[node].get("value", 1.0) for node in nodes]
        return cls(weights=weights, values=values, max_path_length=max_path_length)

    def to_graph(self) -> nx.DiGraph:
        graph = nx.from_numpy_array(np.array(self.weights), create_using=nx.DiGraph)
        for i, value in enumerate(self.values):
            graph.nodes[i]["value"] = float(value)
        return graph
