import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import networkx as nx
import numpy as np
import tsplib95

from .problems import CitySelectionTSP, Encoding, GraphConfig


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class Instance:
    name: str
    path: Path
    problem: CitySelectionTSP


def load_values(path: PathLike) -> np.ndarray:
    """Read one city value per whitespace-separated token."""
    return np.array(Path(path).read_text().split(), dtype=float)


def load_instance(
    path: PathLike,
    values: Optional[Union[Sequence[float], PathLike]] = None,
    max_path_length: float = 1.0,
    encoding=Encoding.CITIES,
) -> Instance:
    """Build a TSP-CS instance from a TSPLIB file.

    Cities are renumbered from 0 in sorted node order. Without ``values`` every
    city is worth 1.
    """
    path = Path(path)
    problem = tsplib95.load(str(path))
    graph = problem.get_graph()
    graph.remove_edges_from(list(nx.selfloop_edges(graph)))
    if isinstance(values, (str, Path)):
        values = load_values(values)
    config = GraphConfig.from_graph(graph, values=values, max_path_length=max_path_length)
    logger.debug("loaded %s: %d cities", problem.name, config.n_cities)
    return Instance(
        name=problem.name or path.stem,
        path=path,
        problem=CitySelectionTSP(config=config, encoding=encoding),
    )


def save_problem(problem: CitySelectionTSP, path: PathLike) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(problem.to_state(), indent=2))


def load_problem(path: PathLike) -> CitySelectionTSP:
    return CitySelectionTSP.from_state(json.loads(Path(path).read_text()))


def load_any(
    path: PathLike,
    values: Optional[Union[Sequence[float], PathLike]] = None,
    max_path_length: float = 1.0,
    encoding=Encoding.CITIES,
) -> Instance:
    # JSON files carry a full problem state; anything else is read as TSPLIB.
    path = Path(path)
    if path.suffix.lower() == ".json":
        return Instance(name=path.stem, path=path, problem=load_problem(path))
    return load_instance(path, values=values, max_path_length=max_path_length, encoding=encoding)
