import numpy as np
import pytest

from tsp_cs.problems import CitySelectionTSP, GraphConfig


def random_instance(n: int, seed: int, budget: float):
    rng = np.random.default_rng(seed)
    weights = rng.uniform(0.5, 2.0, size=(n, n))
    np.fill_diagonal(weights, 0.0)
    values = rng.integers(1, 10, size=n).astype(float)
    return GraphConfig(weights=weights, values=values, max_path_length=budget)


@pytest.fixture
def make_instance():
    return random_instance


@pytest.fixture
def toy_config():
    return GraphConfig.default()


@pytest.fixture
def toy_problem():
    return CitySelectionTSP()


@pytest.fixture
def square4():
    # Unit square walked 0-1-2-3, diagonals of length 2.
    weights = np.array(
        [
            [0.0, 1.0, 2.0, 1.0],
            [1.0, 0.0, 1.0, 2.0],
            [2.0, 1.0, 0.0, 1.0],
            [1.0, 2.0, 1.0, 0.0],
        ]
    )
    values = np.array([1.0, 4.0, 2.0, 3.0])
    return weights, values
