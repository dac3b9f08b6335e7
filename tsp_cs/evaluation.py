import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
import torch

from .problems import CitySelectionTSP


logger = logging.getLogger(__name__)


@dataclass
class EvaluationConfig:
    max_workers: int = 4
    device: str = "cpu"
    random_seed: int = 123


@dataclass
class Fitness:
    fitness: float
    value: float
    saved_length: float
    start: int
    end: int
    tour_length: float
    feasible: bool


def build_dist_tensor(problem: CitySelectionTSP, device=None) -> torch.Tensor:
    return torch.tensor(problem.weights.tolist(), dtype=torch.float64, device=device)


def _tour_length_torch(dist: torch.Tensor, tour) -> float:
    idx = torch.tensor(tour, device=dist.device, dtype=torch.long)
    a = idx
    b = idx.roll(-1)
    return dist[a, b].sum().item()


def evaluate_chromosome(
    problem: CitySelectionTSP,
    x: Sequence[float],
    dist_mat: Optional[torch.Tensor] = None,
) -> Fitness:
    tour = problem.decode(x)
    best = problem.find_city_subsequence(tour)
    if dist_mat is not None:
        length = _tour_length_torch(dist_mat, tour)
    else:
        length = problem.tour_length(tour)
    return Fitness(
        fitness=problem.fitness_of(best),
        value=best.value,
        saved_length=best.saved_length,
        start=best.start,
        end=best.end,
        tour_length=length,
        feasible=problem.feasibility(x),
    )


def evaluate_population(
    problem: CitySelectionTSP,
    chromosomes: Sequence[Sequence[float]],
    cfg: Optional[EvaluationConfig] = None,
) -> List[Fitness]:
    """Evaluate ``chromosomes`` against one shared problem on a thread pool.

    Results keep the order of ``chromosomes``.
    """
    cfg = cfg or EvaluationConfig()
    if len(chromosomes) == 0:
        return []
    dist_mat = build_dist_tensor(problem, device=torch.device(cfg.device))
    workers = max(1, min(cfg.max_workers, len(chromosomes)))
    logger.debug("evaluating %d chromosomes on %d workers", len(chromosomes), workers)

    def worker(x):
        return evaluate_chromosome(problem, x, dist_mat=dist_mat)

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        return list(ex.map(worker, chromosomes))


def sample_chromosomes(
    problem: CitySelectionTSP, count: int, rng: Optional[np.random.Generator] = None
) -> List[np.ndarray]:
    """Encode ``count`` uniformly random tours in the problem's encoding."""
    rng = rng or np.random.default_rng()
    return [problem.encode(rng.permutation(problem.n_cities).tolist()) for _ in range(count)]


def aggregate_fitness(fitnesses: List[Fitness]) -> Dict[str, float]:
    if not fitnesses:
        return {"best": float("inf"), "mean": float("inf"), "feasible": 0.0}
    best = min(f.fitness for f in fitnesses)
    mean = sum(f.fitness for f in fitnesses) / len(fitnesses)
    feasible = sum(1 for f in fitnesses if f.feasible) / len(fitnesses)
    return {"best": best, "mean": mean, "feasible": feasible}
