import numpy as np

from tsp_cs.evaluation import EvaluationConfig, aggregate_fitness, evaluate_population, sample_chromosomes
from tsp_cs.problems import CitySelectionTSP


def main():
    rng = np.random.default_rng(7)
    n = 12
    coords = rng.random((n, 2))
    weights = np.linalg.norm(coords[:, None, :] - coords[None, :, :], axis=-1)
    values = rng.integers(1, 10, size=n)
    problem = CitySelectionTSP(weights, values, max_path_length=1.5, encoding="randomkeys")

    cfg = EvaluationConfig(max_workers=4, random_seed=7)
    generations = 5
    for g in range(generations):
        chromosomes = sample_chromosomes(problem, 50, rng=rng)
        results = evaluate_population(problem, chromosomes, cfg)
        stats = aggregate_fitness(results)
        best = min(results, key=lambda f: f.fitness)
        print(
            f"batch {g+1}: best={stats['best']:.2f} mean={stats['mean']:.2f} "
            f"window={best.start}->{best.end} value={best.value:.0f}"
        )


if __name__ == "__main__":
    main()
