import argparse
import sys
import time
from typing import List, Optional

import numpy as np

from tsp_cs.data import load_any
from tsp_cs.evaluation import (
    EvaluationConfig,
    aggregate_fitness,
    evaluate_chromosome,
    evaluate_population,
    sample_chromosomes,
)
from tsp_cs.problems import ConfigurationError, Encoding


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _load(args):
    instance = load_any(
        args.instance,
        values=args.values,
        max_path_length=args.max_path_length,
        encoding=args.encoding,
    )
    return instance.problem


def _print_result(problem, x, result) -> None:
    print(f"tour: {problem.decode(x)}")
    print(
        f"best window: start={result.start} end={result.end} "
        f"value={result.value:.6g} saved_length={result.saved_length:.6g}"
    )
    print(f"tour length: {result.tour_length:.6g}")
    print(f"fitness: {result.fitness:.6g}")
    print(f"constraints: {problem.evaluate_constraints(x).tolist()}")
    print(f"feasible: {result.feasible}")


def info(args) -> None:
    print(_load(args))


def evaluate(args) -> None:
    problem = _load(args)
    if args.tour is not None:
        x = problem.encode(args.tour)
    else:
        x = np.asarray(args.chromosome, dtype=float)
    _print_result(problem, x, evaluate_chromosome(problem, x))


def sample(args) -> None:
    if args.samples < 1:
        raise ConfigurationError("--samples must be at least 1")
    t0 = time.perf_counter()
    problem = _load(args)
    cfg = EvaluationConfig(max_workers=args.workers, device=args.device, random_seed=args.seed)
    rng = np.random.default_rng(cfg.random_seed)
    chromosomes = sample_chromosomes(problem, args.samples, rng=rng)
    log(f"evaluating {len(chromosomes)} random tours on {problem.n_cities} cities")
    results = evaluate_population(problem, chromosomes, cfg)
    stats = aggregate_fitness(results)
    log(
        f"done in {time.perf_counter() - t0:.2f}s: best={stats['best']:.6g} "
        f"mean={stats['mean']:.6g} feasible={stats['feasible']:.0%}"
    )
    best_idx = min(range(len(results)), key=lambda i: results[i].fitness)
    _print_result(problem, chromosomes[best_idx], results[best_idx])


def _add_instance_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("instance", help="TSPLIB file or JSON problem state")
    parser.add_argument("--values", default=None, help="file with one value per city (TSPLIB only)")
    parser.add_argument("--max-path-length", type=float, default=1.0)
    parser.add_argument(
        "--encoding",
        default=Encoding.CITIES.value,
        choices=[e.value for e in Encoding],
    )


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="City-selection TSP CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser("info", help="Describe a problem instance")
    _add_instance_args(info_parser)
    info_parser.set_defaults(func=info)

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate one tour or chromosome")
    _add_instance_args(eval_parser)
    group = eval_parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--tour", type=int, nargs="+")
    group.add_argument("--chromosome", type=float, nargs="+")
    eval_parser.set_defaults(func=evaluate)

    sample_parser = subparsers.add_parser("sample", help="Evaluate random tours and report the best")
    _add_instance_args(sample_parser)
    sample_parser.add_argument("--samples", type=int, default=100)
    sample_parser.add_argument("--seed", type=int, default=123)
    sample_parser.add_argument("--workers", type=int, default=4)
    sample_parser.add_argument("--device", default="cpu")
    sample_parser.set_defaults(func=sample)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
