"""
Best budget-respecting stretch of a closed tour.

A window ``[l, r]`` covers the cities ``tour[l % n], ..., tour[r % n]`` walking
forward around the cycle and pays for the ``r - l`` edges between them. Both
pointers only move forward, so a full scan is linear in the number of cities.
"""

from typing import Iterator, Sequence, Tuple

from .base import ConfigurationError, SubsequenceResult
from .graph import GraphConfig


Window = Tuple[int, int, float, float]


def iter_windows(config: GraphConfig, tour: Sequence[int]) -> Iterator[Window]:
    """Yield ``(l, r, value, saved_length)`` for every window eligible as a best window.

    ``l`` and ``r`` are the raw, unwrapped pointers. The first window is the
    single city ``tour[0]`` with the whole budget still available.
    """
    n = config.n_cities
    if len(tour) != n:
        raise ConfigurationError("tour dimension must equal city count")
    weights = config.weights
    values = config.values

    it_l = it_r = 0
    cum_p = float(values[tour[0]])
    saved_length = config.max_path_length
    yield it_l, it_r, cum_p, saved_length

    growing = True
    while True:
        while growing:
            saved_length -= weights[tour[it_r % n], tour[(it_r + 1) % n]]
            cum_p += values[tour[(it_r + 1) % n]]
            it_r += 1
            if saved_length < 0 or it_l % n == it_r % n:
                growing = False
            else:
                yield it_l, it_r, float(cum_p), float(saved_length)
        # The window wrapped around the whole cycle.
        if it_l % n == it_r % n:
            return
        saved_length += weights[tour[it_l % n], tour[(it_l + 1) % n]]
        cum_p -= values[tour[it_l % n]]
        it_l += 1
        if saved_length > 0:
            growing = True
            yield it_l, it_r, float(cum_p), float(saved_length)
        if it_l == n:
            return


def find_city_subsequence(config: GraphConfig, tour: Sequence[int]) -> SubsequenceResult:
    """Find the most valuable stretch of ``tour`` whose length fits in the budget.

    Ties on value go to the window leaving more budget unused. Both comparisons
    are exact, so values that only differ by rounding do not tie. The tour must
    be a permutation of all cities; anything else gives an unspecified result.
    """
    n = config.n_cities
    best_p = best_l = None
    best_start = best_end = 0
    for it_l, it_r, cum_p, saved_length in iter_windows(config, tour):
        if best_p is None or cum_p > best_p or (cum_p == best_p and saved_length > best_l):
            best_p = cum_p
            best_l = saved_length
            best_start = it_l % n
            best_end = it_r % n
    return SubsequenceResult(value=best_p, saved_length=best_l, start=best_start, end=best_end)
