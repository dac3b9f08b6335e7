"""
Feasibility constraints for the arc-matrix and permutation chromosomes.

The arc-matrix layout stores ``x[i][j]`` for every ordered pair ``i != j``
row by row with the diagonal dropped, see :func:`compute_idx`. Subtours are
ruled out with the Miller-Tucker-Zemlin order-label formulation.
"""

from typing import Sequence

import numpy as np


def compute_idx(i: int, j: int, n: int) -> int:
    assert i != j and 0 <= i < n and 0 <= j < n
    return i * (n - 1) + j - (1 if j > i else 0)


def walk_arcs(x: Sequence[float], n: int) -> np.ndarray:
    """Follow selected arcs from city 0 for ``n`` steps and return the visiting order.

    At each city the first ``j`` with ``x[idx(city, j)] == 1`` is taken. When a
    city has no selected outgoing arc the walk moves to the previously chosen
    successor again, so a chromosome that is not a single Hamiltonian cycle
    yields repeated cities rather than an error.
    """
    order = np.zeros(n, dtype=int)
    current_city = next_city = 0
    for step in range(n):
        order[step] = current_city
        for j in range(n):
            if j == current_city:
                continue
            if x[compute_idx(current_city, j, n)] == 1:
                next_city = j
                break
        current_city = next_city
    return order


def order_labels(x: Sequence[float], n: int) -> np.ndarray:
    # u[city] = position along the walk, 1-based; cities never reached keep 0.
    u = np.zeros(n, dtype=int)
    for step, city in enumerate(walk_arcs(x, n)):
        u[city] = step + 1
    return u


def degree_constraints(x: Sequence[float], n: int) -> np.ndarray:
    c = np.zeros(2 * n)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            c[i] += x[compute_idx(i, j, n)]
            c[i + n] += x[compute_idx(j, i, n)]
    return c - 1


def subtour_constraints(x: Sequence[float], n: int) -> np.ndarray:
    u = order_labels(x, n)
    c = np.zeros((n - 1) * (n - 2))
    count = 0
    for i in range(1, n):
        for j in range(1, n):
            if i == j:
                continue
            c[count] = u[i] - u[j] + (n + 1) * x[compute_idx(i, j, n)] - n
            count += 1
    return c


def full_constraints(x: Sequence[float], n: int) -> np.ndarray:
    """One outgoing and one incoming arc per city, then the MTZ inequalities."""
    return np.concatenate([degree_constraints(x, n), subtour_constraints(x, n)])


def is_permutation(x: Sequence[float], n: int) -> bool:
    if len(x) != n:
        return False
    return sorted(x) == list(range(n))


def permutation_constraint(x: Sequence[float], n: int) -> np.ndarray:
    return np.array([0.0 if is_permutation(x, n) else 1.0])
