"""
Tour Solver
Exact (brute force over all permutations) and greedy (nearest neighbor)
tour construction on a CityGraph, under a metric chosen per call.
"""

import itertools
import math
import time
from typing import List, Sequence

import numpy as np

from tsp_core import (
    CityGraph,
    DisconnectedWalkError,
    EmptyGraphError,
    InvalidStartIndexError,
    Metric,
    NoValidTourError,
    Tour,
)


class TourSolver:
    """
    Solves the TSP on a graph it does not own and never modifies.

    Both solvers return a Tour with the elapsed search time attached.
    """

    def __init__(self, graph: CityGraph, verbose: bool = False):
        self.graph = graph
        self.verbose = verbose

    # --------------------------------------------------------
    # SHARED COST HELPERS
    # --------------------------------------------------------
    def route_cost(self, i: int, j: int, metric) -> float:
        """Weight of edge i-j under metric, or inf if there is no route."""
        value = self.graph.weight_between(i, j, metric)
        return math.inf if value is None else value

    def tour_cost(self, order: Sequence[int], metric) -> float:
        """Sum of consecutive edge weights; inf as soon as one edge is missing."""
        weights = self._weight_table(Metric.parse(metric))
        return self._path_cost(weights, order)

    def _weight_table(self, metric: Metric) -> List[List[float]]:
        # Plain nested lists are faster than numpy scalars in the permutation loop
        matrix = self.graph.metric_matrix(metric)
        return np.where(np.isnan(matrix), np.inf, matrix).tolist()

    @staticmethod
    def _path_cost(weights: List[List[float]], order: Sequence[int]) -> float:
        total = 0.0
        for a, b in zip(order, order[1:]):
            w = weights[a][b]
            if w == math.inf:
                return math.inf
            total += w
        return total

    def _check_start(self, start_index: int) -> None:
        if self.graph.is_empty():
            raise EmptyGraphError()
        n = self.graph.size()
        if isinstance(start_index, bool) or not isinstance(start_index, (int, np.integer)):
            raise InvalidStartIndexError(start_index, n)
        if not 0 <= start_index < n:
            raise InvalidStartIndexError(start_index, n)

    # --------------------------------------------------------
    # BRUTE FORCE
    # --------------------------------------------------------
    def solve_exhaustive(self, metric, start_index: int) -> Tour:
        """
        Try every ordering of the other cities with start_index fixed first.

        Permutations are visited in lexicographic order and the first one
        reaching the minimum wins. Candidates using a missing edge are
        skipped. Raises NoValidTourError when no candidate closes.
        """
        metric = Metric.parse(metric)
        self._check_start(start_index)
        start_index = int(start_index)

        t0 = time.time()
        n = self.graph.size()
        weights = self._weight_table(metric)
        others = [i for i in range(n) if i != start_index]

        best_order = None
        best_cost = math.inf
        checked = 0

        for perm in itertools.permutations(others):
            order = (start_index,) + perm + (start_index,)
            checked += 1
            if n == 1:
                # A lone city is its own trivial tour
                cost = 0.0
            else:
                cost = self._path_cost(weights, order)
            if cost < best_cost:
                best_cost = cost
                best_order = order

        elapsed = time.time() - t0

        if best_order is None:
            if self.verbose:
                print(f"[Brute] No valid tour among {checked} permutations.")
            raise NoValidTourError(metric)

        if self.verbose:
            print(f"[Brute] Checked {checked} permutations in {elapsed:.4f}s, "
                  f"best {metric.label.lower()} = {best_cost:.2f}")

        return Tour(list(best_order), metric, best_cost, elapsed=elapsed)

    # --------------------------------------------------------
    # NEAREST NEIGHBOR
    # --------------------------------------------------------
    def solve_nearest_neighbor(self, metric, start_index: int, strict: bool = False) -> Tour:
        """
        Greedy walk: always move to the closest unvisited city.

        Ties go to the lowest index. If no unvisited city is reachable the
        walk stops early and the tour is marked incomplete (or
        DisconnectedWalkError is raised when strict). The tour is always
        closed back to the start; a missing closing edge makes the total
        inf and is reported in `anomalies` instead of failing.
        """
        metric = Metric.parse(metric)
        self._check_start(start_index)
        start_index = int(start_index)

        t0 = time.time()
        n = self.graph.size()
        weights = self._weight_table(metric)

        visited = [False] * n
        visited[start_index] = True
        order = [start_index]
        current = start_index
        total = 0.0
        anomalies = []

        while len(order) < n:
            nxt = self._find_nearest(weights, current, visited)
            if nxt == -1:
                break
            total += weights[current][nxt]
            visited[nxt] = True
            order.append(nxt)
            current = nxt

        complete = len(order) == n
        if not complete:
            if strict:
                raise DisconnectedWalkError(len(order), n)
            anomalies.append(
                f"Disconnected walk: visited {len(order)} of {n} cities, "
                f"no route from '{self.graph.city(current).name}' to an unvisited city."
            )

        if current != start_index:
            closing = weights[current][start_index]
            if closing == math.inf:
                anomalies.append(
                    f"No route from '{self.graph.city(current).name}' back to "
                    f"'{self.graph.city(start_index).name}'; tour total is not meaningful."
                )
            total += closing
        order.append(start_index)

        elapsed = time.time() - t0

        if self.verbose:
            print(f"[NN] Visited {len(order) - 1}/{n} cities in {elapsed:.4f}s, "
                  f"{metric.label.lower()} = {total:.2f}")
            for message in anomalies:
                print(f"[NN] Warning: {message}")

        return Tour(order, metric, total, elapsed=elapsed,
                    complete=complete, anomalies=anomalies)

    @staticmethod
    def _find_nearest(weights: List[List[float]], current: int, visited: List[bool]) -> int:
        best = -1
        best_w = math.inf
        for j, w in enumerate(weights[current]):
            if not visited[j] and w < best_w:
                best_w = w
                best = j
        return best
