import os
import re
import numpy as np
from typing import Optional, Tuple

from tsp_core import CityGraph, TSPError

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_CITY_LINE = re.compile(rf"^(\S+)\s+({_NUMBER})\s+({_NUMBER})\s*$")
_ROUTE_LINE = re.compile(rf"^(\S+)\s+(\S+)\s+({_NUMBER})\s+({_NUMBER})\s+({_NUMBER})\s*$")


def _read_lines(path):
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            yield lineno, line


def load_cities_file(graph: CityGraph, path: str, verbose: bool = True) -> Tuple[int, int]:
    """
    Load cities into graph from a whitespace separated text file.

    Each line is:  name x y
    Handles:
        - blank lines and '#' comments
        - malformed lines (skipped)
        - duplicate names (skipped, first one wins)

    Returns:
        (loaded, skipped)
    """
    loaded = skipped = 0

    for lineno, line in _read_lines(path):
        match = _CITY_LINE.match(line)
        if not match:
            skipped += 1
            if verbose:
                print(f"[Loader] {path}:{lineno}: expected 'name x y', skipping.")
            continue

        name, x, y = match.group(1), float(match.group(2)), float(match.group(3))
        try:
            graph.add_city(name, x, y)
        except TSPError as e:
            skipped += 1
            if verbose:
                print(f"[Loader] {path}:{lineno}: {e} Skipping.")
            continue
        loaded += 1

    if verbose:
        print(f"[Loader] Cities loaded from {path}: {loaded} added, {skipped} skipped.")
    return loaded, skipped


def load_routes_file(graph: CityGraph, path: str, verbose: bool = True) -> Tuple[int, int]:
    """
    Load routes into graph. Each line is:  from to distance cost time

    Routes naming unknown cities, self loops, negative weights and
    malformed lines are skipped.

    Returns:
        (loaded, skipped)
    """
    loaded = skipped = 0

    for lineno, line in _read_lines(path):
        match = _ROUTE_LINE.match(line)
        if not match:
            skipped += 1
            if verbose:
                print(f"[Loader] {path}:{lineno}: expected 'from to distance cost time', skipping.")
            continue

        src, dst = match.group(1), match.group(2)
        distance, cost, time = (float(match.group(k)) for k in (3, 4, 5))
        try:
            graph.add_route(src, dst, distance, cost, time)
        except (TSPError, ValueError) as e:
            skipped += 1
            if verbose:
                print(f"[Loader] {path}:{lineno}: {e} Skipping.")
            continue
        loaded += 1

    if verbose:
        print(f"[Loader] Routes loaded from {path}: {loaded} added, {skipped} skipped.")
    return loaded, skipped


def generate_random_graph(
    n: int,
    density: float = 1.0,
    width: float = 100,
    height: float = 100,
    max_weight: int = 100,
    seed: Optional[int] = None,
) -> CityGraph:
    """
    Generate a random instance for testing and benchmarking.

    Args:
        n: Number of cities
        density: Probability that a given pair of cities has a route
        width: Width of the coordinate area
        height: Height of the coordinate area
        max_weight: Upper bound for each of distance, cost and time
        seed: Seed for reproducible instances

    Returns:
        A CityGraph named City_0 .. City_{n-1}
    """
    rng = np.random.default_rng(seed)
    graph = CityGraph()

    for i in range(n):
        graph.add_city(f"City_{i}", rng.uniform(0, width), rng.uniform(0, height))

    for i in range(n):
        for j in range(i + 1, n):
            if density < 1.0 and rng.random() >= density:
                continue
            distance, cost, time = rng.integers(1, max_weight + 1, size=3)
            graph.add_route(f"City_{i}", f"City_{j}", distance, cost, time)

    return graph
