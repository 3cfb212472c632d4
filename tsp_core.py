"""
TSP Solver - Core Module
Contains the fundamental data structures for representing the TSP problem:
cities, multi-criteria edge weights, the city graph and tours.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np


METRIC_NAMES = ("Distance", "Cost", "Time")


# ==========================================
# Errors
# ==========================================
class TSPError(Exception):
    """Base class for every recoverable solver/graph error."""


class DuplicateCityError(TSPError):
    def __init__(self, name: str):
        super().__init__(f"City '{name}' already exists.")
        self.name = name


class CityNotFoundError(TSPError):
    def __init__(self, name: str):
        super().__init__(f"City '{name}' not found. Please add the city first.")
        self.name = name


class SelfLoopRouteError(TSPError):
    def __init__(self, name: str):
        super().__init__(f"Cannot add a route from '{name}' to itself.")
        self.name = name


class EmptyGraphError(TSPError):
    def __init__(self):
        super().__init__("No cities available for TSP.")


class InvalidStartIndexError(TSPError):
    def __init__(self, index, size: int):
        super().__init__(f"Start index {index} is out of range for {size} cities.")
        self.index = index


class NoValidTourError(TSPError):
    def __init__(self, metric: "Metric"):
        super().__init__(f"No valid tour found ({metric.label} optimized).")
        self.metric = metric


class DisconnectedWalkError(TSPError):
    def __init__(self, visited: int, total: int):
        super().__init__(
            f"Nearest neighbor walk stopped after {visited} of {total} cities: "
            f"no unvisited city is reachable."
        )
        self.visited = visited
        self.total = total


# ==========================================
# Value types
# ==========================================
class Metric(Enum):
    """Optimization criterion. The value is the slot in the weight matrix."""

    DISTANCE = 0
    COST = 1
    TIME = 2

    @property
    def label(self) -> str:
        return METRIC_NAMES[self.value]

    @classmethod
    def parse(cls, value: Union["Metric", str]) -> "Metric":
        """Accept a Metric or case-insensitive text ('distance', 'Cost', ...)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper()
        if key not in cls.__members__:
            raise ValueError(
                f"Invalid criterion '{value}'. Please choose Distance, Cost, or Time."
            )
        return cls[key]


@dataclass(frozen=True)
class City:
    """A named city. Coordinates are only used for display."""

    name: str
    x: float = 0.0
    y: float = 0.0

    def __repr__(self):
        return f"City({self.name!r}, {self.x:.2f}, {self.y:.2f})"


@dataclass(frozen=True)
class EdgeWeight:
    """Distance, cost and time of a direct route."""

    distance: float
    cost: float
    time: float

    def get(self, metric: Metric) -> float:
        return self.as_tuple()[Metric.parse(metric).value]

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.distance, self.cost, self.time)


class Tour:
    """
    A closed tour as an ordered sequence of city indices (first == last).

    `total` is the accumulated weight under `metric`; it is `inf` when the
    tour uses a missing edge. `complete` is False when the walk could not
    reach every city. Anything unusual met while building the tour is kept
    in `anomalies`.
    """

    def __init__(
        self,
        order: List[int],
        metric: Metric,
        total: float,
        elapsed: float = 0.0,
        complete: bool = True,
        anomalies: Optional[List[str]] = None,
    ):
        self.order = list(order)
        self.metric = metric
        self.total = total
        self.elapsed = elapsed
        self.complete = complete
        self.anomalies = list(anomalies) if anomalies else []

    @property
    def start(self) -> int:
        return self.order[0]

    @property
    def is_closed(self) -> bool:
        return len(self.order) >= 2 and self.order[0] == self.order[-1]

    @property
    def is_valid(self) -> bool:
        return self.complete and self.is_closed and math.isfinite(self.total)

    def edges(self) -> List[Tuple[int, int]]:
        return list(zip(self.order, self.order[1:]))

    def labels(self, graph: "CityGraph") -> List[str]:
        return [graph.city(i).name for i in self.order]

    def __len__(self):
        return len(self.order)

    def __getitem__(self, index):
        return self.order[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.order)

    def __repr__(self):
        return (
            f"Tour(order={self.order}, {self.metric.label.lower()}={self.total:.2f}, "
            f"complete={self.complete})"
        )


# ==========================================
# Graph
# ==========================================
class CityGraph:
    """
    Cities plus a symmetric adjacency matrix of (distance, cost, time).

    Cities keep the index they were inserted with for the lifetime of the
    graph. The matrix has shape (n, n, 3); NaN marks a missing route.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._cities: List[City] = []
        self._index = {}
        self._weights = np.full((0, 0, len(Metric)), np.nan)

    # --------------------------------------------------------
    # Mutation
    # --------------------------------------------------------
    def add_city(self, name: str, x: float = 0.0, y: float = 0.0) -> int:
        """Append a city and return its index. Raises DuplicateCityError."""
        if name in self._index:
            raise DuplicateCityError(name)

        index = len(self._cities)
        grown = np.full((index + 1, index + 1, len(Metric)), np.nan)
        grown[:index, :index] = self._weights

        self._weights = grown
        self._cities.append(City(name, float(x), float(y)))
        self._index[name] = index

        if self.verbose:
            print(f"[Graph] City '{name}' added at index {index}.")
        return index

    def add_route(
        self,
        from_name: str,
        to_name: str,
        distance: float,
        cost: float,
        time: float,
    ) -> None:
        """Set the weights between two cities in both directions (last write wins)."""
        i = self.index_of(from_name)
        j = self.index_of(to_name)
        if i == j:
            raise SelfLoopRouteError(from_name)

        values = (float(distance), float(cost), float(time))
        for label, value in zip(METRIC_NAMES, values):
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{label} must be a non-negative number, got {value}.")

        self._weights[i, j] = values
        self._weights[j, i] = values

        if self.verbose:
            print(f"[Graph] Route between '{from_name}' and '{to_name}' added.")

    # --------------------------------------------------------
    # Lookup
    # --------------------------------------------------------
    def find_index(self, name: str) -> Optional[int]:
        return self._index.get(name)

    def index_of(self, name: str) -> int:
        index = self._index.get(name)
        if index is None:
            raise CityNotFoundError(name)
        return index

    def city(self, index: int) -> City:
        return self._cities[index]

    def _check_pair(self, i: int, j: int) -> None:
        n = len(self._cities)
        for index in (i, j):
            if not 0 <= index < n:
                raise IndexError(f"City index {index} is out of range for {n} cities.")

    def weight_between(self, i: int, j: int, metric) -> Optional[float]:
        self._check_pair(i, j)
        value = self._weights[i, j, Metric.parse(metric).value]
        if np.isnan(value):
            return None
        return float(value)

    def edge(self, i: int, j: int) -> Optional[EdgeWeight]:
        self._check_pair(i, j)
        values = self._weights[i, j]
        if np.isnan(values[0]):
            return None
        return EdgeWeight(*(float(v) for v in values))

    def has_route(self, i: int, j: int) -> bool:
        self._check_pair(i, j)
        return not np.isnan(self._weights[i, j, 0])

    def routes(self) -> Iterator[Tuple[int, int, EdgeWeight]]:
        """Yield every route once as (i, j, weight) with i < j."""
        n = self.size()
        for i in range(n):
            for j in range(i + 1, n):
                weight = self.edge(i, j)
                if weight is not None:
                    yield i, j, weight

    def metric_matrix(self, metric) -> np.ndarray:
        """Copy of the (n, n) matrix for one metric, NaN where no route exists."""
        return self._weights[:, :, Metric.parse(metric).value].copy()

    # --------------------------------------------------------
    # Views
    # --------------------------------------------------------
    def cities_by_insertion(self) -> List[City]:
        return list(self._cities)

    def sorted_by_name(self) -> List[City]:
        """Cities ordered by name. Indices and weights are not touched."""
        return sorted(self._cities, key=lambda city: city.name)

    def size(self) -> int:
        return len(self._cities)

    def is_empty(self) -> bool:
        return not self._cities

    def __len__(self):
        return len(self._cities)

    def __contains__(self, name):
        return name in self._index

    def __repr__(self):
        n_routes = sum(1 for _ in self.routes())
        return f"CityGraph(cities={self.size()}, routes={n_routes})"
