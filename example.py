"""
Simple Example - Quick Start Guide
Run this to see the TSP solver in action!
"""

from tsp_core import CityGraph, Metric
from tour_solver import TourSolver
from visualization import format_tour, render_weight_tables


def build_example_graph() -> CityGraph:
    """Five cities where cost and time disagree with distance."""
    graph = CityGraph()
    for name, x, y in [
        ("Delhi", 0, 0),
        ("Agra", 2, -2),
        ("Jaipur", -2, -3),
        ("Lucknow", 5, -1),
        ("Kanpur", 4, -3),
    ]:
        graph.add_city(name, x, y)

    routes = [
        ("Delhi", "Agra", 230, 600, 3.5),
        ("Delhi", "Jaipur", 280, 500, 5.0),
        ("Delhi", "Lucknow", 550, 900, 7.5),
        ("Delhi", "Kanpur", 480, 1100, 6.5),
        ("Agra", "Jaipur", 240, 450, 4.0),
        ("Agra", "Lucknow", 335, 700, 4.5),
        ("Agra", "Kanpur", 280, 650, 4.0),
        ("Jaipur", "Lucknow", 570, 800, 9.0),
        ("Jaipur", "Kanpur", 510, 950, 8.0),
        ("Lucknow", "Kanpur", 90, 200, 1.5),
    ]
    for route in routes:
        graph.add_route(*route)
    return graph


def simple_example():
    print("\n" + "=" * 60)
    print("TSP SOLVER - SIMPLE EXAMPLE")
    print("=" * 60 + "\n")

    graph = build_example_graph()
    print(render_weight_tables(graph))

    solver = TourSolver(graph)
    start = graph.index_of("Delhi")

    print(f"\n{'Criterion':<12} {'Method':<18} {'Total':<10} Tour")
    print("-" * 60)
    for metric in Metric:
        exact = solver.solve_exhaustive(metric, start)
        greedy = solver.solve_nearest_neighbor(metric, start)
        print(f"{metric.label:<12} {'Brute Force':<18} {exact.total:<10.2f} {format_tour(graph, exact)}")
        print(f"{metric.label:<12} {'Nearest Neighbor':<18} {greedy.total:<10.2f} {format_tour(graph, greedy)}")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    simple_example()
