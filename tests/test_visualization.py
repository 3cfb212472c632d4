import os
import sys

import matplotlib

matplotlib.use("Agg")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import matplotlib.pyplot as plt

from tsp_core import CityGraph, Metric
from tour_solver import TourSolver
from visualization import (
    TSPVisualizer,
    format_tour,
    format_weight_table,
    render_weight_tables,
)


def make_graph():
    graph = CityGraph()
    graph.add_city("Charlie", 0, 0)
    graph.add_city("Alpha", 1, 0)
    graph.add_city("Bravo", 0, 1)
    graph.add_route("Charlie", "Alpha", 1, 10, 0.5)
    graph.add_route("Alpha", "Bravo", 2, 20, 1.5)
    return graph


def test_weight_table_marks_absent_routes():
    table = format_weight_table(make_graph(), Metric.COST)
    assert list(table.index) == ["Charlie", "Alpha", "Bravo"]
    assert table.loc["Charlie", "Alpha"] == 10
    assert table.loc["Alpha", "Charlie"] == 10
    assert table.loc["Charlie", "Bravo"] == "INF"
    assert table.loc["Alpha", "Alpha"] == "INF"


def test_weight_table_sorted_by_name():
    graph = make_graph()
    table = format_weight_table(graph, "time", sort_by_name=True)
    assert list(table.columns) == ["Alpha", "Bravo", "Charlie"]
    assert table.loc["Bravo", "Alpha"] == 1.5
    assert graph.find_index("Charlie") == 0


def test_render_weight_tables():
    text = render_weight_tables(make_graph())
    assert "Distance Matrix:" in text
    assert "Cost Matrix:" in text
    assert "Time Matrix:" in text
    assert "INF" in text
    assert render_weight_tables(CityGraph()) == "No cities to display."


def test_format_tour():
    graph = make_graph()
    graph.add_route("Charlie", "Bravo", 3, 30, 2)
    tour = TourSolver(graph).solve_exhaustive(Metric.DISTANCE, 0)
    assert format_tour(graph, tour) == "Charlie -> Alpha -> Bravo -> Charlie"


def test_plots_save_to_file(tmp_path):
    graph = make_graph()
    solver = TourSolver(graph)
    tour = solver.solve_nearest_neighbor(Metric.DISTANCE, 0)
    visualizer = TSPVisualizer(figsize=(4, 4))

    single = tmp_path / "tour.png"
    visualizer.plot_tour(graph, tour, save_path=str(single), show=False)
    assert single.exists()

    both = tmp_path / "both.png"
    visualizer.plot_comparison(graph, [tour, tour], ["A", "B"], save_path=str(both), show=False)
    assert both.exists()
    plt.close("all")
