import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from data_generator import generate_random_graph, load_cities_file, load_routes_file
from tsp_core import CityGraph, Metric

DATA_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "data"))


def test_load_bundled_files():
    graph = CityGraph()
    assert load_cities_file(graph, os.path.join(DATA_DIR, "cities.txt"), verbose=False) == (5, 0)
    assert load_routes_file(graph, os.path.join(DATA_DIR, "routes.txt"), verbose=False) == (10, 0)
    assert graph.city(graph.index_of("Agra")).x == 2.0
    assert graph.weight_between(graph.index_of("Lucknow"), graph.index_of("Kanpur"),
                                Metric.TIME) == pytest.approx(1.5)


def test_city_loader_skips_bad_lines_and_duplicates(tmp_path):
    path = tmp_path / "cities.txt"
    path.write_text(
        "# comment\n"
        "A 0 0\n"
        "\n"
        "B 1.5 -2\n"
        "A 9 9\n"
        "broken line\n"
        "C 3 x\n"
    )
    graph = CityGraph()
    assert load_cities_file(graph, str(path), verbose=False) == (2, 3)
    assert [c.name for c in graph.cities_by_insertion()] == ["A", "B"]
    assert graph.city(0).x == 0.0


def test_route_loader_skips_invalid_routes(tmp_path):
    cities = tmp_path / "cities.txt"
    cities.write_text("A 0 0\nB 1 1\nC 2 2\n")
    routes = tmp_path / "routes.txt"
    routes.write_text(
        "A B 1 2 3\n"
        "A Z 1 1 1\n"
        "C C 1 1 1\n"
        "B C -1 1 1\n"
        "B C 1 1\n"
        "A B 4 5 6\n"
    )
    graph = CityGraph()
    load_cities_file(graph, str(cities), verbose=False)
    assert load_routes_file(graph, str(routes), verbose=False) == (2, 4)
    assert graph.weight_between(0, 1, Metric.COST) == 5.0
    assert not graph.has_route(1, 2)


def test_loader_reports_when_verbose(tmp_path, capsys):
    path = tmp_path / "cities.txt"
    path.write_text("A 0 0\nA 1 1\n")
    load_cities_file(CityGraph(), str(path))
    out = capsys.readouterr().out
    assert "already exists" in out
    assert "1 added, 1 skipped" in out


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_cities_file(CityGraph(), str(tmp_path / "nope.txt"), verbose=False)
    with pytest.raises(FileNotFoundError):
        load_routes_file(CityGraph(), str(tmp_path / "nope.txt"), verbose=False)


def test_random_graph_is_complete_and_reproducible():
    a = generate_random_graph(6, seed=7)
    b = generate_random_graph(6, seed=7)
    assert a.size() == 6
    assert len(list(a.routes())) == 15
    assert list(a.routes()) == list(b.routes())
    for _, _, weight in a.routes():
        assert all(1 <= v <= 100 for v in weight.as_tuple())


def test_random_graph_density_zero_has_no_routes():
    graph = generate_random_graph(5, density=0.0, seed=1)
    assert graph.size() == 5
    assert list(graph.routes()) == []


def test_loaders_accept_bare_decimal_points(tmp_path):
    cities = tmp_path / "cities.txt"
    cities.write_text("A .5 1\nB 2. 3\nC -.25 1e2\n")
    routes = tmp_path / "routes.txt"
    routes.write_text("A B .5 2. 3\nB C 1. .75 +4\n")

    graph = CityGraph()
    assert load_cities_file(graph, str(cities), verbose=False) == (3, 0)
    assert (graph.city(0).x, graph.city(1).x) == (0.5, 2.0)
    assert (graph.city(2).x, graph.city(2).y) == (-0.25, 100.0)

    assert load_routes_file(graph, str(routes), verbose=False) == (2, 0)
    assert graph.weight_between(0, 1, Metric.DISTANCE) == 0.5
    assert graph.weight_between(0, 1, Metric.COST) == 2.0
    assert graph.weight_between(1, 2, Metric.COST) == 0.75
    assert graph.weight_between(1, 2, Metric.TIME) == 4.0


def test_loader_still_rejects_lone_dot(tmp_path):
    path = tmp_path / "cities.txt"
    path.write_text("A . 1\n")
    assert load_cities_file(CityGraph(), str(path), verbose=False) == (0, 1)
