import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from example import build_example_graph, simple_example


def test_example_graph_is_complete():
    graph = build_example_graph()
    assert graph.size() == 5
    assert len(list(graph.routes())) == 10


def test_simple_example_prints_every_criterion(capsys):
    simple_example()
    out = capsys.readouterr().out
    for label in ("Distance", "Cost", "Time"):
        assert f"{label} Matrix:" in out
    assert out.count("Brute Force") == 3
    assert out.count("Nearest Neighbor") == 3
