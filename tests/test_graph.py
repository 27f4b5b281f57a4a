import networkx as nx
import pytest

from colorsearch import Color, ColorPalette, Graph


def test_adjacency_keeps_edge_order(cycle4):
    assert cycle4.neighbors(0) == (1, 3)
    assert cycle4.neighbors(2) == (1, 3)
    assert cycle4.num_edges == 4
    assert len(cycle4) == 4
    assert cycle4.max_degree() == 2


def test_parallel_edges_and_self_loops():
    graph = Graph(3, [(0, 1), (0, 1), (2, 2)])
    assert graph.neighbors(0) == (1, 1)
    assert graph.neighbors(2) == (2, 2)
    assert graph.degree(1) == 2
    assert graph.max_degree() == 2


def test_empty_graph():
    graph = Graph(0, [])
    assert len(graph) == 0
    assert graph.max_degree() == 0
    assert list(graph.vertices()) == []


def test_invalid_edge_rejected():
    with pytest.raises(ValueError, match="Invalid vertex"):
        Graph(2, [(0, 2)])


def test_from_file(tmp_path):
    path = tmp_path / "square.txt"
    path.write_text("4\n4\n0 1\n1 2\n2 3\n3 0\n\n")

    graph = Graph.from_file(path)

    assert graph.name == "square"
    assert graph.num_vertices == 4
    assert graph.edges == ((0, 1), (1, 2), (2, 3), (3, 0))


@pytest.mark.parametrize(
    "content, message",
    [
        ("4\n", "too few lines"),
        ("four\n1\n0 1\n", "Invalid header"),
        ("3\n2\n0 1\n", "Missing edge"),
        ("3\n1\n0\n", "Invalid edge format"),
        ("3\n1\n0 5\n", "Invalid vertex"),
    ],
)
def test_from_file_rejects_malformed(tmp_path, content, message):
    path = tmp_path / "bad.txt"
    path.write_text(content)
    with pytest.raises(ValueError, match=message):
        Graph.from_file(path)


def test_networkx_conversion():
    g = nx.MultiGraph()
    g.add_edges_from([("a", "b"), ("a", "b"), ("b", "c")])

    graph = Graph.from_networkx(g, name="multi")

    assert len(graph) == 3
    assert graph.num_edges == 3
    assert graph.neighbors(0) == (1, 1)

    back = graph.to_networkx()
    assert back.number_of_nodes() == 3
    assert back.number_of_edges() == 3


def test_color_derivation():
    color = Color.from_index(3)
    assert (color.r, color.g, color.b) == (291 % 256, 171, 111)
    assert color.hex == "#23AB6F"
    assert Color(3, 0, 0, 0) == color
    assert len({Color(1, 0, 0, 0), Color.from_index(1)}) == 1


def test_palette_sizing_and_growth(k5):
    palette = ColorPalette.for_graph(k5)
    assert len(palette) == 5
    assert [c.index for c in palette] == [0, 1, 2, 3, 4]

    added = palette.add_color()
    assert added.index == 5
    assert len(palette) == 6

    clone = palette.copy()
    clone.add_color()
    assert len(palette) == 6
    assert len(clone) == 7
