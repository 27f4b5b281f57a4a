import random

import networkx as nx
import pytest

from colorsearch import Graph, SearchState, compute_conflicts


def assert_consistent(state: SearchState) -> None:
    """Tracked conflict count and usage histogram match the coloring."""
    assert state.conflicts == compute_conflicts(state.graph, state.coloring)
    assert sum(state.used_colors.values()) == len(state.graph)
    assert set(state.coloring) == set(state.graph.vertices())

    counts: dict[int, int] = {}
    for color in state.coloring.values():
        counts[color.index] = counts.get(color.index, 0) + 1
    for index, count in state.used_colors.items():
        assert counts.get(index, 0) == count


@pytest.fixture
def cycle4() -> Graph:
    return Graph(4, [(0, 1), (1, 2), (2, 3), (3, 0)], name="c4")


@pytest.fixture
def k5() -> Graph:
    return Graph.from_networkx(nx.complete_graph(5), name="k5")


@pytest.fixture
def isolated() -> Graph:
    return Graph(1, [], name="single")


@pytest.fixture
def gnm() -> Graph:
    return Graph.from_networkx(nx.gnm_random_graph(30, 80, seed=7), name="gnm30")


@pytest.fixture
def random_state(gnm):
    return SearchState.random(gnm, random.Random(3))
