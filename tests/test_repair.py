import random

from conftest import assert_consistent

from colorsearch import ColorPalette, Graph, SearchState, greedy_repair


def test_repairs_monochrome_cycle(cycle4):
    state = SearchState.from_assignment(cycle4, [0, 0, 0, 0])

    recolored = greedy_repair(state)

    assert state.conflicts == 0
    assert recolored > 0
    assert_consistent(state)


def test_tries_colors_in_index_order(cycle4):
    state = SearchState.from_assignment(cycle4, [0, 0, 1, 2])

    assert greedy_repair(state) == 1

    # Vertex 0 is visited first and color 1 is the first one free of conflicts
    assert state.color_indices() == {0: 1, 1: 0, 2: 1, 3: 2}
    assert state.conflicts == 0
    assert_consistent(state)


def test_unfixable_vertex_keeps_its_color():
    triangle = Graph(3, [(0, 1), (1, 2), (2, 0)])
    state = SearchState.from_assignment(triangle, [0, 0, 1], palette=ColorPalette(2))

    assert greedy_repair(state) == 0
    assert state.color_indices() == {0: 0, 1: 0, 2: 1}
    assert state.conflicts == 1


def test_self_loop_is_left_alone():
    graph = Graph(2, [(0, 0), (0, 1)])
    state = SearchState.from_assignment(graph, [0, 1], palette=ColorPalette(3))

    greedy_repair(state)

    assert state.conflicts == 1
    assert_consistent(state)


def test_repair_reaches_zero_with_degree_palette(gnm):
    for seed in range(5):
        state = SearchState.random(gnm, random.Random(seed))
        greedy_repair(state)
        assert state.conflicts == 0
        assert_consistent(state)


def test_repair_is_idempotent(gnm):
    palette = ColorPalette(3)
    for seed in range(5):
        state = SearchState.random(gnm, random.Random(seed), palette=palette)
        greedy_repair(state)
        once = (state.color_indices(), state.conflicts)

        assert greedy_repair(state) == 0
        assert (state.color_indices(), state.conflicts) == once
        assert_consistent(state)
