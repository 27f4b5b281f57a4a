from colorsearch import Graph, SearchState, select_next_node


def test_returns_none_when_conflict_free(cycle4):
    state = SearchState.from_assignment(cycle4, [0, 1, 0, 1])
    assert select_next_node(state) is None


def test_prefers_most_incident_conflicts():
    star = Graph(4, [(0, 1), (0, 2), (0, 3)])
    state = SearchState.from_assignment(star, [0, 0, 0, 0])
    assert select_next_node(state) == 0


def test_ties_prefer_least_used_color():
    # Vertices 0-3 all have one incident conflict; color 1 is used three times.
    graph = Graph(5, [(0, 1), (2, 3)])
    state = SearchState.from_assignment(graph, [1, 1, 0, 0, 1])
    assert select_next_node(state) == 2


def test_full_ties_keep_index_order(cycle4):
    state = SearchState.from_assignment(cycle4, [0, 0, 0, 0])
    assert select_next_node(state) == 0


def test_selection_does_not_mutate(random_state):
    before = random_state.color_indices()
    select_next_node(random_state)
    assert random_state.color_indices() == before
