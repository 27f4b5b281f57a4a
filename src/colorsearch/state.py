"""
Search state and conflict accounting.

A conflict is an edge whose two endpoints hold the same color index. The
search state keeps the total conflict count and a per-color usage histogram
in step with the coloring; every recolor goes through `SearchState.recolor`,
which updates all three together using the recolored vertex's neighbor list
only.

Heuristic cost:
    H = conflicts * conflict_weight - color_usage

Lower is better. With conflict_weight larger than the vertex count the order
is lexicographic: fewer conflicts first, then reuse of colors that are
already popular (which keeps the number of distinct colors down).
"""

import random
from typing import Optional, Sequence

from .graph import Graph
from .palette import Color, ColorPalette

CONFLICT_WEIGHT = 100


class SearchInvariantError(RuntimeError):
    """A search precondition was broken upstream; the search cannot continue."""


def heuristic_cost(conflicts: int, color_usage: int, conflict_weight: int = CONFLICT_WEIGHT) -> int:
    return conflicts * conflict_weight - color_usage


def count_node_conflicts(vertex: int, graph: Graph, coloring: dict[int, Color]) -> int:
    """
    Count neighbors of a vertex that share its current color.

    Raises:
        SearchInvariantError: If the vertex has no color assigned
    """
    try:
        color = coloring[vertex]
    except KeyError:
        raise SearchInvariantError(f"Vertex {vertex} not found in coloring") from None

    conflicts = 0
    for neighbor in graph.neighbors(vertex):
        neighbor_color = coloring.get(neighbor)
        if neighbor_color is not None and neighbor_color.index == color.index:
            conflicts += 1
    return conflicts


def compute_conflicts(graph: Graph, coloring: dict[int, Color]) -> int:
    """Full recompute of conflicting edges (each edge is seen from both endpoints)."""
    total = 0
    for v in graph.vertices():
        total += count_node_conflicts(v, graph, coloring)
    return total // 2


class SearchState:
    """Mutable snapshot of a coloring search."""

    def __init__(
        self,
        graph: Graph,
        palette: ColorPalette,
        coloring: dict[int, Color],
        conflicts: Optional[int] = None,
        used_colors: Optional[dict[int, int]] = None,
    ):
        self.graph = graph
        self.palette = palette
        self.coloring = coloring
        self.conflicts = compute_conflicts(graph, coloring) if conflicts is None else conflicts
        if used_colors is None:
            used_colors = {}
            for color in coloring.values():
                used_colors[color.index] = used_colors.get(color.index, 0) + 1
        self.used_colors = used_colors
        self.conflict_weight = max(CONFLICT_WEIGHT, len(graph) + 1)

        # Last committed move, for step-wise observers
        self.moved_vertex: Optional[int] = None
        self.applied_color: Optional[Color] = None
        self.continue_iteration = True

    @classmethod
    def random(
        cls,
        graph: Graph,
        rng: random.Random,
        palette: Optional[ColorPalette] = None,
    ) -> "SearchState":
        """Initial state with a uniform random palette color per vertex."""
        if palette is None:
            palette = ColorPalette.for_graph(graph)
        if len(graph) and not len(palette):
            raise ValueError("Cannot color a non-empty graph with an empty palette")

        coloring = {v: palette[rng.randrange(len(palette))] for v in graph.vertices()}
        return cls(graph, palette, coloring)

    @classmethod
    def from_assignment(
        cls,
        graph: Graph,
        assignment: Sequence[int],
        palette: Optional[ColorPalette] = None,
    ) -> "SearchState":
        """Initial state from explicit color indices, one per vertex."""
        if palette is None:
            palette = ColorPalette.for_graph(graph)
        if len(assignment) != len(graph):
            raise ValueError(f"Assignment has {len(assignment)} entries, graph has {len(graph)} vertices")

        coloring = {}
        for v, color_index in enumerate(assignment):
            if not (0 <= color_index < len(palette)):
                raise ValueError(f"Color {color_index} for vertex {v} is outside the palette (size {len(palette)})")
            coloring[v] = palette[color_index]
        return cls(graph, palette, coloring)

    def color_of(self, vertex: int) -> Color:
        try:
            return self.coloring[vertex]
        except KeyError:
            raise SearchInvariantError(f"Vertex {vertex} not found in coloring") from None

    def usage(self, color_index: int) -> int:
        return self.used_colors.get(color_index, 0)

    def incident_conflicts(self, vertex: int) -> int:
        return count_node_conflicts(vertex, self.graph, self.coloring)

    def recolor_delta(self, vertex: int, color_index: int) -> int:
        """Change in total conflicts if `vertex` took `color_index`, without committing."""
        old_index = self.color_of(vertex).index
        if color_index == old_index:
            return 0

        delta = 0
        for neighbor in self.graph.neighbors(vertex):
            if neighbor == vertex:
                continue  # self-loop conflicts whatever the color
            neighbor_color = self.coloring.get(neighbor)
            if neighbor_color is None:
                continue
            if neighbor_color.index == old_index:
                delta -= 1
            elif neighbor_color.index == color_index:
                delta += 1
        return delta

    def recolor(self, vertex: int, color_index: int) -> int:
        """
        Commit a recolor, updating coloring, histogram and conflict count together.

        Returns:
            The change in total conflicts
        """
        old_color = self.color_of(vertex)
        new_color = self.palette[color_index]

        old_incident = self.incident_conflicts(vertex)
        self.coloring[vertex] = new_color
        new_incident = self.incident_conflicts(vertex)

        delta = new_incident - old_incident
        self.conflicts += delta
        self.used_colors[old_color.index] -= 1
        self.used_colors[new_color.index] = self.used_colors.get(new_color.index, 0) + 1

        self.moved_vertex = vertex
        self.applied_color = new_color
        return delta

    def cost(self) -> int:
        """Heuristic cost of the state, crediting the usage of the last applied color."""
        usage = self.usage(self.applied_color.index) if self.applied_color is not None else 0
        return heuristic_cost(self.conflicts, usage, self.conflict_weight)

    def vertex_cost(self, vertex: int) -> int:
        """Heuristic cost crediting the usage of the vertex's current color."""
        return heuristic_cost(self.conflicts, self.usage(self.color_of(vertex).index), self.conflict_weight)

    def num_colors_used(self) -> int:
        return sum(1 for count in self.used_colors.values() if count > 0)

    def color_indices(self) -> dict[int, int]:
        """Coloring as vertex -> color index."""
        return {v: color.index for v, color in self.coloring.items()}

    def check_consistency(self) -> int:
        """Recompute the conflict count from scratch and return it."""
        return compute_conflicts(self.graph, self.coloring)

    def copy(self) -> "SearchState":
        """Full copy; only the read-only graph is shared."""
        clone = SearchState(
            self.graph,
            self.palette.copy(),
            dict(self.coloring),
            conflicts=self.conflicts,
            used_colors=dict(self.used_colors),
        )
        clone.moved_vertex = self.moved_vertex
        clone.applied_color = self.applied_color
        clone.continue_iteration = self.continue_iteration
        return clone

    def __repr__(self) -> str:
        return (
            f"SearchState(vertices={len(self.graph)}, conflicts={self.conflicts}, "
            f"colors_used={self.num_colors_used()})"
        )
