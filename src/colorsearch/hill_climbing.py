"""
Best-improvement hill climbing.

Each iteration:
1. Select the most conflicted vertex; stop if there is none
2. Evaluate every other palette color for it with the incremental conflict
   delta, scoring H = conflicts * weight - usage(color after the move)
3. Commit the color with the strictly lowest H (first in index order on ties)
   if it beats the vertex's current H; otherwise a local optimum is reached
"""

from typing import Optional

from .iterator import ColoringIterator
from .selection import select_next_node
from .state import heuristic_cost


class HillClimbingIterator(ColoringIterator):
    """Deterministic best-improvement local search."""

    name = "hill_climbing"

    def _advance(self) -> bool:
        state = self.state
        vertex = select_next_node(state)
        if vertex is None:
            return False  # conflict-free

        old_index = state.color_of(vertex).index
        best_cost = state.vertex_cost(vertex)
        best_index: Optional[int] = None

        for color in state.palette:
            if color.index == old_index:
                continue
            new_conflicts = state.conflicts + state.recolor_delta(vertex, color.index)
            new_cost = heuristic_cost(new_conflicts, state.usage(color.index) + 1, state.conflict_weight)
            if new_cost < best_cost:
                best_cost = new_cost
                best_index = color.index

        if best_index is None:
            return False  # stuck

        state.recolor(vertex, best_index)
        return True
