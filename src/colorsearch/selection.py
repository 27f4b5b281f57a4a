"""
Vertex selection.

Picks the vertex to perturb next:
1. Skip vertices with no incident conflicts
2. Prefer the vertex with the most incident conflicts
3. Break ties by the lowest usage count of the vertex's current color
4. Remaining ties keep the first vertex in index order
"""

from typing import Optional

from .state import SearchState


def select_next_node(state: SearchState) -> Optional[int]:
    """
    Select the most conflicted vertex.

    Args:
        state: Current search state

    Returns:
        Vertex index, or None if the coloring is conflict-free
    """
    best_vertex: Optional[int] = None
    best_incident = 0
    best_usage = 0

    for v in state.graph.vertices():
        incident = state.incident_conflicts(v)
        if incident == 0:
            continue

        usage = state.usage(state.coloring[v].index)
        if best_vertex is None or incident > best_incident or (incident == best_incident and usage < best_usage):
            best_vertex = v
            best_incident = incident
            best_usage = usage

    return best_vertex
