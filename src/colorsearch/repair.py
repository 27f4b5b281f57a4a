"""
Greedy conflict repair.

Closing pass for a search that ended with conflicts. Each conflicted vertex
takes the first palette color (in index order) that leaves it conflict-free;
a vertex with no such color keeps the one it had. Passes repeat until one
changes nothing. A successful fix removes all of the vertex's incident
conflicts without creating new ones, so the total strictly decreases and the
loop ends.
"""

import logging

from .state import SearchState

logger = logging.getLogger(__name__)


def _repair_pass(state: SearchState) -> int:
    """Single pass over the vertices in index order. Returns recolored vertex count."""
    recolored = 0
    for v in state.graph.vertices():
        if state.incident_conflicts(v) == 0:
            continue

        original_index = state.color_of(v).index
        for color in state.palette:
            if color.index == original_index:
                continue
            if state.recolor_delta(v, color.index) + state.incident_conflicts(v) == 0:
                state.recolor(v, color.index)
                recolored += 1
                break
    return recolored


def greedy_repair(state: SearchState) -> int:
    """
    Remove residual conflicts vertex by vertex, in place.

    Does not guarantee a conflict-free result: a vertex whose neighbors cover
    the whole palette (or that has a self-loop) stays conflicted.

    Args:
        state: Search state to repair

    Returns:
        Number of recolor moves applied
    """
    initial_conflicts = state.conflicts
    total = 0
    while True:
        recolored = _repair_pass(state)
        total += recolored
        if recolored == 0:
            break

    logger.debug("Greedy repair: %d -> %d conflicts (%d recolors)", initial_conflicts, state.conflicts, total)
    return total
