"""
Beam search.

Keeps a beam of up to k independent search states, k = (palette_size - 1) // 2
(at least 1). Each iteration, for every state in the beam:
1. Select its most conflicted vertex
2. Shuffle the order of the other palette colors (no positional bias on ties)
3. Score every recolor incrementally and keep the k best candidates
4. Materialize each kept candidate as a full copy of the parent with the
   recolor applied

All children are pooled and the k with the lowest heuristic cost form the next
beam (quickselect, expected linear time, then the k survivors are ordered so
the first is the best). A conflict-free survivor ends the search.

Cost: each iteration makes at most k * k full state copies (coloring,
histogram and palette), which dominates the running time and memory; choose
the beam width with that in mind.
"""

import logging
import random
from typing import Callable, Iterable, Optional, TypeVar

from .iterator import ColoringIterator
from .selection import select_next_node
from .state import SearchInvariantError, SearchState, heuristic_cost

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _partition(keyed: list, left: int, right: int) -> int:
    """Lomuto partition around the last element's key."""
    pivot_key = keyed[right][0]
    i = left
    for j in range(left, right):
        if keyed[j][0] <= pivot_key:
            keyed[i], keyed[j] = keyed[j], keyed[i]
            i += 1
    keyed[i], keyed[right] = keyed[right], keyed[i]
    return i


def k_least(items: Iterable[T], k: int, key: Callable[[T], int]) -> list[T]:
    """
    Select the k items with the smallest keys (quickselect).

    Args:
        items: Candidates
        k: Number of items to keep
        key: Ranking key, lower is better

    Returns:
        New list of the k smallest items, in no particular order
    """
    keyed = [(key(item), item) for item in items]
    n = len(keyed)
    if k <= 0:
        return []
    if k >= n:
        return [item for _, item in keyed]

    left, right = 0, n - 1
    target = k
    while left <= right:
        pivot = _partition(keyed, left, right)
        left_count = pivot - left + 1
        if left_count == target:
            break
        if left_count > target:
            right = pivot - 1
        else:
            target -= left_count
            left = pivot + 1

    return [item for _, item in keyed[:k]]


class BeamSearchIterator(ColoringIterator):
    """Beam search over full state copies."""

    name = "beam"

    def __init__(
        self,
        state: SearchState,
        iterations: int,
        rng: random.Random,
        beam_width: Optional[int] = None,
    ):
        if beam_width is None:
            beam_width = max(1, (len(state.palette) - 1) // 2)
        if beam_width < 1:
            raise ValueError(f"Beam width must be at least 1, got {beam_width}")
        self.beam_width = beam_width
        super().__init__(state, iterations, rng)
        self.beam = [state]

    @property
    def beam(self) -> list[SearchState]:
        """States of the beam, best first; the working state is the first one."""
        return self._beam

    @beam.setter
    def beam(self, states: list[SearchState]) -> None:
        if not states:
            raise SearchInvariantError("Beam is empty")
        self._beam = states
        self._state = states[0]

    def _advance(self) -> bool:
        if self.state.conflicts == 0:
            return False

        children: list[SearchState] = []
        for parent in self.beam:
            vertex = select_next_node(parent)
            if vertex is None:
                continue
            children.extend(self._expand(parent, vertex))

        if not children:
            return False

        survivors = k_least(children, self.beam_width, key=SearchState.cost)
        survivors.sort(key=SearchState.cost)
        self.beam = survivors

        if survivors[0].conflicts == 0:
            logger.debug("Found conflict-free coloring in beam at iteration %d", self._iteration + 1)
        return True

    def _expand(self, parent: SearchState, vertex: int) -> list[SearchState]:
        old_index = parent.color_of(vertex).index
        order = [color.index for color in parent.palette if color.index != old_index]
        self.rng.shuffle(order)

        candidates = []
        for color_index in order:
            new_conflicts = parent.conflicts + parent.recolor_delta(vertex, color_index)
            cost = heuristic_cost(new_conflicts, parent.usage(color_index) + 1, parent.conflict_weight)
            candidates.append((cost, color_index))

        children = []
        for _, color_index in k_least(candidates, self.beam_width, key=lambda candidate: candidate[0]):
            child = parent.copy()
            child.recolor(vertex, color_index)
            children.append(child)
        return children
