"""
Stepping protocol shared by all search strategies.

A strategy is a `ColoringIterator` subclass implementing `_advance()`, which
performs one search iteration and reports whether the search should go on.
`step()` wraps it with the iteration budget, degenerate-input handling and the
closing phase (greedy repair when conflicts remain), so calling `step()` until
it stops is exactly what `run_to_end()` does.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .palette import Color
from .repair import greedy_repair
from .state import SearchState

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """
    Observable outcome of a single step.

    `moved_vertex` and `applied_color` are None when the step left the coloring
    unchanged (a rejected annealing move) or closed the search.
    """

    moved_vertex: Optional[int]
    applied_color: Optional[Color]
    conflicts: int
    continue_iteration: bool


class ColoringIterator(ABC):
    """Base class for step-wise coloring strategies."""

    name = "base"

    def __init__(self, state: SearchState, iterations: int, rng: random.Random):
        if iterations < 0:
            raise ValueError(f"Iteration budget must be non-negative, got {iterations}")
        self.iterations = iterations
        self.rng = rng
        self._iteration = 0
        self._finished = False
        self._state = state
        self._state.continue_iteration = True
        logger.debug("%s: initial conflicts %d", self.name, state.conflicts)

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def current_iteration(self) -> int:
        return self._iteration

    @property
    def finished(self) -> bool:
        return self._finished

    def coloring(self) -> dict[int, int]:
        return self.state.color_indices()

    def step(self) -> StepResult:
        """Apply one search iteration, or the closing phase once the search is over."""
        if not self._finished:
            if self._is_degenerate() or self._iteration >= self.iterations or not self._advance():
                self._finish()
            else:
                self._iteration += 1
        return self._result()

    def run_to_end(self) -> SearchState:
        while self.step().continue_iteration:
            pass
        return self.state

    @abstractmethod
    def _advance(self) -> bool:
        """
        Perform one iteration on the working state.

        Returns:
            True if a move was made and the search continues,
            False if the strategy has terminated
        """

    def _is_degenerate(self) -> bool:
        state = self.state
        return len(state.graph) == 0 or len(state.palette) <= 1

    def _finish(self) -> None:
        state = self.state
        if state.conflicts > 0 and not self._is_degenerate():
            logger.debug("%s: performing greedy conflict removal (%d conflicts)", self.name, state.conflicts)
            greedy_repair(state)
            state.moved_vertex = None
            state.applied_color = None
        state.continue_iteration = False
        self._finished = True
        logger.debug("%s: final conflicts %d after %d iterations", self.name, state.conflicts, self._iteration)

    def _result(self) -> StepResult:
        state = self.state
        return StepResult(
            moved_vertex=state.moved_vertex,
            applied_color=state.applied_color,
            conflicts=state.conflicts,
            continue_iteration=state.continue_iteration,
        )
