"""
Search session handle.

A session owns everything one search needs: the seeded random generator, a
preserved copy of the initial state, and the working strategy iterator. Hosts
(command line, web front-ends) drive a search through these operations only.
"""

import random
from typing import Optional

from .beam_search import BeamSearchIterator
from .hill_climbing import HillClimbingIterator
from .iterator import ColoringIterator, StepResult
from .repair import greedy_repair
from .simulated_annealing import SimulatedAnnealingIterator
from .state import SearchState

ALGORITHM_CHOICES: tuple[str, ...] = ("hill_climbing", "simulated_annealing", "beam")

_ITERATORS: dict[str, type[ColoringIterator]] = {
    "hill_climbing": HillClimbingIterator,
    "simulated_annealing": SimulatedAnnealingIterator,
    "beam": BeamSearchIterator,
}


def validate_algorithm(algorithm: str) -> None:
    if algorithm not in _ITERATORS:
        raise ValueError(f"Unknown algorithm {algorithm!r}. Choose one of: {', '.join(ALGORITHM_CHOICES)}")


def create_iterator(
    algorithm: str,
    state: SearchState,
    iterations: int,
    rng: random.Random,
) -> ColoringIterator:
    """Build the strategy iterator for an algorithm name."""
    validate_algorithm(algorithm)
    return _ITERATORS[algorithm](state, iterations, rng)


class SearchSession:
    """Handle for a single step-wise or run-to-end search."""

    def __init__(
        self,
        initial_state: SearchState,
        algorithm: str,
        iterations: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        validate_algorithm(algorithm)
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self._initial_state = initial_state.copy()
        self.algorithm = algorithm
        self.iterations = iterations
        self._iterator = create_iterator(algorithm, initial_state.copy(), iterations, self.rng)

    @property
    def initial_state(self) -> SearchState:
        return self._initial_state

    @property
    def current_iteration(self) -> int:
        return self._iterator.current_iteration

    @property
    def finished(self) -> bool:
        return self._iterator.finished

    def step(self) -> StepResult:
        return self._iterator.step()

    def run_to_end(self) -> SearchState:
        return self._iterator.run_to_end()

    def get_state(self) -> SearchState:
        return self._iterator.state

    def get_coloring(self) -> dict[int, int]:
        return self._iterator.coloring()

    def run_greedy_repair(self) -> int:
        """Repair the current working state in place."""
        return greedy_repair(self._iterator.state)

    def reinitialize(self, algorithm: str, iterations: int) -> None:
        """Restart from the preserved initial state, keeping the graph and the generator."""
        validate_algorithm(algorithm)
        self.algorithm = algorithm
        self.iterations = iterations
        self._iterator = create_iterator(algorithm, self._initial_state.copy(), iterations, self.rng)


def initialize(
    state: SearchState,
    algorithm: str,
    iterations: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SearchSession:
    """
    Start a search session over `state` (the caller's state is not mutated).

    Pass `rng` to keep drawing from the generator that built `state`;
    otherwise a fresh generator is seeded with `seed`.
    """
    return SearchSession(state, algorithm, iterations, seed=seed, rng=rng)
