"""
Simulated annealing.

Shares vertex selection and the heuristic cost with hill climbing and differs
in move acceptance:
- Temperature schedule T(t) = initial_temperature * cooling_rate^t, t from 1;
  the search stops once T is effectively zero
- The selected vertex gets a uniformly random color different from its own
- Improving or neutral moves (dE <= 0) are always accepted; worsening moves
  with probability exp(-dE / T)
- Rejected moves are reverted

Every `check_interval` iterations the conflict count is recomputed from
scratch and resynchronized if it has drifted from the tracked value.
"""

import logging
import math
import random

from .iterator import ColoringIterator
from .selection import select_next_node
from .state import SearchState

logger = logging.getLogger(__name__)

CONSISTENCY_CHECK_INTERVAL = 128
MIN_TEMPERATURE = 1e-12


class SimulatedAnnealingIterator(ColoringIterator):
    """Stochastic local search with Metropolis acceptance."""

    name = "simulated_annealing"

    def __init__(
        self,
        state: SearchState,
        iterations: int,
        rng: random.Random,
        initial_temperature: float = 100.0,
        cooling_rate: float = 0.95,
        check_interval: int = CONSISTENCY_CHECK_INTERVAL,
    ):
        """
        Initialize the annealing iterator.

        Args:
            state: Working search state (mutated in place)
            iterations: Iteration budget
            rng: Random number generator, the only source of randomness
            initial_temperature: Scale of the temperature schedule
            cooling_rate: Geometric cooling factor per iteration (0 < rate < 1)
            check_interval: Iterations between full conflict recomputes
        """
        super().__init__(state, iterations, rng)
        self.initial_temperature = initial_temperature
        self.cooling_rate = cooling_rate
        self.check_interval = check_interval

    def temperature(self, t: int) -> float:
        return self.initial_temperature * self.cooling_rate**t

    def _advance(self) -> bool:
        state = self.state
        t = self._iteration + 1
        temperature = self.temperature(t)
        if temperature <= MIN_TEMPERATURE:
            logger.debug("Temperature ~ 0 at iteration %d, stopping", t)
            return False

        vertex = select_next_node(state)
        if vertex is None:
            return False

        old_index = state.color_of(vertex).index
        # Uniform over the other colors: draw from n-1 slots, skip the current one
        new_index = self.rng.randint(0, len(state.palette) - 2)
        if new_index >= old_index:
            new_index += 1

        old_cost = state.vertex_cost(vertex)
        state.recolor(vertex, new_index)
        new_cost = state.vertex_cost(vertex)
        delta_e = new_cost - old_cost

        if delta_e > 0 and self.rng.random() >= math.exp(-delta_e / temperature):
            state.recolor(vertex, old_index)
            # Rejected: nothing moved this step
            state.moved_vertex = None
            state.applied_color = None

        if t % self.check_interval == 0:
            self._resync(t)
        return True

    def _resync(self, t: int) -> None:
        state = self.state
        actual = state.check_consistency()
        if actual != state.conflicts:
            logger.warning(
                "Conflict count drift at iteration %d: tracked %d, actual %d; resynchronizing",
                t,
                state.conflicts,
                actual,
            )
            state.conflicts = actual
