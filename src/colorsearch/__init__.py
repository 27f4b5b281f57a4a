"""
Local-search graph coloring.

This package searches for low-conflict vertex colorings with interchangeable
strategies (hill climbing, simulated annealing, beam search) that can be run
to completion or stepped one move at a time.
"""

from .beam_search import BeamSearchIterator, k_least
from .graph import Graph
from .hill_climbing import HillClimbingIterator
from .iterator import ColoringIterator, StepResult
from .palette import Color, ColorPalette
from .repair import greedy_repair
from .runner import ExperimentRunner
from .selection import select_next_node
from .session import ALGORITHM_CHOICES, SearchSession, create_iterator, initialize
from .simulated_annealing import SimulatedAnnealingIterator
from .solver import ColoringResult, ColoringSolver
from .state import (
    SearchInvariantError,
    SearchState,
    compute_conflicts,
    count_node_conflicts,
    heuristic_cost,
)

__all__ = [
    # Graph and palette
    "Graph",
    "Color",
    "ColorPalette",
    # Search state
    "SearchState",
    "SearchInvariantError",
    "compute_conflicts",
    "count_node_conflicts",
    "heuristic_cost",
    "select_next_node",
    "greedy_repair",
    # Strategies
    "ColoringIterator",
    "StepResult",
    "HillClimbingIterator",
    "SimulatedAnnealingIterator",
    "BeamSearchIterator",
    "k_least",
    # Sessions
    "ALGORITHM_CHOICES",
    "SearchSession",
    "create_iterator",
    "initialize",
    # Solver and experiments
    "ColoringSolver",
    "ColoringResult",
    "ExperimentRunner",
]
