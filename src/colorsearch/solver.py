"""
Multi-run coloring solver.

Runs one search strategy several times on a graph, each run from a fresh
random initial coloring, and aggregates statistics:
1. Seed each run with base_seed + run index (or leave it unseeded)
2. Build a random initial state over a max_degree + 1 palette
3. Run the strategy to the end (greedy repair included)
4. Keep the best run: fewest conflicts, then fewest distinct colors
"""

import random
import statistics
import time
from dataclasses import dataclass, field
from typing import Optional

from .graph import Graph
from .session import SearchSession, validate_algorithm
from .state import SearchState


@dataclass
class ColoringResult:
    """Result of a coloring solver on a graph."""

    instance_name: str
    num_vertices: int
    num_edges: int
    algorithm: str
    iterations: int
    num_runs: int
    best_colors: int
    best_conflicts: int
    avg_colors: float
    std_colors: float
    total_runtime_seconds: float
    all_colors: list[int] = field(default_factory=list)
    all_conflicts: list[int] = field(default_factory=list)
    best_coloring: Optional[dict[int, int]] = None

    def to_csv_row(self) -> list[str]:
        """Format as CSV row fields."""
        return [
            self.instance_name,
            str(self.num_vertices),
            str(self.num_edges),
            self.algorithm,
            str(self.iterations),
            str(self.num_runs),
            str(self.best_colors),
            str(self.best_conflicts),
            f"{self.avg_colors:.2f}",
            f"{self.std_colors:.2f}",
            f"{self.total_runtime_seconds:.3f}",
        ]

    @staticmethod
    def csv_header() -> list[str]:
        """Return CSV header fields."""
        return [
            "instance",
            "vertices",
            "edges",
            "algorithm",
            "iterations",
            "runs",
            "best",
            "conflicts",
            "avg",
            "std",
            "total_time_s",
        ]


class ColoringSolver:
    """
    Local-search coloring solver.

    Wraps one of the step-wise strategies (hill climbing, simulated annealing,
    beam search) and evaluates it over independent runs.
    """

    def __init__(
        self,
        algorithm: str = "hill_climbing",
        iterations: int = 1000,
        num_runs: int = 1,
        base_seed: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Initialize the solver.

        Args:
            algorithm: Strategy name (hill_climbing, simulated_annealing, beam)
            iterations: Iteration budget per run
            num_runs: Number of independent runs for statistical evaluation
            base_seed: Base random seed for reproducibility
            verbose: Whether to print progress

        Raises:
            ValueError: If the algorithm is unknown or a budget is negative
        """
        validate_algorithm(algorithm)
        if iterations < 0:
            raise ValueError(f"Iteration budget must be non-negative, got {iterations}")
        if num_runs < 1:
            raise ValueError(f"Number of runs must be at least 1, got {num_runs}")
        self.algorithm = algorithm
        self.iterations = iterations
        self.num_runs = num_runs
        self.base_seed = base_seed
        self.verbose = verbose

    def solve(self, graph: Graph) -> ColoringResult:
        """
        Color a graph.

        Args:
            graph: The graph to color

        Returns:
            ColoringResult with statistics across all runs
        """
        start_time = time.time()

        all_colors: list[int] = []
        all_conflicts: list[int] = []
        best_coloring: Optional[dict[int, int]] = None
        best_key: Optional[tuple[int, int]] = None

        for run_idx in range(self.num_runs):
            # Set seed for this run
            if self.base_seed is not None:
                seed = self.base_seed + run_idx
            else:
                seed = None

            state = self._single_run(graph, seed)
            num_colors = state.num_colors_used()
            all_colors.append(num_colors)
            all_conflicts.append(state.conflicts)

            key = (state.conflicts, num_colors)
            if best_key is None or key < best_key:
                best_key = key
                best_coloring = state.color_indices()

                if self.verbose:
                    print(
                        f"  Run {run_idx + 1}/{self.num_runs}: new best = {num_colors} colors, "
                        f"{state.conflicts} conflicts"
                    )

        total_runtime = time.time() - start_time

        best_conflicts, best_colors = best_key if best_key is not None else (0, 0)
        avg_colors = statistics.mean(all_colors)
        std_colors = statistics.stdev(all_colors) if len(all_colors) > 1 else 0.0

        if self.verbose:
            print(
                f"  Final: best={best_colors} (conflicts={best_conflicts}), "
                f"avg={avg_colors:.2f}, std={std_colors:.2f}"
            )

        return ColoringResult(
            instance_name=graph.name,
            num_vertices=graph.num_vertices,
            num_edges=graph.num_edges,
            algorithm=self.algorithm,
            iterations=self.iterations,
            num_runs=self.num_runs,
            best_colors=best_colors,
            best_conflicts=best_conflicts,
            avg_colors=avg_colors,
            std_colors=std_colors,
            total_runtime_seconds=total_runtime,
            all_colors=all_colors,
            all_conflicts=all_conflicts,
            best_coloring=best_coloring,
        )

    def _single_run(self, graph: Graph, seed: Optional[int]) -> SearchState:
        """Execute a single run."""
        rng = random.Random(seed)
        initial_state = SearchState.random(graph, rng)

        if self.verbose:
            print(f"    Initial coloring: {initial_state.conflicts} conflicts")

        session = SearchSession(initial_state, self.algorithm, self.iterations, seed=seed, rng=rng)
        state = session.run_to_end()

        if self.verbose:
            print(
                f"    Finished after {session.current_iteration} iterations: "
                f"{state.conflicts} conflicts, {state.num_colors_used()} colors"
            )
        return state

    def get_params(self) -> dict:
        """Get solver parameters as a dictionary."""
        return {
            "solver": self.algorithm,
            "iterations": self.iterations,
            "num_runs": self.num_runs,
            "base_seed": self.base_seed,
        }

    def verify_solution(self, graph: Graph, result: ColoringResult) -> bool:
        """
        Verify that the best coloring is conflict-free.

        Args:
            graph: The colored graph
            result: The result to verify

        Returns:
            True if every vertex is colored and no edge is conflicting
        """
        if result.best_coloring is None:
            return False
        if set(result.best_coloring) != set(graph.vertices()):
            return False

        for u, v in graph.edges:
            if result.best_coloring[u] == result.best_coloring[v]:
                return False
        return True
