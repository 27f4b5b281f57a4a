"""
Experiment runner for graph coloring instances.

Runs a ColoringSolver over instance files or in-memory graphs and collects
results for tables, CSV and JSON output.
"""

import csv
import json
import sys
from datetime import datetime
from pathlib import Path

from .graph import Graph
from .solver import ColoringResult, ColoringSolver


class ExperimentRunner:
    """Runs experiments on graph instances and collects results."""

    def __init__(
        self,
        solver: ColoringSolver,
        output_dir: Path | None = None,
    ):
        """
        Initialize the experiment runner.

        Args:
            solver: The coloring solver to use
            output_dir: Directory for output files (default: current directory)
        """
        self.solver = solver
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.results: list[ColoringResult] = []

    def run_graph(self, graph: Graph) -> ColoringResult:
        """Run solver on an in-memory graph."""
        result = self.solver.solve(graph)
        self.results.append(result)
        return result

    def run_instance(self, filepath: Path) -> ColoringResult:
        """Run solver on a single instance file."""
        graph = Graph.from_file(filepath)
        return self.run_graph(graph)

    def run_directory(
        self,
        directory: Path,
        pattern: str = "*.txt",
        max_instances: int | None = None,
        from_end: bool = False,
    ) -> list[ColoringResult]:
        """
        Run solver on all instances in a directory.

        Args:
            directory: Directory containing instance files
            pattern: Glob pattern for instance files
            max_instances: Maximum number of instances to run (for testing)
            from_end: If True, select instances from the end of the sorted list

        Returns:
            List of results
        """
        directory = Path(directory)
        files = sorted(directory.glob(pattern))

        if max_instances:
            if from_end:
                files = files[-max_instances:]
            else:
                files = files[:max_instances]

        results = []
        for i, filepath in enumerate(files):
            print(f"[{i + 1}/{len(files)}] Processing {filepath.name}...", end=" ")
            sys.stdout.flush()

            try:
                result = self.run_instance(filepath)
            except ValueError as e:
                print(f"ERROR: {e}")
                continue

            self._print_result_line(result)
            results.append(result)

        return results

    def _print_result_line(self, result: ColoringResult) -> None:
        print(
            f"best={result.best_colors} (conflicts={result.best_conflicts}), avg={result.avg_colors:.2f}, "
            f"std={result.std_colors:.2f} in {result.total_runtime_seconds:.2f}s"
        )

    def save_results_csv(self, filename: str | None = None) -> Path:
        """
        Save all results to a CSV file.

        Args:
            filename: Output filename (default: results_SOLVER_TIMESTAMP.csv)

        Returns:
            Path to the saved file
        """
        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"results_{self.solver.algorithm}_{timestamp}.csv"

        filepath = self.output_dir / filename
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(ColoringResult.csv_header())
            for result in self.results:
                writer.writerow(result.to_csv_row())

        print(f"\nResults saved to: {filepath}")
        return filepath

    def save_params_json(self, csv_filepath: Path) -> Path:
        """
        Save solver parameters to a JSON file alongside the CSV.

        Args:
            csv_filepath: Path to the CSV file (JSON will be saved with same name)

        Returns:
            Path to the saved JSON file
        """
        json_filepath = Path(csv_filepath).with_suffix(".json")

        params = self.solver.get_params()
        params["timestamp"] = datetime.now().isoformat()
        params["num_instances"] = len(self.results)

        with open(json_filepath, "w") as f:
            json.dump(params, f, indent=2)

        print(f"Parameters saved to: {json_filepath}")
        return json_filepath

    def print_summary(self):
        """Print a summary of results."""
        if not self.results:
            print("No results to summarize.")
            return

        print(f"\n{'=' * 60}")
        print("SUMMARY")
        print(f"{'=' * 60}")

        total = len(self.results)
        conflict_free = sum(1 for r in self.results if r.best_conflicts == 0)
        avg_best = sum(r.best_colors for r in self.results) / total
        avg_avg = sum(r.avg_colors for r in self.results) / total
        avg_time = sum(r.total_runtime_seconds for r in self.results) / total

        print(f"Algorithm: {self.solver.algorithm}")
        print(f"Total instances: {total}")
        print(f"Runs per instance: {self.results[0].num_runs}")
        print(f"Conflict-free: {conflict_free} ({100 * conflict_free / total:.1f}%)")
        print(f"Avg best colors: {avg_best:.2f}")
        print(f"Avg avg colors: {avg_avg:.2f}")
        print(f"Avg time per instance: {avg_time:.2f}s")

    def print_table(self):
        """Print results as a formatted table."""
        if not self.results:
            print("No results to display.")
            return

        print(
            f"\n{'Instance':<25} {'V':>5} {'E':>6} {'Algorithm':<20} "
            f"{'Runs':>5} {'Best':>5} {'Conf':>5} {'Avg':>7} {'Std':>6} {'Time':>8}"
        )
        print("-" * 100)

        for r in self.results:
            print(
                f"{r.instance_name:<25} {r.num_vertices:>5} {r.num_edges:>6} {r.algorithm:<20} "
                f"{r.num_runs:>5} {r.best_colors:>5} {r.best_conflicts:>5} "
                f"{r.avg_colors:>7.2f} {r.std_colors:>6.2f} {r.total_runtime_seconds:>7.2f}s"
            )
