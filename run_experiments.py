#!/usr/bin/env python3
"""
Main script to run graph coloring experiments.

Usage:
    # Run hill climbing on a single instance
    python run_experiments.py --instance instances/random/gnm_n50m200.txt

    # Run on every instance in a directory (first 5 only)
    python run_experiments.py --directory instances/random --max-instances 5

    # Color a random G(n, m) graph with simulated annealing, 10 seeded runs
    python run_experiments.py --random 50 200 --solver simulated_annealing --runs 10 --seed 42

    # Compare all strategies on the same graph
    python run_experiments.py --random 30 80 --solver all --iterations 1000 --seed 42
"""

import argparse
import logging
from pathlib import Path

import networkx as nx

from colorsearch import ALGORITHM_CHOICES, ColoringResult, ColoringSolver, ExperimentRunner, Graph


def main():
    parser = argparse.ArgumentParser(description="Run local-search graph coloring on instances")

    # Instance selection
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--instance", type=Path, help="Path to a single instance file")
    group.add_argument("--directory", type=Path, help="Directory of instance files to run")
    group.add_argument(
        "--random",
        type=int,
        nargs=2,
        metavar=("VERTICES", "EDGES"),
        help="Color a random G(n, m) graph instead of an instance file",
    )

    # Solver selection
    parser.add_argument(
        "--solver",
        type=str,
        default="hill_climbing",
        choices=[*ALGORITHM_CHOICES, "all"],
        help="Search strategy to use, or 'all' to compare every strategy (default: hill_climbing)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=1000,
        help="Iteration budget per run (default: 1000)",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=1,
        help="Number of independent runs per instance (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base random seed for reproducibility (default: None = random)",
    )

    # Common parameters
    parser.add_argument("--verbose", action="store_true", help="Print detailed solver output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for the search engine (default: WARNING)",
    )

    # Experiment parameters
    parser.add_argument("--pattern", type=str, default="*.txt", help="Glob pattern for --directory")
    parser.add_argument("--max-instances", type=int, help="Maximum instances to run (for testing)")
    parser.add_argument(
        "--from-end",
        action="store_true",
        help="Select instances from end of sorted list",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("results"),
        help="Directory for output files",
    )
    parser.add_argument("--output-file", type=str, help="Output CSV filename (default: auto-generated)")

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    algorithms = list(ALGORITHM_CHOICES) if args.solver == "all" else [args.solver]

    graph = None
    if args.instance:
        graph = Graph.from_file(args.instance)
    elif args.random:
        num_vertices, num_edges = args.random
        g = nx.gnm_random_graph(num_vertices, num_edges, seed=args.seed)
        graph = Graph.from_networkx(g, name=f"gnm_n{num_vertices}m{num_edges}")

    comparison: list[ColoringResult] = []
    for algorithm in algorithms:
        solver = ColoringSolver(
            algorithm=algorithm,
            iterations=args.iterations,
            num_runs=args.runs,
            base_seed=args.seed,
            verbose=args.verbose,
        )
        runner = ExperimentRunner(solver, output_dir=args.output_dir)

        print(f"\n{'=' * 60}")
        print(f"Algorithm: {algorithm}")
        print(f"{'=' * 60}")

        if graph is not None:
            print(f"Running on graph: {graph}")
            print(f"  Max degree: {graph.max_degree()} (palette size {graph.max_degree() + 1})")
            result = runner.run_graph(graph)

            print(f"\nResult ({result.num_runs} runs):")
            print(f"  Best colors: {result.best_colors}")
            print(f"  Best conflicts: {result.best_conflicts}")
            print(f"  Avg colors: {result.avg_colors:.2f}")
            print(f"  Std colors: {result.std_colors:.2f}")
            print(f"  All runs: {result.all_colors}")
            if solver.verify_solution(graph, result):
                print("  Best solution verified: VALID")
            else:
                print("  Best solution verified: CONFLICTS REMAIN")
            print(f"  Total runtime: {result.total_runtime_seconds:.3f}s")
            comparison.append(result)
        else:
            runner.run_directory(
                args.directory,
                pattern=args.pattern,
                max_instances=args.max_instances,
                from_end=args.from_end,
            )
            runner.print_table()
            runner.print_summary()

        output_file = args.output_file
        if output_file and len(algorithms) > 1:
            output_file = f"{Path(output_file).stem}_{algorithm}{Path(output_file).suffix or '.csv'}"
        csv_path = runner.save_results_csv(output_file)
        runner.save_params_json(csv_path)

    if len(comparison) > 1:
        print(f"\n{'=' * 60}")
        print("COMPARISON SUMMARY")
        print(f"{'=' * 60}")
        print(f"{'Algorithm':<25}{'Colors Used':>12}{'Conflicts':>12}")
        print("-" * 60)
        for r in comparison:
            print(f"{r.algorithm:<25}{r.best_colors:>12}{r.best_conflicts:>12}")

        best = min(comparison, key=lambda r: (r.best_conflicts, r.best_colors))
        print(f"Best result: {best.best_colors} colors ({best.algorithm})")


if __name__ == "__main__":
    main()
