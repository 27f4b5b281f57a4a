import csv
import json

import pytest

import colorsearch.solver as solver_module
from colorsearch import ColoringResult, ColoringSolver, ExperimentRunner, Graph, SearchSession, SearchState


def test_rejects_bad_configuration():
    with pytest.raises(ValueError):
        ColoringSolver(algorithm="tabu")
    with pytest.raises(ValueError):
        ColoringSolver(iterations=-5)
    with pytest.raises(ValueError):
        ColoringSolver(num_runs=0)


@pytest.mark.parametrize("algorithm", ["hill_climbing", "simulated_annealing", "beam"])
def test_solve_collects_run_statistics(gnm, algorithm):
    solver = ColoringSolver(algorithm=algorithm, iterations=300, num_runs=3, base_seed=10)

    result = solver.solve(gnm)

    assert result.num_runs == 3
    assert len(result.all_colors) == 3
    assert len(result.all_conflicts) == 3
    assert result.best_conflicts == min(result.all_conflicts)
    assert result.best_colors <= max(result.all_colors)
    assert result.best_conflicts == 0
    assert solver.verify_solution(gnm, result)


def test_seeded_solves_are_reproducible(gnm):
    a = ColoringSolver(algorithm="simulated_annealing", iterations=200, num_runs=2, base_seed=3).solve(gnm)
    b = ColoringSolver(algorithm="simulated_annealing", iterations=200, num_runs=2, base_seed=3).solve(gnm)

    assert a.best_coloring == b.best_coloring
    assert a.all_colors == b.all_colors


def test_verify_detects_conflicts(cycle4):
    solver = ColoringSolver()
    result = solver.solve(cycle4)
    assert solver.verify_solution(cycle4, result)

    result.best_coloring = {0: 0, 1: 0, 2: 1, 3: 1}
    assert not solver.verify_solution(cycle4, result)

    result.best_coloring = {0: 0, 1: 1}
    assert not solver.verify_solution(cycle4, result)


def test_verbose_prints_progress(cycle4, capsys):
    ColoringSolver(num_runs=2, base_seed=0, verbose=True).solve(cycle4)
    out = capsys.readouterr().out
    assert "Run 1/2" in out
    assert "Final:" in out


def test_csv_row_matches_header(k5):
    result = ColoringSolver(base_seed=1).solve(k5)
    row = result.to_csv_row()
    header = ColoringResult.csv_header()

    assert len(row) == len(header)
    assert row[0] == "k5"
    assert row[3] == "hill_climbing"


def test_runner_over_directory(tmp_path, capsys):
    instances = tmp_path / "instances"
    instances.mkdir()
    (instances / "a_square.txt").write_text("4\n4\n0 1\n1 2\n2 3\n3 0\n")
    (instances / "b_triangle.txt").write_text("3\n3\n0 1\n1 2\n2 0\n")
    (instances / "c_broken.txt").write_text("3\n2\n0 1\n")

    runner = ExperimentRunner(ColoringSolver(iterations=100, base_seed=0), output_dir=tmp_path / "out")
    results = runner.run_directory(instances)

    assert [r.instance_name for r in results] == ["a_square", "b_triangle"]
    assert "ERROR" in capsys.readouterr().out

    csv_path = runner.save_results_csv("results.csv")
    with open(csv_path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ColoringResult.csv_header()
    assert len(rows) == 3

    json_path = runner.save_params_json(csv_path)
    params = json.loads(json_path.read_text())
    assert params["solver"] == "hill_climbing"
    assert params["num_instances"] == 2


def test_runner_tables(capsys):
    runner = ExperimentRunner(ColoringSolver(base_seed=0))
    runner.print_table()
    runner.print_summary()
    assert "No results" in capsys.readouterr().out

    runner.run_graph(Graph(3, [(0, 1), (1, 2)], name="path"))
    runner.print_table()
    runner.print_summary()
    out = capsys.readouterr().out
    assert "path" in out
    assert "Conflict-free: 1" in out


def test_each_run_uses_one_generator(cycle4, monkeypatch):
    state_rngs = []
    sessions = []
    build_random = SearchState.random.__func__

    def recording_random(cls, graph, rng, *args, **kwargs):
        state_rngs.append(rng)
        return build_random(cls, graph, rng, *args, **kwargs)

    class RecordingSession(SearchSession):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            sessions.append(self)

    monkeypatch.setattr(SearchState, "random", classmethod(recording_random))
    monkeypatch.setattr(solver_module, "SearchSession", RecordingSession)

    ColoringSolver(algorithm="simulated_annealing", iterations=20, num_runs=2, base_seed=5).solve(cycle4)

    assert len(state_rngs) == len(sessions) == 2
    for rng, session in zip(state_rngs, sessions):
        assert session.rng is rng
    assert state_rngs[0] is not state_rngs[1]


def test_csv_keeps_instance_names_with_commas(tmp_path):
    runner = ExperimentRunner(ColoringSolver(iterations=50, base_seed=0), output_dir=tmp_path)
    runner.run_graph(Graph(3, [(0, 1), (1, 2)], name="path,3"))

    csv_path = runner.save_results_csv("results.csv")
    with open(csv_path, newline="") as f:
        rows = list(csv.reader(f))

    assert len(rows[1]) == len(ColoringResult.csv_header())
    assert rows[1][0] == "path,3"
