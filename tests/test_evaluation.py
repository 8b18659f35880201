from __future__ import annotations

import logging
import math
import os
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from kp_bench.evaluation.compare import compare_solvers
from kp_bench.evaluation.reporting import save_results_to_csv, write_collision_counts
from kp_bench.evaluation.sweep import run_collision_sweep, sweep_table_sizes, table_sizes
from kp_bench.solvers.classic.dp_solver import DPSolver2D
from kp_bench.solvers.classic.greedy_solvers import GreedyHeapSolver
from kp_bench.solvers.interface import SolverInterface
from kp_bench.utils.instance import KnapsackInstance, generate_knapsack_instance
from kp_bench.utils.logger import log_path_for, setup_logger

SCENARIO = KnapsackInstance(values=(60, 100, 120), weights=(10, 20, 30), capacity=50)


class BrokenSolver(SolverInterface):
    def solve(self, instance):
        raise RuntimeError("boom")


def test_compare_runs_every_configured_solver() -> None:
    df = compare_solvers(SCENARIO)
    assert list(df["solver"]) == [
        "Traditional DP",
        "Space-efficient DP",
        "Greedy (built-in sort)",
        "Greedy (max heap)",
    ]
    values = dict(zip(df["solver"], df["value"]))
    assert values["Traditional DP"] == values["Space-efficient DP"] == 220
    assert values["Greedy (max heap)"] == 160
    gaps = dict(zip(df["solver"], df["gap"]))
    assert gaps["Traditional DP"] == 0
    assert gaps["Greedy (built-in sort)"] == 60


def test_compare_skips_failing_solver(caplog: pytest.LogCaptureFixture) -> None:
    solvers = {"Traditional DP": DPSolver2D, "Broken": BrokenSolver}
    with caplog.at_level(logging.ERROR):
        df = compare_solvers(SCENARIO, solvers=solvers, baseline="Traditional DP")
    assert list(df["solver"]) == ["Traditional DP"]
    assert "Broken" in caplog.text


def test_compare_without_baseline_leaves_gap_empty() -> None:
    df = compare_solvers(SCENARIO, solvers={"Greedy (max heap)": GreedyHeapSolver}, baseline="Traditional DP")
    assert math.isnan(df["gap"].iloc[0])


def test_save_results_to_csv(tmp_path: Path) -> None:
    df = compare_solvers(SCENARIO, solvers={"Traditional DP": DPSolver2D}, baseline="Traditional DP")
    target = tmp_path / "out" / "results.csv"
    save_results_to_csv(df, str(target))
    header = target.read_text().splitlines()[0]
    assert header == "solver,value,solution,time_us,gap"


@pytest.mark.parametrize(
    "n,capacity,granularity,expected",
    [
        (10, 100, 1000, list(range(1, 1000))),
        (50, 1200, 1000, list(range(60, 60000, 60))),
        (0, 10, 5, []),
        (2, 5, 3, [3, 6, 9]),
    ],
)
def test_table_sizes(n: int, capacity: int, granularity: int, expected: list) -> None:
    assert table_sizes(n, capacity, granularity) == expected


def test_table_sizes_rejects_bad_granularity() -> None:
    with pytest.raises(ValueError):
        table_sizes(10, 10, 0)


def test_sweep_is_reproducible_and_always_optimal() -> None:
    instance = generate_knapsack_instance(15, max_weight=20, max_value=40, seed=9)
    optimum = DPSolver2D().solve(instance)["value"]
    sizes = [1, 4, 16, 64, 256]

    first = sweep_table_sizes(instance, sizes=sizes, show_progress=False)
    second = sweep_table_sizes(instance, sizes=sizes, show_progress=False)

    assert list(first["table_size"]) == sizes
    assert (first["value"] == optimum).all()
    assert first.equals(second)


def test_sweep_uses_granularity() -> None:
    instance = KnapsackInstance(values=(3, 4, 5), weights=(2, 3, 4), capacity=6)
    df = sweep_table_sizes(instance, granularity=6, show_progress=False)
    assert list(df["table_size"]) == [3, 6, 9, 12, 15]


def test_write_collision_counts(tmp_path: Path) -> None:
    target = tmp_path / "hash_table_sizes_test.txt"
    write_collision_counts([4, 0, 12], str(target))
    assert target.read_text() == "4\n0\n12\n"


def test_run_collision_sweep_writes_outputs(tmp_path: Path) -> None:
    config = SimpleNamespace(
        paths=SimpleNamespace(results=str(tmp_path / "results"), logs=str(tmp_path / "logs")),
        store=SimpleNamespace(max_probes=16),
        sweep=SimpleNamespace(granularity=10, output_filename="collisions.txt"),
    )
    instance = KnapsackInstance(values=(60, 100, 120), weights=(10, 20, 30), capacity=50)

    df = run_collision_sweep(instance, config)

    outputs = list((tmp_path / "results" / "sweeps").glob("*/collisions.txt"))
    assert len(outputs) == 1
    lines = outputs[0].read_text().splitlines()
    assert [int(line) for line in lines] == list(df["collisions"])
    assert len(lines) == len(table_sizes(3, 50, 10))
    summary = outputs[0].parent / "sweep_summary.csv"
    header = summary.read_text().splitlines()[0].split(",")
    assert header == ["table_size", "collisions", "insertions", "overflows", "value"]


def test_setup_logger_configures_root_once(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers.clear()
    try:
        log_file = setup_logger("unit", str(tmp_path))
        assert Path(log_file).exists()
        assert Path(log_file).name.startswith("unit_")
        assert len(root.handlers) == 2
        assert setup_logger("unit", str(tmp_path)) == ""
        assert len(root.handlers) == 2
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_debug_reaches_the_file_but_not_the_console(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers.clear()
    try:
        log_file = setup_logger("unit", str(tmp_path), console_level=logging.WARNING)
        file_handler, console_handler = root.handlers
        assert file_handler.level == logging.DEBUG
        assert console_handler.level == logging.WARNING

        logging.getLogger("kp_bench.test").debug("collision detail")
        file_handler.flush()
        assert "collision detail" in Path(log_file).read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_log_path_for_uses_run_name_and_timestamp() -> None:
    path = log_path_for("sweep_session", "logs", now=datetime(2024, 1, 2, 3, 4, 5))
    assert path == os.path.join("logs", "sweep_session_20240102_030405.log")
