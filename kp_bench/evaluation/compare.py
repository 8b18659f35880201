# kp_bench/evaluation/compare.py
import logging
from typing import Any, Dict, Optional, Type

import pandas as pd

from kp_bench.solvers.interface import SolverInterface
from kp_bench.utils.config_loader import cfg
from kp_bench.utils.instance import KnapsackInstance

logger = logging.getLogger(__name__)


def compare_solvers(
    instance: KnapsackInstance,
    solvers: Optional[Dict[str, Type[SolverInterface]]] = None,
    baseline: Optional[str] = None,
    solver_configs: Optional[Dict[str, Dict[str, Any]]] = None,
) -> pd.DataFrame:
    """
    Runs every solver on the same instance and collects one row per solver.

    Args:
        instance (KnapsackInstance): The instance to solve.
        solvers (dict): Display name -> solver class. Defaults to the configured algorithms.
        baseline (str): Name of the solver the others are measured against.
            Defaults to the configured baseline.
        solver_configs (dict): Optional per-solver config dicts, keyed by display name.
            Defaults to the configured store sizing for the space-efficient DP.

    Returns:
        pd.DataFrame: columns solver, value, solution, time_us, gap.
            gap is baseline value minus the solver's value (NaN without a baseline row).
    """
    if solvers is None:
        solvers = cfg.solvers.algorithms_to_test
    if baseline is None:
        baseline_class = cfg.solvers.baseline_algorithm
        baseline = next((name for name, cls in solvers.items() if cls is baseline_class), None)

    if solver_configs is None:
        solver_configs = {"Space-efficient DP": {
            "table_size_divisor": cfg.store.table_size_divisor,
            "max_probes": cfg.store.max_probes,
        }}
    rows = []

    for name, SolverClass in solvers.items():
        logger.info(f"--- Running Solver: {name} ---")
        try:
            solver = SolverClass(config=solver_configs.get(name, {}))
            result = solver.solve(instance)
        except Exception as e:
            logger.error(f"Solver '{name}' failed. Error: {e}", exc_info=True)
            continue

        logger.info(f"  -> {name}: value={result['value']}, time={result['time_us']} us")
        rows.append({
            "solver": name,
            "value": result["value"],
            "solution": result["solution"],
            "time_us": result["time_us"],
        })

    results_df = pd.DataFrame(rows, columns=["solver", "value", "solution", "time_us"])

    baseline_rows = results_df[results_df["solver"] == baseline]
    if baseline_rows.empty:
        logger.warning("Baseline solver result is missing; gap column left empty.")
        results_df["gap"] = float("nan")
    else:
        results_df["gap"] = baseline_rows["value"].iloc[0] - results_df["value"]

    return results_df
