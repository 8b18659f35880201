# kp_bench/evaluation/sweep.py
# -*- coding: utf-8 -*-

"""
Table-size sweep for the space-efficient DP.

For one instance the memoised solve is repeated with a range of store sizes
and the collision count of every run is recorded. The output is a plain list
of collision counts, one per line, in sweep order.
"""

import os
import logging
from types import SimpleNamespace
from typing import Dict, List, Optional, Sequence

import pandas as pd
from tqdm import tqdm

from kp_bench.evaluation.reporting import save_results_to_csv, write_collision_counts
from kp_bench.solvers.classic.dp_solver import mf_knapsack, recursion_headroom
from kp_bench.structures.value_store import DEFAULT_MAX_PROBES, ValueStore
from kp_bench.utils.config_loader import cfg
from kp_bench.utils.instance import KnapsackInstance
from kp_bench.utils.logger import setup_logger
from kp_bench.utils.run_utils import create_run_name

logger = logging.getLogger(__name__)


def table_sizes(n: int, capacity: int, granularity: int) -> List[int]:
    """
    Store sizes to try: step, 2*step, ... strictly below n * capacity,
    with step = n * capacity // granularity (at least 1).
    """
    if granularity <= 0:
        raise ValueError(f"granularity must be positive, got {granularity}")
    total = n * capacity
    step = max(1, total // granularity)
    return list(range(step, total, step))


def sweep_table_sizes(
    instance: KnapsackInstance,
    granularity: Optional[int] = None,
    sizes: Optional[Sequence[int]] = None,
    max_probes: int = DEFAULT_MAX_PROBES,
    show_progress: bool = True,
) -> pd.DataFrame:
    """
    Runs one full memoised solve per table size.

    Args:
        instance (KnapsackInstance): The instance to solve.
        granularity (int): Number of sizes to spread over 0..n*capacity.
            Defaults to the configured sweep granularity. Ignored when `sizes` is given.
        sizes (Sequence[int]): Explicit table sizes to use.
        max_probes (int): Probe window passed to every ValueStore.
        show_progress (bool): Show a tqdm progress bar.

    Returns:
        pd.DataFrame: columns table_size, collisions, insertions, overflows, value.
    """
    if sizes is None:
        if granularity is None:
            granularity = cfg.sweep.granularity
        sizes = table_sizes(instance.n, instance.capacity, granularity)

    rows: List[Dict[str, int]] = []
    with recursion_headroom(instance.n):
        for size in tqdm(sizes, desc="Sweeping table sizes", disable=not show_progress):
            store = ValueStore(instance.n, instance.capacity, size, max_probes=max_probes)
            value = mf_knapsack(instance.n, instance.capacity, instance, store)
            logger.debug(f"Size: {size}, Collisions: {store.count_collisions()}")
            rows.append({
                "table_size": size,
                "collisions": store.count_collisions(),
                "insertions": store.num_insertions(),
                "overflows": store.num_overflows(),
                "value": value,
            })

    return pd.DataFrame(rows, columns=["table_size", "collisions", "insertions", "overflows", "value"])


def run_collision_sweep(instance: KnapsackInstance, config: SimpleNamespace = cfg) -> pd.DataFrame:
    """
    Full sweep run: creates a run directory under the results path, sets up
    logging, sweeps the table sizes and writes the collision list plus a
    csv summary.
    """
    run_name = create_run_name(instance, prefix="sweep")
    run_dir = os.path.join(config.paths.results, "sweeps", run_name)
    os.makedirs(run_dir, exist_ok=True)

    setup_logger(run_name="sweep_session", log_dir=config.paths.logs)
    logger.info(f"--- Starting Table-Size Sweep: {run_name} ---")

    sweep_df = sweep_table_sizes(
        instance,
        granularity=config.sweep.granularity,
        max_probes=config.store.max_probes,
    )
    if sweep_df.empty:
        logger.warning("No table sizes to sweep (n * capacity is too small).")

    write_collision_counts(sweep_df["collisions"], os.path.join(run_dir, config.sweep.output_filename))
    save_results_to_csv(sweep_df, os.path.join(run_dir, "sweep_summary.csv"))

    logger.info("--- Sweep finished ---")
    return sweep_df
