# kp_bench/solvers/classic/dp_solver.py
import sys
import time
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, List

import numpy as np

from kp_bench.solvers.interface import SolverInterface
from kp_bench.structures.value_store import ABSENT, DEFAULT_MAX_PROBES, ValueStore
from kp_bench.utils.instance import KnapsackInstance

logger = logging.getLogger(__name__)

DEFAULT_TABLE_SIZE_DIVISOR = 10


def fill_dp_table(instance: KnapsackInstance) -> np.ndarray:
    """
    Bottom-up DP. table[i, j] is the best value using items 1..i with capacity j.
    Row 0 (no items) stays all zeros.
    """
    n, capacity = instance.n, instance.capacity
    table = np.zeros((n + 1, capacity + 1), dtype=np.int64)

    for i, (value, weight) in enumerate(zip(instance.values, instance.weights), start=1):
        prev = table[i - 1]
        row = table[i]
        # Case 1: don't include item i
        row[:] = prev
        # Case 2: include item i wherever it fits
        if weight <= capacity:
            np.maximum(prev[weight:], prev[:capacity + 1 - weight] + value, out=row[weight:])

    return table


def reconstruct_subset(instance: KnapsackInstance, best: Callable[[int, int], int]) -> List[int]:
    """
    Walks back from (n, capacity) and recovers one optimal selection.

    Args:
        instance (KnapsackInstance): The solved instance.
        best (Callable): best(i, j) -> optimal value using items 1..i with capacity j.
            best(0, j) must be 0.

    Returns:
        List[int]: Selected item indices in ascending order.
    """
    selected = []
    j = instance.capacity
    for i in range(instance.n, 0, -1):
        weight = instance.weight(i)
        # strict '>' so that ties leave the item out
        if j - weight >= 0 and instance.value(i) + best(i - 1, j - weight) > best(i - 1, j):
            selected.append(i)
            j -= weight
    selected.sort()
    return selected


def mf_knapsack(i: int, j: int, instance: KnapsackInstance, store: ValueStore) -> int:
    """
    Memory function for the 0/1 knapsack: top-down DP that only visits the
    sub-problems reachable from (i, j), memoised in `store`.
    """
    if i == 0:
        return 0

    cached = store.get(i, j)
    if cached != ABSENT:
        return cached

    weight = instance.weight(i)
    if j < weight:
        value = mf_knapsack(i - 1, j, instance, store)
    else:
        value = max(
            mf_knapsack(i - 1, j, instance, store),
            instance.value(i) + mf_knapsack(i - 1, j - weight, instance, store),
        )
    store.insert(i, j, value)
    return value


@contextmanager
def recursion_headroom(depth: int, margin: int = 200):
    """Temporarily raises the interpreter recursion limit to fit `depth` nested calls."""
    previous = sys.getrecursionlimit()
    required = depth + margin
    if required > previous:
        logger.debug(f"Raising recursion limit from {previous} to {required}")
        sys.setrecursionlimit(required)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def default_table_size(instance: KnapsackInstance, divisor: int = DEFAULT_TABLE_SIZE_DIVISOR) -> int:
    """k = n * capacity // divisor, never below one slot."""
    return max(1, (instance.n * instance.capacity) // divisor)


class DPSolver2D(SolverInterface):
    """
    A solver for the 0-1 Knapsack Problem using the full 2D Dynamic Programming
    table, followed by a backtracking pass to recover the selected items.
    """
    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)
        self.name = "Traditional DP"

    def solve(self, instance: KnapsackInstance) -> Dict[str, Any]:
        start_time = time.perf_counter()

        table = fill_dp_table(instance)
        optimal_value = int(table[instance.n, instance.capacity])
        solution = reconstruct_subset(instance, lambda i, j: int(table[i, j]))

        logger.debug(f"{self.name}: n={instance.n}, capacity={instance.capacity}, value={optimal_value}")
        return self._result(optimal_value, solution, start_time)


class MFKnapsackSolver(SolverInterface):
    """
    Space-efficient DP: the memory-function knapsack backed by a fixed-size
    ValueStore instead of the full (n + 1) x (capacity + 1) table.

    Config keys:
        table_size (int): exact number of store slots.
        table_size_divisor (int): used when table_size is absent,
            k = n * capacity // divisor (default 10).
        max_probes (int): probe window of the store (default 64).

    Memory is not bounded by table_size. Entries that find no free slot in
    their probe window go to the store's unbounded overflow dict, so a small
    table trades collisions for overflow entries rather than dropping results.
    The result dict reports the count as `overflows`.
    """
    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)
        self.name = "Space-efficient DP"

    def table_size_for(self, instance: KnapsackInstance) -> int:
        table_size = self.config.get("table_size")
        if table_size is not None:
            return table_size
        divisor = self.config.get("table_size_divisor", DEFAULT_TABLE_SIZE_DIVISOR)
        return default_table_size(instance, divisor)

    def solve(self, instance: KnapsackInstance) -> Dict[str, Any]:
        start_time = time.perf_counter()

        store = ValueStore(
            instance.n,
            instance.capacity,
            self.table_size_for(instance),
            max_probes=self.config.get("max_probes", DEFAULT_MAX_PROBES),
        )

        def best(i: int, j: int) -> int:
            return mf_knapsack(i, j, instance, store)

        with recursion_headroom(instance.n):
            optimal_value = best(instance.n, instance.capacity)
            solution = reconstruct_subset(instance, best)

        logger.debug(
            f"{self.name}: value={optimal_value}, table size={store.size()}, "
            f"insertions={store.num_insertions()}, collisions={store.count_collisions()}"
        )
        return self._result(
            optimal_value,
            solution,
            start_time,
            table_size=store.size(),
            collisions=store.count_collisions(),
            insertions=store.num_insertions(),
            overflows=store.num_overflows(),
        )
