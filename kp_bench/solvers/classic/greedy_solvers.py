# kp_bench/solvers/classic/greedy_solvers.py
import time
import logging
from typing import Any, Dict, Iterable, List, Tuple

from kp_bench.solvers.interface import SolverInterface
from kp_bench.structures.max_heap import RatioMaxHeap, RatioPair, item_ratio
from kp_bench.utils.instance import KnapsackInstance

logger = logging.getLogger(__name__)


def ratio_pairs(instance: KnapsackInstance) -> List[RatioPair]:
    return [RatioPair(item_ratio(item.value, item.weight), item.index) for item in instance.items()]


def take_while_below_capacity(instance: KnapsackInstance, order: Iterable[int]) -> Tuple[int, List[int]]:
    """
    Accumulates items in the given order while the running weight stays
    strictly below capacity, stopping at the first item that does not.

    Returns:
        Tuple[int, List[int]]: (total value, selected indices ascending)
    """
    running_weight = 0
    total_value = 0
    selected = []
    for i in order:
        weight = instance.weight(i)
        if running_weight + weight < instance.capacity:
            running_weight += weight
            total_value += instance.value(i)
            selected.append(i)
        else:
            break
    selected.sort()
    return total_value, selected


def drain(heap: RatioMaxHeap) -> Iterable[int]:
    """Yields item indices in decreasing ratio order; stops extracting when the consumer stops."""
    while heap:
        yield heap.extract_max().index


class GreedySortSolver(SolverInterface):
    """
    An approximation solver for the 0-1 Knapsack Problem using a greedy
    approach based on value-to-weight density, ordered with the built-in sort.
    Does not guarantee optimality.
    """
    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)
        self.name = "Greedy (built-in sort)"

    def solve(self, instance: KnapsackInstance) -> Dict[str, Any]:
        start_time = time.perf_counter()

        # sorted() is stable, so equal ratios keep item order
        pairs = sorted(ratio_pairs(instance), key=lambda pair: pair.ratio, reverse=True)
        total_value, solution = take_while_below_capacity(instance, (pair.index for pair in pairs))

        logger.debug(f"{self.name}: value={total_value}, picked {len(solution)} of {instance.n} items")
        return self._result(total_value, solution, start_time)


class GreedyHeapSolver(SolverInterface):
    """
    The same greedy selection, but items are pulled from a RatioMaxHeap one at
    a time instead of sorting the whole list up front.
    """
    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)
        self.name = "Greedy (max heap)"

    def solve(self, instance: KnapsackInstance) -> Dict[str, Any]:
        start_time = time.perf_counter()

        heap = RatioMaxHeap.build(ratio_pairs(instance))
        total_value, solution = take_while_below_capacity(instance, drain(heap))

        logger.debug(
            f"{self.name}: value={total_value}, picked {len(solution)} of {instance.n} items, "
            f"{len(heap)} left in heap"
        )
        return self._result(total_value, solution, start_time)
