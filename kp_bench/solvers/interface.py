# kp_bench/solvers/interface.py
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from kp_bench.utils.instance import KnapsackInstance


class SolverInterface(ABC):
    """
    Common base for every solver.

    solve() returns a dict with at least:
        "value":    the total value of the reported selection,
        "solution": the selected 1-based item indices, ascending,
        "time_us":  wall time of the solve in whole microseconds.
    """
    def __init__(self, config: Dict[str, Any] = None):
        self.config = dict(config or {})
        self.name = self.__class__.__name__

    @abstractmethod
    def solve(self, instance: KnapsackInstance) -> Dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def _result(value: int, solution: List[int], start_time: float, **extra) -> Dict[str, Any]:
        elapsed_us = int((time.perf_counter() - start_time) * 1_000_000)
        result = {"value": int(value), "solution": sorted(solution), "time_us": elapsed_us}
        result.update(extra)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
