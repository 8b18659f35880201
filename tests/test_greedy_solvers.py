from __future__ import annotations

import random

import pytest

from kp_bench.solvers.classic.dp_solver import DPSolver2D
from kp_bench.solvers.classic.greedy_solvers import (
    GreedyHeapSolver,
    GreedySortSolver,
    ratio_pairs,
    take_while_below_capacity,
)
from kp_bench.utils.instance import KnapsackInstance

GREEDY_SOLVERS = [GreedySortSolver, GreedyHeapSolver]

SCENARIO = KnapsackInstance(values=(60, 100, 120), weights=(10, 20, 30), capacity=50)


@pytest.mark.parametrize("solver_class", GREEDY_SOLVERS)
def test_strict_boundary_scenario(solver_class) -> None:
    result = solver_class().solve(SCENARIO)
    # 10 + 20 = 30 < 50, adding 30 more gives 60 which is not < 50
    assert result["value"] == 160
    assert result["solution"] == [1, 2]
    assert DPSolver2D().solve(SCENARIO)["value"] == 220


@pytest.mark.parametrize("solver_class", GREEDY_SOLVERS)
def test_item_reaching_capacity_exactly_is_not_taken(solver_class) -> None:
    instance = KnapsackInstance(values=(10,), weights=(5,), capacity=5)
    result = solver_class().solve(instance)
    assert result["value"] == 0
    assert result["solution"] == []


@pytest.mark.parametrize("solver_class", GREEDY_SOLVERS)
def test_selection_stops_at_first_item_that_does_not_fit(solver_class) -> None:
    # ratios 10.0, 1.11, 1.0: item 2 does not fit, item 3 would but is never reached
    instance = KnapsackInstance(values=(100, 50, 1), weights=(10, 45, 1), capacity=50)
    result = solver_class().solve(instance)
    assert result["value"] == 100
    assert result["solution"] == [1]


@pytest.mark.parametrize("solver_class", GREEDY_SOLVERS)
def test_zero_weight_items_come_first(solver_class) -> None:
    instance = KnapsackInstance(values=(1, 7, 30), weights=(1, 0, 10), capacity=20)
    result = solver_class().solve(instance)
    assert result["solution"] == [1, 2, 3]
    assert result["value"] == 38


@pytest.mark.parametrize("solver_class", GREEDY_SOLVERS)
def test_empty_instance(solver_class) -> None:
    result = solver_class().solve(KnapsackInstance(values=(), weights=(), capacity=10))
    assert result["value"] == 0
    assert result["solution"] == []


@pytest.mark.parametrize("seed", range(15))
def test_heap_and_sort_agree_and_stay_feasible(seed: int) -> None:
    rng = random.Random(seed)
    n = rng.randint(1, 40)
    # value = ratio * weight with distinct integer ratios, so both orders are fully determined
    weights = [rng.randint(1, 200) for _ in range(n)]
    ratios = rng.sample(range(1, 500), n)
    instance = KnapsackInstance(
        values=tuple(r * w for r, w in zip(ratios, weights)),
        weights=tuple(weights),
        capacity=rng.randint(0, 1500),
    )
    assert sorted(pair.ratio for pair in ratio_pairs(instance)) == sorted(float(r) for r in ratios)

    by_sort = GreedySortSolver().solve(instance)
    by_heap = GreedyHeapSolver().solve(instance)
    assert by_sort["value"] == by_heap["value"]
    assert by_sort["solution"] == by_heap["solution"]
    assert instance.total_weight(by_heap["solution"]) < max(instance.capacity, 1)
    assert by_heap["value"] <= DPSolver2D().solve(instance)["value"]


def test_take_while_below_capacity_follows_given_order() -> None:
    assert take_while_below_capacity(SCENARIO, [3, 1, 2]) == (180, [1, 3])
