# kp_bench/__init__.py
"""Memoised, table-based and greedy solvers for the 0/1 knapsack problem."""

__version__ = "0.1.0"
