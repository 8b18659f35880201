# kp_bench/utils/instance.py
# -*- coding: utf-8 -*-


'''
This module provides the knapsack instance model together with functions to
generate, save and load instances.

Items are addressed with 1-based indices throughout the project; index 0 is
reserved for "no item" (the base case of the recurrences).
'''

import os
import csv
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from kp_bench.exceptions import InvalidInstanceError

logger = logging.getLogger(__name__)

CORRELATION_TYPES = ('uncorrelated', 'weakly_correlated', 'strongly_correlated', 'subset_sum')


class Item(NamedTuple):
    index: int
    value: int
    weight: int


def _check_integers(sequence: Sequence[int], label: str) -> None:
    for entry in sequence:
        if isinstance(entry, bool) or not isinstance(entry, (int, np.integer)):
            raise InvalidInstanceError(f"{label} must contain integers, got {entry!r}")
        if entry < 0:
            raise InvalidInstanceError(f"{label} must contain non-negative integers, got {entry}")


@dataclass(frozen=True)
class KnapsackInstance:
    """
    An immutable 0/1 knapsack instance.

    Args:
        values (Sequence[int]): Value of each item, item 1 first.
        weights (Sequence[int]): Weight of each item, item 1 first.
        capacity (int): The maximum capacity of the knapsack.

    Raises:
        InvalidInstanceError: On negative or non-integer data, or when the
            lists differ in length. An empty item list is valid.
    """
    values: Tuple[int, ...]
    weights: Tuple[int, ...]
    capacity: int

    def __post_init__(self):
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, (int, np.integer)):
            raise InvalidInstanceError(f"capacity must be an integer, got {self.capacity!r}")
        if self.capacity < 0:
            raise InvalidInstanceError(f"capacity must be non-negative, got {self.capacity}")
        if len(self.values) != len(self.weights):
            raise InvalidInstanceError(
                f"values and weights must be the same length ({len(self.values)} != {len(self.weights)})"
            )
        _check_integers(self.values, "values")
        _check_integers(self.weights, "weights")
        # Normalise to plain python ints held in tuples.
        object.__setattr__(self, 'values', tuple(int(v) for v in self.values))
        object.__setattr__(self, 'weights', tuple(int(w) for w in self.weights))
        object.__setattr__(self, 'capacity', int(self.capacity))

    @property
    def n(self) -> int:
        return len(self.values)

    def value(self, i: int) -> int:
        """Value of item i (1-based)."""
        if not 1 <= i <= self.n:
            raise IndexError(f"Item index {i} outside 1..{self.n}")
        return self.values[i - 1]

    def weight(self, i: int) -> int:
        """Weight of item i (1-based)."""
        if not 1 <= i <= self.n:
            raise IndexError(f"Item index {i} outside 1..{self.n}")
        return self.weights[i - 1]

    def items(self) -> Iterator[Item]:
        for i, (value, weight) in enumerate(zip(self.values, self.weights), start=1):
            yield Item(i, value, weight)

    def total_value(self, indices: Iterable[int]) -> int:
        return sum(self.value(i) for i in indices)

    def total_weight(self, indices: Iterable[int]) -> int:
        return sum(self.weight(i) for i in indices)


# Function to generate a knapsack instance with one constraint
def generate_knapsack_instance(
    n: int,
    correlation: str = 'uncorrelated',
    max_weight: int = 1000,
    max_value: int = 1000,
    capacity_ratio: float = 0.5,
    seed: Optional[int] = None
) -> KnapsackInstance:
    """
    Generate an instance of the knapsack problem.

    Args:
        n (int): Number of items to generate.
        correlation (str): Type of correlation between item values and weights.
            Options: 'uncorrelated', 'weakly_correlated',
                    'strongly_correlated', 'subset_sum'.
        max_weight (int): Maximum weight for a single item.
        max_value (int): Maximum value for a single item (used when uncorrelated).
        capacity_ratio (float): Ratio of knapsack capacity to the total weight of all items.
        seed (int): Seed for the random generator; the same seed gives the same instance.

    Returns:
        KnapsackInstance: The generated instance.
    """
    if correlation not in CORRELATION_TYPES:
        raise ValueError(f"Correlation type must be one of {', '.join(CORRELATION_TYPES)}")
    if not (0.0 < capacity_ratio <= 1.0):
        raise ValueError("Capacity ratio must be between 0.0 and 1.0")

    rng = np.random.default_rng(seed)
    weights = rng.integers(1, max_weight, size=n, endpoint=True)

    if correlation == 'uncorrelated':
        values = rng.integers(1, max_value, size=n, endpoint=True)
    elif correlation == 'subset_sum':
        # Value equals weight
        values = weights.copy()
    else:
        # weakly: noise around 25% of max_value, strongly: around 10%
        noise = max_value // 4 if correlation == 'weakly_correlated' else max_value // 10
        values = np.maximum(1, weights + rng.integers(-noise, noise, size=n, endpoint=True))

    capacity = int(int(weights.sum()) * capacity_ratio)
    return KnapsackInstance(values=tuple(values.tolist()), weights=tuple(weights.tolist()), capacity=capacity)


def save_instance_to_file(instance: KnapsackInstance, filename: str):
    """Saves the instance to a csv file."""
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filename, 'w', newline='') as f:
        # Write the first line with number of total items and capacity
        f.write(f"{instance.n} {instance.capacity}\n")
        writer = csv.writer(f)
        writer.writerow(['value', 'weight'])
        for item in instance.items():
            writer.writerow([item.value, item.weight])

    logger.info(f"Instance successfully saved to {filename}")


def load_instance_from_file(filename: str) -> KnapsackInstance:
    """
    Loads a knapsack instance from a csv file.
    Assumes first line is 'num_items capacity', followed by a 'value,weight'
    header and one row per item.
    """
    weights = []
    values = []

    with open(filename, 'r', newline='') as f:
        # 1. Read the meta-data line
        meta_line = f.readline().strip()
        try:
            num_items_str, capacity_str = meta_line.split()
            expected_num_items = int(num_items_str)
            capacity = int(capacity_str)
        except ValueError as e:
            raise InvalidInstanceError(f"Malformed header line in '{filename}': {meta_line!r}") from e

        reader = csv.reader(f)

        # 2. Skip the column header
        try:
            next(reader)
        except StopIteration:
            logger.warning(f"File '{filename}' contains no data rows.")

        # 3. Read each data row
        for row in reader:
            if not row:
                continue
            values.append(int(row[0]))
            weights.append(int(row[1]))

    actual_num_items = len(values)
    if actual_num_items != expected_num_items:
        logger.warning(f"Inconsistent data in '{filename}'. "
                       f"Header specified {expected_num_items} items, but file contained {actual_num_items} items.")

    logger.info(f"Instance successfully loaded from {filename} ({actual_num_items} items).")
    return KnapsackInstance(values=tuple(values), weights=tuple(weights), capacity=capacity)


def _read_integers(filename: str) -> List[int]:
    with open(filename, 'r') as f:
        return [int(token) for token in f.read().split()]


def load_instance_from_lists(values_path: str, weights_path: str, capacity_path: str) -> KnapsackInstance:
    """
    Loads an instance stored as three plain files (e.g. p01_v.txt, p01_w.txt, p01_c.txt):
    one value per line, one weight per line, and a single capacity.
    """
    values = _read_integers(values_path)
    weights = _read_integers(weights_path)
    capacity_tokens = _read_integers(capacity_path)
    if len(capacity_tokens) != 1:
        raise InvalidInstanceError(
            f"Capacity file '{capacity_path}' must contain exactly one integer, found {len(capacity_tokens)}"
        )

    logger.info(f"Instance loaded from {values_path} / {weights_path} / {capacity_path} ({len(values)} items).")
    return KnapsackInstance(values=tuple(values), weights=tuple(weights), capacity=capacity_tokens[0])
