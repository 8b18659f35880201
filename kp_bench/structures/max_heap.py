# kp_bench/structures/max_heap.py
# -*- coding: utf-8 -*-

'''
Array-backed binary max-heap over (ratio, item index) pairs.
The greedy solver drains it instead of sorting the whole item list.
'''

from typing import Iterable, List, NamedTuple

from kp_bench.exceptions import EmptyHeapError


class RatioPair(NamedTuple):
    ratio: float
    index: int


def item_ratio(value: int, weight: int) -> float:
    """Value-to-weight density. Zero-weight items are infinitely dense unless worthless."""
    if weight == 0:
        return float('inf') if value > 0 else 0.0
    return value / weight


class RatioMaxHeap:
    """
    Max-heap ordered by `ratio` only.

    For every non-root node, heap[parent].ratio >= heap[node].ratio. Equal
    ratios are never swapped, so the extraction order of ties depends only on
    the input order and is the same on every run.
    """

    def __init__(self, pairs: Iterable[RatioPair] = ()):
        self._heap: List[RatioPair] = [RatioPair(*pair) for pair in pairs]
        # Floyd's bottom-up construction
        for node in range(len(self._heap) // 2 - 1, -1, -1):
            self._sift_down(node)

    @classmethod
    def build(cls, pairs: Iterable[RatioPair]) -> "RatioMaxHeap":
        return cls(pairs)

    def _sift_down(self, node: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            largest = node
            left = 2 * node + 1
            right = left + 1
            if left < size and heap[left].ratio > heap[largest].ratio:
                largest = left
            if right < size and heap[right].ratio > heap[largest].ratio:
                largest = right
            if largest == node:
                return
            heap[node], heap[largest] = heap[largest], heap[node]
            node = largest

    def peek(self) -> RatioPair:
        if not self._heap:
            raise EmptyHeapError("peek on an empty heap")
        return self._heap[0]

    def extract_max(self) -> RatioPair:
        """Removes and returns the pair with the greatest ratio."""
        if not self._heap:
            raise EmptyHeapError("extract_max called on an empty heap")
        last = self._heap.pop()
        if not self._heap:
            return last
        top = self._heap[0]
        self._heap[0] = last
        self._sift_down(0)
        return top

    def is_valid(self) -> bool:
        """Checks the heap property over the whole array."""
        heap = self._heap
        return all(heap[(node - 1) // 2].ratio >= heap[node].ratio for node in range(1, len(heap)))

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
