# kp_bench/structures/value_store.py
# -*- coding: utf-8 -*-

'''
Fixed-size open-addressing hash table used as the memo for the
memory-function knapsack solver.

A key (i, j) means "best value using items 1..i with residual capacity j".
The pair is folded into one integer with combine_key() and the slot is found
with probe(), a pure function of (key, table_size, attempt). Because nothing
here is randomised, the same (n, capacity, table_size) and the same insertion
order always give the same collision count.

A key only ever looks at the first `max_probes` slots of its probe sequence.
When all of them hold other keys the entry goes to a separate overflow area,
so a table much smaller than the number of sub-problems still memoises every
result. Slots are never freed, which means a key that once spilled can never
have a free slot in its window later on.

The overflow area is a plain dict with no size limit: `table_size` bounds
the slot array only, and total memory grows with the number of distinct
sub-problems the solve touches. num_overflows() reports how many spilled.
'''

import logging
from typing import Dict, List, Optional, Tuple

from kp_bench.exceptions import StoreSizeError

logger = logging.getLogger(__name__)

# Returned by get() for keys that have not been computed yet.
# Knapsack values are never negative, so -1 can not be confused with a result.
ABSENT = -1

DEFAULT_MAX_PROBES = 64


def combine_key(i: int, j: int, capacity: int) -> int:
    """Folds (i, j) into a single integer, distinct for every j in 0..capacity."""
    return i * (capacity + 1) + j


def probe(key: int, table_size: int, attempt: int) -> int:
    """
    Linear probing sequence.

    Args:
        key (int): The combined key from combine_key().
        table_size (int): Number of slots in the table.
        attempt (int): 0 for the home slot, 1 for the next candidate, etc.

    Returns:
        int: The slot index to inspect on this attempt.
    """
    return (key + attempt) % table_size


class ValueStore:
    """
    Memo table keyed by (item index, residual capacity).

    The slot array never grows. A table smaller than (n + 1) * (capacity + 1)
    is allowed on purpose: sweeping the table size and counting collisions is
    how the space/collision trade-off is studied.

    Args:
        n (int): Number of items; valid item indices are 0..n.
        capacity (int): Knapsack capacity; valid residual capacities are 0..capacity.
        table_size (int): Number of slots, must be positive.
        max_probes (int): Length of the probe window, capped at table_size.

    Raises:
        StoreSizeError: If table_size is not a positive integer.
    """

    def __init__(self, n: int, capacity: int, table_size: int, max_probes: int = DEFAULT_MAX_PROBES):
        if isinstance(table_size, bool) or not isinstance(table_size, int) or table_size <= 0:
            raise StoreSizeError(f"table_size must be a positive integer, got {table_size!r}")
        if max_probes <= 0:
            raise ValueError(f"max_probes must be positive, got {max_probes}")

        self.n = n
        self.capacity = capacity
        self._table_size = table_size
        self._max_probes = min(max_probes, table_size)
        # Parallel arrays: combined key (None for a free slot) and stored value.
        self._keys: List[Optional[int]] = [None] * table_size
        self._values: List[int] = [ABSENT] * table_size
        self._overflow: Dict[int, int] = {}
        self._occupied = 0
        self._collisions = 0
        self._insertions = 0

    # --- Key handling ---

    def _key(self, i: int, j: int) -> int:
        if not (0 <= i <= self.n and 0 <= j <= self.capacity):
            raise IndexError(
                f"Key ({i}, {j}) is outside 0..{self.n} x 0..{self.capacity}"
            )
        return combine_key(i, j, self.capacity)

    def _find_slot(self, key: int) -> Optional[int]:
        """Returns the slot holding `key`, or the first free slot in its probe window."""
        for attempt in range(self._max_probes):
            slot = probe(key, self._table_size, attempt)
            stored = self._keys[slot]
            if stored is None or stored == key:
                return slot
        # every slot in the window holds some other key
        return None

    # --- Public API ---

    def get(self, i: int, j: int) -> int:
        """Returns the memoised value for (i, j), or ABSENT if it was never stored."""
        key = self._key(i, j)
        slot = self._find_slot(key)
        if slot is None:
            return self._overflow.get(key, ABSENT)
        if self._keys[slot] is None:
            return ABSENT
        return self._values[slot]

    def insert(self, i: int, j: int, value: int) -> None:
        """
        Stores `value` under (i, j), overwriting an earlier value for the same key.

        The collision counter goes up once per insert whose home slot already
        holds a different key; the probe sequence then resolves the slot.
        """
        if value < 0:
            raise ValueError(f"Memoised values must be non-negative, got {value}")
        key = self._key(i, j)
        self._insertions += 1

        home = probe(key, self._table_size, 0)
        if self._keys[home] is not None and self._keys[home] != key:
            self._collisions += 1

        slot = self._find_slot(key)
        if slot is None:
            if not self._overflow:
                logger.debug(
                    f"Probe window of {self._max_probes} slots exhausted at ({i}, {j}); "
                    f"spilling to overflow (table size {self._table_size})."
                )
            self._overflow[key] = value
            return

        if self._keys[slot] is None:
            self._keys[slot] = key
            self._occupied += 1
        self._values[slot] = value

    def count_collisions(self) -> int:
        return self._collisions

    def size(self) -> int:
        return self._table_size

    def num_insertions(self) -> int:
        return self._insertions

    def num_overflows(self) -> int:
        """Number of distinct keys held outside the slot array."""
        return len(self._overflow)

    def load_factor(self) -> float:
        return self._occupied / self._table_size

    def entries(self) -> Dict[Tuple[int, int], int]:
        """Snapshot of every stored entry as {(i, j): value}."""
        width = self.capacity + 1
        snapshot = {
            divmod(key, width): value
            for key, value in zip(self._keys, self._values)
            if key is not None
        }
        snapshot.update((divmod(key, width), value) for key, value in self._overflow.items())
        return snapshot

    def __len__(self) -> int:
        return self._occupied + len(self._overflow)

    def __repr__(self) -> str:
        return (
            f"ValueStore(n={self.n}, capacity={self.capacity}, size={self._table_size}, "
            f"entries={len(self)}, collisions={self._collisions})"
        )
