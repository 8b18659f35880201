# kp_bench/structures/__init__.py
from .max_heap import RatioMaxHeap, RatioPair, item_ratio
from .value_store import ABSENT, ValueStore, combine_key, probe

__all__ = [
    "ABSENT",
    "RatioMaxHeap",
    "RatioPair",
    "ValueStore",
    "combine_key",
    "item_ratio",
    "probe",
]
