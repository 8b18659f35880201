# kp_bench/evaluation/reporting.py
import os
import logging
from typing import Iterable

import pandas as pd

logger = logging.getLogger(__name__)


def _ensure_parent(path: str):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def save_results_to_csv(results_df: pd.DataFrame, save_path: str):
    """Saves a results DataFrame to csv, creating the target directory if needed."""
    _ensure_parent(save_path)
    results_df.to_csv(save_path, index=False)
    logger.info(f"Results saved to {save_path}")


def write_collision_counts(counts: Iterable[int], save_path: str):
    """
    Writes one collision count per line, in sweep order.
    This is the plain list consumed by external plotting tools.
    """
    _ensure_parent(save_path)
    with open(save_path, 'w') as f:
        for count in counts:
            f.write(f"{int(count)}\n")
    logger.info(f"Collision counts written to {save_path}")
