# kp_bench/utils/run_utils.py
import datetime

from kp_bench.utils.instance import KnapsackInstance


def create_run_name(instance: KnapsackInstance, prefix: str = "") -> str:
    """
    Creates a unique and informative name for a run.

    Args:
        instance (KnapsackInstance): The instance the run works on.
        prefix (str): Optional label put in front, e.g. 'sweep'.

    Returns:
        str: A unique name, e.g., 'sweep_20250622_210000_n50_c1200'
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_name = f"{timestamp}_n{instance.n}_c{instance.capacity}"
    if prefix:
        run_name = f"{prefix}_{run_name}"
    return run_name
