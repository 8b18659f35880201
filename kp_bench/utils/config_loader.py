# kp_bench/utils/config_loader.py
import yaml
import os
from types import SimpleNamespace
from typing import Dict, Any

# --- Import solver CLASSes here ---
from kp_bench.solvers.classic.dp_solver import DPSolver2D, MFKnapsackSolver
from kp_bench.solvers.classic.greedy_solvers import GreedySortSolver, GreedyHeapSolver

# The registry maps a display name to a Solver Class.
ALGORITHM_REGISTRY = {
    "Traditional DP": DPSolver2D,
    "Space-efficient DP": MFKnapsackSolver,
    "Greedy (built-in sort)": GreedySortSolver,
    "Greedy (max heap)": GreedyHeapSolver,
}

PACKAGE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
PROJECT_ROOT = os.path.abspath(os.path.join(PACKAGE_DIR, '..'))
DEFAULT_CONFIG_PATH = os.path.join(PACKAGE_DIR, 'configs', 'config.yaml')


def _post_process_config(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Processes the raw config dict to add absolute paths and resolve solver names.
    This function contains all logic that cannot be represented in a static YAML file.
    """
    # --- 1. Build absolute paths for all entries in the 'paths' section ---
    for key, rel_path in config_dict['paths'].items():
        config_dict['paths'][key] = os.path.join(PROJECT_ROOT, rel_path)
    config_dict['paths']['root'] = PROJECT_ROOT

    # --- 2. Map Algorithm Names to Solver Classes ---
    solvers_cfg = config_dict['solvers']
    try:
        solvers_cfg['algorithms_to_test'] = {
            name: ALGORITHM_REGISTRY[name] for name in solvers_cfg['algorithms_to_test']
        }
        solvers_cfg['baseline_algorithm'] = ALGORITHM_REGISTRY[solvers_cfg['baseline_algorithm']]
    except KeyError as e:
        raise ValueError(f"Algorithm '{e.args[0]}' is defined in config.yaml but not found in ALGORITHM_REGISTRY in config_loader.py.") from e

    return config_dict


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> SimpleNamespace:
    """
    Loads, processes, and returns the project configuration from a YAML file
    as a SimpleNamespace object for dot notation access.
    """
    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {config_path}")

    processed_config = _post_process_config(config_dict)

    # Convert the final dictionary to a SimpleNamespace for easy attribute access.
    # The solver-name mapping stays a plain dict so it can be iterated.
    def dict_to_namespace(d: Dict) -> SimpleNamespace:
        for k, v in d.items():
            if isinstance(v, dict) and k != 'algorithms_to_test':
                d[k] = dict_to_namespace(v)
        return SimpleNamespace(**d)

    return dict_to_namespace(processed_config)

# --- A single, global config instance for easy import across the project ---
# Other modules can simply use: from kp_bench.utils.config_loader import cfg
cfg = load_config()
