# kp_bench/utils/logger.py
"""
Root logger setup for benchmark runs.

Every run writes a full DEBUG trace to its own file under the log directory,
while the console only carries progress messages.
"""
import logging
import os
import sys
from datetime import datetime
from typing import Optional

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_path_for(run_name: str, log_dir: str, now: Optional[datetime] = None) -> str:
    """Timestamped log file path for a run, e.g. `<log_dir>/sweep_session_20240101_120000.log`."""
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return os.path.join(log_dir, f"{run_name}_{stamp}.log")


def _file_handler(path: str) -> logging.Handler:
    handler = logging.FileHandler(path, mode="w")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(run_name: str, log_dir: str, console_level: int = logging.INFO) -> str:
    """
    Attaches a per-run file handler and a stdout handler to the root logger.

    Only the first call configures anything; once the root logger has
    handlers, later calls are no-ops.

    Args:
        run_name (str): Prefix of the log file name.
        log_dir (str): Directory for log files, created if missing.
        console_level (int): Threshold for the stdout handler.

    Returns:
        str: Path of the log file, or "" if logging was already configured.
    """
    root = logging.getLogger()
    if root.hasHandlers():
        return ""

    os.makedirs(log_dir, exist_ok=True)
    log_filepath = log_path_for(run_name, log_dir)

    # the root level gates both handlers, so it must let DEBUG through to the file
    root.setLevel(logging.DEBUG)
    root.addHandler(_file_handler(log_filepath))
    root.addHandler(_console_handler(console_level))

    root.info(f"Logging to {log_filepath}")
    return log_filepath
