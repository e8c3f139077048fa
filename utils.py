# utils.py
"""
Utility functions for the snowfall application.

This module provides helpers, such as logging setup, config loading and
frame diagnostics, that are used across the application but do not belong to
the physics or the rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Any, Dict, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from simulation import ParticleField

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary with an optional "logging" key holding "level",
#       "format" and "log_file" sub-keys.
#   - Side Effects: Configures the root Python logger with a console handler
#     and a rotating file handler. Creates the log directory if needed.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises: FileNotFoundError, json.JSONDecodeError (logged first).
#
# log_throttle_from_config(run_params: Dict[str, Any]) -> int:
#   - Raises: ValueError unless "log_throttle_steps" is a positive integer.
#
# field_statistics(field: ParticleField) -> Dict[str, float]:
#   - Outputs: Mean fall speed, mean horizontal speed and the share of
#     particles currently inside the visible bounds.


DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/snowfall.log'
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 5


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Routes application logs to the terminal and to a size-capped log file.

    Replaces any handlers already on the root logger.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    formatter = logging.Formatter(log_format)
    terminal = logging.StreamHandler()
    log_file = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
    )
    for handler in (terminal, log_file):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.info(f"Snowfall logging at {log_level} to the terminal and {log_file_path}.")


def load_config(path: str) -> Dict[str, Any]:
    """Reads the snowfall settings file."""
    logging.info(f"Reading snowfall settings from {path}.")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"No snowfall settings at {path}; copy config.json next to main.py.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Snowfall settings in {path} are not valid JSON (line {e.lineno}, column {e.colno}).")
        raise
    logging.debug(f"Settings sections: {list(config)}")
    return config


def log_throttle_from_config(run_params: Dict[str, Any], default: int = 600) -> int:
    """Reads how many frames pass between periodic log lines."""
    steps = run_params.get('log_throttle_steps', default)
    if isinstance(steps, bool) or not isinstance(steps, int) or steps <= 0:
        msg = f"Configuration error: 'log_throttle_steps' must be a positive integer, got {steps!r}."
        logging.critical(msg)
        raise ValueError(msg)
    return steps


def field_statistics(field: "ParticleField") -> Dict[str, float]:
    """Aggregates per-particle state for throttled DEBUG logging."""
    bounds = field.bounds_source()
    state = np.array([(p.x, p.y, p.vx, p.vy) for p in field.particles], dtype=np.float64)
    x, y, vx, vy = state.T
    on_screen = (x >= 0) & (x <= bounds.width) & (y >= 0) & (y <= bounds.height)
    return {
        'mean_fall_speed': float(np.mean(vy)),
        'mean_drift_speed': float(np.mean(np.abs(vx))),
        'on_screen_ratio': float(np.mean(on_screen)),
    }
