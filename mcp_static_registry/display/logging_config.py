"""Logging configuration setup."""

import copy
import logging
import logging.config
import os
import sys
from typing import Optional, Tuple

from mcp_static_registry.constants import DEFAULT_LOG_LEVEL

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": "%(message)s",
            "datefmt": "[%X]",
        },
        "simple_file": {
            "format": ("%(asctime)s - %(name)25s:%(lineno)-4d - " "%(levelname)-7s - %(message)s"),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console_handler": {
            "()": "rich.logging.RichHandler",
            "level": "DEBUG",
            "formatter": "console",
            "show_path": False,
            "markup": False,
            "rich_tracebacks": True,
            "console": "ext://mcp_static_registry.display.console.err_console",
        },
    },
    "loggers": {
        "mcp_static_registry": {
            "handlers": ["console_handler"],
            "propagate": False,
            "level": "INFO",
        },
    },
    "root": {
        "handlers": ["console_handler"],
        "level": "WARNING",
    },
}


def validate_level(log_lvl_str: str) -> Tuple[str, bool]:
    """Return ``(level, ok)``; unknown names fall back to ``INFO``."""
    log_lvl_valid = (log_lvl_str or "").upper()
    if log_lvl_valid not in VALID_LEVELS:
        return DEFAULT_LOG_LEVEL, False
    return log_lvl_valid, True


def setup_logging(log_lvl_str: str, *, log_file: Optional[str] = None) -> str:
    """
    Set up the logging system.

    Console output goes to stderr through Rich.  When *log_file* is given,
    the same records are also written there with the plain file format.

    Args:
        log_lvl_str: The desired log level string (e.g., 'debug', 'info').
        log_file: Optional path of an additional log file.

    Returns:
        The validated log level name.
    """
    log_lvl_valid, ok = validate_level(log_lvl_str)
    if not ok:
        print(f"Warning: invalid log level '{log_lvl_str}'. Using 'INFO'.", file=sys.stderr)

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    app_logger = log_cfg["loggers"]["mcp_static_registry"]
    app_logger["level"] = log_lvl_valid

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        log_cfg["handlers"]["file_handler"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": log_file,
            "encoding": "utf-8",
        }
        app_logger["handlers"].append("file_handler")
        log_cfg["root"]["handlers"].append("file_handler")

    log_cfg["root"]["level"] = log_lvl_valid if log_lvl_valid == "DEBUG" else "WARNING"

    try:
        logging.config.dictConfig(log_cfg)
    except (ValueError, TypeError, AttributeError, ImportError) as e_log_cfg:
        print(
            f"Error applying logging configuration: {e_log_cfg}",
            file=sys.stderr,
        )

    return log_lvl_valid
