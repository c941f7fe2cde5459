"""
Logging setup and configuration utilities.

This module provides functions for setting up logging for applications
built on the tuning client, with consistent formatting and handling.
"""

import logging
import logging.config
import logging.handlers
from typing import Dict, Any, Optional
from pathlib import Path
import sys

from .formatters import CustomFormatter, JSONFormatter


def setup_logging(
    config: Optional[Dict[str, Any]] = None,
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    log_format: str = "standard",
    enable_json_logs: bool = False,
    enable_console_logging: bool = True
) -> None:
    """
    Set up logging configuration.

    Args:
        config: Optional ``logging.config.dictConfig`` dictionary
        log_level: Default logging level
        log_file: Optional path of a rotating log file
        log_format: Format style ('standard', 'detailed', 'minimal')
        enable_json_logs: Enable JSON formatted logs
        enable_console_logging: Enable console logging
    """
    if config:
        logging.config.dictConfig(config)
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    if enable_json_logs:
        formatter = JSONFormatter()
    else:
        formatter = CustomFormatter(format_style=log_format)

    if enable_console_logging:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configure_component_loggers()

    logging.getLogger(__name__).debug("Logging system initialized")


def _configure_component_loggers() -> None:
    """Quiet noisy third-party loggers."""
    component_levels = {
        'urllib3': 'WARNING',
        'requests': 'WARNING',
    }

    for component, level in component_levels.items():
        logging.getLogger(component).setLevel(getattr(logging, level))
