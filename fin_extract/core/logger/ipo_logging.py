# Path: fin_extract/core/logger/ipo_logging.py
"""
IPO-Aware Logging for fin_extract

Input-Process-Output separated logging for filing extraction.

This module sets up logging with separate files for:
- INPUT layer (detector, context parser, fact parser, metadata)
- PROCESS layer (period resolver, concept mapper, merge, calibration)
- OUTPUT layer (final record assembly)
- Full activity (everything combined)

The library never configures logging on import. Host applications
call setup_ipo_logging() (or setup_from_config()) once at startup.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


_LAYER_FILES = {
    'input': 'input_activity.log',
    'process': 'process_activity.log',
    'output': 'output_activity.log',
}

_FILE_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'
_CONSOLE_FORMAT = '[%(levelname)s] %(name)s - %(message)s'


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name.startswith(self.layer)


def setup_ipo_logging(
    log_dir: Optional[Path],
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for fin_extract.

    Creates separate log files for:
    - input_activity.log (document scanning)
    - process_activity.log (mapping, merge, calibration)
    - output_activity.log (record assembly)
    - full_activity.log (all activities combined)

    Args:
        log_dir: Directory for log files (None = console only)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/fin_extract'),
            log_level='INFO',
            console_output=True
        )
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(_FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        full_handler = logging.FileHandler(log_dir / 'full_activity.log')
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(formatter)
        root_logger.addHandler(full_handler)

        for layer, filename in _LAYER_FILES.items():
            handler = logging.FileHandler(log_dir / filename)
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(formatter)
            handler.addFilter(IPOFilter(layer))
            root_logger.addHandler(handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)


def setup_from_config(config) -> None:
    """
    Set up logging from a ConfigLoader.

    Args:
        config: ConfigLoader (or any object with get(key, default))
    """
    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=config.get('log_level', 'INFO'),
        console_output=config.get('log_console', True),
    )


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'context_parser', 'fact_parser')

    Returns:
        Logger configured for INPUT layer
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer.

    Args:
        name: Logger name (e.g., 'concept_mapper', 'calibrator')

    Returns:
        Logger configured for PROCESS layer
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'orchestrator')

    Returns:
        Logger configured for OUTPUT layer
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'setup_ipo_logging',
    'setup_from_config',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
