# Path: fin_extract/core/logger/__init__.py
"""
fin_extract Logger Package

IPO-aware logging for the extraction core.

Provides separate log streams for:
- INPUT layer (document scanning: detector, context/fact parsers)
- PROCESS layer (period resolution, mapping, merge, calibration)
- OUTPUT layer (final record assembly)
"""

from .ipo_logging import (
    setup_ipo_logging,
    setup_from_config,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'setup_from_config',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
