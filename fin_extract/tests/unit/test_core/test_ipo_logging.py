# Path: fin_extract/tests/unit/test_core/test_ipo_logging.py
"""
Unit tests for IPO-aware logging setup.
"""

import logging
import os
from unittest.mock import patch

import pytest

from core.logger.ipo_logging import (
    IPOFilter,
    setup_ipo_logging,
    setup_from_config,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest left it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield root

    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLayerLoggers:
    def test_logger_names(self):
        assert get_input_logger('fact_parser').name == 'input.fact_parser'
        assert get_process_logger('concept_mapper').name == 'process.concept_mapper'
        assert get_output_logger('orchestrator').name == 'output.orchestrator'

    def test_filter_by_prefix(self):
        layer_filter = IPOFilter('process')
        record = logging.LogRecord('process.merger', logging.INFO, __file__, 1, 'm', None, None)
        other = logging.LogRecord('input.detector', logging.INFO, __file__, 1, 'm', None, None)

        assert layer_filter.filter(record)
        assert not layer_filter.filter(other)


class TestSetup:
    def test_log_files_created(self, temp_dir, restore_root_logger):
        setup_ipo_logging(temp_dir / 'logs', 'DEBUG', console_output=False)

        get_input_logger('detector').info('scanning')
        get_process_logger('merger').info('merging')
        for handler in restore_root_logger.handlers:
            handler.flush()

        log_dir = temp_dir / 'logs'
        assert 'scanning' in (log_dir / 'input_activity.log').read_text()
        assert 'merging' not in (log_dir / 'input_activity.log').read_text()
        assert 'merging' in (log_dir / 'process_activity.log').read_text()
        full = (log_dir / 'full_activity.log').read_text()
        assert 'scanning' in full and 'merging' in full

    def test_console_only(self, restore_root_logger):
        setup_ipo_logging(None, 'WARNING', console_output=True)

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)
        assert restore_root_logger.level == logging.WARNING

    def test_setup_from_config(self, temp_dir, restore_root_logger):
        env = {
            'FIN_EXTRACT_LOG_DIR': str(temp_dir),
            'FIN_EXTRACT_LOG_LEVEL': 'ERROR',
            'FIN_EXTRACT_LOG_CONSOLE': 'false',
        }
        with patch.dict(os.environ, env, clear=False):
            from config_loader import ConfigLoader
            setup_from_config(ConfigLoader())

        assert (temp_dir / 'full_activity.log').exists()
        assert restore_root_logger.level == logging.ERROR
        assert len(restore_root_logger.handlers) == 4
