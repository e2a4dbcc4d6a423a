# Path: fin_extract/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for fin_extract

Provides common test fixtures used across all test modules.
"""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Add fin_extract to path for imports
FIN_EXTRACT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(FIN_EXTRACT_ROOT))

# Synthetic filing builders
sys.path.insert(0, str(Path(__file__).parent / 'fixtures'))

from sample_filings import annual_filing, minimal_filing  # noqa: E402


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'FIN_EXTRACT_ENVIRONMENT': 'test',
        'FIN_EXTRACT_DEBUG': 'true',

        # Logging
        'FIN_EXTRACT_LOG_LEVEL': 'DEBUG',
        'FIN_EXTRACT_LOG_CONSOLE': 'false',

        # Thresholds
        'FIN_EXTRACT_XBRL_MIN_CONFIDENCE': '0.4',
        'FIN_EXTRACT_AI_TIMEOUT_SECONDS': '5',
        'FIN_EXTRACT_MIN_PUBLIC_REVENUE': '1000000',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# FILING FIXTURES
# ==============================================================================

@pytest.fixture
def sample_annual_filing():
    """A complete synthetic 10-K with current, prior and cover contexts."""
    return annual_filing()


@pytest.fixture
def sample_minimal_filing():
    """Two facts only: revenue and total assets, both scale 3."""
    return minimal_filing()


# ==============================================================================
# SINGLETON RESET
# ==============================================================================

@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset any singleton instances between tests."""
    from config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
