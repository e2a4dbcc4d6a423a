# Path: fin_extract/config_loader.py
"""
Configuration Loader for fin_extract

Loads configuration from .env file for the extraction core.
Singleton pattern ensures consistent configuration across all components.

NO hardcoded paths, NO magic numbers.
All configuration comes from environment variables, with defaults
taken from constants.py.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from constants import (
    XBRL_MIN_CONFIDENCE,
    XBRL_FIELD_CONFIDENCE,
    DERIVED_FIELD_CONFIDENCE,
    AI_DEFAULT_CONFIDENCE,
    AI_TIMEOUT_SECONDS,
    MIN_PUBLIC_REVENUE,
    MAX_PLAUSIBLE_REVENUE,
    MIN_PLAUSIBLE_SHARES,
)


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'


class ConfigLoader:
    """
    Singleton configuration loader for fin_extract.

    Loads configuration from environment variables with type
    conversion and sensible defaults. Nothing is required: the
    extraction core runs with defaults alone.

    Example:
        config = ConfigLoader()
        timeout = config.get('ai_timeout_seconds')  # Returns float
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # fin_extract/config_loader.py -> .env is in same directory
        current_file = Path(__file__).resolve()
        project_root = current_file.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('FIN_EXTRACT_ENVIRONMENT', 'development'),
            'debug': self._get_bool('FIN_EXTRACT_DEBUG', False),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('FIN_EXTRACT_LOG_DIR'),
            'log_level': self._get_env('FIN_EXTRACT_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('FIN_EXTRACT_LOG_CONSOLE', True),

            # ================================================================
            # EXTRACTION THRESHOLDS
            # ================================================================
            'xbrl_min_confidence': self._get_float(
                'FIN_EXTRACT_XBRL_MIN_CONFIDENCE', XBRL_MIN_CONFIDENCE
            ),
            'xbrl_field_confidence': self._get_float(
                'FIN_EXTRACT_XBRL_FIELD_CONFIDENCE', XBRL_FIELD_CONFIDENCE
            ),
            'derived_field_confidence': self._get_float(
                'FIN_EXTRACT_DERIVED_FIELD_CONFIDENCE', DERIVED_FIELD_CONFIDENCE
            ),
            'ai_default_confidence': self._get_float(
                'FIN_EXTRACT_AI_DEFAULT_CONFIDENCE', AI_DEFAULT_CONFIDENCE
            ),
            'ai_timeout_seconds': self._get_float(
                'FIN_EXTRACT_AI_TIMEOUT_SECONDS', AI_TIMEOUT_SECONDS
            ),

            # ================================================================
            # SCALE VALIDATION
            # ================================================================
            'min_public_revenue': self._get_float(
                'FIN_EXTRACT_MIN_PUBLIC_REVENUE', MIN_PUBLIC_REVENUE
            ),
            'max_plausible_revenue': self._get_float(
                'FIN_EXTRACT_MAX_PLAUSIBLE_REVENUE', MAX_PLAUSIBLE_REVENUE
            ),
            'min_plausible_shares': self._get_float(
                'FIN_EXTRACT_MIN_PLAUSIBLE_SHARES', MIN_PLAUSIBLE_SHARES
            ),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name
            required: If True, raise error when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        # Handle variable interpolation
        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"environment={self._config.get('environment')}, "
            f"ai_timeout_seconds={self._config.get('ai_timeout_seconds')})"
        )


__all__ = ['ConfigLoader']
