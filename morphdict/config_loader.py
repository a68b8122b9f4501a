# Path: morphdict/config_loader.py
"""
Configuration Loader for morphdict

Loads configuration from .env file for the dictionary loader.
Singleton pattern ensures consistent configuration across all components.

All configuration comes from environment variables.
"""

import os
import threading
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from .constants import CompressionAlgorithm, NO_COMPRESSION, ProviderType


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

DEFAULT_ENVIRONMENT: str = 'development'
DEFAULT_PROVIDER: str = ProviderType.FILESYSTEM.value
DEFAULT_COMPRESS_ALGORITHM: str = 'deflate'

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'


class ConfigLoader:
    """
    Thread-safe singleton configuration loader for morphdict.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults.

    Example:
        config = ConfigLoader()
        resource_dir = config.get('resource_dir')  # Returns Path object
        strict = config.get('strict_decompression')  # Returns bool
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        and validates all configuration on first instantiation.
        """
        with ConfigLoader._lock:
            if ConfigLoader._initialized:
                return

            # .env sits at the repository root, one level above the package
            env_path = Path(__file__).resolve().parent.parent / '.env'

            if env_path.exists():
                load_dotenv(dotenv_path=env_path, interpolate=True)

            self._config = self._load_configuration()
            ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values with proper types

        Raises:
            ValueError: If a configured value is invalid
        """
        config = {
            # ================================================================
            # ENVIRONMENT
            # ================================================================
            'environment': self._get_env('MORPHDICT_ENVIRONMENT', DEFAULT_ENVIRONMENT),

            # ================================================================
            # RESOURCE PROVIDER
            # ================================================================
            'provider': self._get_choice(
                'MORPHDICT_PROVIDER',
                DEFAULT_PROVIDER,
                [p.value for p in ProviderType],
            ),
            'resource_dir': self._get_path('MORPHDICT_RESOURCE_DIR'),
            'bundle_path': self._get_path('MORPHDICT_BUNDLE_PATH'),
            'allow_empty_artifacts': self._get_bool(
                'MORPHDICT_ALLOW_EMPTY_ARTIFACTS', False
            ),
            'verify_bundle_checksums': self._get_bool(
                'MORPHDICT_VERIFY_BUNDLE_CHECKSUMS', True
            ),

            # ================================================================
            # RESOLUTION
            # ================================================================
            'strict_decompression': self._get_bool(
                'MORPHDICT_STRICT_DECOMPRESSION', False
            ),
            'compress_algorithm': self._get_choice(
                'MORPHDICT_COMPRESS_ALGORITHM',
                DEFAULT_COMPRESS_ALGORITHM,
                [a.name.lower() for a in CompressionAlgorithm] + [NO_COMPRESSION],
            ),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('MORPHDICT_LOG_DIR'),
            'log_level': self._get_env('MORPHDICT_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
            'log_console': self._get_bool('MORPHDICT_LOG_CONSOLE', True),
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
        value = self._config.get(key)
        return default if value is None else value

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

        if not value:
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        # Handle variable interpolation
        if '$' in value:
            value = os.path.expandvars(value)

        return Path(value).expanduser()

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_choice(self, key: str, default: str, choices: list[str]) -> str:
        """
        Get a string environment variable restricted to known choices.

        Raises:
            ValueError: If the value is not one of the choices
        """
        value = os.getenv(key, default).strip().lower()
        if value not in choices:
            raise ValueError(
                f"Invalid value for {key}: {value!r} "
                f"(expected one of {', '.join(choices)})"
            )
        return value

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"provider={self._config.get('provider')}, "
            f"environment={self._config.get('environment')})"
        )


__all__ = ['ConfigLoader']
