# Path: morphdict/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for morphdict

Provides common test fixtures used across all test modules.
"""

import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Repository root (for `import morphdict`) and tests dir (for `import fixtures`)
TESTS_ROOT = Path(__file__).parent
REPO_ROOT = TESTS_ROOT.parent.parent
sys.path.insert(0, str(REPO_ROOT))
sys.path.insert(0, str(TESTS_ROOT))

from fixtures.sample_data import (  # noqa: E402
    build_artifacts,
    build_metadata,
    compress_artifacts,
    write_resource_dir,
)


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

MORPHDICT_ENV_KEYS = [
    'MORPHDICT_ENVIRONMENT',
    'MORPHDICT_PROVIDER',
    'MORPHDICT_RESOURCE_DIR',
    'MORPHDICT_BUNDLE_PATH',
    'MORPHDICT_ALLOW_EMPTY_ARTIFACTS',
    'MORPHDICT_VERIFY_BUNDLE_CHECKSUMS',
    'MORPHDICT_STRICT_DECOMPRESSION',
    'MORPHDICT_COMPRESS_ALGORITHM',
    'MORPHDICT_LOG_DIR',
    'MORPHDICT_LOG_LEVEL',
    'MORPHDICT_LOG_CONSOLE',
]


@pytest.fixture
def clean_env():
    """Remove every MORPHDICT_* variable for the duration of a test."""
    saved = {key: os.environ.pop(key) for key in MORPHDICT_ENV_KEYS if key in os.environ}
    yield
    for key in MORPHDICT_ENV_KEYS:
        os.environ.pop(key, None)
    os.environ.update(saved)


@pytest.fixture
def mock_env_vars(clean_env, temp_dir):
    """Provide mock environment variables for testing."""
    env_vars = {
        'MORPHDICT_ENVIRONMENT': 'test',
        'MORPHDICT_PROVIDER': 'filesystem',
        'MORPHDICT_RESOURCE_DIR': str(temp_dir / 'resources'),
        'MORPHDICT_STRICT_DECOMPRESSION': 'false',
        'MORPHDICT_COMPRESS_ALGORITHM': 'zlib',
        'MORPHDICT_LOG_LEVEL': 'debug',
        'MORPHDICT_LOG_CONSOLE': 'false',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# SAMPLE DATA FIXTURES
# ==============================================================================

@pytest.fixture
def raw_artifacts():
    """All seven artifacts, uncompressed."""
    return build_artifacts()


@pytest.fixture
def compressed_artifacts(raw_artifacts):
    """All seven artifacts wrapped in deflate containers."""
    return compress_artifacts(raw_artifacts)


@pytest.fixture
def metadata_bytes():
    return build_metadata()


@pytest.fixture
def resource_dir(temp_dir, raw_artifacts):
    """Resource directory holding raw artifacts."""
    return write_resource_dir(temp_dir / 'resources', raw_artifacts)


@pytest.fixture
def compressed_resource_dir(temp_dir, compressed_artifacts):
    """Resource directory holding compressed artifacts."""
    return write_resource_dir(temp_dir / 'compressed', compressed_artifacts)


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

@pytest.fixture
def make_config():
    """Factory for mock ConfigLoader objects with the given values."""
    def make(**values):
        config = MagicMock()
        config.get.side_effect = lambda key, default=None: values.get(key, default)
        return config
    return make


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def capture_logs():
    """Capture log output for testing."""
    import logging
    from io import StringIO

    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    previous_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    yield log_capture

    root_logger.removeHandler(handler)
    root_logger.setLevel(previous_level)


@pytest.fixture
def reset_singletons():
    """Reset singleton instances between tests."""
    from morphdict.config_loader import ConfigLoader
    from morphdict.process.loader import reset_default_loader

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
    reset_default_loader()

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
    reset_default_loader()
