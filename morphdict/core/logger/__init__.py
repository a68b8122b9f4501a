# Path: morphdict/core/logger/__init__.py
"""
morphdict Logger Package

IPO-aware logging for the dictionary loader.

Provides separate log streams for:
- INPUT layer (resource providers)
- PROCESS layer (resolution, caching, assembly)
- OUTPUT layer (bundle packaging, reports)
"""

from .ipo_logging import (
    IPOFilter,
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'IPOFilter',
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
