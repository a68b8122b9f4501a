# Path: morphdict/core/__init__.py
"""
morphdict Core Package

Core utilities for the dictionary loader.

Submodules:
    - logger: IPO-aware logging system
    - memory: Process memory snapshots for profiling loads
"""

from .memory import MemorySnapshot, take_snapshot

__all__ = [
    'MemorySnapshot',
    'take_snapshot',
]
