# Path: morphdict/core/memory.py
"""
Memory Snapshots

Measures process memory around dictionary loads so the retained cost
of the cached path can be compared with the ephemeral path.
"""

from dataclasses import dataclass, field
from datetime import datetime

import psutil

BYTES_TO_MB: float = 1024 * 1024


@dataclass
class MemorySnapshot:
    """
    Memory usage snapshot.

    Attributes:
        rss_mb: Resident set size in megabytes
        vms_mb: Virtual memory size in megabytes
        available_mb: Available system memory in MB
        timestamp: When snapshot was taken
    """
    rss_mb: float
    vms_mb: float
    available_mb: float
    timestamp: datetime = field(default_factory=datetime.now)

    def delta(self, earlier: 'MemorySnapshot') -> float:
        """RSS growth in MB since an earlier snapshot."""
        return self.rss_mb - earlier.rss_mb

    def __str__(self) -> str:
        return (
            f"Memory: {self.rss_mb:.1f}MB RSS, "
            f"{self.vms_mb:.1f}MB VMS, "
            f"{self.available_mb:.1f}MB available"
        )


def take_snapshot() -> MemorySnapshot:
    """Capture current process memory usage."""
    info = psutil.Process().memory_info()
    virtual_memory = psutil.virtual_memory()
    return MemorySnapshot(
        rss_mb=info.rss / BYTES_TO_MB,
        vms_mb=info.vms / BYTES_TO_MB,
        available_mb=virtual_memory.available / BYTES_TO_MB,
    )


__all__ = ['MemorySnapshot', 'take_snapshot']
