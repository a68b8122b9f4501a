# Path: morphdict/process/compression/__init__.py
"""
Compressed container codec.
"""

from .container import (
    CompressedContainer,
    align_up,
    aligned_copy,
    compress,
    decompress,
    encode,
)

__all__ = [
    'CompressedContainer',
    'align_up',
    'aligned_copy',
    'compress',
    'decompress',
    'encode',
]
