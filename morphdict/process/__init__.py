# Path: morphdict/process/__init__.py
"""
morphdict Process Package

Resolution and assembly (PROCESS layer).

Submodules:
    - compression: compressed container codec
    - resolver: container detection with raw-bytes fallback
    - cache: compute-once cells per artifact
    - assembler: builds the Dictionary aggregate
    - loader: cached and ephemeral load paths
"""

from .resolver import PayloadResolver, ResolverStats
from .cache import OnceCell, ArtifactCache
from .assembler import DictionaryAssembler, ResolvedArtifacts
from .loader import (
    DictionaryLoader,
    build_loader,
    get_default_loader,
    reset_default_loader,
    load,
    load_temporary,
)

__all__ = [
    'PayloadResolver',
    'ResolverStats',
    'OnceCell',
    'ArtifactCache',
    'DictionaryAssembler',
    'ResolvedArtifacts',
    'DictionaryLoader',
    'build_loader',
    'get_default_loader',
    'reset_default_loader',
    'load',
    'load_temporary',
]
