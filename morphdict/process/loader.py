# Path: morphdict/process/loader.py
"""
Dictionary Loader

Two ways to get a Dictionary from a resource provider:

    load()            cached: each artifact is resolved at most once per
                      loader and the resolved bytes are kept for the
                      life of the process
    load_temporary()  ephemeral: artifacts are read and resolved afresh
                      on every call; nothing is retained

Both parse metadata first, so a bad metadata record fails the load
before any artifact is read or resolved. Both run the same resolution
and assembly steps and return equal Dictionary values for the same
inputs.

Example:
    loader = DictionaryLoader(FilesystemProvider(Path('/opt/dict/ipadic')))
    dictionary = loader.load()

    # or, with the configured provider:
    from morphdict import load
    dictionary = load()
"""

import threading
from typing import Optional

from ..config_loader import ConfigLoader
from ..constants import ARTIFACT_ORDER, ArtifactKind
from ..core.logger import get_process_logger
from ..loaders import ResourceProvider, create_provider
from ..models.dictionary import Dictionary
from ..models.error import LoadError
from .assembler import DictionaryAssembler, ResolvedArtifacts
from .cache import ArtifactCache
from .resolver import PayloadResolver


class DictionaryLoader:
    """
    Loads dictionaries from one provider, with and without memoization.

    The loader owns its ArtifactCache; two loaders never share cached
    bytes, and load_temporary() never touches the cache.
    """

    def __init__(
        self,
        provider: ResourceProvider,
        resolver: Optional[PayloadResolver] = None,
        assembler: Optional[DictionaryAssembler] = None,
    ):
        """
        Args:
            provider: Source of raw artifact bytes
            resolver: Payload resolver (lenient default)
            assembler: Dictionary assembler
        """
        self.provider = provider
        self.resolver = resolver or PayloadResolver()
        self.assembler = assembler or DictionaryAssembler()
        self.cache = ArtifactCache()
        self.logger = get_process_logger('loader')

    def load(self) -> Dictionary:
        """
        Load using memoized resolved artifacts.

        Raises:
            LoadError: First provider, resolution or parse failure
        """
        try:
            metadata = self.assembler.parse_metadata(self.provider.read_metadata())
            resolved = ResolvedArtifacts.from_mapping(
                {kind: self._cached(kind) for kind in ARTIFACT_ORDER}
            )
            dictionary = self.assembler.assemble(resolved, metadata)
        except LoadError as e:
            self.logger.error(f"Dictionary load failed ({self.provider.describe()}): {e}")
            raise

        self.logger.info(
            f"Loaded dictionary {dictionary.name} from {self.provider.describe()} "
            f"({self.cache.cached_bytes} resolved bytes cached)"
        )
        return dictionary

    def load_temporary(self) -> Dictionary:
        """
        Load without caching: every call re-reads and re-resolves.

        Raises:
            LoadError: First provider, resolution or parse failure
        """
        try:
            metadata = self.assembler.parse_metadata(self.provider.read_metadata())
            resolved = ResolvedArtifacts.from_mapping(
                {kind: self._fresh(kind) for kind in ARTIFACT_ORDER}
            )
            dictionary = self.assembler.assemble(resolved, metadata)
        except LoadError as e:
            self.logger.error(
                f"Temporary dictionary load failed ({self.provider.describe()}): {e}"
            )
            raise

        self.logger.info(f"Loaded temporary dictionary {dictionary.name}")
        return dictionary

    def _fresh(self, kind: ArtifactKind) -> bytes:
        return self.resolver.resolve(self.provider.read(kind), kind.filename)

    def _cached(self, kind: ArtifactKind) -> bytes:
        return self.cache.get(kind, lambda: self._fresh(kind))

    def __repr__(self) -> str:
        return f"DictionaryLoader({self.provider!r})"


# ==============================================================================
# PROCESS-WIDE DEFAULT LOADER
# ==============================================================================

_default_loader: Optional[DictionaryLoader] = None
_default_loader_lock = threading.Lock()


def build_loader(config) -> DictionaryLoader:
    """
    Build a loader from configuration.

    Args:
        config: ConfigLoader (or anything with get(key, default))
    """
    return DictionaryLoader(
        create_provider(config),
        resolver=PayloadResolver(strict=config.get('strict_decompression', False)),
    )


def get_default_loader() -> DictionaryLoader:
    """The configured loader, created once per process."""
    global _default_loader

    if _default_loader is None:
        with _default_loader_lock:
            if _default_loader is None:
                _default_loader = build_loader(ConfigLoader())
    return _default_loader


def reset_default_loader() -> None:
    """Forget the process-wide loader (tests only)."""
    global _default_loader
    with _default_loader_lock:
        _default_loader = None


def load() -> Dictionary:
    """Load the configured dictionary through the memoized path."""
    return get_default_loader().load()


def load_temporary() -> Dictionary:
    """Load the configured dictionary without memoization."""
    return get_default_loader().load_temporary()


__all__ = [
    'DictionaryLoader',
    'build_loader',
    'get_default_loader',
    'reset_default_loader',
    'load',
    'load_temporary',
]
