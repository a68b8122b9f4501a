# Path: morphdict/process/resolver.py
"""
Payload Resolver

Turns an artifact blob into its usable bytes: decompresses it when it
is a compressed container, passes it through otherwise.

Fallback policy:
    1. Not a container           -> return the input unchanged
    2. Container, corrupt stream -> return the input unchanged (warning logged)
    3. Container, good stream    -> return the decompressed payload

With strict=True, case 2 raises DecompressionError instead.

The same loader code therefore serves bundles built with and without
compression.
"""

import threading
from dataclasses import dataclass
from typing import Optional

from ..core.logger import get_process_logger
from ..models.error import ContainerFormatError, DecompressionError
from .compression.container import CompressedContainer, decompress


@dataclass(frozen=True)
class ResolverStats:
    """
    Counters since the resolver was created.

    Attributes:
        resolve_calls: Calls to resolve()
        decompressions: Containers successfully decompressed
        passthroughs: Inputs that were not containers
        fallbacks: Containers whose payload failed to decompress
    """
    resolve_calls: int = 0
    decompressions: int = 0
    passthroughs: int = 0
    fallbacks: int = 0


class PayloadResolver:
    """
    Resolve artifact bytes, decompressing self-describing containers.

    Example:
        resolver = PayloadResolver()
        data = resolver.resolve(blob)
        print(resolver.stats.decompressions)
    """

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise DecompressionError for corrupt containers instead
                of falling back to the raw bytes
        """
        self.strict = strict
        self.logger = get_process_logger('resolver')
        self._stats_lock = threading.Lock()
        self._resolve_calls = 0
        self._decompressions = 0
        self._passthroughs = 0
        self._fallbacks = 0

    def resolve(self, data: bytes, artifact: Optional[str] = None) -> bytes:
        """
        Resolve one artifact blob.

        Args:
            data: Raw artifact bytes from a provider
            artifact: Artifact file name, used in log messages only

        Returns:
            Decompressed payload, or data unchanged

        Raises:
            DecompressionError: Only in strict mode, for a corrupt container
        """
        data = bytes(data)
        label = artifact or '<artifact>'
        self._count('_resolve_calls')

        try:
            container = CompressedContainer.from_bytes(data)
        except ContainerFormatError as e:
            self.logger.debug(f"{label}: not a compressed container ({e}), using raw bytes")
            self._count('_passthroughs')
            return data

        try:
            resolved = decompress(container)
        except DecompressionError as e:
            if self.strict:
                self.logger.error(f"{label}: corrupt compressed container: {e.message}")
                raise DecompressionError(e.message, artifact) from e
            self.logger.warning(
                f"{label}: decompression failed ({e.message}), falling back to raw bytes"
            )
            self._count('_fallbacks')
            return data

        self._count('_decompressions')
        self.logger.debug(
            f"{label}: decompressed {len(data)} -> {len(resolved)} bytes "
            f"({container.algorithm.name.lower()})"
        )
        return resolved

    @property
    def stats(self) -> ResolverStats:
        with self._stats_lock:
            return ResolverStats(
                resolve_calls=self._resolve_calls,
                decompressions=self._decompressions,
                passthroughs=self._passthroughs,
                fallbacks=self._fallbacks,
            )

    def _count(self, counter: str) -> None:
        with self._stats_lock:
            setattr(self, counter, getattr(self, counter) + 1)


def resolve(data: bytes) -> bytes:
    """Resolve with the default lenient policy."""
    return PayloadResolver().resolve(data)


__all__ = ['PayloadResolver', 'ResolverStats', 'resolve']
