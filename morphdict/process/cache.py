# Path: morphdict/process/cache.py
"""
Memoized Artifact Cache

One compute-once cell per artifact kind. A cell runs its factory at
most once even when many threads ask for it at the same time; every
caller then receives the same bytes object.

Cells are never invalidated. reset() exists for tests.
"""

import threading
from typing import Callable, Generic, Optional, TypeVar

from ..constants import ARTIFACT_ORDER, ArtifactKind
from ..core.logger import get_process_logger

T = TypeVar('T')


class OnceCell(Generic[T]):
    """
    Single-initialization guard around a value.

    The fast path reads without locking once the value is set. The slow
    path takes the cell's lock and checks again, so the factory runs
    exactly once. If the factory raises, the cell stays empty and the
    next caller retries.
    """

    def __init__(self, name: str = ''):
        self.name = name
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._initialized = False

    def get_or_init(self, factory: Callable[[], T]) -> T:
        if self._initialized:
            return self._value

        with self._lock:
            if not self._initialized:
                self._value = factory()
                self._initialized = True
        return self._value

    def get(self) -> Optional[T]:
        """Current value, or None if not yet initialized."""
        return self._value if self._initialized else None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def reset(self) -> None:
        with self._lock:
            self._value = None
            self._initialized = False

    def __repr__(self) -> str:
        state = 'set' if self._initialized else 'empty'
        return f"OnceCell({self.name!r}, {state})"


class ArtifactCache:
    """
    Holds the resolved bytes of each artifact kind for a loader.

    Example:
        cache = ArtifactCache()
        data = cache.get(ArtifactKind.UNKNOWN, lambda: resolver.resolve(raw))
    """

    def __init__(self):
        self.logger = get_process_logger('cache')
        self._cells: dict[ArtifactKind, OnceCell[bytes]] = {
            kind: OnceCell(kind.filename) for kind in ARTIFACT_ORDER
        }

    def get(self, kind: ArtifactKind, factory: Callable[[], bytes]) -> bytes:
        cell = self._cells[kind]
        if cell.is_initialized:
            return cell.get()

        def initialize() -> bytes:
            value = factory()
            self.logger.debug(f"{kind.filename}: cached {len(value)} resolved bytes")
            return value

        return cell.get_or_init(initialize)

    def is_cached(self, kind: ArtifactKind) -> bool:
        return self._cells[kind].is_initialized

    @property
    def cached_kinds(self) -> list[ArtifactKind]:
        return [kind for kind in ARTIFACT_ORDER if self._cells[kind].is_initialized]

    @property
    def cached_bytes(self) -> int:
        return sum(len(cell.get()) for cell in self._cells.values() if cell.is_initialized)

    def reset(self) -> None:
        """Drop every cached artifact (tests only)."""
        for cell in self._cells.values():
            cell.reset()


__all__ = ['OnceCell', 'ArtifactCache']
