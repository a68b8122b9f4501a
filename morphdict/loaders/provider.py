# Path: morphdict/loaders/provider.py
"""
Resource Provider Base

BLIND byte suppliers for dictionary artifacts. A provider knows where
the bytes live; it does not know whether they are compressed or what
they mean. Resolution and parsing happen in the process layer.

Every provider applies the same empty-artifact policy: a zero-length
artifact is an EmptyArtifactError unless the provider was created with
allow_empty=True (the placeholder build with embedding disabled).
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Optional

from ..constants import ARTIFACT_ORDER, METADATA_ENCODING, METADATA_FILENAME, ArtifactKind
from ..core.logger import get_input_logger
from ..models.error import EmptyArtifactError, MissingArtifactError


class ResourceProvider(ABC):
    """
    Supplies raw artifact bytes.

    Subclasses implement _read_artifact() and _read_metadata().
    """

    logger_name = 'provider'

    def __init__(self, allow_empty: bool = False):
        """
        Args:
            allow_empty: Accept zero-length artifacts instead of raising
        """
        self.allow_empty = allow_empty
        self.logger = get_input_logger(self.logger_name)

    def read(self, kind: ArtifactKind) -> bytes:
        """
        Read raw bytes of one artifact.

        Raises:
            MissingArtifactError: Artifact is absent
            EmptyArtifactError: Artifact is empty and allow_empty is False
        """
        data = self._read_artifact(kind)
        if not data and not self.allow_empty:
            raise EmptyArtifactError(
                f"zero-length artifact from {self.describe()}", kind.filename
            )
        self.logger.debug(f"Read {kind.filename}: {len(data)} bytes")
        return data

    def read_metadata(self) -> bytes:
        """
        Read raw metadata.json bytes.

        Raises:
            MissingArtifactError: Metadata is absent
            EmptyArtifactError: Metadata is empty and allow_empty is False
        """
        data = self._read_metadata()
        if not data and not self.allow_empty:
            raise EmptyArtifactError(
                f"zero-length metadata from {self.describe()}", METADATA_FILENAME
            )
        return data

    def read_all(self) -> dict[ArtifactKind, bytes]:
        return {kind: self.read(kind) for kind in ARTIFACT_ORDER}

    @abstractmethod
    def _read_artifact(self, kind: ArtifactKind) -> bytes:
        ...

    @abstractmethod
    def _read_metadata(self) -> bytes:
        ...

    @abstractmethod
    def describe(self) -> str:
        """Short description of the byte source for logs and errors."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()})"


class MemoryProvider(ResourceProvider):
    """
    Serves artifacts held in memory.

    Example:
        provider = MemoryProvider(
            {ArtifactKind.UNKNOWN: unk_bytes, ...},
            metadata=b'{"name": "ipadic"}',
        )
    """

    logger_name = 'memory_provider'

    def __init__(
        self,
        artifacts: Mapping[ArtifactKind, bytes],
        metadata: Optional[bytes],
        allow_empty: bool = False,
    ):
        super().__init__(allow_empty=allow_empty)
        self._artifacts = {ArtifactKind(k): bytes(v) for k, v in artifacts.items()}
        self._metadata = None if metadata is None else bytes(metadata)

    def _read_artifact(self, kind: ArtifactKind) -> bytes:
        try:
            return self._artifacts[kind]
        except KeyError:
            raise MissingArtifactError('not present in memory provider', kind.filename) from None

    def _read_metadata(self) -> bytes:
        if self._metadata is None:
            raise MissingArtifactError('not present in memory provider', METADATA_FILENAME)
        return self._metadata

    def describe(self) -> str:
        return f"memory ({len(self._artifacts)} artifacts)"


PLACEHOLDER_NAME = 'placeholder'


class PlaceholderProvider(ResourceProvider):
    """
    Zero-length artifacts with a minimal metadata record.

    Models a build where resource embedding was disabled. Loading
    through it always fails when the character definition is parsed.
    """

    logger_name = 'placeholder_provider'

    def __init__(self):
        super().__init__(allow_empty=True)
        self.logger.warning('Placeholder provider in use: all artifacts are empty')

    def _read_artifact(self, kind: ArtifactKind) -> bytes:
        return b''

    def _read_metadata(self) -> bytes:
        return json.dumps({'name': PLACEHOLDER_NAME}).encode(METADATA_ENCODING)

    def describe(self) -> str:
        return 'placeholder (embedding disabled)'


__all__ = ['ResourceProvider', 'MemoryProvider', 'PlaceholderProvider']
