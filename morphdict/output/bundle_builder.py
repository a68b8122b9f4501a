# Path: morphdict/output/bundle_builder.py
"""
Bundle Builder

Build-time packaging step. Collects the seven artifacts and the
metadata record from a resource directory, wraps each artifact in a
compressed container, and writes a single resource bundle that
BundleProvider can serve at runtime.

Bundle layout (zip, members stored without zip compression):
    char_def.bin, matrix.mtx, dict.da, dict.vals,
    unk.bin, dict.wordsidx, dict.words   (containers, or raw with 'none')
    metadata.json                        (always raw)
    manifest.yaml                        (format version, sizes, sha256)

Member timestamps are fixed. The manifest created_at comes from the
created_at argument or SOURCE_DATE_EPOCH when either is set, and builds
with a fixed created_at are byte-identical. Otherwise it is the current time.

Example:
    builder = BundleBuilder(Path('build/ipadic'), algorithm='deflate')
    manifest = builder.build(Path('dist/ipadic.mdbundle'))
"""

import hashlib
import os
import zipfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from ..constants import (
    ARTIFACT_ORDER,
    BUNDLE_FORMAT_VERSION,
    BUNDLE_MANIFEST_FILENAME,
    DEFAULT_COMPRESSION_LEVEL,
    METADATA_FILENAME,
    NO_COMPRESSION,
    CompressionAlgorithm,
)
from ..core.logger import get_output_logger
from ..loaders import FilesystemProvider
from ..models.metadata import Metadata
from ..process.compression import encode

ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


def build_timestamp() -> str:
    """
    Manifest creation time as ISO 8601 UTC.

    Uses SOURCE_DATE_EPOCH (seconds since the Unix epoch) when set,
    the current time otherwise.

    Raises:
        ValueError: If SOURCE_DATE_EPOCH is not an integer
    """
    epoch = os.getenv('SOURCE_DATE_EPOCH', '').strip()
    if not epoch:
        moment = datetime.now(timezone.utc)
    else:
        try:
            moment = datetime.fromtimestamp(int(epoch), tz=timezone.utc)
        except ValueError:
            raise ValueError(f"SOURCE_DATE_EPOCH must be an integer, got {epoch!r}") from None
    return moment.isoformat(timespec='seconds')


@dataclass
class BundleMember:
    """
    Manifest record of one bundle member.

    Attributes:
        name: Member file name
        size: Size of the original artifact
        stored_size: Size as written into the bundle
        sha256: Digest of the stored bytes
        compressed: Whether the member is a compressed container
    """
    name: str
    size: int
    stored_size: int
    sha256: str
    compressed: bool

    def to_dict(self) -> dict:
        return {
            'size': self.size,
            'stored_size': self.stored_size,
            'sha256': self.sha256,
            'compressed': self.compressed,
        }


@dataclass
class BundleManifest:
    dictionary_name: str
    algorithm: str
    members: list[BundleMember] = field(default_factory=list)
    format_version: int = BUNDLE_FORMAT_VERSION
    created_at: str = field(default_factory=build_timestamp)

    @property
    def total_size(self) -> int:
        return sum(m.size for m in self.members)

    @property
    def total_stored_size(self) -> int:
        return sum(m.stored_size for m in self.members)

    def to_dict(self) -> dict:
        return {
            'format_version': self.format_version,
            'dictionary_name': self.dictionary_name,
            'algorithm': self.algorithm,
            'created_at': self.created_at,
            'members': {m.name: m.to_dict() for m in self.members},
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)


class BundleBuilder:
    """
    Package a resource directory into a bundle.

    Reading goes through FilesystemProvider, so missing or empty
    artifacts fail the build instead of producing a degenerate bundle.
    """

    def __init__(
        self,
        source_dir: Path,
        algorithm: str = 'deflate',
        level: int = DEFAULT_COMPRESSION_LEVEL,
        created_at: Optional[str] = None,
    ):
        """
        Args:
            source_dir: Directory holding raw artifacts and metadata.json
            algorithm: deflate, zlib, gzip, raw, or none (no container)
            level: Compression level 0-9
            created_at: Fixed manifest timestamp (default: build_timestamp())

        Raises:
            ValueError: If the algorithm name is unknown
        """
        self.logger = get_output_logger('bundle_builder')
        self.provider = FilesystemProvider(Path(source_dir))
        self.level = level
        self.created_at = created_at
        self.algorithm_name = algorithm.strip().lower()
        self.algorithm: Optional[CompressionAlgorithm] = (
            None if self.algorithm_name == NO_COMPRESSION
            else CompressionAlgorithm.from_name(self.algorithm_name)
        )

    def build(self, output_path: Path) -> BundleManifest:
        """
        Write the bundle.

        Args:
            output_path: Bundle file to create (parent directories are created)

        Returns:
            Manifest describing what was written

        Raises:
            LoadError: If an artifact is missing/empty or metadata is invalid
            ValueError: If SOURCE_DATE_EPOCH is set but not an integer
        """
        output_path = Path(output_path)

        metadata_bytes = self.provider.read_metadata()
        metadata = Metadata.load(metadata_bytes)
        manifest = BundleManifest(
            dictionary_name=metadata.name,
            algorithm=self.algorithm_name,
            created_at=self.created_at or build_timestamp(),
        )

        members: list[tuple[str, bytes]] = []
        for kind in ARTIFACT_ORDER:
            raw = self.provider.read(kind)
            stored = raw if self.algorithm is None else encode(raw, self.algorithm, self.level)
            members.append((kind.filename, stored))
            manifest.members.append(self._describe(kind.filename, raw, stored, self.algorithm is not None))
            self.logger.debug(f"Packed {kind.filename}: {len(raw)} -> {len(stored)} bytes")

        members.append((METADATA_FILENAME, metadata_bytes))
        manifest.members.append(self._describe(METADATA_FILENAME, metadata_bytes, metadata_bytes, False))

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(output_path, 'w', compression=zipfile.ZIP_STORED) as archive:
            for name, data in members:
                archive.writestr(zipfile.ZipInfo(name, date_time=ZIP_EPOCH), data)
            archive.writestr(
                zipfile.ZipInfo(BUNDLE_MANIFEST_FILENAME, date_time=ZIP_EPOCH),
                manifest.to_yaml(),
            )

        self.logger.info(
            f"Bundle written: {output_path} ({metadata.name}, {self.algorithm_name}, "
            f"{manifest.total_size} -> {manifest.total_stored_size} bytes)"
        )
        return manifest

    @staticmethod
    def _describe(name: str, raw: bytes, stored: bytes, compressed: bool) -> BundleMember:
        return BundleMember(
            name=name,
            size=len(raw),
            stored_size=len(stored),
            sha256=hashlib.sha256(stored).hexdigest(),
            compressed=compressed,
        )


__all__ = ['BundleBuilder', 'BundleManifest', 'BundleMember', 'build_timestamp']
