# Path: morphdict/loaders/bundle_provider.py
"""
Bundle Provider

Reads artifacts from a resource bundle produced by BundleBuilder: a
zip archive of stored (not zip-compressed) members plus manifest.yaml
recording each member's size and sha256.

The bundle may live on disk or ship as package data. from_package()
keeps the bundle bytes resident in memory, which is the embedded
resource source.
"""

import hashlib
import io
import zipfile
import zlib
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..constants import BUNDLE_FORMAT_VERSION, BUNDLE_MANIFEST_FILENAME, METADATA_FILENAME, ArtifactKind
from ..models.error import BundleIntegrityError, MissingArtifactError
from .provider import ResourceProvider


class BundleProvider(ResourceProvider):
    """
    Example:
        provider = BundleProvider(Path('ipadic.mdbundle'))
        raw = provider.read(ArtifactKind.TRIE_INDEX)

        embedded = BundleProvider.from_package('my_dicts', 'ipadic.mdbundle')
    """

    logger_name = 'bundle_provider'

    def __init__(
        self,
        source: Union[Path, bytes],
        allow_empty: bool = False,
        verify_checksums: bool = True,
        label: Optional[str] = None,
    ):
        """
        Args:
            source: Bundle file path, or the bundle's bytes
            allow_empty: Accept zero-length artifacts
            verify_checksums: Check each member against its manifest sha256
            label: Name used in logs when source is bytes

        Raises:
            ValueError: If no source is given
            BundleIntegrityError: If the bundle or its manifest is unreadable
        """
        super().__init__(allow_empty=allow_empty)
        if source is None or (isinstance(source, (str, Path)) and not str(source)):
            raise ValueError(
                "Bundle path not configured. Check MORPHDICT_BUNDLE_PATH in .env"
            )

        if isinstance(source, (bytes, bytearray, memoryview)):
            self._path: Optional[Path] = None
            self._data: Optional[bytes] = bytes(source)
            self._label = label or f"embedded bundle ({len(self._data)} bytes)"
        else:
            self._path = Path(source)
            self._data = None
            self._label = label or str(self._path)

        self.verify_checksums = verify_checksums
        self.manifest = self._load_manifest()
        self.logger.info(
            f"BundleProvider initialized: {self._label} "
            f"({self.manifest.get('dictionary_name', 'unknown')}, "
            f"algorithm={self.manifest.get('algorithm', 'unknown')})"
        )

    @classmethod
    def from_package(
        cls,
        package: str,
        resource: str,
        allow_empty: bool = False,
        verify_checksums: bool = True,
    ) -> 'BundleProvider':
        """
        Open a bundle shipped as package data.

        Raises:
            MissingArtifactError: If the resource does not exist in the package
        """
        try:
            data = resources.files(package).joinpath(resource).read_bytes()
        except (FileNotFoundError, ModuleNotFoundError) as e:
            raise MissingArtifactError(f"package resource {package}/{resource}: {e}", resource) from e
        return cls(
            data,
            allow_empty=allow_empty,
            verify_checksums=verify_checksums,
            label=f"package:{package}/{resource}",
        )

    def _open(self) -> zipfile.ZipFile:
        try:
            if self._data is not None:
                return zipfile.ZipFile(io.BytesIO(self._data))
            return zipfile.ZipFile(self._path)
        except FileNotFoundError:
            raise MissingArtifactError(f"bundle not found: {self._label}") from None
        except (zipfile.BadZipFile, OSError) as e:
            raise BundleIntegrityError(f"unreadable bundle {self._label}: {e}") from e

    def _load_manifest(self) -> dict[str, Any]:
        with self._open() as archive:
            try:
                raw = archive.read(BUNDLE_MANIFEST_FILENAME)
            except KeyError:
                raise BundleIntegrityError(
                    f"no {BUNDLE_MANIFEST_FILENAME} in {self._label}"
                ) from None
            except (zipfile.BadZipFile, zlib.error, EOFError, OSError) as e:
                raise BundleIntegrityError(
                    f"corrupt member in {self._label}: {e}", BUNDLE_MANIFEST_FILENAME
                ) from e

        try:
            manifest = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise BundleIntegrityError(f"invalid manifest: {e}", BUNDLE_MANIFEST_FILENAME) from e

        if not isinstance(manifest, dict) or not isinstance(manifest.get('members'), dict):
            raise BundleIntegrityError('manifest has no members table', BUNDLE_MANIFEST_FILENAME)

        version = manifest.get('format_version')
        if version != BUNDLE_FORMAT_VERSION:
            raise BundleIntegrityError(
                f"unsupported bundle format version {version!r}", BUNDLE_MANIFEST_FILENAME
            )
        return manifest

    def _read_member(self, name: str) -> bytes:
        entry = self.manifest['members'].get(name)
        if entry is None:
            raise MissingArtifactError(f"not listed in manifest of {self._label}", name)

        with self._open() as archive:
            try:
                data = archive.read(name)
            except KeyError:
                raise MissingArtifactError(f"listed but absent from {self._label}", name) from None
            except (zipfile.BadZipFile, zlib.error, EOFError, OSError) as e:
                # Bad CRC, broken local header or undecodable deflate stream
                raise BundleIntegrityError(f"corrupt member in {self._label}: {e}", name) from e

        if self.verify_checksums:
            digest = hashlib.sha256(data).hexdigest()
            if digest != entry.get('sha256'):
                raise BundleIntegrityError(
                    f"sha256 mismatch (manifest {entry.get('sha256')}, actual {digest})", name
                )
        return data

    def _read_artifact(self, kind: ArtifactKind) -> bytes:
        return self._read_member(kind.filename)

    def _read_metadata(self) -> bytes:
        return self._read_member(METADATA_FILENAME)

    def describe(self) -> str:
        return self._label


__all__ = ['BundleProvider']
