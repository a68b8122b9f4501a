# Path: morphdict/loaders/filesystem_provider.py
"""
Filesystem Provider

Reads artifacts from a resource directory laid out as:

    <resource_dir>/
        char_def.bin  matrix.mtx  dict.da  dict.vals
        unk.bin  dict.wordsidx  dict.words  metadata.json

Files may be raw or wrapped in compressed containers; the provider
does not look inside them.
"""

from pathlib import Path

from ..constants import METADATA_FILENAME, ArtifactKind
from ..models.error import MissingArtifactError, ResourceProviderError
from .provider import ResourceProvider


class FilesystemProvider(ResourceProvider):
    """
    Example:
        provider = FilesystemProvider(Path('/opt/dict/ipadic'))
        raw = provider.read(ArtifactKind.CONNECTION_COST)
    """

    logger_name = 'filesystem_provider'

    def __init__(self, resource_dir: Path, allow_empty: bool = False):
        """
        Args:
            resource_dir: Directory holding the artifact files
            allow_empty: Accept zero-length artifacts

        Raises:
            ValueError: If resource_dir is not configured
        """
        super().__init__(allow_empty=allow_empty)
        if not resource_dir:
            raise ValueError(
                "Resource directory not configured. "
                "Check MORPHDICT_RESOURCE_DIR in .env"
            )
        self.resource_dir = Path(resource_dir)

        if not self.resource_dir.is_dir():
            self.logger.warning(f"Resource directory not found: {self.resource_dir}")
        else:
            self.logger.info(f"FilesystemProvider initialized: {self.resource_dir}")

    def _read_artifact(self, kind: ArtifactKind) -> bytes:
        return self._read_file(kind.filename)

    def _read_metadata(self) -> bytes:
        return self._read_file(METADATA_FILENAME)

    def _read_file(self, filename: str) -> bytes:
        path = self.resource_dir / filename
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise MissingArtifactError(f"file not found: {path}", filename) from None
        except OSError as e:
            raise ResourceProviderError(f"cannot read {path}: {e}", filename) from e

    def describe(self) -> str:
        return str(self.resource_dir)


__all__ = ['FilesystemProvider']
