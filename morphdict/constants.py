# Path: morphdict/constants.py
"""
System-Wide Constants for morphdict

Central repository for constant values used across the loader.

Constants are organized by category:
- Artifact Kinds
- Compressed Container Layout
- Compression Algorithms
- Provider Types
- Status Codes
"""

from enum import Enum, IntEnum
from typing import Final


# ==============================================================================
# ARTIFACT KINDS
# ==============================================================================

class ArtifactKind(str, Enum):
    """
    The seven binary artifacts backing a dictionary.

    Values are the artifact file names inside a resource directory
    or bundle. Metadata is deliberately NOT a member: it is never
    compressed and is read through its own path.
    """
    CHAR_DEFINITION = 'char_def.bin'
    CONNECTION_COST = 'matrix.mtx'
    TRIE_INDEX = 'dict.da'
    TRIE_VALUES = 'dict.vals'
    UNKNOWN = 'unk.bin'
    WORD_INDEX = 'dict.wordsidx'
    WORD_SURFACES = 'dict.words'

    @property
    def filename(self) -> str:
        return self.value


METADATA_FILENAME: Final[str] = 'metadata.json'
METADATA_ENCODING: Final[str] = 'utf-8'

# Order in which artifacts are resolved and reported
ARTIFACT_ORDER: Final[tuple[ArtifactKind, ...]] = (
    ArtifactKind.CHAR_DEFINITION,
    ArtifactKind.CONNECTION_COST,
    ArtifactKind.TRIE_INDEX,
    ArtifactKind.TRIE_VALUES,
    ArtifactKind.UNKNOWN,
    ArtifactKind.WORD_INDEX,
    ArtifactKind.WORD_SURFACES,
)


# ==============================================================================
# COMPRESSED CONTAINER LAYOUT
# ==============================================================================

CONTAINER_MAGIC: Final[bytes] = b'MDCC'
CONTAINER_VERSION: Final[int] = 1

# Buffers must be 16-byte aligned before the header is parsed
CONTAINER_ALIGNMENT: Final[int] = 16

# magic(4) version(1) algorithm(1) reserved(2) payload_length(8)
CONTAINER_HEADER_FORMAT: Final[str] = '<4sBBHQ'
CONTAINER_HEADER_SIZE: Final[int] = 16


# ==============================================================================
# COMPRESSION ALGORITHMS
# ==============================================================================

class CompressionAlgorithm(IntEnum):
    """Algorithm tag stored in byte 5 of a container header."""
    DEFLATE = 0
    ZLIB = 1
    GZIP = 2
    RAW = 3

    @classmethod
    def from_name(cls, name: str) -> 'CompressionAlgorithm':
        """
        Look up an algorithm by case-insensitive name.

        Raises:
            ValueError: If the name is not a known algorithm
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ', '.join(a.name.lower() for a in cls)
            raise ValueError(
                f"Unknown compression algorithm: {name!r} (expected one of {valid})"
            ) from None


# Packaging option meaning "store artifacts without a container"
NO_COMPRESSION: Final[str] = 'none'

# zlib.decompressobj wbits per algorithm
DEFLATE_WBITS: Final[int] = -15
ZLIB_WBITS: Final[int] = 15
GZIP_WBITS: Final[int] = 31

DEFAULT_COMPRESSION_LEVEL: Final[int] = 6


# ==============================================================================
# PROVIDER TYPES
# ==============================================================================

class ProviderType(str, Enum):
    """Resource provider selected by MORPHDICT_PROVIDER."""
    FILESYSTEM = 'filesystem'
    BUNDLE = 'bundle'
    PLACEHOLDER = 'placeholder'


# ==============================================================================
# BUNDLE LAYOUT
# ==============================================================================

BUNDLE_MANIFEST_FILENAME: Final[str] = 'manifest.yaml'
BUNDLE_FORMAT_VERSION: Final[int] = 1
BUNDLE_EXTENSION: Final[str] = '.mdbundle'


# ==============================================================================
# STATUS CODES (console output)
# ==============================================================================

STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_INFO: Final[str] = '[INFO]'
STATUS_WARN: Final[str] = '[WARN]'

EXIT_OK: Final[int] = 0
EXIT_LOAD_FAILURE: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2

MENU_SEPARATOR: Final[str] = '-' * 60


__all__ = [
    'ArtifactKind',
    'METADATA_FILENAME',
    'METADATA_ENCODING',
    'ARTIFACT_ORDER',
    'CONTAINER_MAGIC',
    'CONTAINER_VERSION',
    'CONTAINER_ALIGNMENT',
    'CONTAINER_HEADER_FORMAT',
    'CONTAINER_HEADER_SIZE',
    'CompressionAlgorithm',
    'NO_COMPRESSION',
    'DEFLATE_WBITS',
    'ZLIB_WBITS',
    'GZIP_WBITS',
    'DEFAULT_COMPRESSION_LEVEL',
    'ProviderType',
    'BUNDLE_MANIFEST_FILENAME',
    'BUNDLE_FORMAT_VERSION',
    'BUNDLE_EXTENSION',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_INFO',
    'STATUS_WARN',
    'EXIT_OK',
    'EXIT_LOAD_FAILURE',
    'EXIT_CONFIG_ERROR',
    'MENU_SEPARATOR',
]
