# Path: morphdict/models/error.py
"""
Error Handling System

Load error taxonomy for dictionary resolution and assembly.

Every failure a caller can observe from load() or load_temporary()
is a LoadError. Each structural parse error names the artifact whose
own encoding was rejected.

Hierarchy:
    LoadError
    ├── MetadataParseError
    ├── CharacterDefinitionParseError
    ├── UnknownDictionaryParseError
    ├── DecompressionError          (strict resolution only)
    └── ResourceProviderError
        ├── MissingArtifactError
        ├── EmptyArtifactError
        └── BundleIntegrityError

ContainerFormatError is internal to the resolver: it only means
"these bytes are not a compressed container" and never escapes.
"""

from typing import Optional


class LoadError(Exception):
    """
    Base class for dictionary load failures.

    Attributes:
        message: Human-readable description
        artifact: File name of the artifact involved, if any
    """

    def __init__(self, message: str, artifact: Optional[str] = None):
        self.message = message
        self.artifact = artifact
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.artifact:
            return f"{self.artifact}: {self.message}"
        return self.message


# ==============================================================================
# STRUCTURAL PARSE ERRORS
# ==============================================================================

class MetadataParseError(LoadError):
    """Metadata record is not valid JSON or fails validation."""


class CharacterDefinitionParseError(LoadError):
    """Character definition table failed its structural parse."""


class UnknownDictionaryParseError(LoadError):
    """Unknown-word table failed its structural parse."""


# ==============================================================================
# RESOLUTION ERRORS
# ==============================================================================

class DecompressionError(LoadError):
    """
    A recognized container held a corrupt or truncated payload.

    The default resolver swallows this and falls back to the raw bytes;
    it only reaches callers when strict decompression is enabled.
    """


class ContainerFormatError(ValueError):
    """Bytes are not a well-formed compressed container."""


# ==============================================================================
# PROVIDER ERRORS
# ==============================================================================

class ResourceProviderError(LoadError):
    """A resource provider could not supply an artifact."""


class MissingArtifactError(ResourceProviderError):
    """Artifact is absent from the provider's source."""


class EmptyArtifactError(ResourceProviderError):
    """Artifact is zero-length and the provider does not allow that."""


class BundleIntegrityError(ResourceProviderError):
    """Resource bundle is malformed or a member fails its checksum."""


__all__ = [
    'LoadError',
    'MetadataParseError',
    'CharacterDefinitionParseError',
    'UnknownDictionaryParseError',
    'DecompressionError',
    'ContainerFormatError',
    'ResourceProviderError',
    'MissingArtifactError',
    'EmptyArtifactError',
    'BundleIntegrityError',
]
