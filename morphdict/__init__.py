# Path: morphdict/__init__.py
"""
morphdict - Dictionary resource loader for morphological analysis

Resolves the binary artifacts of a morphological dictionary (raw or
wrapped in compressed containers) and assembles them into a
Dictionary, either memoized per process or freshly on every call.

Example:
    from morphdict import DictionaryLoader, FilesystemProvider

    loader = DictionaryLoader(FilesystemProvider(Path('/opt/dict/ipadic')))
    dictionary = loader.load()            # resolved bytes cached
    scratch = loader.load_temporary()     # nothing retained
"""

from .constants import ArtifactKind, CompressionAlgorithm
from .models import (
    Dictionary,
    Metadata,
    LoadError,
    MetadataParseError,
    CharacterDefinitionParseError,
    UnknownDictionaryParseError,
    DecompressionError,
    ResourceProviderError,
    MissingArtifactError,
    EmptyArtifactError,
    BundleIntegrityError,
)
from .loaders import (
    ResourceProvider,
    MemoryProvider,
    PlaceholderProvider,
    FilesystemProvider,
    BundleProvider,
    create_provider,
)
from .process import (
    PayloadResolver,
    DictionaryAssembler,
    DictionaryLoader,
    load,
    load_temporary,
)
from .output import BundleBuilder

__version__ = '0.3.0'

__all__ = [
    'ArtifactKind',
    'CompressionAlgorithm',
    'Dictionary',
    'Metadata',
    'LoadError',
    'MetadataParseError',
    'CharacterDefinitionParseError',
    'UnknownDictionaryParseError',
    'DecompressionError',
    'ResourceProviderError',
    'MissingArtifactError',
    'EmptyArtifactError',
    'BundleIntegrityError',
    'ResourceProvider',
    'MemoryProvider',
    'PlaceholderProvider',
    'FilesystemProvider',
    'BundleProvider',
    'create_provider',
    'PayloadResolver',
    'DictionaryAssembler',
    'DictionaryLoader',
    'load',
    'load_temporary',
    'BundleBuilder',
]
