# Path: morphdict/models/__init__.py
"""
morphdict Models Package

Dictionary components and the error taxonomy.

Each component owns its byte layout and exposes a load(bytes)
classmethod. PrefixDictionary and ConnectionCostMatrix never fail;
Metadata, CharacterDefinition and UnknownDictionary raise their own
LoadError subclass.
"""

from .error import (
    LoadError,
    MetadataParseError,
    CharacterDefinitionParseError,
    UnknownDictionaryParseError,
    DecompressionError,
    ContainerFormatError,
    ResourceProviderError,
    MissingArtifactError,
    EmptyArtifactError,
    BundleIntegrityError,
)
from .metadata import Metadata, Schema
from .prefix_dictionary import PrefixDictionary, WordEntry
from .connection_cost_matrix import ConnectionCostMatrix
from .character_definition import CharacterDefinition, CategoryData, CharacterRange
from .unknown_dictionary import UnknownDictionary, UnknownEntry
from .dictionary import Dictionary

__all__ = [
    # Errors
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

    # Components
    'Metadata',
    'Schema',
    'PrefixDictionary',
    'WordEntry',
    'ConnectionCostMatrix',
    'CharacterDefinition',
    'CategoryData',
    'CharacterRange',
    'UnknownDictionary',
    'UnknownEntry',
    'Dictionary',
]
