# Path: morphdict/models/dictionary.py
"""
Dictionary Aggregate

The fully assembled dictionary handed to callers. Instances are only
built by DictionaryAssembler once every component has parsed, and are
immutable afterwards; they hold no reference back to the loader.
"""

from dataclasses import dataclass

from .character_definition import CharacterDefinition
from .connection_cost_matrix import ConnectionCostMatrix
from .metadata import Metadata
from .prefix_dictionary import PrefixDictionary
from .unknown_dictionary import UnknownDictionary


@dataclass(frozen=True)
class Dictionary:
    """
    Attributes:
        prefix_dictionary: Word index
        connection_cost_matrix: Context transition costs
        character_definition: Character category table
        unknown_dictionary: Unknown-word entries
        metadata: Build metadata
    """
    prefix_dictionary: PrefixDictionary
    connection_cost_matrix: ConnectionCostMatrix
    character_definition: CharacterDefinition
    unknown_dictionary: UnknownDictionary
    metadata: Metadata

    @property
    def name(self) -> str:
        return self.metadata.name


__all__ = ['Dictionary']
