# Path: morphdict/process/assembler.py
"""
Dictionary Assembler

Combines the seven resolved artifacts and the metadata record into a
Dictionary. Shared by the cached and ephemeral load paths.

Order:
    1. Metadata (own JSON encoding; parse_metadata() runs before any
       artifact is read or resolved)
    2. Prefix dictionary from four tables (never fails)
    3. Connection cost matrix (never fails)
    4. Character definition (may fail)
    5. Unknown dictionary (may fail)

The first failure propagates unchanged; a Dictionary is only
constructed after every component has loaded.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from ..constants import ARTIFACT_ORDER, ArtifactKind
from ..core.logger import get_process_logger
from ..models.character_definition import CharacterDefinition
from ..models.connection_cost_matrix import ConnectionCostMatrix
from ..models.dictionary import Dictionary
from ..models.metadata import Metadata
from ..models.prefix_dictionary import PrefixDictionary
from ..models.unknown_dictionary import UnknownDictionary


@dataclass(frozen=True)
class ResolvedArtifacts:
    """Resolved bytes for all seven artifact kinds."""
    char_definition: bytes
    connection_cost: bytes
    trie_index: bytes
    trie_values: bytes
    unknown: bytes
    word_index: bytes
    word_surfaces: bytes

    @classmethod
    def from_mapping(cls, resolved: Mapping[ArtifactKind, bytes]) -> 'ResolvedArtifacts':
        """
        Raises:
            KeyError: If any artifact kind is missing
        """
        missing = [kind.filename for kind in ARTIFACT_ORDER if kind not in resolved]
        if missing:
            raise KeyError(f"missing resolved artifacts: {', '.join(missing)}")
        return cls(
            char_definition=resolved[ArtifactKind.CHAR_DEFINITION],
            connection_cost=resolved[ArtifactKind.CONNECTION_COST],
            trie_index=resolved[ArtifactKind.TRIE_INDEX],
            trie_values=resolved[ArtifactKind.TRIE_VALUES],
            unknown=resolved[ArtifactKind.UNKNOWN],
            word_index=resolved[ArtifactKind.WORD_INDEX],
            word_surfaces=resolved[ArtifactKind.WORD_SURFACES],
        )


class DictionaryAssembler:
    """
    Build a Dictionary from resolved artifacts.

    Example:
        assembler = DictionaryAssembler()
        metadata = assembler.parse_metadata(metadata_bytes)
        dictionary = assembler.assemble(resolved, metadata)
    """

    def __init__(self):
        self.logger = get_process_logger('assembler')

    def parse_metadata(self, metadata_bytes: bytes) -> Metadata:
        """
        Parse the metadata record on its own.

        Raises:
            MetadataParseError: Metadata is not valid
        """
        metadata = Metadata.load(metadata_bytes)
        self.logger.debug(f"Metadata parsed: name={metadata.name}, encoding={metadata.encoding}")
        return metadata

    def assemble(self, resolved: ResolvedArtifacts, metadata: Metadata) -> Dictionary:
        """
        Assemble the dictionary aggregate.

        Args:
            resolved: Resolved bytes of the seven artifacts
            metadata: Metadata already parsed by parse_metadata()

        Returns:
            Fully populated Dictionary

        Raises:
            CharacterDefinitionParseError: Character table is malformed
            UnknownDictionaryParseError: Unknown-word table is malformed
        """
        prefix_dictionary = PrefixDictionary.load(
            resolved.trie_index,
            resolved.trie_values,
            resolved.word_index,
            resolved.word_surfaces,
            is_system=True,
        )
        connection_cost_matrix = ConnectionCostMatrix.load(resolved.connection_cost)
        character_definition = CharacterDefinition.load(resolved.char_definition)
        unknown_dictionary = UnknownDictionary.load(resolved.unknown)

        self.logger.debug(
            f"Assembled {metadata.name}: {prefix_dictionary.word_count} words, "
            f"{connection_cost_matrix.forward_size}x{connection_cost_matrix.backward_size} matrix, "
            f"{len(character_definition.categories)} categories"
        )

        return Dictionary(
            prefix_dictionary=prefix_dictionary,
            connection_cost_matrix=connection_cost_matrix,
            character_definition=character_definition,
            unknown_dictionary=unknown_dictionary,
            metadata=metadata,
        )


def assemble(resolved: ResolvedArtifacts, metadata_bytes: bytes) -> Dictionary:
    """Parse metadata_bytes, then assemble. Metadata errors win over component errors."""
    assembler = DictionaryAssembler()
    return assembler.assemble(resolved, assembler.parse_metadata(metadata_bytes))


__all__ = ['ResolvedArtifacts', 'DictionaryAssembler', 'assemble']
