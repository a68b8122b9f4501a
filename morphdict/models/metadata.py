# Path: morphdict/models/metadata.py
"""
Dictionary Metadata Model

Pydantic model for metadata.json, the small uncompressed record that
describes how a dictionary was built. Defaults match IPADIC.
"""

import json

from pydantic import BaseModel, Field, ValidationError

from ..constants import METADATA_ENCODING, METADATA_FILENAME
from .error import MetadataParseError


class Schema(BaseModel):
    """Ordered CSV field names of a (user) dictionary source."""
    fields: list[str] = Field(default_factory=list)

    def field_index(self, name: str) -> int:
        """Position of a field, or -1 when absent."""
        try:
            return self.fields.index(name)
        except ValueError:
            return -1


IPADIC_FIELDS = [
    'surface',
    'left_context_id',
    'right_context_id',
    'cost',
    'major_pos',
    'middle_pos',
    'small_pos',
    'fine_pos',
    'conjugation_type',
    'conjugation_form',
    'base_form',
    'reading',
    'pronunciation',
]

IPADIC_USER_FIELDS = [
    'surface',
    'major_pos',
    'reading',
]


class Metadata(BaseModel):
    """
    Build metadata for a dictionary.

    Attributes:
        name: Dictionary name (e.g. "ipadic")
        encoding: Character encoding of the source CSV files
        compress_algorithm: Algorithm used when packaging artifacts
        default_word_cost: Cost assigned to user words without one
        default_left_context_id: Left context id for user words
        default_right_context_id: Right context id for user words
        default_field_value: Filler for missing detail fields
        flexible_csv: Whether ragged CSV rows were accepted
        skip_invalid_cost_or_id: Whether bad rows were skipped
        normalize_details: Whether detail fields were normalized
        dictionary_schema: Field layout of system entries
        user_dictionary_schema: Field layout of user entries
    """
    name: str = Field(min_length=1)
    encoding: str = 'EUC-JP'
    compress_algorithm: str = 'deflate'
    default_word_cost: int = -10000
    default_left_context_id: int = Field(default=1288, ge=0)
    default_right_context_id: int = Field(default=1288, ge=0)
    default_field_value: str = '*'
    flexible_csv: bool = False
    skip_invalid_cost_or_id: bool = False
    normalize_details: bool = False
    dictionary_schema: Schema = Field(default_factory=lambda: Schema(fields=list(IPADIC_FIELDS)))
    user_dictionary_schema: Schema = Field(
        default_factory=lambda: Schema(fields=list(IPADIC_USER_FIELDS))
    )

    @classmethod
    def load(cls, data: bytes) -> 'Metadata':
        """
        Parse metadata from its JSON encoding.

        Raises:
            MetadataParseError: If the bytes are not UTF-8 JSON or fail validation
        """
        try:
            raw = json.loads(bytes(data).decode(METADATA_ENCODING))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MetadataParseError(f"invalid JSON: {e}", METADATA_FILENAME) from e

        if not isinstance(raw, dict):
            raise MetadataParseError(
                f"expected a JSON object, got {type(raw).__name__}", METADATA_FILENAME
            )

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise MetadataParseError(
                f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}",
                METADATA_FILENAME,
            ) from e

    def to_bytes(self) -> bytes:
        """Serialize back to the metadata.json encoding."""
        return self.model_dump_json(indent=2).encode(METADATA_ENCODING)


__all__ = ['Schema', 'Metadata', 'IPADIC_FIELDS', 'IPADIC_USER_FIELDS']
