# Path: morphdict/models/character_definition.py
"""
Character Definition

Classifies characters into categories used by unknown-word heuristics.

Binary layout (little-endian):
    magic        4s   b"CDEF"
    n_categories u32
    n_categories x { name_len u8, name utf-8, invoke u8, group u8, length u8 }
    n_ranges     u32
    n_ranges x { low u32, high u32, category_mask u32 }

Code points not covered by any range fall into category 0.
"""

import struct
from dataclasses import dataclass

from ..constants import ArtifactKind
from .error import CharacterDefinitionParseError

MAGIC = b'CDEF'
MAX_CATEGORIES = 32
_COUNT = struct.Struct('<I')
_CATEGORY_FLAGS = struct.Struct('<BBB')
_RANGE = struct.Struct('<III')


@dataclass(frozen=True)
class CategoryData:
    """
    Unknown-word behaviour of one category.

    Attributes:
        name: Category name (DEFAULT, KANJI, ...)
        invoke: Always run unknown-word processing for this category
        group: Group consecutive characters of this category
        length: Also emit prefixes up to this many characters
    """
    name: str
    invoke: bool
    group: bool
    length: int


@dataclass(frozen=True)
class CharacterRange:
    low: int
    high: int
    category_mask: int

    def contains(self, code_point: int) -> bool:
        return self.low <= code_point <= self.high


class _Reader:
    """Cursor over a buffer that reports truncation as a parse error."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def unpack(self, fmt: struct.Struct, what: str) -> tuple:
        if self.offset + fmt.size > len(self.data):
            raise CharacterDefinitionParseError(
                f"truncated {what} at offset {self.offset}",
                ArtifactKind.CHAR_DEFINITION.filename,
            )
        values = fmt.unpack_from(self.data, self.offset)
        self.offset += fmt.size
        return values

    def take(self, size: int, what: str) -> bytes:
        if self.offset + size > len(self.data):
            raise CharacterDefinitionParseError(
                f"truncated {what} at offset {self.offset}",
                ArtifactKind.CHAR_DEFINITION.filename,
            )
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk


@dataclass(frozen=True)
class CharacterDefinition:
    categories: tuple[CategoryData, ...]
    ranges: tuple[CharacterRange, ...]

    @classmethod
    def load(cls, data: bytes) -> 'CharacterDefinition':
        """
        Parse the binary character definition table.

        Raises:
            CharacterDefinitionParseError: On any structural inconsistency
        """
        filename = ArtifactKind.CHAR_DEFINITION.filename
        reader = _Reader(bytes(data))

        if reader.take(len(MAGIC), 'magic') != MAGIC:
            raise CharacterDefinitionParseError('bad magic', filename)

        (n_categories,) = reader.unpack(_COUNT, 'category count')
        if not 0 < n_categories <= MAX_CATEGORIES:
            raise CharacterDefinitionParseError(
                f"category count {n_categories} outside 1..{MAX_CATEGORIES}", filename
            )

        categories = []
        for _ in range(n_categories):
            (name_len,) = reader.unpack(struct.Struct('<B'), 'category name length')
            try:
                name = reader.take(name_len, 'category name').decode('utf-8')
            except UnicodeDecodeError as e:
                raise CharacterDefinitionParseError(f"category name: {e}", filename) from e
            invoke, group, length = reader.unpack(_CATEGORY_FLAGS, 'category flags')
            categories.append(CategoryData(name, bool(invoke), bool(group), length))

        (n_ranges,) = reader.unpack(_COUNT, 'range count')
        valid_mask = (1 << n_categories) - 1
        ranges = []
        for _ in range(n_ranges):
            low, high, mask = reader.unpack(_RANGE, 'range')
            if low > high:
                raise CharacterDefinitionParseError(
                    f"range 0x{low:X}..0x{high:X} is inverted", filename
                )
            if mask == 0 or mask & ~valid_mask:
                raise CharacterDefinitionParseError(
                    f"range 0x{low:X}..0x{high:X} has invalid category mask 0x{mask:X}",
                    filename,
                )
            ranges.append(CharacterRange(low, high, mask))

        if reader.offset != len(reader.data):
            raise CharacterDefinitionParseError(
                f"{len(reader.data) - reader.offset} trailing bytes", filename
            )

        return cls(tuple(categories), tuple(ranges))

    def category_ids(self, ch: str) -> list[int]:
        """Category ids for a single character (category 0 when unmapped)."""
        code_point = ord(ch)
        mask = 0
        for char_range in self.ranges:
            if char_range.contains(code_point):
                mask |= char_range.category_mask
        if not mask:
            return [0]
        return [i for i in range(len(self.categories)) if mask & (1 << i)]

    def lookup_categories(self, ch: str) -> list[CategoryData]:
        return [self.categories[i] for i in self.category_ids(ch)]

    def to_bytes(self) -> bytes:
        """Serialize into the binary layout read by load()."""
        parts = [MAGIC, _COUNT.pack(len(self.categories))]
        for category in self.categories:
            name = category.name.encode('utf-8')
            parts.append(struct.pack('<B', len(name)))
            parts.append(name)
            parts.append(_CATEGORY_FLAGS.pack(int(category.invoke), int(category.group), category.length))
        parts.append(_COUNT.pack(len(self.ranges)))
        for char_range in self.ranges:
            parts.append(_RANGE.pack(char_range.low, char_range.high, char_range.category_mask))
        return b''.join(parts)


__all__ = ['CharacterDefinition', 'CategoryData', 'CharacterRange']
