# Path: morphdict/models/unknown_dictionary.py
"""
Unknown Dictionary

Fallback entries for out-of-vocabulary words, grouped by character
category.

Binary layout (little-endian):
    magic        4s   b"UNKD"
    n_categories u32
    n_categories x { n_refs u32, n_refs x entry_index u32 }
    n_entries    u32
    n_entries x { left_id u16, right_id u16, word_cost i16 }
"""

import struct
from dataclasses import dataclass

from ..constants import ArtifactKind
from .error import UnknownDictionaryParseError

MAGIC = b'UNKD'
_U32 = struct.Struct('<I')
_ENTRY = struct.Struct('<HHh')


@dataclass(frozen=True)
class UnknownEntry:
    left_id: int
    right_id: int
    word_cost: int


@dataclass(frozen=True)
class UnknownDictionary:
    """
    Attributes:
        category_references: Entry indexes per character category id
        costs: Entry table shared by all categories
    """
    category_references: tuple[tuple[int, ...], ...]
    costs: tuple[UnknownEntry, ...]

    @classmethod
    def load(cls, data: bytes) -> 'UnknownDictionary':
        """
        Parse the binary unknown-word table.

        Raises:
            UnknownDictionaryParseError: On truncation, dangling references
                or trailing bytes
        """
        filename = ArtifactKind.UNKNOWN.filename
        buf = bytes(data)
        offset = 0

        def read_u32(what: str) -> int:
            nonlocal offset
            if offset + _U32.size > len(buf):
                raise UnknownDictionaryParseError(f"truncated {what} at offset {offset}", filename)
            (value,) = _U32.unpack_from(buf, offset)
            offset += _U32.size
            return value

        if buf[:len(MAGIC)] != MAGIC:
            raise UnknownDictionaryParseError('bad magic', filename)
        offset = len(MAGIC)

        n_categories = read_u32('category count')
        references = []
        for category_id in range(n_categories):
            n_refs = read_u32(f"reference count of category {category_id}")
            if offset + n_refs * _U32.size > len(buf):
                raise UnknownDictionaryParseError(
                    f"truncated references of category {category_id}", filename
                )
            refs = struct.unpack_from(f'<{n_refs}I', buf, offset)
            offset += n_refs * _U32.size
            references.append(tuple(refs))

        n_entries = read_u32('entry count')
        if offset + n_entries * _ENTRY.size != len(buf):
            raise UnknownDictionaryParseError(
                f"entry table size mismatch: expected {n_entries * _ENTRY.size} bytes, "
                f"found {len(buf) - offset}",
                filename,
            )
        costs = tuple(
            UnknownEntry(*_ENTRY.unpack_from(buf, offset + i * _ENTRY.size))
            for i in range(n_entries)
        )

        for category_id, refs in enumerate(references):
            for ref in refs:
                if ref >= n_entries:
                    raise UnknownDictionaryParseError(
                        f"category {category_id} references missing entry {ref}", filename
                    )

        return cls(tuple(references), costs)

    def entries_for_category(self, category_id: int) -> list[UnknownEntry]:
        if not 0 <= category_id < len(self.category_references):
            return []
        return [self.costs[i] for i in self.category_references[category_id]]

    def to_bytes(self) -> bytes:
        """Serialize into the binary layout read by load()."""
        parts = [MAGIC, _U32.pack(len(self.category_references))]
        for refs in self.category_references:
            parts.append(_U32.pack(len(refs)))
            parts.append(struct.pack(f'<{len(refs)}I', *refs))
        parts.append(_U32.pack(len(self.costs)))
        for entry in self.costs:
            parts.append(_ENTRY.pack(entry.left_id, entry.right_id, entry.word_cost))
        return b''.join(parts)


__all__ = ['UnknownDictionary', 'UnknownEntry']
