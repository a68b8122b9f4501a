# Path: morphdict/models/prefix_dictionary.py
"""
Prefix Dictionary

Trie-backed word index. The double-array trie itself is owned by the
tokenizer; here the four tables are held as-is and only the value and
word tables are decoded on demand.

Construction is non-fallible: the four tables are assumed to have been
built together and are not cross-validated.
"""

import struct
from dataclasses import dataclass
from typing import Optional

# word_id(u32) word_cost(i16) left_id(u16) right_id(u16)
WORD_ENTRY_FORMAT = '<IhHH'
WORD_ENTRY_SIZE = struct.calcsize(WORD_ENTRY_FORMAT)
WORD_OFFSET_FORMAT = '<I'
WORD_OFFSET_SIZE = struct.calcsize(WORD_OFFSET_FORMAT)


@dataclass(frozen=True)
class WordEntry:
    """One value record of the trie."""
    word_id: int
    word_cost: int
    left_id: int
    right_id: int


@dataclass(frozen=True)
class PrefixDictionary:
    """
    Word index made of four parallel tables.

    Attributes:
        da: Double-array trie bytes
        vals: Packed WordEntry records
        words_idx: u32 offsets into words, one per word id
        words: Concatenated word detail records
        is_system: True for the system dictionary, False for user dictionaries
    """
    da: bytes
    vals: bytes
    words_idx: bytes
    words: bytes
    is_system: bool = True

    @classmethod
    def load(
        cls,
        da: bytes,
        vals: bytes,
        words_idx: bytes,
        words: bytes,
        is_system: bool = True,
    ) -> 'PrefixDictionary':
        return cls(bytes(da), bytes(vals), bytes(words_idx), bytes(words), is_system)

    @property
    def entry_count(self) -> int:
        return len(self.vals) // WORD_ENTRY_SIZE

    @property
    def word_count(self) -> int:
        return len(self.words_idx) // WORD_OFFSET_SIZE

    def word_entry(self, index: int) -> WordEntry:
        """
        Decode the value record at index.

        Raises:
            IndexError: If index is outside the value table
        """
        if not 0 <= index < self.entry_count:
            raise IndexError(f"word entry {index} out of range ({self.entry_count})")
        return WordEntry(*struct.unpack_from(WORD_ENTRY_FORMAT, self.vals, index * WORD_ENTRY_SIZE))

    def word_details(self, word_id: int) -> Optional[bytes]:
        """Raw detail record for word_id, or None if the id is unknown."""
        if not 0 <= word_id < self.word_count:
            return None

        (start,) = struct.unpack_from(WORD_OFFSET_FORMAT, self.words_idx, word_id * WORD_OFFSET_SIZE)
        if word_id + 1 < self.word_count:
            (end,) = struct.unpack_from(
                WORD_OFFSET_FORMAT, self.words_idx, (word_id + 1) * WORD_OFFSET_SIZE
            )
        else:
            end = len(self.words)
        return self.words[start:end]


__all__ = ['PrefixDictionary', 'WordEntry', 'WORD_ENTRY_FORMAT', 'WORD_ENTRY_SIZE']
