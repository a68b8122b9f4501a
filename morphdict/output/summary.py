# Path: morphdict/output/summary.py
"""
Dictionary Summary

Compact description of a loaded Dictionary for console output.
"""

from dataclasses import dataclass, asdict

from ..constants import MENU_SEPARATOR
from ..models.dictionary import Dictionary


@dataclass(frozen=True)
class DictionarySummary:
    name: str
    encoding: str
    compress_algorithm: str
    word_count: int
    entry_count: int
    matrix_forward_size: int
    matrix_backward_size: int
    category_count: int
    unknown_entry_count: int

    def to_dict(self) -> dict:
        return asdict(self)

    def format_text(self) -> str:
        lines = [
            f"  Dictionary:         {self.name}",
            f"  Source encoding:    {self.encoding}",
            f"  Packaging:          {self.compress_algorithm}",
            f"  {MENU_SEPARATOR}",
            f"  Words:              {self.word_count}",
            f"  Trie entries:       {self.entry_count}",
            f"  Connection matrix:  {self.matrix_forward_size} x {self.matrix_backward_size}",
            f"  Char categories:    {self.category_count}",
            f"  Unknown entries:    {self.unknown_entry_count}",
        ]
        return '\n'.join(lines)


def summarize(dictionary: Dictionary) -> DictionarySummary:
    """Build a summary of a loaded dictionary."""
    matrix = dictionary.connection_cost_matrix
    return DictionarySummary(
        name=dictionary.metadata.name,
        encoding=dictionary.metadata.encoding,
        compress_algorithm=dictionary.metadata.compress_algorithm,
        word_count=dictionary.prefix_dictionary.word_count,
        entry_count=dictionary.prefix_dictionary.entry_count,
        matrix_forward_size=matrix.forward_size,
        matrix_backward_size=matrix.backward_size,
        category_count=len(dictionary.character_definition.categories),
        unknown_entry_count=len(dictionary.unknown_dictionary.costs),
    )


__all__ = ['DictionarySummary', 'summarize']
