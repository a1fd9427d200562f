"""
Reference scanning and position resolution.
Locates `<prefix>.<NAME>` references (e.g. `process.env.API_URL`) in file text.
"""

import re
from dataclasses import dataclass
from typing import Iterator, NamedTuple


DEFAULT_PREFIX = "process.env"


@dataclass(frozen=True)
class Occurrence:
    """A single reference found during one scan."""
    text: str  # Full matched text, e.g. "process.env.API_URL"
    name: str  # Variable name, e.g. "API_URL"
    offset: int  # Character offset of the match in the scanned text


class Position(NamedTuple):
    """1-based line/column coordinate."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class ReferenceScanner:
    """
    Finds environment variable references in text.

    A reference is the namespace prefix followed by a dot and an identifier
    made of word characters. Both ends are bounded by word boundaries, so
    `xprocess.env.A` and partial identifiers never match.
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        """Initialize the scanner for a namespace prefix."""
        if not prefix:
            raise ValueError("Reference prefix must not be empty")
        self.prefix = prefix
        self.pattern = re.compile(r'\b' + re.escape(prefix) + r'\.(\w+)\b')

    def scan(self, text: str) -> Iterator[Occurrence]:
        """
        Lazily yield every reference in left-to-right order.

        Each call starts a fresh scan of the given text.

        Args:
            text: Content to scan

        Returns:
            Iterator of Occurrence records
        """
        for match in self.pattern.finditer(text):
            yield Occurrence(text=match.group(0), name=match.group(1), offset=match.start())


def resolve_position(text: str, offset: int) -> Position:
    """
    Convert a character offset into a 1-based line/column position.

    `\\r` is ignored so CRLF line endings count as a single line break.

    Args:
        text: Original content
        offset: Character offset to resolve

    Returns:
        Position of the character at offset
    """
    line = 1
    column = 1
    for char in text[:max(0, offset)]:
        if char == '\n':
            line += 1
            column = 1
        elif char == '\r':
            continue
        else:
            column += 1
    return Position(line, column)
