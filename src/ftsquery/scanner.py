"""Character cursor over a query string.

Pure text operations with zero query semantics.  Every read past the end of
the text yields ``NULL_CHAR`` and every move is clamped to the text length,
so callers never need bounds checks.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

NULL_CHAR = "\0"
WHITESPACE = " \t\n\r"

Predicate: TypeAlias = Callable[[str], bool]


class TextScanner:
    """Cursor over a string with lookahead and conditional skipping."""

    def __init__(self, text: str | None = None) -> None:
        self._text = ""
        self._position = 0
        self.reset(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> int:
        return self._position

    @property
    def end_of_text(self) -> bool:
        """True once the cursor has reached the end of the text."""
        return self._position >= len(self._text)

    def reset(self, text: str | None) -> None:
        """Load *text* and move the cursor to its start."""
        self._text = text or ""
        self._position = 0

    def peek(self, ahead: int = 0) -> str:
        """Return the character *ahead* positions past the cursor, or ``NULL_CHAR``."""
        pos = self._position + ahead
        if 0 <= pos < len(self._text):
            return self._text[pos]
        return NULL_CHAR

    def extract(self, start: int, end: int) -> str:
        return self._text[start:end]

    def advance(self, ahead: int = 1) -> None:
        """Move the cursor forward, never past the end of the text."""
        self._position = min(self._position + ahead, len(self._text))

    def skip_whitespace(self) -> None:
        while self.peek() in WHITESPACE and not self.end_of_text:
            self.advance()

    def skip_while(self, predicate: Predicate) -> None:
        """Advance while *predicate* holds for the current character."""
        while not self.end_of_text and predicate(self.peek()):
            self.advance()

    def take_while(self, predicate: Predicate) -> str:
        """Advance while *predicate* holds and return the characters skipped."""
        start = self._position
        self.skip_while(predicate)
        return self.extract(start, self._position)
