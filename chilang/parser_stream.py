"""Character stream for the parser with push-back and position tracking."""

from __future__ import annotations

from typing import Optional

from chilang.parser_chars import is_newline
from chilang.streams import EOF, InStream


class ParserInStream:
    """Wraps an input stream, tracking line and column and allowing push-back.

    ``line`` starts at 1 and ``character`` counts the characters read on the
    current line; both are rewound by ``ungetc``.
    """

    def __init__(
        self,
        stream: InStream,
        path: Optional[str] = None,
        parent: Optional[ParserInStream] = None,
    ) -> None:
        self.stream = stream
        self.path = path
        self.parent = parent
        self.line = 1
        self.character = 0
        self._pushed_back: list[str] = []
        self._line_lengths: list[int] = []

    @property
    def pending(self) -> int:
        """Number of pushed-back characters waiting to be read again."""
        return len(self._pushed_back)

    def getc(self) -> str:
        """Read the next character, or ``EOF``."""
        if self._pushed_back:
            c = self._pushed_back.pop()
        else:
            c = self.stream.getc()

        if is_newline(c):
            self._line_lengths.append(self.character)
            self.line += 1
            self.character = 0
        else:
            self.character += 1
        return c

    def ungetc(self, c: str) -> None:
        """Push ``c`` back so the next ``getc`` returns it; ``EOF`` is ignored."""
        if c == EOF:
            return
        if is_newline(c):
            self.line -= 1
            self.character = self._line_lengths.pop()
        else:
            self.character -= 1
        self._pushed_back.append(c)

    def at_end(self) -> bool:
        """Whether nothing is pushed back and the stream has hit its end."""
        if self._pushed_back:
            return False
        return self.stream.at_end()

    def describe(self) -> str:
        """Return the path, position and push-back depth as one line."""
        path = "(null)" if self.path is None else self.path
        return f"{path}: L{self.line}C{self.character} -{len(self._pushed_back)}"