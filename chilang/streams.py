"""Character output and input streams used by the parser and the simulator."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import NamedTuple, TextIO

EOF = ""
"""Value returned by ``getc`` once the stream is exhausted."""

_NULL_TEXT = "(null)"


def _char(c: int | str) -> str:
    if isinstance(c, int):
        return chr(c)
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    return c


def _text(text: str | None) -> str:
    return _NULL_TEXT if text is None else text


class OutStream(ABC):
    """A sink for characters that can also mark the bounds of list items."""

    @abstractmethod
    def putc(self, c: int | str) -> None:
        """Write a single character, given as a string or a code point."""

    def write(self, text: str | None) -> None:
        """Write ``text``; ``None`` is written as ``(null)``."""
        for c in _text(text):
            self.putc(c)

    def flush(self) -> None:
        """Flush buffered output, if any."""

    def close(self) -> None:
        """Release the stream."""

    def begin_item(self) -> None:
        """Mark the start of a list item."""

    def end_item(self) -> None:
        """Mark the end of a list item."""


class FileOutStream(OutStream):
    """Output stream writing to a text file object."""

    def __init__(self, file: TextIO) -> None:
        self.file = file

    def putc(self, c: int | str) -> None:
        self.file.write(_char(c))

    def write(self, text: str | None) -> None:
        self.file.write(_text(text))

    def flush(self) -> None:
        self.file.flush()

    def close(self) -> None:
        self.file.close()


class StringOutStream(OutStream):
    """Output stream collecting everything written into a string."""

    def __init__(self) -> None:
        self._chunks: list[str] = []

    def putc(self, c: int | str) -> None:
        self._chunks.append(_char(c))

    def write(self, text: str | None) -> None:
        self._chunks.append(_text(text))

    def close(self) -> None:
        self._chunks.clear()

    def getvalue(self) -> str:
        """Return everything written so far."""
        return "".join(self._chunks)


class DelimOutStream(OutStream):
    """Forwards to a parent stream, writing a delimiter between list items."""

    def __init__(self, parent: OutStream, delimiter: str) -> None:
        self.parent = parent
        self.delimiter = delimiter
        self._first = True

    def putc(self, c: int | str) -> None:
        self.parent.putc(c)

    def write(self, text: str | None) -> None:
        self.parent.write(text)

    def flush(self) -> None:
        self.parent.flush()

    def close(self) -> None:
        self.parent.close()

    def begin_item(self) -> None:
        self.parent.begin_item()
        if not self._first:
            self.parent.write(self.delimiter)

    def end_item(self) -> None:
        self._first = False
        self.parent.end_item()


class InStream(ABC):
    """A source of characters; ``getc`` returns ``EOF`` when exhausted."""

    @abstractmethod
    def getc(self) -> str:
        """Read one character, or ``EOF``."""

    @abstractmethod
    def read(self, size: int) -> str:
        """Read up to ``size`` characters."""

    @abstractmethod
    def at_end(self) -> bool:
        """Whether a read has already hit the end of the stream."""

    def close(self) -> None:
        """Release the stream."""


class FileInStream(InStream):
    """Input stream reading from a text file object."""

    def __init__(self, file: TextIO) -> None:
        self.file = file
        self._eof = False

    def getc(self) -> str:
        c = self.file.read(1)
        if not c:
            self._eof = True
            return EOF
        return c

    def read(self, size: int) -> str:
        data = self.file.read(size)
        if len(data) < size:
            self._eof = True
        return data

    def at_end(self) -> bool:
        return self._eof

    def close(self) -> None:
        self.file.close()


class StringInStream(InStream):
    """Input stream over an in-memory string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def getc(self) -> str:
        if self._pos >= len(self._text):
            self._pos += 1
            return EOF
        c = self._text[self._pos]
        self._pos += 1
        return c

    def read(self, size: int) -> str:
        count = max(0, min(size, len(self._text) - self._pos))
        data = self._text[self._pos:self._pos + count]
        self._pos += count
        return data

    def at_end(self) -> bool:
        return self._pos > len(self._text)


class StdStreams(NamedTuple):
    stdout: FileOutStream
    stderr: FileOutStream
    stdin: FileInStream


def std_streams() -> StdStreams:
    """Wrap the process's current standard streams."""
    return StdStreams(
        stdout=FileOutStream(sys.stdout),
        stderr=FileOutStream(sys.stderr),
        stdin=FileInStream(sys.stdin),
    )