"""Errors the parser raises, with the position they were found at."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from chilang.parser_stream import ParserInStream

PARSER_TOKEN_MAX_LEN = 16
PARSER_STRING_LITERAL_MAX_LEN = 32
PARSER_NUMERIC_LITERAL_MAX_LEN = 8

_MESSAGE_LIMIT = 255


class ParserCode(Enum):
    """Why parsing stopped."""

    SUCCESS = 0
    INTERNAL_ERROR = 1
    UNEXPECTED_CHAR = 2
    UNEXPECTED_EOF = 3
    TOKEN_TOO_LONG = 4
    TOKEN_UNKNOWN = 5
    TOKEN_UNEXPECTED = 6
    LITERAL_TOO_LONG = 7
    UNIMPLEMENTED = 8

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ParserCode.SUCCESS: "Success",
    ParserCode.INTERNAL_ERROR: "Internal error",
    ParserCode.UNEXPECTED_CHAR: "Unexpected character",
    ParserCode.UNEXPECTED_EOF: "Unexpected end of stream",
    ParserCode.TOKEN_TOO_LONG: "Token too long",
    ParserCode.TOKEN_UNKNOWN: "Token unknown",
    ParserCode.TOKEN_UNEXPECTED: "Token unexpected",
    ParserCode.LITERAL_TOO_LONG: "Literal too long",
    ParserCode.UNIMPLEMENTED: "Unimplemented",
}


class ParserError(Exception):
    """A parse failure; ``str()`` gives ``path:line:character: message``."""

    def __init__(
        self,
        code: ParserCode,
        message: Optional[str] = None,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        character: Optional[int] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.path = path
        self.line = line
        self.character = character
        super().__init__(self._render())

    @classmethod
    def at(
        cls, stream: ParserInStream, code: ParserCode, message: Optional[str] = None
    ) -> ParserError:
        """Build an error located at the current position of ``stream``."""
        return cls(
            code,
            message,
            path=stream.path,
            line=stream.line,
            character=stream.character,
        )

    def _render(self) -> str:
        text = self.code.description if self.message is None else self.message
        if self.line is None:
            return text
        path = "(null)" if self.path is None else self.path
        return f"{path}:{self.line}:{self.character}: {text}"

    def __str__(self) -> str:
        return self._render()


def _limited(message: str) -> str:
    return message[:_MESSAGE_LIMIT]


def token_unknown(stream: ParserInStream, token: str) -> ParserError:
    return ParserError.at(
        stream, ParserCode.TOKEN_UNKNOWN, _limited(f"Unknown token '{token}'")
    )


def token_unexpected(stream: ParserInStream, token: str) -> ParserError:
    return ParserError.at(
        stream, ParserCode.TOKEN_UNEXPECTED, _limited(f"Unexpected token '{token}'")
    )


def unimplemented(stream: ParserInStream, feature: str) -> ParserError:
    return ParserError.at(
        stream,
        ParserCode.UNIMPLEMENTED,
        _limited(f"Unimplemented feature '{feature}'"),
    )


def unexpected_char(stream: ParserInStream, c: str) -> ParserError:
    return ParserError.at(
        stream, ParserCode.UNEXPECTED_CHAR, _limited(f"Unexpected character '{c}'")
    )


def internal_error(stream: ParserInStream) -> ParserError:
    return ParserError.at(stream, ParserCode.INTERNAL_ERROR)