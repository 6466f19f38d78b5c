"""Character classes the parser distinguishes.

Every function takes a single character as a one-character string; the
end-of-stream marker ``EOF`` (the empty string) belongs to none of the
classes except ``is_expression_begin``, which accepts anything that is not
whitespace.
"""

from __future__ import annotations

import string

_NEWLINES = frozenset("\n\r")
_BLANKS = frozenset("\t ")
_DIGITS = frozenset(string.digits)
_TOKEN_SYMBOLS = frozenset("~!@#$%^&*_+-=/<>?")
_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)
_EXPRESSION_END_INCLUSIVE = frozenset(";)")
_EXPRESSION_END_EXCLUSIVE = frozenset("}")
_LIST_DELIMITERS = frozenset(",")


def is_newline(c: str) -> bool:
    """Line feed or carriage return."""
    return c in _NEWLINES


def is_whitespace(c: str) -> bool:
    """Tab, space or a newline."""
    return c in _BLANKS or is_newline(c)


def is_numeric_literal_begin(c: str) -> bool:
    """A decimal digit."""
    return c in _DIGITS


def is_numeric_literal(c: str) -> bool:
    """A character that may continue a numeric literal."""
    return is_numeric_literal_begin(c)


def is_literal_begin(c: str) -> bool:
    """A character that starts a literal."""
    return is_numeric_literal_begin(c)


def is_token(c: str) -> bool:
    """An ASCII letter, digit or one of the operator symbols."""
    return c in _TOKEN_SYMBOLS or c in _ASCII_ALNUM


def is_token_begin(c: str) -> bool:
    """A token character that does not start a literal."""
    return is_token(c) and not is_literal_begin(c)


def is_expression_begin(c: str) -> bool:
    """Anything but whitespace."""
    return not is_whitespace(c)


def is_block_begin(c: str) -> bool:
    return c == "{"


def is_block_end(c: str) -> bool:
    return c == "}"


def is_expression_end_inclusive(c: str) -> bool:
    """A character that ends an expression and is consumed with it."""
    return c in _EXPRESSION_END_INCLUSIVE


def is_expression_end_exclusive(c: str) -> bool:
    """A character that ends an expression but belongs to what follows."""
    return c in _EXPRESSION_END_EXCLUSIVE


def is_list_delimiter(c: str) -> bool:
    return c in _LIST_DELIMITERS