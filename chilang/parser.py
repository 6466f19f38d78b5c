"""Recursive-descent parser turning source text into an expression tree."""

from __future__ import annotations

import string
from typing import Optional

from chilang.expressions import (
    AssignmentExpression,
    Expression,
    FrameExpression,
    GetExpression,
    LiteralExpression,
    PrintExpression,
    SequenceExpression,
)
from chilang.members import AnyMemberMatcher, Member, MemberList, init_global_frame
from chilang.objects import Keyword
from chilang.parser_chars import (
    is_block_begin,
    is_block_end,
    is_expression_end_exclusive,
    is_expression_end_inclusive,
    is_literal_begin,
    is_numeric_literal,
    is_numeric_literal_begin,
    is_token,
    is_token_begin,
    is_whitespace,
)
from chilang.parser_errors import (
    PARSER_NUMERIC_LITERAL_MAX_LEN,
    PARSER_TOKEN_MAX_LEN,
    ParserCode,
    ParserError,
    internal_error,
    token_unexpected,
    token_unknown,
    unexpected_char,
)
from chilang.parser_stream import ParserInStream
from chilang.streams import EOF, InStream
from chilang.types import (
    ANY,
    PrimitiveKind,
    SmartTypeMatcher,
    Type,
    is_primitive,
    is_unsigned_integer,
    primitive,
)

_KEYWORDS = (
    ("=", Keyword.ASSIGN),
    ("print", Keyword.PRINT),
    ("if", Keyword.IF),
    ("else", Keyword.ELSE),
    ("true", Keyword.TRUE),
    ("false", Keyword.FALSE),
    ("fn", Keyword.CALLABLE),
)

_NUMERIC_LITERAL_BYTES = 8

_ANY_MEMBER = AnyMemberMatcher()
_ANY_TYPE = SmartTypeMatcher(ANY)


def convert_numeric_literal(literal: str, capacity: int) -> tuple[bytes, int]:
    """Convert a decimal literal into ``capacity`` little-endian bytes.

    Returns the bytes and the number of bits the conversion produced.
    Raises ``OverflowError`` if the value needs more than ``capacity`` bytes.
    """
    if not literal or any(ch not in string.digits for ch in literal):
        raise ValueError(f"not a decimal literal: {literal!r}")

    digits = [ord(ch) - ord("0") for ch in literal]
    limit = capacity * 8
    value = 0
    bits = 0
    begin = 0
    while True:
        if digits[begin] == 0:
            begin += 1
        if begin == len(digits):
            break
        if bits >= limit:
            raise OverflowError(f"literal {literal} does not fit in {capacity} bytes")

        carry = 0
        halved = []
        for digit in digits[begin:]:
            halved.append(digit // 2 + carry * 5)
            carry = digit % 2
        digits[begin:] = halved

        value |= carry << bits
        bits += 1

    return value.to_bytes(capacity, "little"), bits


class ParserFrame:
    """A scope seen by the parser: its own members plus those of its parents."""

    def __init__(self, frame: MemberList, parent: Optional[ParserFrame] = None) -> None:
        self.frame = frame
        self.parent = parent

    def local_member(self, token: str, member_matcher, type_matcher) -> Optional[Member]:
        """Find a matching member in this scope only."""
        return self.frame.matching(token, member_matcher, type_matcher)

    def member(self, token: str, member_matcher, type_matcher) -> Optional[Member]:
        """Find a matching member here or in the nearest enclosing scope."""
        scope: Optional[ParserFrame] = self
        while scope is not None:
            found = scope.local_member(token, member_matcher, type_matcher)
            if found is not None:
                return found
            scope = scope.parent
        return None

    def add_member(self, token: str) -> Member:
        """Declare a new member in this scope."""
        return self.frame.add(token)


class Parser:
    """Parses units of source text against a global frame of built-in names."""

    def __init__(self, global_frame: Optional[MemberList] = None) -> None:
        if global_frame is None:
            global_frame = init_global_frame(MemberList())
        self.global_frame = global_frame
        for token, keyword in _KEYWORDS:
            self.global_frame.add_keyword(token, keyword)

        bool_type = primitive(PrimitiveKind.BOOL)
        self.literal_true = LiteralExpression(bool_type, b"\x01")
        self.literal_false = LiteralExpression(bool_type, b"\x00")

    def parse_unit(self, stream: InStream, path: Optional[str] = None) -> FrameExpression:
        """Parse a whole input stream into a frame expression."""
        parser_stream = ParserInStream(stream, path)
        global_scope = ParserFrame(self.global_frame)
        return self.parse_frame(parser_stream, global_scope)

    def parse_frame(
        self, stream: ParserInStream, parent_frame: Optional[ParserFrame]
    ) -> FrameExpression:
        """Parse expressions up to a closing brace or the end of the stream."""
        frame_expression = FrameExpression()
        scope = ParserFrame(frame_expression.frame, parent_frame)
        expressions: list[Expression] = []

        while True:
            c = stream.getc()
            if c == EOF or is_block_end(c):
                break
            if is_whitespace(c):
                continue
            stream.ungetc(c)
            expression = self.parse_expression(stream, scope, ANY)
            if expression is not None:
                expressions.append(expression)

        if len(expressions) == 1:
            frame_expression.expression = expressions[0]
        elif expressions:
            frame_expression.expression = SequenceExpression(expressions)
        return frame_expression

    def parse_expression(
        self, stream: ParserInStream, frame: ParserFrame, desired_type: Type
    ) -> Optional[Expression]:
        """Parse one expression; ``None`` if it turned out empty."""
        tokens: list[str] = []
        unconsumed = 0
        result: Optional[Expression] = None

        while True:
            c = stream.getc()
            if c == EOF:
                break

            if is_token_begin(c):
                stream.ungetc(c)
                tokens.append(self.read_token(stream))

                pending = tokens[unconsumed:]
                first = pending[0]
                first_member = frame.member(first, _ANY_MEMBER, _ANY_TYPE)
                if first_member is None:
                    raise token_unknown(stream, first)

                if is_primitive(first_member.type, PrimitiveKind.KEYWORD):
                    return self._keyword_expression(
                        stream, frame, first_member.object.keyword, first
                    )

                if len(pending) < 2:
                    continue
                second = pending[1]
                second_member = frame.member(second, _ANY_MEMBER, _ANY_TYPE)

                if second_member is not None and is_primitive(
                    second_member.type, PrimitiveKind.KEYWORD
                ):
                    if second_member.object.keyword is Keyword.ASSIGN:
                        return self.parse_assignment_expression(stream, frame, first)
                    raise token_unexpected(stream, second)

                if second_member is None:
                    if is_primitive(first_member.type, PrimitiveKind.TYPE):
                        declared = frame.add_member(second)
                        declared.type = first_member.object.type
                        unconsumed += 1
                        continue
                    raise token_unknown(stream, second)
                continue

            if is_literal_begin(c):
                stream.ungetc(c)
                result = self.parse_literal(stream, desired_type)
                continue

            if is_block_begin(c):
                return self.parse_frame(stream, frame)

            if is_expression_end_inclusive(c):
                break

            if is_expression_end_exclusive(c):
                stream.ungetc(c)
                break

            if is_whitespace(c):
                continue

            raise unexpected_char(stream, c)

        if unconsumed >= len(tokens):
            return result

        token = tokens[unconsumed]
        member = frame.member(token, _ANY_MEMBER, SmartTypeMatcher(desired_type))
        if member is None:
            raise token_unknown(stream, token)
        return GetExpression(member)

    def _keyword_expression(
        self, stream: ParserInStream, frame: ParserFrame, keyword: Keyword, token: str
    ) -> Expression:
        if keyword is Keyword.PRINT:
            return self.parse_print_expression(stream, frame)
        if keyword in (Keyword.CALLABLE, Keyword.TRUE):
            return self.literal_true
        if keyword is Keyword.FALSE:
            return self.literal_false
        raise token_unexpected(stream, token)

    def parse_literal(self, stream: ParserInStream, desired_type: Type) -> LiteralExpression:
        """Parse a literal of ``desired_type``."""
        c = stream.getc()
        if c == EOF:
            raise internal_error(stream)
        if is_numeric_literal_begin(c):
            stream.ungetc(c)
            return self.parse_numeric_literal(stream, desired_type)
        raise internal_error(stream)

    def parse_numeric_literal(
        self, stream: ParserInStream, desired_type: Type
    ) -> LiteralExpression:
        """Parse a decimal literal into a value of the unsigned ``desired_type``."""
        digits: list[str] = []
        while True:
            c = stream.getc()
            if c == EOF:
                raise ParserError.at(stream, ParserCode.UNEXPECTED_EOF)
            if not is_numeric_literal(c):
                stream.ungetc(c)
                break
            if len(digits) + 1 > PARSER_NUMERIC_LITERAL_MAX_LEN:
                raise ParserError.at(stream, ParserCode.LITERAL_TOO_LONG)
            digits.append(c)

        try:
            value, bits = convert_numeric_literal("".join(digits), _NUMERIC_LITERAL_BYTES)
        except (OverflowError, ValueError):
            raise ParserError.at(stream, ParserCode.INTERNAL_ERROR, "convert failed") from None

        if not is_unsigned_integer(desired_type):
            raise ParserError.at(stream, ParserCode.INTERNAL_ERROR, "bad type")

        size = bits // 8 + (bits % 8 > 0)
        if size > desired_type.info().size:
            raise ParserError.at(
                stream, ParserCode.INTERNAL_ERROR, "integer literal too large for type"
            )
        return LiteralExpression(desired_type, value)

    def parse_assignment_expression(
        self, stream: ParserInStream, frame: ParserFrame, token: str
    ) -> AssignmentExpression:
        """Parse the right-hand side of an assignment to ``token``."""
        member = frame.member(token, _ANY_MEMBER, _ANY_TYPE)
        if member is None:
            raise internal_error(stream)
        expression = self.parse_expression(stream, frame, member.type)
        if expression is None:
            raise internal_error(stream)
        return AssignmentExpression(member, expression)

    def parse_print_expression(
        self, stream: ParserInStream, frame: ParserFrame
    ) -> PrintExpression:
        """Parse the operand of ``print``."""
        expression = self.parse_expression(stream, frame, ANY)
        if expression is None:
            raise internal_error(stream)
        return PrintExpression(expression)

    def read_token(self, stream: ParserInStream) -> str:
        """Read a run of token characters."""
        chars: list[str] = []
        while True:
            c = stream.getc()
            if c == EOF or not is_token(c):
                stream.ungetc(c)
                break
            if len(chars) + 1 > PARSER_TOKEN_MAX_LEN:
                raise ParserError.at(stream, ParserCode.TOKEN_TOO_LONG)
            chars.append(c)
        return "".join(chars)