"""Expression tree produced by the parser."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional

from chilang.members import Member, MemberList
from chilang.streams import OutStream, StringOutStream
from chilang.types import PrimitiveKind, Type, primitive


class ExpressionKind(Enum):
    NULL = 0
    ASSIGNMENT = 1
    GET = 2
    LITERAL = 3
    PRINT = 4
    FRAME = 5
    SEQUENCE = 6


class Expression(ABC):
    """A node of the expression tree."""

    kind: ClassVar[ExpressionKind] = ExpressionKind.NULL

    @abstractmethod
    def repr_to(self, os: OutStream) -> None:
        """Write the textual form of the expression."""

    def result_type(self) -> Type:
        """Return the type the expression evaluates to."""
        raise TypeError(f"{type(self).__name__} has no result type")

    @abstractmethod
    def copy(self) -> Expression:
        """Return a deep copy of the expression."""


@dataclass
class SequenceExpression(Expression):
    """Expressions evaluated one after another."""

    kind: ClassVar[ExpressionKind] = ExpressionKind.SEQUENCE

    items: list[Expression] = field(default_factory=list)

    def repr_to(self, os: OutStream) -> None:
        for item in self.items:
            os.begin_item()
            item.repr_to(os)
            os.end_item()

    def copy(self) -> SequenceExpression:
        return SequenceExpression([item.copy() for item in self.items])


@dataclass(frozen=True)
class LiteralExpression(Expression):
    """A constant value; ``data`` is cut to the size of ``type``."""

    kind: ClassVar[ExpressionKind] = ExpressionKind.LITERAL

    type: Type
    data: bytes

    def __post_init__(self) -> None:
        size = self.type.info().size
        if len(self.data) < size:
            raise ValueError(
                f"literal of type {self.type} needs {size} bytes, got {len(self.data)}"
            )
        object.__setattr__(self, "data", bytes(self.data[:size]))

    def repr_to(self, os: OutStream) -> None:
        os.write("Literal(")
        os.write(str(self.type))
        os.putc(")")

    def result_type(self) -> Type:
        return self.type

    def copy(self) -> LiteralExpression:
        return LiteralExpression(self.type, self.data)


@dataclass
class AssignmentExpression(Expression):
    """Stores the value of ``expression`` into ``member``."""

    kind: ClassVar[ExpressionKind] = ExpressionKind.ASSIGNMENT

    member: Member
    expression: Expression

    def repr_to(self, os: OutStream) -> None:
        os.write(self.member.token)
        os.putc("=")
        self.expression.repr_to(os)

    def result_type(self) -> Type:
        return self.expression.result_type()

    def copy(self) -> AssignmentExpression:
        return AssignmentExpression(self.member, self.expression.copy())


@dataclass
class GetExpression(Expression):
    """Reads the value of ``member``."""

    kind: ClassVar[ExpressionKind] = ExpressionKind.GET

    member: Member

    def repr_to(self, os: OutStream) -> None:
        os.write(self.member.token)

    def result_type(self) -> Type:
        return self.member.type

    def copy(self) -> GetExpression:
        return GetExpression(self.member)


@dataclass
class PrintExpression(Expression):
    """Prints the value of ``expression``."""

    kind: ClassVar[ExpressionKind] = ExpressionKind.PRINT

    expression: Expression

    def repr_to(self, os: OutStream) -> None:
        os.write("Print(")
        self.expression.repr_to(os)
        os.putc(")")

    def result_type(self) -> Type:
        return primitive(PrimitiveKind.VOID)

    def copy(self) -> PrintExpression:
        return PrintExpression(self.expression.copy())


@dataclass
class FrameExpression(Expression):
    """A block with its own members, evaluating ``expression`` inside them."""

    kind: ClassVar[ExpressionKind] = ExpressionKind.FRAME

    frame: MemberList = field(default_factory=MemberList)
    expression: Optional[Expression] = None

    def repr_to(self, os: OutStream) -> None:
        for header in ("FrameExpression: {", "members:"):
            os.begin_item()
            os.write(header)
            os.end_item()
        self.frame.repr_to(os)
        os.begin_item()
        os.write("expression:")
        os.end_item()
        if self.expression is not None:
            self.expression.repr_to(os)
        os.begin_item()
        os.write("}")
        os.end_item()

    def result_type(self) -> Type:
        if self.expression is None:
            raise TypeError("empty frame expression has no result type")
        return self.expression.result_type()

    def copy(self) -> FrameExpression:
        raise TypeError("cannot copy frame expression")


def render(expression: Expression) -> str:
    """Return the textual form of ``expression``."""
    out = StringOutStream()
    expression.repr_to(out)
    return out.getvalue()