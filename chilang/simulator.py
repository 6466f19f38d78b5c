"""Tree-walking evaluator for parsed expressions."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from chilang.expressions import (
    AssignmentExpression,
    Expression,
    ExpressionKind,
    FrameExpression,
    GetExpression,
    LiteralExpression,
    PrintExpression,
    SequenceExpression,
)
from chilang.members import Member
from chilang.streams import FileOutStream, OutStream
from chilang.types import Type


class SimCode(IntEnum):
    """Outcome of a simulation step."""

    OK = 0
    ERROR = 1
    UNSUPPORTED_EXPRESSION = 2
    FRAME_MEMBER_NOT_FOUND = 3
    INVALID_LITERAL = 4


class SimulationError(Exception):
    """Evaluation failed with ``code``."""

    def __init__(
        self, code: SimCode, message: Optional[str] = None, payload: Any = None
    ) -> None:
        self.code = code
        self.message = message
        self.payload = payload
        super().__init__(message if message is not None else code.name)


@dataclass(frozen=True)
class SimValue:
    """A runtime value: its type and its raw bytes."""

    type: Type
    data: bytes


class SimFrame:
    """Runtime storage for the members of one frame, chained to its parent."""

    def __init__(
        self, members: Iterable[Member], parent: Optional[SimFrame] = None
    ) -> None:
        self.parent = parent
        self._values: dict[Member, Optional[SimValue]] = {
            member: None for member in members if member.type.info().valid
        }

    def _owner(self, member: Member) -> SimFrame:
        frame: Optional[SimFrame] = self
        while frame is not None:
            if member in frame._values:
                return frame
            frame = frame.parent
        raise SimulationError(
            SimCode.FRAME_MEMBER_NOT_FOUND, f"member '{member.token}' not found"
        )

    def get_value(self, member: Member) -> Optional[SimValue]:
        """Return the value stored for ``member`` here or in an enclosing frame."""
        return self._owner(member)._values[member]

    def set_value(self, member: Member, value: Optional[SimValue]) -> None:
        """Store ``value`` for ``member`` in the frame that holds it."""
        self._owner(member)._values[member] = value


class Simulator:
    """Evaluates expressions against a global frame, printing to ``os_stdout``."""

    def __init__(
        self,
        global_frame: Iterable[Member],
        os_stdout: Optional[OutStream] = None,
        log_stream: Optional[OutStream] = None,
    ) -> None:
        self.os_stdout = os_stdout if os_stdout is not None else FileOutStream(sys.stdout)
        self.log_stream = log_stream
        self.global_frame = SimFrame(global_frame)
        self._handlers: dict[
            ExpressionKind, Callable[[Any, SimFrame], Optional[SimValue]]
        ] = {
            ExpressionKind.FRAME: self._frame,
            ExpressionKind.LITERAL: self._literal,
            ExpressionKind.GET: self._get,
            ExpressionKind.ASSIGNMENT: self._assignment,
            ExpressionKind.PRINT: self._print,
            ExpressionKind.SEQUENCE: self._sequence,
        }

    def evaluate(self, expression: Expression) -> Optional[SimValue]:
        """Evaluate ``expression`` in the global frame."""
        return self.simulate(expression, self.global_frame)

    def simulate(self, expression: Expression, frame: SimFrame) -> Optional[SimValue]:
        """Evaluate ``expression`` in ``frame`` and return its value."""
        handler = self._handlers.get(expression.kind)
        if handler is None:
            raise SimulationError(
                SimCode.UNSUPPORTED_EXPRESSION,
                f"unsupported expression {type(expression).__name__}",
            )
        return handler(expression, frame)

    def _get(self, expression: GetExpression, frame: SimFrame) -> Optional[SimValue]:
        return frame.get_value(expression.member)

    def _assignment(
        self, expression: AssignmentExpression, frame: SimFrame
    ) -> Optional[SimValue]:
        value = self.simulate(expression.expression, frame)
        frame.set_value(expression.member, value)
        return value

    def _literal(self, expression: LiteralExpression, frame: SimFrame) -> SimValue:
        size = expression.type.info().size
        return SimValue(expression.type, bytes(expression.data[:size]))

    def _print(self, expression: PrintExpression, frame: SimFrame) -> None:
        try:
            value = self.simulate(expression.expression, frame)
        except SimulationError:
            self.os_stdout.write("(null)\n")
            raise
        if value is None:
            self.os_stdout.write("(null)\n")
            return None
        size = value.type.info().size
        self.os_stdout.write(f"({value.type})")
        self.os_stdout.write(value.data[:size].hex().upper())
        self.os_stdout.write("\n")
        return None

    def _frame(self, expression: FrameExpression, frame: SimFrame) -> Optional[SimValue]:
        inner = SimFrame(expression.frame, frame)
        if expression.expression is None:
            return None
        try:
            return self.simulate(expression.expression, inner)
        except SimulationError:
            # A frame reports success even when its body failed.
            return None

    def _sequence(
        self, expression: SequenceExpression, frame: SimFrame
    ) -> Optional[SimValue]:
        value: Optional[SimValue] = None
        for item in expression.items:
            value = self.simulate(item, frame)
        return value