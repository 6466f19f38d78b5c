"""A small register machine operating on 64-bit integers in a byte frame."""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Callable, Optional, Union

from chilang.streams import OutStream

VM_STACK_SIZE = 1_000_000
"""Size in bytes of a machine stack."""

INT_SIZE = 8
"""Size in bytes of a machine integer, stored little-endian."""

_INT_MIN = -(1 << 63)
_INT_RANGE = 1 << 64


class VmExitCode(IntEnum):
    OK = 0
    ERR = 1


class Opcode(Enum):
    NOP = 0
    RET = 1
    CALL = 2
    CPY = 3
    READ = 4
    WRITE = 5
    JMP = 6
    JMP_Z = 7
    JMP_L = 8
    JMP_G = 9
    JMP_ZL = 10
    JMP_ZG = 11
    SET = 12
    ADD = 13
    SUB = 14
    MUL = 15
    DIV = 16
    MOD = 17
    CMP = 18
    PRINT = 19
    PRINT_CHAR = 20


@dataclass(frozen=True)
class RetData:
    """Leave the procedure with ``code``."""

    code: VmExitCode = VmExitCode.OK


@dataclass(frozen=True)
class CallData:
    """Run ``procedure`` with its frame starting at offset ``frame``."""

    procedure: Procedure
    frame: int


@dataclass(frozen=True)
class CopyData:
    """Copy ``n`` bytes inside the frame from ``src`` to ``dest``."""

    n: int
    dest: int
    src: int


@dataclass(frozen=True)
class ReadData:
    """Copy ``n`` bytes from the host buffer ``src`` into the frame at ``dest``."""

    n: int
    dest: int
    src: bytes


@dataclass(frozen=True)
class WriteData:
    """Copy ``n`` bytes from the frame at ``src`` into the host buffer ``dest``."""

    n: int
    dest: bytearray
    src: int


@dataclass(frozen=True)
class JumpData:
    """Continue at operation ``target``, conditioned on the integer at ``cond``."""

    target: int
    cond: int = 0


@dataclass(frozen=True)
class SetData:
    """Copy the integer stored at ``val`` to ``dest``."""

    dest: int
    val: int


@dataclass(frozen=True)
class GenericData:
    """Operand addresses: result ``r`` and arguments ``a`` and ``b``."""

    r: int = 0
    a: int = 0
    b: int = 0


OperationData = Union[
    RetData, CallData, CopyData, ReadData, WriteData, JumpData, SetData, GenericData
]


@dataclass(frozen=True)
class Operation:
    opcode: Union[Opcode, int]
    data: Optional[OperationData] = None


@dataclass
class Procedure:
    ops: list[Operation] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.ops)


def _wrap(value: int) -> int:
    return (value - _INT_MIN) % _INT_RANGE + _INT_MIN


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _trunc_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def _compare(a: int, b: int) -> int:
    difference = _wrap(a - b)
    return (difference > 0) - (difference < 0)


_ARITHMETIC: dict[Opcode, Callable[[int, int], int]] = {
    Opcode.ADD: operator.add,
    Opcode.SUB: operator.sub,
    Opcode.MUL: operator.mul,
    Opcode.DIV: _trunc_div,
    Opcode.MOD: _trunc_mod,
    Opcode.CMP: _compare,
}

_CONDITIONAL_JUMPS: dict[Opcode, Callable[[int], bool]] = {
    Opcode.JMP_Z: lambda value: value == 0,
    Opcode.JMP_L: lambda value: value < 0,
    Opcode.JMP_G: lambda value: value > 0,
    Opcode.JMP_ZL: lambda value: value <= 0,
    Opcode.JMP_ZG: lambda value: value >= 0,
}


def _span(memory: memoryview, address: int, size: int) -> slice:
    if address < 0 or size < 0 or address + size > len(memory):
        raise IndexError(
            f"frame access [{address}, {address + size}) outside {len(memory)} bytes"
        )
    return slice(address, address + size)


def _load(memory: memoryview, address: int) -> int:
    return int.from_bytes(memory[_span(memory, address, INT_SIZE)], "little", signed=True)


def _store(memory: memoryview, address: int, value: int) -> None:
    memory[_span(memory, address, INT_SIZE)] = _wrap(value).to_bytes(
        INT_SIZE, "little", signed=True
    )


@dataclass
class VmInstance:
    """Executes procedures, printing to ``os_out`` and logging to ``os_log``."""

    os_out: OutStream
    os_err: OutStream
    os_log: OutStream

    def execute_procedure(
        self, procedure: Procedure, frame: Union[bytearray, memoryview]
    ) -> VmExitCode:
        """Run ``procedure`` over ``frame`` and return how it ended.

        Running past the last operation without ``RET`` is an error.
        """
        memory = frame if isinstance(frame, memoryview) else memoryview(frame)
        ops = procedure.ops
        index = 0
        while index < len(ops):
            op = ops[index]
            data = op.data
            index += 1

            try:
                opcode = Opcode(op.opcode)
            except ValueError:
                self.os_log.write(f"\nVM: Unsupported operation {op.opcode}\n")
                return VmExitCode.ERR

            if opcode is Opcode.NOP:
                continue
            if opcode is Opcode.RET:
                return VmExitCode(data.code) if data is not None else VmExitCode.OK
            if opcode is Opcode.CALL:
                code = self.execute_procedure(data.procedure, memory[data.frame:])
                if code != VmExitCode.OK:
                    return code
            elif opcode is Opcode.CPY:
                chunk = bytes(memory[_span(memory, data.src, data.n)])
                memory[_span(memory, data.dest, data.n)] = chunk
            elif opcode is Opcode.READ:
                if len(data.src) < data.n:
                    raise IndexError(f"host buffer holds fewer than {data.n} bytes")
                memory[_span(memory, data.dest, data.n)] = bytes(data.src[: data.n])
            elif opcode is Opcode.WRITE:
                if len(data.dest) < data.n:
                    raise IndexError(f"host buffer holds fewer than {data.n} bytes")
                data.dest[: data.n] = bytes(memory[_span(memory, data.src, data.n)])
            elif opcode is Opcode.JMP:
                index = data.target
            elif opcode in _CONDITIONAL_JUMPS:
                if _CONDITIONAL_JUMPS[opcode](_load(memory, data.cond)):
                    index = data.target
            elif opcode is Opcode.SET:
                _store(memory, data.dest, _load(memory, data.val))
            elif opcode in _ARITHMETIC:
                result = _ARITHMETIC[opcode](_load(memory, data.a), _load(memory, data.b))
                _store(memory, data.r, result)
            elif opcode is Opcode.PRINT:
                self.os_out.write(str(_load(memory, data.a)))
            elif opcode is Opcode.PRINT_CHAR:
                self.os_out.putc(chr(_load(memory, data.a) & 0xFF))

        return VmExitCode.ERR