import pytest

from chilang.expressions import (
    AssignmentExpression,
    Expression,
    FrameExpression,
    GetExpression,
    LiteralExpression,
    PrintExpression,
    SequenceExpression,
)
from chilang.members import MemberList, init_global_frame
from chilang.parser import Parser
from chilang.simulator import (
    SimCode,
    SimFrame,
    SimulationError,
    SimValue,
    Simulator,
)
from chilang.streams import StringInStream, StringOutStream
from chilang.types import PointerType, PrimitiveKind, primitive

U8 = primitive(PrimitiveKind.U8)
BOOL = primitive(PrimitiveKind.BOOL)


def make_simulator():
    out = StringOutStream()
    sim = Simulator(init_global_frame(MemberList()), os_stdout=out)
    return sim, out


def test_literal_evaluates_to_its_bytes():
    sim, _ = make_simulator()
    value = sim.evaluate(LiteralExpression(U8, b"\x07"))
    assert value == SimValue(U8, b"\x07")


def test_assignment_then_get_round_trip():
    sim, _ = make_simulator()
    members = MemberList()
    x = members.add("x")
    x.type = U8
    frame = SimFrame(members, sim.global_frame)
    assigned = sim.simulate(AssignmentExpression(x, LiteralExpression(U8, b"\x09")), frame)
    assert sim.simulate(GetExpression(x), frame) == assigned
    assert frame.get_value(x).data == b"\x09"


def test_print_writes_type_and_hex_bytes():
    sim, out = make_simulator()
    result = sim.evaluate(PrintExpression(LiteralExpression(U8, b"\x2a")))
    assert result is None
    assert out.getvalue() == "(u8)2A\n"


def test_print_of_unset_member_writes_null():
    sim, out = make_simulator()
    members = MemberList()
    x = members.add("x")
    x.type = U8
    frame = SimFrame(members)
    sim.simulate(PrintExpression(GetExpression(x)), frame)
    assert out.getvalue() == "(null)\n"


def test_get_of_unknown_member_raises():
    sim, _ = make_simulator()
    stranger = MemberList().add("y")
    stranger.type = U8
    with pytest.raises(SimulationError) as info:
        sim.evaluate(GetExpression(stranger))
    assert info.value.code is SimCode.FRAME_MEMBER_NOT_FOUND


def test_print_of_failing_operand_writes_null_and_raises():
    sim, out = make_simulator()
    stranger = MemberList().add("y")
    with pytest.raises(SimulationError):
        sim.evaluate(PrintExpression(GetExpression(stranger)))
    assert out.getvalue() == "(null)\n"


def test_frame_swallows_errors():
    sim, _ = make_simulator()
    stranger = MemberList().add("y")
    frame_expression = FrameExpression(expression=GetExpression(stranger))
    assert sim.evaluate(frame_expression) is None


def test_empty_frame_evaluates_to_none():
    sim, out = make_simulator()
    assert sim.evaluate(FrameExpression()) is None
    assert out.getvalue() == ""


def test_frame_lookup_reaches_parent():
    parent_members = MemberList()
    x = parent_members.add("x")
    x.type = U8
    parent = SimFrame(parent_members)
    child = SimFrame(MemberList(), parent)
    value = SimValue(U8, b"\x01")
    child.set_value(x, value)
    assert parent.get_value(x) is value
    assert child.get_value(x) is value


def test_frame_skips_members_of_invalid_type():
    members = MemberList()
    bad = members.add("p")
    bad.type = PointerType(primitive(PrimitiveKind.TYPE))
    frame = SimFrame(members)
    with pytest.raises(SimulationError) as info:
        frame.set_value(bad, None)
    assert info.value.code is SimCode.FRAME_MEMBER_NOT_FOUND


def test_sequence_returns_last_value():
    sim, _ = make_simulator()
    seq = SequenceExpression(
        [LiteralExpression(U8, b"\x01"), LiteralExpression(U8, b"\x02")]
    )
    assert sim.evaluate(seq) == SimValue(U8, b"\x02")


class _Unknown(Expression):
    def repr_to(self, os):
        os.write("?")

    def copy(self):
        return _Unknown()


def test_unsupported_expression_raises():
    sim, _ = make_simulator()
    with pytest.raises(SimulationError) as info:
        sim.evaluate(_Unknown())
    assert info.value.code is SimCode.UNSUPPORTED_EXPRESSION


def test_parsed_program_runs():
    parser = Parser(init_global_frame(MemberList()))
    root = parser.parse_unit(StringInStream("u8 x = 7;\nprint x;\nprint true;\n"), "t")
    out = StringOutStream()
    sim = Simulator(parser.global_frame, os_stdout=out)
    sim.evaluate(root)
    lines = out.getvalue().splitlines()
    assert lines[0] == "(u8)07"
    assert lines[1] == "(bool)01"