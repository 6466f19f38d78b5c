import pytest

from chilang.types import (
    CallableType,
    EqualTypeMatcher,
    PointerType,
    PrimitiveKind,
    PrimitiveType,
    QualifierType,
    SmartTypeMatcher,
    TypeInfo,
    TypeQualifiers,
    TYPEQUALIFIER_CONST,
    is_integer,
    is_primitive,
    is_signed_integer,
    is_unsigned_integer,
    primitive,
    qualify,
)

META = TypeInfo(valid=True, meta=True, size_known=False, size=0)


@pytest.mark.parametrize(
    "kind, text, info",
    [
        (PrimitiveKind.UNIT, "<unit>", META),
        (PrimitiveKind.NAMESPACE, "<namespace>", META),
        (PrimitiveKind.TYPE, "<type>", META),
        (PrimitiveKind.KEYWORD, "<keyword>", META),
        (PrimitiveKind.ANY, "<any>", META),
        (PrimitiveKind.TOKEN, "<token>", META),
        (PrimitiveKind.VOID, "void", TypeInfo(True, False, True, 0)),
        (PrimitiveKind.BOOL, "bool", TypeInfo(True, False, True, 1)),
        (PrimitiveKind.U8, "u8", TypeInfo(True, False, True, 1)),
        (PrimitiveKind.U32, "u32", TypeInfo(True, False, True, 4)),
        (PrimitiveKind.I8, "i8", TypeInfo(True, False, True, 1)),
        (PrimitiveKind.I32, "i32", TypeInfo(True, False, True, 4)),
    ],
)
def test_primitive_repr_and_info(kind, text, info):
    t = primitive(kind)
    assert str(t) == text
    assert t.info() == info


def test_every_primitive_has_repr_and_info():
    for kind in PrimitiveKind:
        t = primitive(kind)
        assert str(t)
        assert t.info().valid is True


def test_pointer_to_i32():
    t = PointerType(primitive(PrimitiveKind.I32))
    assert str(t) == "@i32"
    assert t.info() == TypeInfo(valid=True, meta=False, size_known=True, size=8)


def test_pointer_to_meta_type_is_invalid():
    info = PointerType(primitive(PrimitiveKind.TYPE)).info()
    assert info.valid is False
    assert info.meta is True


def test_const_qualified_i32():
    t = qualify(TypeQualifiers.from_flags(TYPEQUALIFIER_CONST), primitive(PrimitiveKind.I32))
    assert str(t) == "const i32"
    assert t.info() == TypeInfo(valid=True, meta=False, size_known=True, size=4)


def test_unqualified_repr_has_no_prefix():
    t = QualifierType(TypeQualifiers(), primitive(PrimitiveKind.U8))
    assert str(t) == "u8"


def test_qualify_merges_nested_qualifiers():
    inner = qualify(TypeQualifiers(const=True), primitive(PrimitiveKind.I8))
    outer = qualify(TypeQualifiers(), inner)
    assert outer == QualifierType(TypeQualifiers(const=True), primitive(PrimitiveKind.I8))


def test_qualifier_merge_and_flags():
    assert TypeQualifiers().merge(TypeQualifiers(const=True)).const is True
    assert TypeQualifiers().merge(TypeQualifiers()).const is False
    assert TypeQualifiers.from_flags(0).const is False


def test_equality():
    i32 = primitive(PrimitiveKind.I32)
    assert i32 == PrimitiveType(PrimitiveKind.I32)
    assert i32 != primitive(PrimitiveKind.U32)
    assert PointerType(i32) == PointerType(PrimitiveType(PrimitiveKind.I32))
    assert PointerType(i32) != i32
    c1 = qualify(TypeQualifiers(const=True), i32)
    assert c1 != QualifierType(TypeQualifiers(), i32)


def test_callable_type():
    i32 = primitive(PrimitiveKind.I32)
    t = CallableType(i32, (i32, primitive(PrimitiveKind.BOOL)))
    assert str(t) == "i32(i32, bool)"
    assert t.info() == TypeInfo(valid=True, meta=True, size_known=True, size=0)
    assert (t == CallableType(i32, (i32, primitive(PrimitiveKind.BOOL)))) is False
    assert str(CallableType(primitive(PrimitiveKind.VOID))) == "void()"


def test_integer_predicates():
    assert is_signed_integer(primitive(PrimitiveKind.I8))
    assert is_signed_integer(primitive(PrimitiveKind.I32))
    assert not is_signed_integer(primitive(PrimitiveKind.U8))
    assert is_unsigned_integer(primitive(PrimitiveKind.U32))
    assert not is_unsigned_integer(primitive(PrimitiveKind.BOOL))
    assert is_integer(primitive(PrimitiveKind.U8))
    assert not is_integer(PointerType(primitive(PrimitiveKind.I32)))


def test_is_primitive():
    assert is_primitive(primitive(PrimitiveKind.TYPE), PrimitiveKind.TYPE)
    assert not is_primitive(primitive(PrimitiveKind.TYPE), PrimitiveKind.ANY)
    assert not is_primitive(PointerType(primitive(PrimitiveKind.ANY)), PrimitiveKind.ANY)


def test_equal_matcher():
    m = EqualTypeMatcher(primitive(PrimitiveKind.ANY))
    assert m.match(primitive(PrimitiveKind.ANY))
    assert not m.match(primitive(PrimitiveKind.I32))


def test_smart_matcher():
    any_matcher = SmartTypeMatcher(primitive(PrimitiveKind.ANY))
    assert any_matcher.match(primitive(PrimitiveKind.I32))
    assert any_matcher.match(PointerType(primitive(PrimitiveKind.U8)))
    u8 = SmartTypeMatcher(primitive(PrimitiveKind.U8))
    assert u8.match(primitive(PrimitiveKind.U8))
    assert not u8.match(primitive(PrimitiveKind.U32))