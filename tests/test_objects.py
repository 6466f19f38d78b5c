import pytest

from chilang.objects import (
    Keyword,
    KeywordObject,
    TypedObject,
    TypeObject,
    keyword_object,
    type_object,
)
from chilang.types import PointerType, PrimitiveKind, primitive


def test_keyword_repr_print():
    assert str(KeywordObject(Keyword.PRINT)) == "<keyword:print>"


def test_keyword_repr_assign():
    assert str(KeywordObject(Keyword.ASSIGN)) == "<keyword:assign>"


@pytest.mark.parametrize("keyword", list(Keyword))
def test_every_keyword_has_distinct_repr(keyword):
    text = str(KeywordObject(keyword))
    assert text.startswith("<keyword:") and text.endswith(">")
    others = {str(KeywordObject(k)) for k in Keyword if k is not keyword}
    assert text not in others


@pytest.mark.parametrize("keyword", list(Keyword))
def test_keyword_object_copy_round_trip(keyword):
    obj = KeywordObject(keyword)
    assert obj.copy() == obj
    assert obj.copy().keyword is keyword


def test_keyword_object_has_keyword_type():
    typed = keyword_object(Keyword.IF)
    assert typed.type == primitive(PrimitiveKind.KEYWORD)
    assert typed.object == KeywordObject(Keyword.IF)


def test_type_object_has_type_type():
    typed = type_object(primitive(PrimitiveKind.U8))
    assert typed.type == primitive(PrimitiveKind.TYPE)
    assert typed.object.type == primitive(PrimitiveKind.U8)


def test_type_object_repr_is_type_repr():
    inner = PointerType(primitive(PrimitiveKind.I32))
    assert str(TypeObject(inner)) == str(inner)


def test_type_object_copy_equal():
    obj = TypeObject(primitive(PrimitiveKind.BOOL))
    copied = obj.copy()
    assert copied == obj
    assert copied.type == primitive(PrimitiveKind.BOOL)


def test_typed_object_copy():
    typed = type_object(primitive(PrimitiveKind.U32))
    copied = typed.copy()
    assert copied == typed
    assert isinstance(copied, TypedObject)
    assert copied.object.type == primitive(PrimitiveKind.U32)