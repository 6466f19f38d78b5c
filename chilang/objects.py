"""Compile-time objects bound to members: keywords and types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from chilang.types import PrimitiveKind, Type, primitive


class Keyword(Enum):
    """Keywords of the language."""

    ASSIGN = 0
    PRINT = 1
    IF = 2
    ELSE = 3
    TRUE = 4
    FALSE = 5
    CALLABLE = 6


_KEYWORD_REPRS = {
    Keyword.ASSIGN: "<keyword:assign>",
    Keyword.PRINT: "<keyword:print>",
    Keyword.IF: "<keyword:if>",
    Keyword.ELSE: "<keyword:else>",
    Keyword.TRUE: "<keyword:true>",
    Keyword.FALSE: "<keyword:false>",
    Keyword.CALLABLE: "<keyword:callable>",
}


@dataclass(frozen=True)
class KeywordObject:
    """An object standing for a keyword."""

    keyword: Keyword

    def copy(self) -> KeywordObject:
        return KeywordObject(self.keyword)

    def __str__(self) -> str:
        return _KEYWORD_REPRS[self.keyword]


@dataclass(frozen=True)
class TypeObject:
    """An object whose value is a type."""

    type: Type

    def copy(self) -> TypeObject:
        return TypeObject(self.type)

    def __str__(self) -> str:
        return str(self.type)


LanguageObject = Union[KeywordObject, TypeObject]


@dataclass(frozen=True)
class TypedObject:
    """An object together with the type it has."""

    type: Type
    object: LanguageObject

    def copy(self) -> TypedObject:
        return TypedObject(self.type, self.object.copy())


def keyword_object(keyword: Keyword) -> TypedObject:
    """Return the keyword as an object of type ``<keyword>``."""
    return TypedObject(primitive(PrimitiveKind.KEYWORD), KeywordObject(keyword))


def type_object(type_: Type) -> TypedObject:
    """Return the type as an object of type ``<type>``."""
    return TypedObject(primitive(PrimitiveKind.TYPE), TypeObject(type_))