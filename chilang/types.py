"""Type descriptions of the language: primitives, pointers, qualifiers, callables."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

POINTER_SIZE = 8
"""Size in bytes of a pointer value."""

TYPEQUALIFIER_CONST = 1 << 0
"""Flag bit selecting the ``const`` qualifier in ``TypeQualifiers.from_flags``."""


class PrimitiveKind(Enum):
    """Built-in types; the first group are meta types, the rest hold values."""

    UNIT = 0
    NAMESPACE = 1
    ALIAS = 2
    INTERFACE = 3
    TEMPLATE = 4
    TYPE = 5
    MODIFIER = 6
    STRUCT = 7
    UNION = 8
    KEYWORD = 9
    INFER = 10
    DISCARD = 11
    ANY = 12
    TOKEN = 13

    VOID = 14
    BOOL = 15
    U8 = 16
    U32 = 17
    I8 = 18
    I32 = 19


@dataclass(frozen=True)
class TypeInfo:
    """What is known about the storage of values of a type."""

    valid: bool
    meta: bool
    size_known: bool
    size: int


_META_INFO = TypeInfo(valid=True, meta=True, size_known=False, size=0)


def _value_info(size: int) -> TypeInfo:
    return TypeInfo(valid=True, meta=False, size_known=True, size=size)


_PRIMITIVE_NAMES = {
    PrimitiveKind.UNIT: "<unit>",
    PrimitiveKind.NAMESPACE: "<namespace>",
    PrimitiveKind.ALIAS: "<alias>",
    PrimitiveKind.INTERFACE: "<interface>",
    PrimitiveKind.TEMPLATE: "<template>",
    PrimitiveKind.TYPE: "<type>",
    PrimitiveKind.MODIFIER: "<modifier>",
    PrimitiveKind.STRUCT: "<struct>",
    PrimitiveKind.UNION: "<union>",
    PrimitiveKind.KEYWORD: "<keyword>",
    PrimitiveKind.INFER: "<infer>",
    PrimitiveKind.DISCARD: "<discard>",
    PrimitiveKind.ANY: "<any>",
    PrimitiveKind.TOKEN: "<token>",
    PrimitiveKind.VOID: "void",
    PrimitiveKind.BOOL: "bool",
    PrimitiveKind.U8: "u8",
    PrimitiveKind.U32: "u32",
    PrimitiveKind.I8: "i8",
    PrimitiveKind.I32: "i32",
}

_PRIMITIVE_INFOS = {
    **{kind: _META_INFO for kind in PrimitiveKind if kind.value < PrimitiveKind.VOID.value},
    PrimitiveKind.VOID: _value_info(0),
    PrimitiveKind.BOOL: _value_info(1),
    PrimitiveKind.I8: _value_info(1),
    PrimitiveKind.I32: _value_info(4),
    PrimitiveKind.U8: _value_info(1),
    PrimitiveKind.U32: _value_info(4),
}

_SIGNED = frozenset({PrimitiveKind.I8, PrimitiveKind.I32})
_UNSIGNED = frozenset({PrimitiveKind.U8, PrimitiveKind.U32})


class Type(ABC):
    """A type; ``str()`` gives its textual form, ``==`` its equality."""

    @abstractmethod
    def info(self) -> TypeInfo:
        """Return the storage information of the type."""


@dataclass(frozen=True)
class PrimitiveType(Type):
    """One of the built-in types."""

    kind: PrimitiveKind

    def info(self) -> TypeInfo:
        return _PRIMITIVE_INFOS[self.kind]

    def __str__(self) -> str:
        return _PRIMITIVE_NAMES[self.kind]


@dataclass(frozen=True)
class PointerType(Type):
    """A pointer to values of ``type``."""

    type: Type

    def info(self) -> TypeInfo:
        inner = self.type.info()
        return TypeInfo(
            valid=inner.valid and not inner.meta,
            meta=inner.meta,
            size_known=True,
            size=POINTER_SIZE,
        )

    def __str__(self) -> str:
        return f"@{self.type}"


@dataclass(frozen=True)
class TypeQualifiers:
    """Qualifiers attached to a type."""

    const: bool = False

    def merge(self, other: TypeQualifiers) -> TypeQualifiers:
        """Combine two sets of qualifiers."""
        return TypeQualifiers(const=self.const or other.const)

    @classmethod
    def from_flags(cls, flags: int) -> TypeQualifiers:
        """Build qualifiers from a bit set of ``TYPEQUALIFIER_*`` flags."""
        return cls(const=bool(flags & TYPEQUALIFIER_CONST))


@dataclass(frozen=True)
class QualifierType(Type):
    """A type with qualifiers attached."""

    qualifiers: TypeQualifiers
    type: Type

    def info(self) -> TypeInfo:
        return self.type.info()

    def __str__(self) -> str:
        prefix = "const " if self.qualifiers.const else ""
        return f"{prefix}{self.type}"


@dataclass(frozen=True, eq=False)
class CallableType(Type):
    """The type of a callable; no two callable types compare equal yet."""

    result: Type
    arguments: tuple[Type, ...] = ()

    def info(self) -> TypeInfo:
        return TypeInfo(valid=True, meta=True, size_known=True, size=0)

    def __str__(self) -> str:
        return f"{self.result}({', '.join(str(arg) for arg in self.arguments)})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Type):
            return False
        return NotImplemented

    __hash__ = object.__hash__


def qualify(qualifiers: TypeQualifiers, type_: Type) -> QualifierType:
    """Attach qualifiers to a type, merging with any it already carries."""
    if isinstance(type_, QualifierType):
        return QualifierType(qualifiers.merge(type_.qualifiers), type_.type)
    return QualifierType(qualifiers, type_)


@lru_cache(maxsize=None)
def primitive(kind: PrimitiveKind) -> PrimitiveType:
    """Return the shared primitive type of ``kind``."""
    return PrimitiveType(kind)


def is_primitive(type_: Type, kind: PrimitiveKind) -> bool:
    """Whether ``type_`` is the primitive type ``kind``."""
    return isinstance(type_, PrimitiveType) and type_.kind is kind


def is_signed_integer(type_: Type) -> bool:
    return isinstance(type_, PrimitiveType) and type_.kind in _SIGNED


def is_unsigned_integer(type_: Type) -> bool:
    return isinstance(type_, PrimitiveType) and type_.kind in _UNSIGNED


def is_integer(type_: Type) -> bool:
    return is_signed_integer(type_) or is_unsigned_integer(type_)


@dataclass(frozen=True)
class EqualTypeMatcher:
    """Matches types equal to ``type``."""

    type: Type

    def match(self, type_: Type) -> bool:
        return self.type == type_


@dataclass(frozen=True)
class SmartTypeMatcher:
    """Matches types equal to ``type``; ``<any>`` matches every type."""

    type: Type

    def match(self, type_: Type) -> bool:
        if is_primitive(self.type, PrimitiveKind.ANY):
            return True
        return self.type == type_


ANY = primitive(PrimitiveKind.ANY)
"""The ``<any>`` type."""