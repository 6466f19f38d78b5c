"""Named members of a frame and the lists that hold them."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, Protocol

from chilang.multimap import MultiMap
from chilang.objects import Keyword, LanguageObject, keyword_object, type_object
from chilang.streams import OutStream
from chilang.types import PrimitiveKind, Type, primitive


@dataclass(frozen=True)
class MemberQualifiers:
    """Qualifiers a member is declared with."""

    static: bool = False
    private: bool = False
    public: bool = False
    const: bool = False
    reserve: bool = False

    def __str__(self) -> str:
        names = ("static", "private", "public", "const", "reserve")
        return "".join(f"{name} " for name in names if getattr(self, name))


@dataclass(eq=False)
class Member:
    """A named slot of a frame; members compare by identity."""

    token: str
    type: Type = field(default_factory=lambda: primitive(PrimitiveKind.VOID))
    object: Optional[LanguageObject] = None
    qualifiers: MemberQualifiers = field(default_factory=MemberQualifiers)


class _MemberMatcher(Protocol):
    def match(self, member: Member) -> bool: ...


class _TypeMatcher(Protocol):
    def match(self, type_: Type) -> bool: ...


class AnyMemberMatcher:
    """Matches every member."""

    def match(self, member: Member) -> bool:
        return True


class MemberList:
    """Members of one frame, looked up by token; later members shadow earlier ones."""

    def __init__(self) -> None:
        self._members: list[Member] = []
        self._by_token = MultiMap()

    def add(self, token: str) -> Member:
        """Add a new member named ``token`` and return it."""
        member = Member(token)
        self._members.append(member)
        self._by_token.add(token, member)
        return member

    def add_type(self, token: str, type_: Type) -> Member:
        """Add a constant member naming the type ``type_``."""
        return self._add_constant(token, type_object(type_))

    def add_keyword(self, token: str, keyword: Keyword) -> Member:
        """Add a constant member naming the keyword."""
        return self._add_constant(token, keyword_object(keyword))

    def _add_constant(self, token: str, typed) -> Member:
        member = self.add(token)
        member.type = typed.type
        member.object = typed.object
        member.qualifiers = MemberQualifiers(const=True)
        return member

    def first(self, token: str) -> Member:
        """Return the newest member named ``token``; raise ``KeyError`` if none."""
        return self._by_token[token]

    def matching(
        self, token: str, member_matcher: _MemberMatcher, type_matcher: _TypeMatcher
    ) -> Member | None:
        """Return the newest member named ``token`` accepted by both matchers."""
        for member in self._by_token.matching(token):
            if member_matcher.match(member) and type_matcher.match(member.type):
                return member
        return None

    def has_member(self, member: Member) -> bool:
        """Whether this very member belongs to the list."""
        return any(m is member for m in self._members)

    def runtime_size(self) -> int:
        return 0

    def repr_to(self, os: OutStream) -> None:
        """Write every member, one item each, in the order they were added."""
        for token, member in self._by_token.items():
            os.begin_item()
            os.write(str(member.qualifiers))
            os.write(str(member.type))
            os.putc(" ")
            os.write(token)
            if member.object is not None:
                os.write(" = ")
                os.write(str(member.object))
            os.end_item()

    def __iter__(self) -> Iterator[Member]:
        return iter(list(self._members))

    def __len__(self) -> int:
        return len(self._members)


_GLOBAL_TYPES = (
    ("namespace", PrimitiveKind.NAMESPACE),
    ("alias", PrimitiveKind.ALIAS),
    ("interface", PrimitiveKind.INTERFACE),
    ("template", PrimitiveKind.TEMPLATE),
    ("struct", PrimitiveKind.STRUCT),
    ("union", PrimitiveKind.UNION),
    ("type", PrimitiveKind.TYPE),
    ("auto", PrimitiveKind.INFER),
    ("any", PrimitiveKind.ANY),
    ("void", PrimitiveKind.VOID),
    ("bool", PrimitiveKind.BOOL),
    ("u8", PrimitiveKind.U8),
    ("u32", PrimitiveKind.U32),
    ("i8", PrimitiveKind.I8),
    ("i32", PrimitiveKind.I32),
)


def init_global_frame(frame: MemberList) -> MemberList:
    """Add the built-in type names to ``frame`` and return it."""
    for token, kind in _GLOBAL_TYPES:
        frame.add_type(token, primitive(kind))
    return frame