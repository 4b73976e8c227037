"""Data model for class members, decorators, type annotations and option maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Union


# ---------------------------------------------------------------------------
# InferredType / MemberKind
# ---------------------------------------------------------------------------

class InferredType(Enum):
    String = auto()
    Number = auto()
    Boolean = auto()
    Array = auto()
    Object = auto()
    Unknown = auto()


class MemberKind(Enum):
    Field = auto()
    Getter = auto()
    Setter = auto()
    Method = auto()


@dataclass(slots=True, frozen=True)
class SourceLocation:
    line: int  # 1-based
    column: int  # 0-based


# ---------------------------------------------------------------------------
# TypeAnnotation: closed set of annotation shapes
# ---------------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class Primitive:
    tag: InferredType  # String | Number | Boolean


@dataclass(slots=True, frozen=True)
class ArrayOf:
    element: TypeAnnotation | None = None


@dataclass(slots=True, frozen=True)
class Literal:
    value: str | float | int | bool


@dataclass(slots=True, frozen=True)
class Reference:
    name: str


@dataclass(slots=True, frozen=True)
class StructuralShape:
    pass


@dataclass(slots=True, frozen=True)
class UnionOf:
    members: tuple[TypeAnnotation, ...]


@dataclass(slots=True, frozen=True)
class Other:
    text: str  # e.g. "any", "unknown", a function type


TypeAnnotation = Union[Primitive, ArrayOf, Literal, Reference, StructuralShape, UnionOf, Other]


# ---------------------------------------------------------------------------
# Expressions: default values and option values
# ---------------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class Identifier:
    name: str


@dataclass(slots=True, frozen=True)
class StringLiteral:
    value: str


@dataclass(slots=True, frozen=True)
class NumericLiteral:
    raw: str


@dataclass(slots=True, frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(slots=True, frozen=True)
class ArrayLiteral:
    elements: tuple[Expression, ...] = ()


@dataclass(slots=True, frozen=True)
class OtherExpression:
    text: str  # e.g. "new Foo()"


@dataclass(slots=True, frozen=True)
class ObjectEntry:
    key: str | None  # None = spread / computed key, carried through as-is
    value: Expression | None
    source: str | None = None  # original text of the entry, if any


@dataclass(slots=True, frozen=True)
class ObjectLiteral:
    """Ordered, key-unique object literal.

    Used both for object default values and as the options argument of a
    decorator call (see ``OptionsMap``). Instances are never mutated;
    ``with_entry`` returns a new map.
    """

    entries: tuple[ObjectEntry, ...] = ()

    def get(self, key: str) -> ObjectEntry | None:
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def keys(self) -> Iterator[str]:
        return (e.key for e in self.entries if e.key is not None)

    def with_entry(self, key: str, value: Expression) -> ObjectLiteral:
        """Return a copy with *key* added.

        The entry goes in front of the first spread or computed entry so a
        later spread can still override it at runtime, otherwise at the end.
        """
        if self.has(key):
            raise KeyError(f"option {key!r} is already set")
        index = next(
            (i for i, e in enumerate(self.entries) if e.key is None), len(self.entries)
        )
        entry = ObjectEntry(key, value)
        return ObjectLiteral(self.entries[:index] + (entry,) + self.entries[index:])


OptionsMap = ObjectLiteral

Expression = Union[
    Identifier,
    StringLiteral,
    NumericLiteral,
    BooleanLiteral,
    ObjectLiteral,
    ArrayLiteral,
    OtherExpression,
]


# ---------------------------------------------------------------------------
# Decorators and class members
# ---------------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class DecoratorCall:
    callee: str
    arguments: tuple[Expression, ...] = ()
    location: SourceLocation | None = None


@dataclass(slots=True, frozen=True)
class Decorator:
    name: str
    call: DecoratorCall | None = None  # None for a bare ``@name``
    location: SourceLocation | None = None


@dataclass(slots=True, frozen=True)
class FieldDeclaration:
    name: str
    kind: MemberKind = MemberKind.Field
    type_annotation: TypeAnnotation | None = None
    default_value: Expression | None = None
    decorators: tuple[Decorator, ...] = field(default_factory=tuple)
    location: SourceLocation | None = None
