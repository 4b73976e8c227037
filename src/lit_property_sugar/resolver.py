"""Type resolution: annotation or default value → InferredType."""

from __future__ import annotations

from .model import (
    ArrayLiteral,
    ArrayOf,
    BooleanLiteral,
    Expression,
    FieldDeclaration,
    InferredType,
    Literal,
    MemberKind,
    NumericLiteral,
    ObjectLiteral,
    Other,
    Primitive,
    Reference,
    StringLiteral,
    StructuralShape,
    TypeAnnotation,
    UnionOf,
)


def resolve(member: FieldDeclaration) -> InferredType:
    """Resolve the value kind of *member*.

    Never raises; ``InferredType.Unknown`` means the kind could not be
    determined and the caller decides whether that is fatal.

    - Getter: its return annotation only
    - Setter / plain method: always Unknown
    - Field: annotation first, then default value
    """
    if member.kind is not MemberKind.Field:
        if member.kind is MemberKind.Getter and member.type_annotation is not None:
            return resolve_annotation(member.type_annotation)
        return InferredType.Unknown

    if member.type_annotation is not None:
        return resolve_annotation(member.type_annotation)

    if member.default_value is not None:
        return resolve_value(member.default_value)

    return InferredType.Unknown


def resolve_annotation(annotation: TypeAnnotation) -> InferredType:
    match annotation:
        case Primitive(tag=tag):
            return tag
        case ArrayOf():
            return InferredType.Array
        case Literal(value=value):
            return _literal_kind(value)
        case Reference() | StructuralShape():
            return InferredType.Object
        case UnionOf(members=members):
            return _common_kind(members)
        case Other():
            return InferredType.Unknown
    return InferredType.Unknown


def resolve_value(expr: Expression) -> InferredType:
    match expr:
        case StringLiteral():
            return InferredType.String
        case NumericLiteral():
            return InferredType.Number
        case BooleanLiteral():
            return InferredType.Boolean
        case ObjectLiteral():
            return InferredType.Object
        case ArrayLiteral():
            return InferredType.Array
    # new Foo(), identifiers, templates, ...
    return InferredType.Unknown


def _literal_kind(value: object) -> InferredType:
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return InferredType.Boolean
    if isinstance(value, str):
        return InferredType.String
    if isinstance(value, (int, float)):
        return InferredType.Number
    return InferredType.Unknown


def _common_kind(members: tuple[TypeAnnotation, ...]) -> InferredType:
    """All members must agree on one known kind, else Unknown."""
    if not members:
        return InferredType.Unknown
    kinds = {resolve_annotation(m) for m in members}
    if len(kinds) != 1:
        return InferredType.Unknown
    return kinds.pop()
