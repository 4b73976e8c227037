"""Render model expressions back to JavaScript/TypeScript source text."""

from __future__ import annotations

from .model import (
    ArrayLiteral,
    BooleanLiteral,
    Expression,
    Identifier,
    NumericLiteral,
    ObjectEntry,
    ObjectLiteral,
    OtherExpression,
    StringLiteral,
)


def render_expression(expr: Expression) -> str:
    match expr:
        case Identifier(name=name):
            return name
        case StringLiteral(value=value):
            return quote(value)
        case NumericLiteral(raw=raw):
            return raw
        case BooleanLiteral(value=value):
            return "true" if value else "false"
        case ArrayLiteral(elements=elements):
            return "[" + ", ".join(render_expression(e) for e in elements) + "]"
        case ObjectLiteral():
            return render_object(expr)
        case OtherExpression(text=text):
            return text
    raise TypeError(f"cannot render {expr!r}")


def render_entry(entry: ObjectEntry) -> str:
    """Original source text for kept entries, ``key: value`` for new ones."""
    if entry.source is not None:
        return entry.source
    if entry.key is None or entry.value is None:
        raise ValueError(f"entry without source text needs a key and value: {entry!r}")
    return f"{entry.key}: {render_expression(entry.value)}"


def render_object(obj: ObjectLiteral) -> str:
    """``{ type: String, attribute: 'my-field', reflect: true }``"""
    if not obj.entries:
        return "{}"
    return "{ " + ", ".join(render_entry(e) for e in obj.entries) + " }"


def quote(value: str) -> str:
    """Single-quoted string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"
