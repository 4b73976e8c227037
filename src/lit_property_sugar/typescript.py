"""TypeScript host: tree-sitter parse tree → model, and rewrites → source text.

The engine only sees ``FieldDeclaration`` values. This module walks every
class body of a compilation unit, converts each field / accessor into the
model, runs the engine, and splices the rendered option maps back into the
unit's source. Nothing outside the rewritten argument lists is touched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .engine import Rewrite, enhance_member
from .errors import syntax_error
from .model import (
    ArrayLiteral,
    ArrayOf,
    BooleanLiteral,
    Decorator,
    DecoratorCall,
    Expression,
    FieldDeclaration,
    Identifier,
    InferredType,
    Literal,
    MemberKind,
    NumericLiteral,
    ObjectEntry,
    ObjectLiteral,
    Other,
    OtherExpression,
    Primitive,
    Reference,
    SourceLocation,
    StringLiteral,
    StructuralShape,
    TypeAnnotation,
    UnionOf,
)
from .render import render_object
from .rules import FULL, Rules

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

_LANGUAGES = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_EXTENSIONS = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".js": "typescript",
    ".mjs": "typescript",
    ".cjs": "typescript",
    ".tsx": "tsx",
    ".jsx": "tsx",
}

_parsers: dict[str, Parser] = {}


def get_parser(language: str = "typescript") -> Parser:
    """Return the cached parser for *language* (``typescript`` or ``tsx``)."""
    language = language.lower()
    if language in _parsers:
        return _parsers[language]
    try:
        factory = _LANGUAGES[language]
    except KeyError:
        raise ValueError(f"unsupported language: {language!r}") from None
    parser = Parser(Language(factory()))
    _parsers[language] = parser
    logger.debug("Loaded %s parser", language)
    return parser


def detect_language(path: str | Path) -> str | None:
    """Map a file suffix to a parser language, or None if unsupported."""
    return _EXTENSIONS.get(Path(path).suffix.lower())


# ---------------------------------------------------------------------------
# Transform
# ---------------------------------------------------------------------------

@dataclass
class TransformResult:
    """Outcome of enhancing one compilation unit."""

    source: str
    output: str
    rewrites: list[Rewrite] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.output != self.source


def transform(source: str, rules: Rules = FULL, language: str = "typescript") -> TransformResult:
    """Enhance every decorated class member in *source*.

    Raises an ``EnhanceError`` subclass on the first failure; in that case
    no output is produced for the unit.
    """
    data = source.encode("utf-8")
    tree = get_parser(language).parse(data)
    if tree.root_node.has_error:
        raise syntax_error(_first_error_location(tree.root_node, data))

    edits: list[tuple[int, int, str]] = []
    rewrites: list[Rewrite] = []
    for visit in collect_members(tree.root_node, data):
        logger.debug("Visiting member %r at %s", visit.member.name, visit.member.location)
        rewrite = enhance_member(visit.member, rules)
        if rewrite is None:
            continue
        args_node = visit.arguments_node(rewrite.call)
        edits.append(
            (args_node.start_byte, args_node.end_byte, f"({render_object(rewrite.options)})")
        )
        rewrites.append(rewrite)
        logger.debug("Rewrote @%s on %r", rules.decorator_name, visit.member.name)

    for start, end, text in sorted(edits, reverse=True):
        data = data[:start] + text.encode("utf-8") + data[end:]
    return TransformResult(source=source, output=data.decode("utf-8"), rewrites=rewrites)


# ---------------------------------------------------------------------------
# Tree walking
# ---------------------------------------------------------------------------

_CLASS_MEMBERS = ("public_field_definition", "method_definition")


@dataclass
class MemberVisit:
    """A converted member plus the call nodes its decorators came from."""

    member: FieldDeclaration
    call_nodes: list[Node | None]

    def arguments_node(self, call: DecoratorCall) -> Node:
        for decorator, node in zip(self.member.decorators, self.call_nodes):
            if decorator.call is call and node is not None:
                return node.child_by_field_name("arguments")
        raise LookupError(f"no call node for {call!r}")


def collect_members(root: Node, source: bytes) -> list[MemberVisit]:
    """Convert every class field and accessor under *root*, in source order."""
    visits: list[MemberVisit] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "class_body":
            visits.extend(_visit_class_body(node, source))
        stack.extend(reversed(node.children))
    visits.sort(key=lambda v: (v.member.location.line, v.member.location.column))
    return visits


def _visit_class_body(body: Node, source: bytes) -> list[MemberVisit]:
    visits: list[MemberVisit] = []
    pending: list[Node] = []  # method decorators are siblings in the class body
    for child in body.children:
        if child.type == "decorator":
            pending.append(child)
            continue
        if child.type == "comment":
            continue
        if child.type in _CLASS_MEMBERS:
            own = [c for c in child.children if c.type == "decorator"]
            visit = _member_visit(child, pending + own, source)
            if visit is not None:
                visits.append(visit)
        pending = []
    return visits


def _member_visit(
    node: Node, decorator_nodes: list[Node], source: bytes
) -> MemberVisit | None:
    name_node = node.child_by_field_name("name")
    if name_node is None or name_node.type == "private_property_identifier":
        return None

    if node.type == "method_definition":
        kind = _method_kind(node)
        annotation_node = node.child_by_field_name("return_type")
        value_node = None
    else:
        kind = MemberKind.Field
        annotation_node = node.child_by_field_name("type")
        value_node = node.child_by_field_name("value")

    decorators: list[Decorator] = []
    call_nodes: list[Node | None] = []
    for dec in decorator_nodes:
        decorator, call_node = _decorator(dec, source)
        decorators.append(decorator)
        call_nodes.append(call_node)

    start = decorator_nodes[0] if decorator_nodes else node
    member = FieldDeclaration(
        name=_property_name(name_node),
        kind=kind,
        type_annotation=_annotation(annotation_node) if annotation_node is not None else None,
        default_value=_expression(value_node) if value_node is not None else None,
        decorators=tuple(decorators),
        location=_location(start, source),
    )
    return MemberVisit(member=member, call_nodes=call_nodes)


def _method_kind(node: Node) -> MemberKind:
    for child in node.children:
        if not child.is_named and child.type == "get":
            return MemberKind.Getter
        if not child.is_named and child.type == "set":
            return MemberKind.Setter
    return MemberKind.Method


def _decorator(node: Node, source: bytes) -> tuple[Decorator, Node | None]:
    expr = _first_named(node)
    while expr is not None and expr.type == "parenthesized_expression":
        expr = _first_named(expr)
    if expr is None:
        return Decorator(name=_text(node), location=_location(node, source)), None

    if expr.type != "call_expression":
        return Decorator(name=_text(expr), location=_location(node, source)), None

    callee = _text(expr.child_by_field_name("function"))
    args_node = expr.child_by_field_name("arguments")
    arguments = tuple(_expression(a) for a in _named(args_node)) if args_node is not None else ()
    call = DecoratorCall(callee=callee, arguments=arguments, location=_location(expr, source))
    return Decorator(name=callee, call=call, location=_location(node, source)), expr


# ---------------------------------------------------------------------------
# Type annotations
# ---------------------------------------------------------------------------

_PRIMITIVES = {
    "string": InferredType.String,
    "number": InferredType.Number,
    "boolean": InferredType.Boolean,
}

_ARRAY_GENERICS = ("Array", "ReadonlyArray")


def _annotation(node: Node) -> TypeAnnotation:
    """Convert a ``type_annotation`` node (``: T``)."""
    inner = _first_named(node)
    if inner is None:
        return Other(_text(node))
    return _type(inner)


def _type(node: Node) -> TypeAnnotation:
    kind = node.type
    if kind == "predefined_type":
        text = _text(node)
        if text in _PRIMITIVES:
            return Primitive(_PRIMITIVES[text])
        return Other(text)
    if kind == "array_type":
        element = _first_named(node)
        return ArrayOf(_type(element) if element is not None else None)
    if kind == "generic_type":
        name = _text(node.child_by_field_name("name"))
        if name in _ARRAY_GENERICS:
            return ArrayOf()
        return Reference(name)
    if kind in ("type_identifier", "nested_type_identifier"):
        return Reference(_text(node))
    if kind == "object_type":
        return StructuralShape()
    if kind == "literal_type":
        return _literal_type(node)
    if kind == "union_type":
        return UnionOf(tuple(_type(m) for m in _union_members(node)))
    if kind == "parenthesized_type":
        inner = _first_named(node)
        return _type(inner) if inner is not None else Other(_text(node))
    return Other(_text(node))


def _union_members(node: Node) -> list[Node]:
    # a | b | c parses left-nested: ((a | b) | c)
    members: list[Node] = []
    for child in _named(node):
        if child.type == "union_type":
            members.extend(_union_members(child))
        else:
            members.append(child)
    return members


def _literal_type(node: Node) -> TypeAnnotation:
    lit = _first_named(node)
    if lit is None:
        return Other(_text(node))
    if lit.type == "string":
        return Literal(_string_value(lit))
    if lit.type == "true":
        return Literal(True)
    if lit.type == "false":
        return Literal(False)
    if lit.type == "number":
        value = _number_value(_text(lit))
        return Literal(value) if value is not None else Other(_text(lit))
    if lit.type == "unary_expression":
        operand = lit.child_by_field_name("argument")
        if operand is not None and operand.type == "number":
            value = _number_value(_text(operand))
            if value is not None:
                return Literal(-value if _text(lit).startswith("-") else value)
    # null, undefined, template literal types
    return Other(_text(node))


def _number_value(raw: str) -> int | float | None:
    text = raw.replace("_", "")
    if text.endswith("n"):
        return None  # bigint
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

def _expression(node: Node) -> Expression:
    kind = node.type
    if kind == "string":
        return StringLiteral(_string_value(node))
    if kind == "number":
        return NumericLiteral(_text(node))
    if kind == "true":
        return BooleanLiteral(True)
    if kind == "false":
        return BooleanLiteral(False)
    if kind == "identifier":
        return Identifier(_text(node))
    if kind == "object":
        return ObjectLiteral(tuple(_object_entry(c) for c in _named(node)))
    if kind == "array":
        return ArrayLiteral(tuple(_expression(c) for c in _named(node)))
    if kind == "parenthesized_expression":
        inner = _first_named(node)
        if inner is not None:
            return _expression(inner)
    return OtherExpression(_text(node))


def _object_entry(node: Node) -> ObjectEntry:
    source = _text(node)
    if node.type == "pair":
        key_node = node.child_by_field_name("key")
        value_node = node.child_by_field_name("value")
        return ObjectEntry(
            key=_property_key(key_node),
            value=_expression(value_node) if value_node is not None else None,
            source=source,
        )
    if node.type == "shorthand_property_identifier":
        return ObjectEntry(key=source, value=Identifier(source), source=source)
    if node.type == "method_definition":
        name_node = node.child_by_field_name("name")
        key = _property_key(name_node)
        return ObjectEntry(key=key, value=OtherExpression(source), source=source)
    # spread elements and anything else without a static key
    return ObjectEntry(key=None, value=OtherExpression(source), source=source)


def _property_key(node: Node | None) -> str | None:
    if node is None:
        return None
    if node.type in ("property_identifier", "number"):
        return _text(node)
    if node.type == "string":
        return _string_value(node)
    return None  # computed_property_name


def _property_name(node: Node) -> str:
    if node.type == "string":
        return _string_value(node)
    return _text(node)


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v"}
_OCTAL_RE = re.compile(r"[0-7]{1,3}")


def _string_value(node: Node) -> str:
    parts: list[str] = []
    for child in _named(node):
        text = _text(child)
        if child.type == "escape_sequence":
            parts.append(_unescape(text[1:]))
        else:
            parts.append(text)
    return "".join(parts)


def _unescape(body: str) -> str:
    """Decode the part of an escape sequence after the backslash."""
    if body in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        return ""  # line continuation
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1], 16))
    if body[:1] in ("x", "u") and len(body) > 1:
        return chr(int(body[1:], 16))
    if _OCTAL_RE.fullmatch(body):
        return chr(int(body, 8))
    return _ESCAPES.get(body, body)


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------

def _named(node: Node) -> list[Node]:
    return [c for c in node.named_children if c.type != "comment"]


def _first_named(node: Node) -> Node | None:
    named = _named(node)
    return named[0] if named else None


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _location(node: Node, source: bytes) -> SourceLocation:
    # start_point columns count bytes; report characters
    line_start = source.rfind(b"\n", 0, node.start_byte) + 1
    prefix = source[line_start:node.start_byte].decode("utf-8", errors="replace")
    return SourceLocation(line=node.start_point[0] + 1, column=len(prefix))


def _first_error_location(root: Node, source: bytes) -> SourceLocation | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return _location(node, source)
        stack.extend(reversed(node.children))
    return None
