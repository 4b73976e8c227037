"""Option synthesis: merge inferred type/attribute/reflect into the options."""

from __future__ import annotations

from .errors import type_inference_error
from .model import (
    BooleanLiteral,
    DecoratorCall,
    FieldDeclaration,
    Identifier,
    InferredType,
    ObjectLiteral,
    OptionsMap,
    StringLiteral,
)
from .naming import to_kebab_case
from .resolver import resolve
from .rules import FULL, Rules

REFLECTED_TYPES = frozenset({"String", "Number", "Boolean"})


def synthesize(
    call: DecoratorCall,
    member: FieldDeclaration,
    rules: Rules = FULL,
) -> OptionsMap | None:
    """Return the enriched options for *call*, or None if nothing changes.

    Options already present are never touched. New options are added in
    the order ``type``, ``attribute``, ``reflect``, in front of the first
    spread entry if there is one.

    Raises ``TypeInferenceError`` when ``type`` is missing and cannot be
    inferred from *member*.
    """
    original: OptionsMap = call.arguments[0] if call.arguments else ObjectLiteral()
    options = original

    if rules.skip_non_attribute and _is_non_attribute(options):
        return None

    if rules.infer_type and not options.has("type"):
        tag = resolve(member)
        if tag is InferredType.Unknown:
            raise type_inference_error(
                rules.decorator_name, member.location or call.location
            )
        if not (tag is InferredType.String and rules.omit_default_string_type):
            options = options.with_entry("type", Identifier(tag.name))

    if rules.infer_attribute and not options.has("attribute"):
        attr_name = to_kebab_case(member.name)
        if attr_name != member.name:
            options = options.with_entry("attribute", StringLiteral(attr_name))

    if rules.infer_reflect and not options.has("reflect"):
        type_entry = options.get("type")
        # only a plain identifier is recognizable, e.g. not `type: fromAttr()`
        if (
            type_entry is not None
            and isinstance(type_entry.value, Identifier)
            and type_entry.value.name in REFLECTED_TYPES
        ):
            options = options.with_entry("reflect", BooleanLiteral(True))

    if options is original:
        return None
    return options


def _is_non_attribute(options: OptionsMap) -> bool:
    entry = options.get("attribute")
    return entry is not None and entry.value == BooleanLiteral(False)
