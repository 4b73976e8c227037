"""Locate the property decorator call on a class member."""

from __future__ import annotations

from .errors import invalid_argument_count, invalid_argument_kind
from .model import DecoratorCall, FieldDeclaration, ObjectLiteral

DEFAULT_DECORATOR = "property"


def locate(member: FieldDeclaration, name: str = DEFAULT_DECORATOR) -> DecoratorCall | None:
    """Return the ``@name(...)`` call attached to *member*, or None.

    Decorators are scanned in the order the host provides them; when more
    than one matches, the first one is used. A bare ``@name`` (not a call)
    does not match.

    Raises ``InvalidArgumentCount`` if the call has more than one argument
    and ``InvalidArgumentKind`` if its single argument is not an object
    literal.
    """
    call = next(
        (
            d.call
            for d in member.decorators
            if d.call is not None and d.call.callee == name
        ),
        None,
    )
    if call is None:
        return None

    location = call.location or member.location
    if len(call.arguments) > 1:
        raise invalid_argument_count(name, len(call.arguments), location)
    if call.arguments and not isinstance(call.arguments[0], ObjectLiteral):
        raise invalid_argument_kind(name, location)
    return call
