"""Engine entry points: one member, or one compilation unit of members."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .locator import locate
from .model import DecoratorCall, FieldDeclaration, OptionsMap
from .rules import FULL, Rules
from .synthesizer import synthesize


@dataclass(slots=True, frozen=True)
class Rewrite:
    """Replace the arguments of ``call`` with the single ``options`` map."""

    member: FieldDeclaration
    call: DecoratorCall
    options: OptionsMap


def enhance_member(member: FieldDeclaration, rules: Rules = FULL) -> Rewrite | None:
    """Process a single class member.

    Returns None when the member has no matching decorator call or when its
    options are already complete.
    """
    call = locate(member, rules.decorator_name)
    if call is None:
        return None
    options = synthesize(call, member, rules)
    if options is None:
        return None
    return Rewrite(member=member, call=call, options=options)


def enhance(members: Iterable[FieldDeclaration], rules: Rules = FULL) -> list[Rewrite]:
    """Process every member of a compilation unit.

    The first ``EnhanceError`` propagates immediately; no rewrites are
    returned for a unit that fails.
    """
    rewrites: list[Rewrite] = []
    for member in members:
        rewrite = enhance_member(member, rules)
        if rewrite is not None:
            rewrites.append(rewrite)
    return rewrites
