"""Rule sets selecting which inferences the engine performs."""

from __future__ import annotations

from dataclasses import dataclass

from .locator import DEFAULT_DECORATOR


@dataclass(slots=True, frozen=True)
class Rules:
    """Engine configuration.

    - decorator_name: callee of the decorator to enhance
    - infer_type / infer_attribute / infer_reflect: enable each option
    - omit_default_string_type: never write ``type: String`` (it is the
      decorator's implicit default)
    - skip_non_attribute: leave members with ``attribute: false`` untouched
    """

    decorator_name: str = DEFAULT_DECORATOR
    infer_type: bool = True
    infer_attribute: bool = True
    infer_reflect: bool = True
    omit_default_string_type: bool = False
    skip_non_attribute: bool = False


FULL = Rules()

MINIMAL = Rules(
    infer_attribute=False,
    infer_reflect=False,
    omit_default_string_type=True,
    skip_non_attribute=True,
)

PRESETS: dict[str, Rules] = {
    "full": FULL,
    "minimal": MINIMAL,
}


def preset(name: str) -> Rules:
    """Look up a named rule set (``full`` or ``minimal``)."""
    try:
        return PRESETS[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(PRESETS))
        raise ValueError(f"unknown preset {name!r} (expected one of: {choices})") from None
