"""Project configuration: ``[tool.lit-property-sugar]`` in pyproject.toml."""

from __future__ import annotations

import dataclasses
import tomllib
from pathlib import Path

from .rules import FULL, Rules, preset

TABLE = "lit-property-sugar"

# file key → Rules field
_KEYS = {
    "decorator": "decorator_name",
    "infer-type": "infer_type",
    "infer-attribute": "infer_attribute",
    "infer-reflect": "infer_reflect",
    "omit-default-string-type": "omit_default_string_type",
    "skip-non-attribute": "skip_non_attribute",
}


class ConfigError(ValueError):
    pass


def find_config(start: Path) -> Path | None:
    """Nearest pyproject.toml at or above *start*."""
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_rules(path: Path | None, base: Rules = FULL, use_preset: bool = True) -> Rules:
    """Read the rule set from *path*, falling back to *base*.

    A missing file or a file without the tool table yields *base*
    unchanged. ``preset`` picks the starting rule set unless *use_preset*
    is false (a preset chosen on the command line wins); the other keys
    override individual fields.
    """
    if path is None or not path.is_file():
        return base
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc

    table = data.get("tool", {}).get(TABLE)
    if table is None:
        return base
    return rules_from_table(table, base, source=str(path), use_preset=use_preset)


def rules_from_table(
    table: dict, base: Rules = FULL, source: str = "<config>", use_preset: bool = True
) -> Rules:
    rules = base
    if use_preset and "preset" in table:
        try:
            rules = preset(str(table["preset"]))
        except ValueError as exc:
            raise ConfigError(f"{source}: {exc}") from None

    overrides: dict[str, object] = {}
    for key, value in table.items():
        if key == "preset":
            continue
        if key not in _KEYS:
            raise ConfigError(f"{source}: unknown option {key!r}")
        attr = _KEYS[key]
        expected = str if attr == "decorator_name" else bool
        if not isinstance(value, expected):
            raise ConfigError(
                f"{source}: option {key!r} must be a {expected.__name__}"
            )
        overrides[attr] = value
    return dataclasses.replace(rules, **overrides)
