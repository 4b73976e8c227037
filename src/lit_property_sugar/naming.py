"""camelCase → kebab-case conversion for attribute names."""

from __future__ import annotations

import re

# ASCII only: the result must not depend on locale
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def to_kebab_case(name: str) -> str:
    """Convert a camelCase member name to its kebab-case attribute name.

    - ``myField``  → ``my-field``
    - ``URLValue`` → ``url-value``
    - ``field5``   → ``field5`` (no case boundary)

    Already kebab-cased (or all-lowercase) names are returned unchanged.
    """
    s = _ACRONYM_BOUNDARY_RE.sub(r"\1-\2", name)
    s = _WORD_BOUNDARY_RE.sub(r"\1-\2", s)
    return s.translate(_LOWER)
