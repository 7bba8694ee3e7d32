"""
Wildcard matching for entry names with the semantics of the windows shell
(`PathMatchSpec`):

- `*` matches zero or more characters, `?` exactly one
- matching is case-insensitive and always applies to the whole name
- every other character is literal (no character classes, no regex)
- several specs can be given separated by `;`, a name matches if any does
- `*.*` matches every name, even without a dot
"""

import re
from functools import lru_cache

from banal import ensure_list

from filespyder.types import Pattern

MATCH_ALL = ("*", "*.*")
SPEC_SEPARATOR = ";"


def translate(spec: str) -> str:
    """Translate a single wildcard spec into a regular expression"""
    parts: list[str] = []
    for char in spec:
        if char == "*":
            if not parts or parts[-1] != ".*":
                parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def split_specs(pattern: Pattern) -> tuple[str, ...]:
    specs: list[str] = []
    for item in ensure_list(pattern):
        for spec in str(item).split(SPEC_SEPARATOR):
            spec = spec.strip()
            if spec:
                specs.append(spec)
    return tuple(specs)


@lru_cache(1024)
def compile_pattern(pattern: str) -> re.Pattern | None:
    """
    Compile a (possibly `;` separated) wildcard pattern. Returns `None` for an
    empty pattern, which never matches.
    """
    specs = split_specs(pattern)
    if not specs:
        return None
    if any(spec in MATCH_ALL for spec in specs):
        return re.compile(".*", re.DOTALL)
    rx = "|".join(f"(?:{translate(spec)})" for spec in specs)
    return re.compile(rx, re.IGNORECASE | re.DOTALL)


def match_name(name: str, pattern: Pattern) -> bool:
    """
    Test if an entry name matches a wildcard pattern.

    Examples:
        >>> match_name("readme.TXT", "*.txt")
        True
        >>> match_name("report.txtx", "*.txt")
        False
        >>> match_name("abc", "a?c")
        True

    Args:
        name: Entry name (no directory part)
        pattern: Wildcard pattern, or a list of them

    Returns:
        Whether the full name matches
    """
    if not isinstance(pattern, str):
        pattern = SPEC_SEPARATOR.join(split_specs(pattern))
    rx = compile_pattern(pattern)
    if rx is None:
        return False
    return rx.fullmatch(name) is not None
