"""Placeholder scanning and substitution for datafield templates.

A placeholder is an opening delimiter, an identifier, and a closing delimiter
(`{name}` by default). Delimiters are literal strings, never patterns, so a
template written for a URL query can switch to e.g. `[[`/`]]` without any
escaping rules.

This module must not import the store or the CLI.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Tuple

DEFAULT_OPEN_DELIMITER = "{"
DEFAULT_CLOSE_DELIMITER = "}"

Transform = Callable[[Any, str], Any]


def resolve_delimiters(
    open_delimiter: Optional[str] = None,
    close_delimiter: Optional[str] = None,
) -> Tuple[str, str]:
    """Return the effective delimiters; None or "" falls back to the defaults."""
    return (
        open_delimiter or DEFAULT_OPEN_DELIMITER,
        close_delimiter or DEFAULT_CLOSE_DELIMITER,
    )


def to_text(value: Any) -> str:
    """Textual form of a datafield value as it appears in rendered output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _scan(template: str, open_delimiter: str, close_delimiter: str):
    """Yield (start, end, identifier) for every placeholder, left to right.

    `start`/`end` bound the whole token, delimiters included.
    """
    pos = 0
    while True:
        start = template.find(open_delimiter, pos)
        if start < 0:
            return
        inner = start + len(open_delimiter)
        end = template.find(close_delimiter, inner)
        if end < 0:
            return
        # Identifier cannot contain the opening delimiter: restart at the later one.
        later = template.find(open_delimiter, inner, end)
        if later >= 0:
            pos = later
            continue
        identifier = template[inner:end]
        stop = end + len(close_delimiter)
        if identifier:
            yield start, stop, identifier
        pos = stop


def find_placeholders(
    template: str,
    open_delimiter: Optional[str] = None,
    close_delimiter: Optional[str] = None,
) -> List[str]:
    """Return placeholder identifiers in scan order (repetitions kept)."""
    open_d, close_d = resolve_delimiters(open_delimiter, close_delimiter)
    return [identifier for _, _, identifier in _scan(str(template), open_d, close_d)]


def substitute(
    template: str,
    fields: Mapping[str, Any],
    open_delimiter: Optional[str] = None,
    close_delimiter: Optional[str] = None,
    transform: Optional[Transform] = None,
) -> str:
    """Replace every known placeholder occurrence with its field value.

    - Unknown identifiers are left in place, delimiters included.
    - `transform(value, key)` runs once per occurrence, not once per key.
    - Neither `template` nor `fields` is modified.
    """
    template = str(template)
    open_d, close_d = resolve_delimiters(open_delimiter, close_delimiter)
    if open_d not in template:
        return template

    parts: List[str] = []
    pos = 0
    for start, stop, key in _scan(template, open_d, close_d):
        if key not in fields:
            continue
        value = fields[key]
        if transform is not None:
            value = transform(value, key)
        parts.append(template[pos:start])
        parts.append(to_text(value))
        pos = stop
    parts.append(template[pos:])
    return "".join(parts)


__all__ = [
    "DEFAULT_OPEN_DELIMITER",
    "DEFAULT_CLOSE_DELIMITER",
    "Transform",
    "resolve_delimiters",
    "to_text",
    "find_placeholders",
    "substitute",
]
