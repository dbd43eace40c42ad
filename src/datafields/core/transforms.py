"""Named transform callbacks for ``render_datafields``.

Each transform takes ``(value, key)`` and returns the value to insert. The
encoding transforms exist for templates that are themselves structured text:
a POST body such as ``x={tag1}&b={tag2}`` must encode the values but not the
``=`` and ``&`` separators around them.
"""

from __future__ import annotations

import html
import json
from typing import Any, Dict
from urllib.parse import quote, quote_plus

from datafields.core.exceptions import UnknownTransformError
from datafields.core.templating import Transform, to_text


def urlencode(value: Any, key: str) -> str:
    return quote_plus(to_text(value))


def rawurlencode(value: Any, key: str) -> str:
    return quote(to_text(value), safe="")


def html_escape(value: Any, key: str) -> str:
    return html.escape(to_text(value))


def json_encode(value: Any, key: str) -> str:
    return json.dumps(value, default=str)


def upper(value: Any, key: str) -> str:
    return to_text(value).upper()


def lower(value: Any, key: str) -> str:
    return to_text(value).lower()


def strip(value: Any, key: str) -> str:
    return to_text(value).strip()


TRANSFORMS: Dict[str, Transform] = {
    "urlencode": urlencode,
    "rawurlencode": rawurlencode,
    "html": html_escape,
    "json": json_encode,
    "upper": upper,
    "lower": lower,
    "strip": strip,
}


def get_transform(name: str) -> Transform:
    """Look up a registered transform by name.

    Raises:
        UnknownTransformError: If ``name`` is not registered.
    """
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise UnknownTransformError(
            f"Unknown transform: {name}",
            context={"name": name, "available": sorted(TRANSFORMS)},
        ) from None


def chain(*transforms: Transform) -> Transform:
    """Compose transforms left to right; every stage sees the same key."""

    def _chained(value: Any, key: str) -> Any:
        for transform in transforms:
            value = transform(value, key)
        return value

    return _chained


__all__ = [
    "TRANSFORMS",
    "get_transform",
    "chain",
    "urlencode",
    "rawurlencode",
    "html_escape",
    "json_encode",
    "upper",
    "lower",
    "strip",
]
