"""Read datafields out of recorded events.

An event exposes a flat set of named attributes plus one nested set under
``other``. Three shapes are accepted:

- a mapping (e.g. an event loaded from YAML/JSON);
- an object with a callable ``get_data()`` returning a mapping;
- any other object, read through its public instance attributes.

Only ``other`` is flattened, and only one level deep.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

OTHER_ATTRIBUTE = "other"
OTHER_PREFIX = "other_"


def _read_attributes(obj: Any) -> Dict[str, Any]:
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    get_data = getattr(obj, "get_data", None)
    if callable(get_data):
        data = get_data()
        return dict(data) if data else {}
    try:
        attrs = vars(obj)
    except TypeError:
        return {}
    return {k: v for k, v in attrs.items() if not k.startswith("_")}


def event_attributes(event: Any) -> Dict[str, Any]:
    """Return the direct attributes of ``event``, ``other`` included as-is."""
    return _read_attributes(event)


def nested_attributes(event: Any) -> Dict[str, Any]:
    """Return the attributes nested under the event's ``other`` attribute.

    A missing or ``None`` ``other`` yields ``{}``.
    """
    other = event_attributes(event).get(OTHER_ATTRIBUTE)
    if other is None:
        return {}
    if isinstance(other, (str, bytes, int, float, bool)):
        logger.warning(
            "Ignoring scalar %r attribute of type %s", OTHER_ATTRIBUTE, type(other).__name__
        )
        return {}
    return _read_attributes(other)


@dataclass
class Event:
    """A recorded occurrence, shaped like the events the store consumes."""

    eventname: str = ""
    component: Optional[str] = None
    action: Optional[str] = None
    target: Optional[str] = None
    objectid: Any = None
    crud: Optional[str] = None
    contextid: Optional[int] = None
    userid: Optional[int] = None
    courseid: Optional[int] = None
    relateduserid: Optional[int] = None
    anonymous: bool = False
    timecreated: Optional[int] = None
    other: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def get_data(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Event":
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs, extra=extra)


__all__ = [
    "OTHER_ATTRIBUTE",
    "OTHER_PREFIX",
    "Event",
    "event_attributes",
    "nested_attributes",
]
