"""Datafield aggregation, rendering, and the layers around them."""
from __future__ import annotations

from .exceptions import ConfigError, DatafieldsError, DocumentError, UnknownTransformError
from .events import Event, event_attributes, nested_attributes
from .steps import TemplateStep, run_steps
from .store import DatafieldStore
from .templating import find_placeholders, substitute, to_text
from .transforms import TRANSFORMS, chain, get_transform

__all__ = [
    "DatafieldStore",
    "Event",
    "event_attributes",
    "nested_attributes",
    "TemplateStep",
    "run_steps",
    "substitute",
    "find_placeholders",
    "to_text",
    "TRANSFORMS",
    "get_transform",
    "chain",
    "DatafieldsError",
    "UnknownTransformError",
    "ConfigError",
    "DocumentError",
]
