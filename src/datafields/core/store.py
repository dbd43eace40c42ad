"""Datafield store: aggregate event and step data, render templates.

A host that needs datafields (a workflow step, a notifier, the CLI) holds its
own ``DatafieldStore`` instance. Instances are not safe for concurrent use;
give each flow its own store.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from datafields.core.events import OTHER_PREFIX, event_attributes, nested_attributes
from datafields.core.templating import Transform, resolve_delimiters, substitute

logger = logging.getLogger(__name__)


class DatafieldStore:
    """Owns one name -> value mapping built from events and step data.

    Sources overwrite earlier sources with the same key, in this order:
    event attributes, ``other_``-prefixed nested attributes, step data. The
    mapping is never cleared; each ``update`` folds new values in.
    """

    def __init__(
        self,
        open_delimiter: Optional[str] = None,
        close_delimiter: Optional[str] = None,
    ) -> None:
        self._datafields: Dict[str, Any] = {}
        self.open_delimiter, self.close_delimiter = resolve_delimiters(
            open_delimiter, close_delimiter
        )

    def update(self, event: Any = None, step_data: Optional[Mapping[str, Any]] = None) -> None:
        """Fold ``event`` and ``step_data`` into the datafield mapping."""
        for key, value in event_attributes(event).items():
            self._datafields[key] = value

        for key, value in nested_attributes(event).items():
            self._datafields[f"{OTHER_PREFIX}{key}"] = value

        for key, value in (step_data or {}).items():
            self._datafields[key] = value

        logger.debug("Datafields updated (%d fields)", len(self._datafields))

    def get_datafields(self) -> Dict[str, Any]:
        """Return a copy of the current datafield mapping."""
        return dict(self._datafields)

    def render_datafields(
        self,
        template: str,
        open_delimiter: Optional[str] = None,
        close_delimiter: Optional[str] = None,
        transform: Optional[Transform] = None,
    ) -> str:
        """Render ``template`` with the current datafields.

        Args:
            template: Text containing placeholders such as ``{objectid}``.
            open_delimiter: Overrides the store's opening delimiter.
            close_delimiter: Overrides the store's closing delimiter.
            transform: Optional ``(value, key) -> value`` applied to each
                matched placeholder before insertion.

        Returns:
            The rendered string. Placeholders for unknown fields are kept
            verbatim.
        """
        logger.debug("Rendering template (%d fields)", len(self._datafields))
        return substitute(
            template,
            self._datafields,
            open_delimiter or self.open_delimiter,
            close_delimiter or self.close_delimiter,
            transform,
        )

    def __len__(self) -> int:
        return len(self._datafields)

    def __contains__(self, key: object) -> bool:
        return key in self._datafields

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._datafields)} fields)"


__all__ = ["DatafieldStore"]
