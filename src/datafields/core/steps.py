"""Workflow steps that render datafield templates.

A step receives the triggering event and the results of the previous steps,
and returns ``(ok, results)``. ``TemplateStep`` holds one ``DatafieldStore``
and adds one rendered value per configured template to the results.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from datafields.core.store import DatafieldStore
from datafields.core.templating import Transform


class TemplateStep:
    """Render a set of named templates against event + step results."""

    def __init__(
        self,
        templates: Mapping[str, str],
        *,
        transform: Optional[Transform] = None,
        open_delimiter: Optional[str] = None,
        close_delimiter: Optional[str] = None,
        prefix: str = "",
    ) -> None:
        self.templates = dict(templates)
        self.transform = transform
        self.prefix = prefix
        self.store = DatafieldStore(open_delimiter, close_delimiter)

    @property
    def datafields(self) -> Dict[str, Any]:
        return self.store.get_datafields()

    def execute(
        self, event: Any, step_results: Optional[Mapping[str, Any]] = None
    ) -> Tuple[bool, Dict[str, Any]]:
        results = dict(step_results or {})
        self.store.update(event, results)
        for name, template in self.templates.items():
            results[f"{self.prefix}{name}"] = self.store.render_datafields(
                template, transform=self.transform
            )
        return True, results


def run_steps(
    steps: Iterable[Any],
    event: Any,
    step_results: Optional[Mapping[str, Any]] = None,
) -> Tuple[bool, Dict[str, Any]]:
    """Run steps in order, feeding each one the previous step's results.

    Stops at the first step that reports failure.
    """
    results: Dict[str, Any] = dict(step_results or {})
    for step in steps:
        ok, results = step.execute(event, results)
        if not ok:
            return False, results
    return True, results


__all__ = ["TemplateStep", "run_steps"]
