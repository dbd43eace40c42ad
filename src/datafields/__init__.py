"""
Datafields - event data aggregation and placeholder rendering

Collects named values from recorded events and step results into one flat
mapping, and renders `{name}` templates against it.
"""

from datafields.core.store import DatafieldStore

__version__ = "1.0.0"
__all__ = ["DatafieldStore", "__version__"]
