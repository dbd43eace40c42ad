"""Shared CLI utility functions.

This module provides common utilities used across CLI commands to reduce
duplication and ensure consistent behavior.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from datafields.core.config import ConfigManager
from datafields.core.exceptions import DocumentError
from datafields.core.io import load_document, parse_yaml_string
from datafields.core.store import DatafieldStore


def get_config_manager(args: argparse.Namespace) -> ConfigManager:
    """Build the ConfigManager for this invocation (cwd + optional --config)."""
    config_file: Optional[str] = getattr(args, "config_file", None)
    return ConfigManager(Path.cwd(), Path(config_file) if config_file else None)


def parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """Parse ``KEY=VALUE`` pairs; values are read as YAML scalars.

    Raises:
        DocumentError: If an assignment has no ``=`` or an empty key.
    """
    values: Dict[str, Any] = {}
    for raw in assignments or []:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            raise DocumentError(
                f"Invalid assignment '{raw}': expected KEY=VALUE",
                context={"assignment": raw},
            )
        parsed = parse_yaml_string(value, default=value) if value else ""
        # Only scalars are read as YAML; "a: b" stays a string.
        values[key] = value if isinstance(parsed, (dict, list)) else parsed
    return values


def build_store(args: argparse.Namespace, config: ConfigManager) -> DatafieldStore:
    """Create a store from config and fold in the event and step data from args."""
    options = config.store_options()
    if getattr(args, "open_delimiter", None):
        options["open_delimiter"] = args.open_delimiter
    if getattr(args, "close_delimiter", None):
        options["close_delimiter"] = args.close_delimiter

    event_doc = load_document(getattr(args, "event", None), label="Event")
    step_data = load_document(getattr(args, "step_data", None), label="Step data")
    step_data.update(parse_assignments(getattr(args, "assignments", [])))

    store = DatafieldStore(**options)
    store.update(event_doc or None, step_data)
    return store


__all__ = ["get_config_manager", "parse_assignments", "build_store"]
