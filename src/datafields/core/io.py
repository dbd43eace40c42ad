"""Document reading for event and step-data inputs.

YAML is the canonical format; JSON documents parse through the same loader
since JSON is a subset of YAML 1.2 for the documents we accept.
"""
from __future__ import annotations

import fcntl
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from datafields.core.exceptions import DocumentError


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or invalid (default: None)
        raise_on_error: If True, propagate exceptions instead of returning default.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            data = yaml.safe_load(f)
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        return data if data is not None else default
    except Exception:
        if raise_on_error:
            raise
        return default


def parse_yaml_string(content: str, default: Any = None) -> Any:
    """Parse YAML from a string; returns default on error or empty input."""
    try:
        data = yaml.safe_load(content)
        return data if data is not None else default
    except yaml.YAMLError:
        return default


def dump_yaml_string(data: Any) -> str:
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )


def load_document(path: Optional[str | Path], *, label: str = "document") -> Dict[str, Any]:
    """Load a YAML/JSON mapping from ``path`` (``-`` reads stdin).

    ``None`` yields an empty mapping.

    Raises:
        DocumentError: If the file is missing, unparsable, or not a mapping.
    """
    if path is None:
        return {}
    try:
        if str(path) == "-":
            data = yaml.safe_load(sys.stdin.read())
        else:
            data = read_yaml(Path(path), default=None, raise_on_error=True)
    except FileNotFoundError as exc:
        raise DocumentError(f"{label} not found: {path}", context={"path": str(path)}) from exc
    except yaml.YAMLError as exc:
        raise DocumentError(f"{label} is not valid YAML/JSON: {path}", context={"path": str(path)}) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(f"{label} could not be read: {path}", context={"path": str(path)}) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentError(
            f"{label} must be a mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )
    return data


__all__ = ["read_yaml", "parse_yaml_string", "dump_yaml_string", "load_document"]
