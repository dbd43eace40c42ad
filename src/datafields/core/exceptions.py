from __future__ import annotations

from typing import Any, Dict, Mapping


class DatafieldsError(Exception):
    """Base exception for the datafields package."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class UnknownTransformError(DatafieldsError, KeyError):
    """Raised when a transform name is not registered."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        DatafieldsError.__init__(self, message, context=context)
        KeyError.__init__(self, message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class ConfigError(DatafieldsError, ValueError):
    """Raised when configuration is invalid or cannot be loaded."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        DatafieldsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class DocumentError(DatafieldsError, ValueError):
    """Raised when an event or step-data document is missing or malformed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        DatafieldsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "DatafieldsError",
    "UnknownTransformError",
    "ConfigError",
    "DocumentError",
]
