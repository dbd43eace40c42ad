from __future__ import annotations

from datafields.core.exceptions import ConfigError, DatafieldsError, DocumentError


def test_error_context_is_copied() -> None:
    ctx = {"path": "a.yml"}
    err = DocumentError("bad", context=ctx)
    ctx["path"] = "changed"
    assert err.context == {"path": "a.yml"}
    assert isinstance(err, ValueError)


def test_to_json_error() -> None:
    err = ConfigError("invalid", context={"key": "x"})
    assert err.to_json_error() == {
        "message": "invalid",
        "code": "ConfigError",
        "context": {"key": "x"},
    }
    assert DatafieldsError("plain").context == {}
