"""Tests for named transforms."""
from __future__ import annotations

import pytest

from datafields import DatafieldStore
from datafields.core.exceptions import DatafieldsError, UnknownTransformError
from datafields.core.transforms import TRANSFORMS, chain, get_transform


def test_urlencode_encodes_values_not_separators() -> None:
    store = DatafieldStore()
    store.update({}, {"tag1": "a b&c", "tag2": "x=y"})
    body = store.render_datafields("x={tag1}&b={tag2}", transform=get_transform("urlencode"))
    assert body == "x=a+b%26c&b=x%3Dy"


def test_rawurlencode_uses_percent_twenty() -> None:
    assert get_transform("rawurlencode")("a b/c", "k") == "a%20b%2Fc"


def test_html_and_json_transforms() -> None:
    assert get_transform("html")("<b>&</b>", "k") == "&lt;b&gt;&amp;&lt;/b&gt;"
    assert get_transform("json")('say "hi"', "k") == '"say \\"hi\\""'
    assert get_transform("json")(3, "k") == "3"


def test_text_transforms_handle_non_strings() -> None:
    assert get_transform("upper")(None, "k") == ""
    assert get_transform("lower")("MiXeD", "k") == "mixed"
    assert get_transform("strip")("  x  ", "k") == "x"


def test_unknown_transform() -> None:
    with pytest.raises(UnknownTransformError) as excinfo:
        get_transform("rot13")
    err = excinfo.value
    assert isinstance(err, KeyError)
    assert isinstance(err, DatafieldsError)
    assert str(err) == "Unknown transform: rot13"
    assert err.context["available"] == sorted(TRANSFORMS)


def test_chain_applies_left_to_right_with_same_key() -> None:
    seen = []

    def record(v, k):
        seen.append(k)
        return v

    transform = chain(get_transform("strip"), get_transform("upper"), record)
    assert transform("  hello ", "greeting") == "HELLO"
    assert seen == ["greeting"]
