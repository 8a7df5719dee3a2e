from __future__ import annotations

import pytest

from handle_client.handles import admin_value, handle_path, parse_admin_identity, url_value


def test_handle_path_plain() -> None:
    assert handle_path("1234/abc") == "/handles/1234/abc"


def test_handle_path_quotes_suffix() -> None:
    assert handle_path("1234/a b#c") == "/handles/1234/a%20b%23c"


def test_handle_path_query() -> None:
    assert handle_path("1234/abc", types=["URL"], indexes=[1, 2], overwrite=False) == (
        "/handles/1234/abc?type=URL&index=1&index=2&overwrite=false"
    )


def test_handle_path_requires_prefix() -> None:
    with pytest.raises(ValueError):
        handle_path("abc")


def test_url_value() -> None:
    assert url_value(1, "https://example.org") == {
        "index": 1,
        "type": "URL",
        "data": {"format": "string", "value": "https://example.org"},
    }


def test_admin_value_from_identity() -> None:
    index, handle = parse_admin_identity("300:0.NA/1234")
    value = admin_value(handle, index)
    assert value["index"] == 100
    assert value["type"] == "HS_ADMIN"
    assert value["data"]["value"] == {"handle": "0.NA/1234", "index": 300, "permissions": "011111110011"}


@pytest.mark.parametrize("identity", ["0.NA/1234", "x:0.NA/1234", "300:"])
def test_parse_admin_identity_invalid(identity) -> None:
    with pytest.raises(ValueError):
        parse_admin_identity(identity)
