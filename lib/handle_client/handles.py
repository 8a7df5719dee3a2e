from __future__ import annotations

from typing import Any, Iterable
from urllib.parse import quote, urlencode

HANDLES_PATH = "/handles/"
DEFAULT_ADMIN_PERMISSIONS = "011111110011"


def handle_path(
        handle: str,
        *,
        types: Iterable[str] | None = None,
        indexes: Iterable[int] | None = None,
        overwrite: bool | None = None,
) -> str:
    handle = (handle or "").strip()
    if "/" not in handle:
        raise ValueError(f"invalid handle {handle!r}, expected <prefix>/<suffix>")
    params: list[tuple[str, Any]] = []
    for t in types or ():
        params.append(("type", t))
    for i in indexes or ():
        params.append(("index", int(i)))
    if overwrite is not None:
        params.append(("overwrite", "true" if overwrite else "false"))
    query = urlencode(params) if params else ""
    return HANDLES_PATH + quote(handle, safe="/") + (f"?{query}" if query else "")


def string_value(index: int, type_: str, value: str) -> dict[str, Any]:
    return {"index": int(index), "type": type_, "data": {"format": "string", "value": value}}


def url_value(index: int, url: str) -> dict[str, Any]:
    return string_value(index, "URL", url)


def admin_value(
        admin_handle: str,
        admin_index: int,
        *,
        index: int = 100,
        permissions: str = DEFAULT_ADMIN_PERMISSIONS,
) -> dict[str, Any]:
    return {
        "index": int(index),
        "type": "HS_ADMIN",
        "data": {
            "format": "admin",
            "value": {"handle": admin_handle, "index": int(admin_index), "permissions": permissions},
        },
    }


def parse_admin_identity(identity: str) -> tuple[int, str]:
    """Split ``300:0.NA/prefix`` into ``(300, "0.NA/prefix")``."""
    index, sep, handle = (identity or "").partition(":")
    if not sep or not handle:
        raise ValueError(f"invalid admin identity {identity!r}, expected <index>:<handle>")
    try:
        return int(index), handle
    except ValueError as e:
        raise ValueError(f"invalid admin identity {identity!r}, index must be numeric") from e
