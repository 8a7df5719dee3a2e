from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from .errors import HandleError, ProtocolError

SUCCESS = 1
UNEXPECTED_ERROR_MESSAGE = "Unexpected error"

# Handle not found (100) is left out: the server always sends its own message for it.
RESPONSE_CODES: Mapping[int, str] = MappingProxyType({
    2: "An unexpected error on the server",
    3: "Server too busy",
    4: "Protocol error",
    5: "Operation not supported",
    6: "Recursion count too high",
    7: "Server is read-only",
    101: "Handle already exists",
    102: "Invalid handle",
    200: "Values not found",
    201: "Value already exists",
    202: "Invalid value",
    300: "Out of date site info",
    301: "Server not responsible for handle",
    302: "Service referral",
    303: "Prefix referral",
    400: "Invalid admin",
    401: "Insufficient permissions",
    402: "Authentication needed",
    403: "Authentication failed",
    404: "Invalid credential",
    405: "Authentication timed out",
    406: "Unable to authenticate",
    500: "Session timed out",
    501: "Session failed",
    502: "Invalid session key",
    504: "Invalid session setup request",
    505: "Session message rejected",
})


def resolve_message(response_code: Any, body: Mapping[str, Any]) -> str:
    message = body.get("message")
    if message is not None:
        return str(message)
    if type(response_code) is int and response_code in RESPONSE_CODES:
        return RESPONSE_CODES[response_code]
    return UNEXPECTED_ERROR_MESSAGE


def translate_response(url: str, body: Any) -> dict[str, Any]:
    """Return ``body`` for a successful response, raise HandleError otherwise."""
    if not isinstance(body, dict):
        raise ProtocolError(f"{url} returned {type(body).__name__}, expected a JSON object")

    response_code = body.get("responseCode")
    if type(response_code) is int and response_code == SUCCESS:
        return body

    handle = body.get("handle")
    raise HandleError(
        response_code if type(response_code) is int else None,
        resolve_message(response_code, body),
        handle=handle if isinstance(handle, str) else None,
        url=url,
    )
