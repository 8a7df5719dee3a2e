from __future__ import annotations

from typing import Any

from .auth_header import build_session_header
from .errors import AuthenticationError
from .responses import translate_response
from .session import JSON_CONTENT_TYPE, Session
from .transport import Transport


class RequestExecutor:
    """Issues authenticated calls relative to the API root."""

    def __init__(self, transport: Transport, session: Session):
        self._t = transport
        self._session = session
        self._check_session()

    def _check_session(self) -> None:
        if not self._session.authenticated:
            raise AuthenticationError("session is not authenticated")

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": JSON_CONTENT_TYPE,
            "Authorization": build_session_header(self._session.session_id),
        }

    def _send(self, method: str, path: str, body: Any | None = None) -> dict[str, Any]:
        self._check_session()
        if isinstance(body, (str, bytes)):
            data = self._t.request(method, path, headers=self._headers(), content=body)
        else:
            data = self._t.request(method, path, headers=self._headers(), json_body=body)
        return translate_response(self._t.url(path), data)

    def get(self, path: str) -> dict[str, Any]:
        return self._send("GET", path)

    def put(self, path: str, body: Any) -> dict[str, Any]:
        return self._send("PUT", path, body)

    def delete(self, path: str) -> dict[str, Any]:
        return self._send("DELETE", path)
