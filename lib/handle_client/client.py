from __future__ import annotations

from typing import Any, Iterable

import httpx

from .config_types import ClientConfig
from .credentials import Credential, load_credential
from .executor import RequestExecutor
from .handles import handle_path
from .session import Session, establish_session
from .transport import Transport


class HandleClient:
    def __init__(
            self,
            cfg: ClientConfig,
            *,
            credential: Credential | None = None,
            transport: httpx.BaseTransport | None = None,
    ):
        # key problems surface before any network call
        self._credential = credential or load_credential(
            cfg.admin_identity, cfg.private_key_path, cfg.passphrase
        )
        self._t = Transport(cfg, transport=transport)
        try:
            self._session = establish_session(self._t, self._credential)
        except Exception:
            self._t.close()
            raise
        self._x = RequestExecutor(self._t, self._session)

    def __enter__(self) -> "HandleClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def admin_identity(self) -> str:
        return self._credential.admin_identity

    @property
    def base_url(self) -> str:
        return self._t.base_url

    def close(self) -> None:
        self._t.close()

    # --- raw verbs, paths relative to /api ---
    def get(self, path: str) -> dict[str, Any]:
        return self._x.get(path)

    def put(self, path: str, body: Any) -> dict[str, Any]:
        return self._x.put(path, body)

    def delete(self, path: str) -> dict[str, Any]:
        return self._x.delete(path)

    # --- handle records ---
    def get_handle(
            self,
            handle: str,
            *,
            types: Iterable[str] | None = None,
            index: Iterable[int] | None = None,
    ) -> dict[str, Any]:
        return self.get(handle_path(handle, types=types, indexes=index))

    def put_handle(self, handle: str, values: list[dict[str, Any]], *, overwrite: bool = True) -> dict[str, Any]:
        path = handle_path(handle, overwrite=None if overwrite else False)
        return self.put(path, {"values": values})

    def delete_handle(self, handle: str, *, index: Iterable[int] | None = None) -> dict[str, Any]:
        return self.delete(handle_path(handle, indexes=index))
