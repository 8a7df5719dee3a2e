from __future__ import annotations

import logging
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import NetworkError, ProtocolError

logger = logging.getLogger(__name__)


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._base_url = cfg.base_url
        if not cfg.verify_tls:
            logger.warning("TLS certificate verification is disabled for %s", self._base_url)

        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=cfg.timeout_s,
            headers={"User-Agent": "handle-client/0.1.0"},
            verify=cfg.verify_tls,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def url(self, path: str) -> str:
        return self._base_url + path

    def close(self) -> None:
        self._client.close()

    def request(
            self,
            method: str,
            path: str,
            *,
            headers: dict[str, str] | None = None,
            json_body: Any | None = None,
            content: str | bytes | None = None,
    ) -> Any:
        logger.debug("%s %s", method, self.url(path))
        try:
            r = self._client.request(method, path, headers=headers, json=json_body, content=content)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        # Handle servers report failures in the JSON body, status codes are informational only
        try:
            return r.json()
        except ValueError as e:
            snippet = r.text[:200] if r.text else "<empty body>"
            raise ProtocolError(
                f"{method} {self.url(path)} returned non-JSON response ({r.status_code}): {snippet}"
            ) from e
