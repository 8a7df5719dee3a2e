from __future__ import annotations


class HandleClientError(Exception):
    """Base client error."""


class NetworkError(HandleClientError):
    """Transport/network layer error."""


class CredentialError(HandleClientError):
    """Private key could not be read, parsed or used for signing."""


class ProtocolError(HandleClientError):
    """Server payload does not match the expected protocol shape."""


class AuthenticationError(HandleClientError):
    """Server rejected the session handshake."""


class HandleError(HandleClientError):
    def __init__(
            self,
            response_code: int | None,
            message: str,
            *,
            handle: str | None = None,
            url: str = "",
    ):
        super().__init__(message)
        self.response_code = response_code
        self.message = message
        self.handle = handle
        self.url = url

    def __str__(self) -> str:
        parts = [self.message]
        if self.response_code is not None:
            parts.append(f"(responseCode={self.response_code})")
        if self.handle:
            parts.append(f"handle={self.handle}")
        return " ".join(parts)
