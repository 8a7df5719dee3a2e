from .client import HandleClient
from .errors import (
    AuthenticationError,
    CredentialError,
    HandleClientError,
    HandleError,
    NetworkError,
    ProtocolError,
)

__all__ = [
    "HandleClient",
    "HandleClientError",
    "AuthenticationError",
    "CredentialError",
    "HandleError",
    "NetworkError",
    "ProtocolError",
]
