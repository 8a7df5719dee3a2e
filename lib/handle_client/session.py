"""HS_PUBKEY session handshake.

Two round trips: the server hands out a nonce and a provisional session id,
the client answers with a signature over ``server_nonce || client_nonce`` and
receives the authenticated session id.
"""

from __future__ import annotations

import base64
import binascii
import enum
import logging
import secrets
from dataclasses import dataclass
from typing import Any

from .auth_header import build_auth_header
from .credentials import Credential
from .errors import AuthenticationError, CredentialError, ProtocolError
from .transport import Transport

logger = logging.getLogger(__name__)

SESSIONS_PATH = "/sessions/"
SESSION_THIS_PATH = "/sessions/this"
CLIENT_NONCE_SIZE = 16
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"


@dataclass(frozen=True)
class Session:
    session_id: str
    authenticated: bool


class HandshakeState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    NONCE_RECEIVED = "nonce_received"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


def generate_client_nonce() -> bytes:
    return secrets.token_bytes(CLIENT_NONCE_SIZE)


class Handshake:
    """Single-use state machine for one handshake attempt."""

    def __init__(self, transport: Transport, credential: Credential):
        self._t = transport
        self._credential = credential
        self.state = HandshakeState.UNAUTHENTICATED
        self.server_nonce: bytes | None = None
        self.provisional_session_id: str | None = None
        self.session: Session | None = None

    def _expect(self, state: HandshakeState) -> None:
        if self.state is not state:
            raise ProtocolError(f"handshake is {self.state.value}, expected {state.value}")

    def request_challenge(self) -> None:
        self._expect(HandshakeState.UNAUTHENTICATED)
        data = self._t.request("POST", SESSIONS_PATH)
        try:
            nonce, session_id = _parse_challenge(data)
        except ProtocolError:
            self.state = HandshakeState.FAILED
            raise
        self.server_nonce = nonce
        self.provisional_session_id = session_id
        self.state = HandshakeState.NONCE_RECEIVED
        logger.debug("received server nonce for provisional session")

    def answer_challenge(self) -> Session:
        self._expect(HandshakeState.NONCE_RECEIVED)
        client_nonce = generate_client_nonce()
        try:
            signature = self._credential.sign(self.server_nonce + client_nonce)
        except CredentialError:
            self.state = HandshakeState.FAILED
            raise
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Authorization": build_auth_header(
                client_nonce,
                self.provisional_session_id,
                self._credential.admin_identity,
                signature,
                server_nonce=self.server_nonce,
            ),
        }
        data = self._t.request("PUT", SESSION_THIS_PATH, headers=headers)
        try:
            session_id = _parse_verdict(data)
        except (AuthenticationError, ProtocolError):
            self.state = HandshakeState.FAILED
            raise

        self.session = Session(session_id=session_id, authenticated=True)
        self.state = HandshakeState.AUTHENTICATED
        logger.debug("session authenticated for %s", self._credential.admin_identity)
        return self.session

    def run(self) -> Session:
        self.request_challenge()
        return self.answer_challenge()


def _parse_challenge(data: Any) -> tuple[bytes, str]:
    if not isinstance(data, dict):
        raise ProtocolError("session challenge is not a JSON object")
    nonce_b64 = data.get("nonce")
    session_id = data.get("sessionId")
    if not isinstance(nonce_b64, str) or not nonce_b64:
        raise ProtocolError("session challenge is missing 'nonce'")
    if not isinstance(session_id, str) or not session_id:
        raise ProtocolError("session challenge is missing 'sessionId'")
    try:
        nonce = base64.b64decode(nonce_b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ProtocolError(f"session challenge 'nonce' is not valid base64: {e}") from e
    if not nonce:
        raise ProtocolError("session challenge 'nonce' is empty")
    return nonce, session_id


def _parse_verdict(data: Any) -> str:
    if not isinstance(data, dict):
        raise ProtocolError("session verdict is not a JSON object")
    if data.get("authenticated") is not True:
        error = data.get("error")
        raise AuthenticationError(error if isinstance(error, str) and error else "authentication failed")
    session_id = data.get("sessionId")
    if not isinstance(session_id, str) or not session_id:
        raise ProtocolError("authenticated session verdict is missing 'sessionId'")
    return session_id


def establish_session(transport: Transport, credential: Credential) -> Session:
    return Handshake(transport, credential).run()
