"""Authorization header values for the Handle HTTP JSON API.

The server matches the header grammar literally, so field names, their order
and the quoting below are part of the wire contract.
"""

from __future__ import annotations

import base64
from urllib.parse import quote_plus

AUTH_SCHEME = "Handle"
AUTH_TYPE = "HS_PUBKEY"
AUTH_ALG = "SHA256"


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def build_session_header(session_id: str) -> str:
    return f'{AUTH_SCHEME} sessionId="{session_id}"'


def build_auth_header(
        client_nonce: bytes,
        session_id: str,
        identity: str,
        signature: bytes,
        *,
        server_nonce: bytes | None = None,
) -> str:
    """Header that completes the HS_PUBKEY handshake.

    ``server_nonce`` only takes part in the signed payload; it is accepted so
    callers can pass the whole nonce pair, and does not appear in the header.
    """
    header = (
        f'{build_session_header(session_id)}, '
        f'id="{quote_plus(identity)}", '
        f'type="{AUTH_TYPE}", '
        f'cnonce="{_b64(client_nonce)}", '
        f'alg="{AUTH_ALG}", '
        f'signature="{_b64(signature)}"'
    )
    return header.replace("\r", "").replace("\n", "")
