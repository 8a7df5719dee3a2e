from __future__ import annotations

import base64
import re

import httpx
import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from handle_client.config_types import ClientConfig
from handle_client.credentials import Credential

ADMIN = "300:0.NA/1234"
SERVER_NONCE = b"server-nonce-0123456789"

_FIELD_RE = re.compile(r'(\w+)="([^"]*)"')


def parse_auth_header(value: str) -> dict[str, str]:
    scheme, _, rest = value.partition(" ")
    assert scheme == "Handle"
    return dict(_FIELD_RE.findall(rest))


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def credential(rsa_key) -> Credential:
    return Credential(admin_identity=ADMIN, private_key=rsa_key)


@pytest.fixture
def key_file(tmp_path, rsa_key):
    path = tmp_path / "admpriv.pem"
    path.write_bytes(
        rsa_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return path


@pytest.fixture
def client_config(key_file) -> ClientConfig:
    return ClientConfig(server="hdl.example.test:8000", admin_identity=ADMIN, private_key_path=str(key_file))


class FakeHandleServer:
    """In-memory Handle server speaking the session handshake."""

    def __init__(self, public_key: rsa.RSAPublicKey):
        self.public_key = public_key
        self.requests: list[httpx.Request] = []
        self.challenge: dict | None = {
            "sessionId": "provisional-1",
            "nonce": base64.b64encode(SERVER_NONCE).decode("ascii"),
        }
        self.final_session_id = "final-session-42"
        self.reject_with: str | None = None
        self.verdict_override: dict | None = None
        self.routes: dict[tuple[str, str], httpx.Response] = {}

    def route(self, method: str, path: str, status: int = 200, **kwargs) -> None:
        self.routes[(method, path)] = httpx.Response(status, **kwargs)

    def _verdict(self, request: httpx.Request) -> dict:
        if self.verdict_override is not None:
            return self.verdict_override
        fields = parse_auth_header(request.headers.get("Authorization", ""))
        if self.reject_with:
            return {"sessionId": fields.get("sessionId"), "authenticated": False, "error": self.reject_with}
        nonce = base64.b64decode(self.challenge["nonce"])
        cnonce = base64.b64decode(fields["cnonce"])
        signature = base64.b64decode(fields["signature"])
        try:
            self.public_key.verify(signature, nonce + cnonce, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature:
            return {"sessionId": fields["sessionId"], "authenticated": False, "error": "Signature verification failed"}
        return {"sessionId": self.final_session_id, "authenticated": True, "id": fields["id"]}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "POST" and path == "/api/sessions/":
            if self.challenge is None:
                return httpx.Response(500, text="Internal Server Error")
            return httpx.Response(201, json=self.challenge)
        if request.method == "PUT" and path == "/api/sessions/this":
            return httpx.Response(200, json=self._verdict(request))
        target = request.url.raw_path.decode("ascii")
        if (request.method, target) in self.routes:
            return self.routes[(request.method, target)]
        return httpx.Response(404, json={"responseCode": 100, "handle": path.removeprefix("/api/handles/")})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def server(rsa_key) -> FakeHandleServer:
    return FakeHandleServer(rsa_key.public_key())
