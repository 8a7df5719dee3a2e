from __future__ import annotations

from dataclasses import dataclass, field

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from .errors import CredentialError


@dataclass(frozen=True)
class Credential:
    """Administrator identity plus the RSA key that proves it."""

    admin_identity: str
    private_key: rsa.RSAPrivateKey = field(repr=False)
    passphrase: str | None = field(default=None, repr=False)

    @classmethod
    def from_pem(cls, admin_identity: str, pem: bytes, passphrase: str | None = None) -> "Credential":
        password = passphrase.encode("utf-8") if passphrase else None
        try:
            key = load_pem_private_key(pem, password=password)
        except TypeError as e:
            # raised for a missing passphrase on an encrypted key and vice versa
            raise CredentialError(f"private key passphrase mismatch: {e}") from e
        except (ValueError, UnsupportedAlgorithm) as e:
            raise CredentialError(f"unable to parse private key (wrong passphrase?): {e}") from e
        if not isinstance(key, rsa.RSAPrivateKey):
            raise CredentialError(f"private key must be RSA, got {type(key).__name__}")
        return cls(admin_identity=admin_identity, private_key=key, passphrase=passphrase)

    def sign(self, payload: bytes) -> bytes:
        try:
            return self.private_key.sign(payload, padding.PKCS1v15(), hashes.SHA256())
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise CredentialError(f"unable to sign handshake payload: {e}") from e


def load_credential(admin_identity: str, key_path: str, passphrase: str | None = None) -> Credential:
    if not admin_identity:
        raise CredentialError("administrator identity is required")
    try:
        with open(key_path, "rb") as f:
            pem = f.read()
    except OSError as e:
        raise CredentialError(f"unable to read private key {key_path}: {e.strerror or e}") from e
    return Credential.from_pem(admin_identity, pem, passphrase)
