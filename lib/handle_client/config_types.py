from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ClientConfig:
    server: str
    admin_identity: str
    private_key_path: str
    passphrase: str | None = None
    verify_tls: bool = True
    timeout_s: float = 15.0

    @property
    def base_url(self) -> str:
        server = self.server.strip().rstrip("/")
        lowered = server.lower()
        if not (lowered.startswith("http://") or lowered.startswith("https://")):
            server = f"https://{server}"
        return f"{server}/api"
