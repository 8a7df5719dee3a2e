from __future__ import annotations

import os

from handle_client import HandleClient
from handle_client.config_types import ClientConfig

from .config import AppConfig, apply_env, apply_profile, normalize_server, resolve_passphrase


class ConfigIncomplete(Exception):
    """Required connection setting is missing."""


def build_client_config(
    cfg: AppConfig,
    *,
    profile: str | None,
    server_override: str | None = None,
    insecure: bool = False,
    passphrase: str | None = None,
) -> ClientConfig:
    try:
        effective_cfg = apply_env(apply_profile(cfg, profile))
    except KeyError:
        raise ConfigIncomplete(f"Unknown profile: {profile}") from None
    server = normalize_server(server_override or effective_cfg.server)

    missing = []
    if not server:
        missing.append("server")
    if not effective_cfg.admin:
        missing.append("admin")
    if not effective_cfg.private_key_path:
        missing.append("private_key_path")
    if missing:
        raise ConfigIncomplete(
            "Missing " + ", ".join(missing) + ". Run 'handle config set' or use HANDLE_* env variables."
        )

    return ClientConfig(
        server=server,
        admin_identity=effective_cfg.admin,
        private_key_path=os.path.expanduser(effective_cfg.private_key_path),
        passphrase=resolve_passphrase(passphrase),
        verify_tls=effective_cfg.verify_tls and not insecure,
        timeout_s=effective_cfg.timeout_s,
    )


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None,
    server_override: str | None = None,
    insecure: bool = False,
    passphrase: str | None = None,
) -> HandleClient:
    return HandleClient(
        build_client_config(
            cfg,
            profile=profile,
            server_override=server_override,
            insecure=insecure,
            passphrase=passphrase,
        )
    )
