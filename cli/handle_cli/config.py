from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from typing import Any

import tomli_w
from platformdirs import user_config_dir

APP_NAME = "handle-client"
CONFIG_FILENAME = "config.toml"

ENV_SERVER = "HANDLE_SERVER"
ENV_ADMIN = "HANDLE_ADMIN"
ENV_PRIVATE_KEY = "HANDLE_PRIVATE_KEY"
ENV_PASSPHRASE = "HANDLE_PASSPHRASE"


@dataclass
class ProfileConfig:
    server: str = ""
    admin: str = ""
    private_key_path: str = ""
    verify_tls: bool | None = None


@dataclass
class AppConfig:
    server: str = ""
    admin: str = ""
    private_key_path: str = ""
    verify_tls: bool = True
    timeout_s: float = 15.0
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_server(raw: str | None) -> str:
    value = (raw or "").strip().rstrip("/")
    if value.lower().endswith("/api"):
        value = value[: -len("/api")].rstrip("/")
    return value


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        "server": cfg.server,
        "admin": cfg.admin,
        "private_key_path": cfg.private_key_path,
        "verify_tls": cfg.verify_tls,
        "timeout_s": cfg.timeout_s,
    }
    profiles: dict[str, Any] = {}
    for name, p in cfg.profiles.items():
        prof: dict[str, Any] = {
            "server": p.server,
            "admin": p.admin,
            "private_key_path": p.private_key_path,
        }
        if p.verify_tls is not None:
            prof["verify_tls"] = p.verify_tls
        profiles[name] = {k: v for k, v in prof.items() if v != ""}
    if profiles:
        data["profiles"] = profiles
    return data


def _profile_from_toml(raw: dict[str, Any]) -> ProfileConfig:
    verify_tls = raw.get("verify_tls")
    return ProfileConfig(
        server=normalize_server(str(raw.get("server") or "")),
        admin=str(raw.get("admin") or "").strip(),
        private_key_path=str(raw.get("private_key_path") or "").strip(),
        verify_tls=verify_tls if isinstance(verify_tls, bool) else None,
    )


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    cfg.server = normalize_server(str(data.get("server") or ""))
    cfg.admin = str(data.get("admin") or "").strip()
    cfg.private_key_path = str(data.get("private_key_path") or "").strip()
    verify_tls = data.get("verify_tls")
    if isinstance(verify_tls, bool):
        cfg.verify_tls = verify_tls
    timeout_s = data.get("timeout_s")
    if isinstance(timeout_s, (int, float)) and not isinstance(timeout_s, bool) and timeout_s > 0:
        cfg.timeout_s = float(timeout_s)

    profiles_raw = data.get("profiles") or {}
    if isinstance(profiles_raw, dict):
        for name, v in profiles_raw.items():
            if isinstance(v, dict):
                cfg.profiles[str(name)] = _profile_from_toml(v)
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    prof = cfg.profiles.get(profile)
    if prof is None:
        raise KeyError(profile)
    return replace(
        cfg,
        server=prof.server or cfg.server,
        admin=prof.admin or cfg.admin,
        private_key_path=prof.private_key_path or cfg.private_key_path,
        verify_tls=cfg.verify_tls if prof.verify_tls is None else prof.verify_tls,
    )


def apply_env(cfg: AppConfig) -> AppConfig:
    server = os.getenv(ENV_SERVER)
    admin = os.getenv(ENV_ADMIN)
    key_path = os.getenv(ENV_PRIVATE_KEY)
    return replace(
        cfg,
        server=normalize_server(server) if server else cfg.server,
        admin=admin.strip() if admin else cfg.admin,
        private_key_path=key_path.strip() if key_path else cfg.private_key_path,
    )


def resolve_passphrase(explicit: str | None) -> str | None:
    if explicit:
        return explicit
    return os.getenv(ENV_PASSPHRASE) or None
