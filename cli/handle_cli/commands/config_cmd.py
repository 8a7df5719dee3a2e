from __future__ import annotations

import typer
from rich.markup import escape

from .. import console
from ..config import config_path, load_config, normalize_server, save_config

app = typer.Typer(help="Show or change connection settings.")


@app.command("show")
def show() -> None:
    cfg = load_config()
    console.console.print(f"config={config_path()}")
    console.console.print(
        f"server={cfg.server or '(empty)'} admin={cfg.admin or '(empty)'} "
        f"private_key_path={cfg.private_key_path or '(empty)'} verify_tls={str(cfg.verify_tls).lower()}"
    )
    for name, prof in cfg.profiles.items():
        console.console.print(escape(f"[{name}]") + f" server={prof.server or '-'} admin={prof.admin or '-'}")


@app.command("set")
def set_values(
        server: str | None = typer.Option(None, "--server", help="Handle server host:port."),
        admin: str | None = typer.Option(None, "--admin", help="Administrator identity, e.g. 300:0.NA/1234."),
        private_key: str | None = typer.Option(None, "--private-key", help="Path to the PEM private key."),
        verify_tls: bool | None = typer.Option(
            None,
            "--verify-tls/--insecure",
            help="Verify the server TLS certificate.",
        ),
) -> None:
    cfg = load_config()

    if server is not None:
        cfg.server = normalize_server(server)
    if admin is not None:
        cfg.admin = admin.strip()
    if private_key is not None:
        cfg.private_key_path = private_key.strip()
    if verify_tls is not None:
        cfg.verify_tls = verify_tls
        if not verify_tls:
            console.warn("TLS certificate verification disabled for every request.")

    path = save_config(cfg)
    console.ok(f"Config saved to {path}.")
