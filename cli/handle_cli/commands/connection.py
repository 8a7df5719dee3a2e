from __future__ import annotations

import typer
from handle_client import HandleClient, HandleClientError, HandleError

from .. import console
from ..config import load_config
from ..http import ConfigIncomplete, make_client

ProfileOpt = typer.Option(None, "--profile", help="Use a [profiles.<name>] table from the config file.")
ServerOpt = typer.Option(None, "--server", help="Override server host:port.")
InsecureOpt = typer.Option(False, "--insecure", help="Skip TLS certificate verification (test servers only).")
PassphraseOpt = typer.Option(None, "--passphrase", help="Private key passphrase (or set HANDLE_PASSPHRASE).")


def fail(e: Exception) -> typer.Exit:
    if isinstance(e, HandleError):
        console.err(f"{e} [{e.url}]")
    else:
        console.err(str(e))
    return typer.Exit(code=2)


def connect(
        *,
        profile: str | None,
        server: str | None,
        insecure: bool,
        passphrase: str | None,
) -> HandleClient:
    cfg = load_config()
    try:
        client = make_client(
            cfg,
            profile=profile,
            server_override=server,
            insecure=insecure,
            passphrase=passphrase,
        )
    except (ConfigIncomplete, HandleClientError) as e:
        raise fail(e)
    if insecure:
        console.warn("TLS certificate verification disabled.")
    return client
