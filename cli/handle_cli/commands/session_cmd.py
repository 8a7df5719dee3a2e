from __future__ import annotations

import typer

from .. import console
from .connection import InsecureOpt, PassphraseOpt, ProfileOpt, ServerOpt, connect


def session(
        profile: str | None = ProfileOpt,
        server: str | None = ServerOpt,
        insecure: bool = InsecureOpt,
        passphrase: str | None = PassphraseOpt,
        show_id: bool = typer.Option(False, "--show-id", help="Print the session id."),
) -> None:
    """Authenticate against the server and report the session."""
    client = connect(profile=profile, server=server, insecure=insecure, passphrase=passphrase)
    try:
        console.ok(f"Authenticated at {client.base_url}.")
        if show_id:
            console.console.print(client.session_id)
    finally:
        client.close()
