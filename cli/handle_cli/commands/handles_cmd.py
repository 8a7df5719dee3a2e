from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from handle_client import HandleClientError
from handle_client.handles import admin_value, parse_admin_identity, url_value

from .. import console
from .connection import InsecureOpt, PassphraseOpt, ProfileOpt, ServerOpt, connect, fail


def _load_values(values_file: Path) -> list[dict[str, Any]]:
    try:
        data = json.loads(values_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.err(f"Unable to read values from {values_file}: {e}")
        raise typer.Exit(code=2)
    if isinstance(data, dict):
        data = data.get("values")
    if not isinstance(data, list) or not all(isinstance(v, dict) for v in data):
        console.err(f"{values_file} must hold a list of handle values or an object with 'values'.")
        raise typer.Exit(code=2)
    return data


def get_handle(
        handle: str = typer.Argument(..., help="Handle, e.g. 1234/abc."),
        types: list[str] | None = typer.Option(None, "--type", help="Only values of this type (repeatable)."),
        index: list[int] | None = typer.Option(None, "--index", help="Only values at this index (repeatable)."),
        profile: str | None = ProfileOpt,
        server: str | None = ServerOpt,
        insecure: bool = InsecureOpt,
        passphrase: str | None = PassphraseOpt,
) -> None:
    """Print a handle record."""
    client = connect(profile=profile, server=server, insecure=insecure, passphrase=passphrase)
    try:
        data = client.get_handle(handle, types=types or None, index=index or None)
    except (HandleClientError, ValueError) as e:
        raise fail(e)
    finally:
        client.close()
    console.print_json(data)


def put_handle(
        handle: str = typer.Argument(..., help="Handle to create or update."),
        url: str | None = typer.Option(None, "--url", help="Point the handle at this URL (index 1)."),
        values_file: Path | None = typer.Option(None, "--values-file", help="JSON file with handle values."),
        overwrite: bool = typer.Option(True, "--overwrite/--no-overwrite", help="Replace an existing record."),
        with_admin: bool = typer.Option(
            True,
            "--with-admin/--no-admin",
            help="With --url, also add an HS_ADMIN value for the configured administrator.",
        ),
        profile: str | None = ProfileOpt,
        server: str | None = ServerOpt,
        insecure: bool = InsecureOpt,
        passphrase: str | None = PassphraseOpt,
) -> None:
    """Create or replace a handle record."""
    if (url is None) == (values_file is None):
        console.err("Pass exactly one of --url or --values-file.")
        raise typer.Exit(code=2)
    values = [url_value(1, url)] if url is not None else _load_values(values_file)

    client = connect(profile=profile, server=server, insecure=insecure, passphrase=passphrase)
    try:
        if url is not None and with_admin:
            admin_index, admin_handle = parse_admin_identity(client.admin_identity)
            values.append(admin_value(admin_handle, admin_index))
        data = client.put_handle(handle, values, overwrite=overwrite)
    except (HandleClientError, ValueError) as e:
        raise fail(e)
    finally:
        client.close()
    console.ok(f"Handle {data.get('handle') or handle} saved.")


def delete_handle(
        handle: str = typer.Argument(..., help="Handle to delete."),
        index: list[int] | None = typer.Option(None, "--index", help="Delete only the value at this index (repeatable)."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        profile: str | None = ProfileOpt,
        server: str | None = ServerOpt,
        insecure: bool = InsecureOpt,
        passphrase: str | None = PassphraseOpt,
) -> None:
    """Delete a handle record or some of its values."""
    if not yes:
        what = f"values {', '.join(map(str, index))} of {handle}" if index else handle
        typer.confirm(f"Delete {what}?", abort=True)

    client = connect(profile=profile, server=server, insecure=insecure, passphrase=passphrase)
    try:
        client.delete_handle(handle, index=index or None)
    except (HandleClientError, ValueError) as e:
        raise fail(e)
    finally:
        client.close()
    console.ok(f"Deleted {handle}.")
