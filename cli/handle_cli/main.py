from __future__ import annotations

import typer

from .commands import config_cmd
from .commands.handles_cmd import delete_handle, get_handle, put_handle
from .commands.session_cmd import session
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="handle",
        help="Handle server admin client",
        no_args_is_help=True,
    )

    app.command("session")(session)
    app.command("get")(get_handle)
    app.command("put")(put_handle)
    app.command("delete")(delete_handle)
    app.add_typer(config_cmd.app, name="config")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
