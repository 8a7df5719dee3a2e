from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console()


def _emit(tag: str, msg: str) -> None:
    console.print(f"{tag} {escape(msg)}")


def print_json(data) -> None:
    console.print_json(data=data)


def ok(msg: str) -> None:
    _emit("[bold green]OK[/]", msg)


def warn(msg: str) -> None:
    _emit("[bold yellow]WARN[/]", msg)


def err(msg: str) -> None:
    _emit("[bold red]ERR[/]", msg)
