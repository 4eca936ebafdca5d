"""Terminal output helpers built on rich."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

_out = Console(highlight=False)
_err = Console(stderr=True, highlight=False)


def print(*objects: Any, **kwargs: Any) -> None:  # noqa: A001
    _out.print(*objects, **kwargs)


def info(message: str) -> None:
    _out.print(escape(message))


def success(message: str) -> None:
    _out.print(f"[green]✓[/] {escape(message)}")


def warning(message: str) -> None:
    _err.print(f"[yellow]warning:[/] {escape(message)}")


def error(message: str) -> None:
    _err.print(f"[bold red]error:[/] {escape(message)}")


def dim(message: str) -> None:
    _out.print(f"[dim]{escape(message)}[/]")


def header(title: str) -> None:
    _out.print(f"\n[bold]{title}[/]")
    _out.rule(style="dim")


def subheader(title: str) -> None:
    _out.print(f"[bold cyan]{title}[/]")


def key_value(key: str, value: Any, indent: int = 2) -> None:
    _out.print(f"{' ' * indent}[dim]{key}:[/] {escape(str(value))}")
