"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relsync.core.result import Err, Result
from relsync.output.errors import print_sync_error, sync_error_exit_code
from relsync.services.errors import SyncError

if TYPE_CHECKING:
    from relsync.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(result: Result[T, SyncError], ctx: CLIContext) -> None:
    """Print the error and exit with its code if result is Err.

    Replaces the boilerplate:
        match result:
            case Err(e):
                print_sync_error(e, ctx.console)
                raise typer.Exit(code=sync_error_exit_code(e))
            case Ok(_):
                pass
    """
    if isinstance(result, Err):
        print_sync_error(result.error, ctx.console)
        exit_with_code(sync_error_exit_code(result.error))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def split_patterns(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated pattern values.

    ``["dist/*.tar.gz,dist/*.sha256", "docs/*.pdf"]`` yields three patterns.
    """
    out: list[str] = []
    for value in values or []:
        out.extend(p.strip() for p in value.split(",") if p.strip())
    return out
