"""
Presentation settings for CLI output.

Quiet/verbose/no-color live on an Output object created by the root callback
and carried in the typer context, never in module globals. Every message is
also sent to the logger so that --log captures the whole session.
"""

from __future__ import annotations

import logging
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("post_compact_reminder.cli")


class Output:
    """Console wrapper with the installer's message vocabulary."""

    def __init__(self, quiet: bool = False, verbose: bool = False, no_color: bool = False):
        self.quiet = quiet
        self.verbose_enabled = verbose
        self.no_color = no_color
        self.console = Console(no_color=no_color, highlight=False, soft_wrap=True)
        self.err_console = Console(
            stderr=True, no_color=no_color, highlight=False, soft_wrap=True
        )

    def _emit(self, symbol: str, message: str, *, always: bool = False) -> None:
        if always or not self.quiet:
            self.console.print(f"{symbol}  {message}")

    def info(self, message: str) -> None:
        logger.info(f"INFO: {message}")
        self._emit("[cyan]ℹ[/cyan]", message)

    def step(self, message: str) -> None:
        logger.info(f"STEP: {message}")
        self._emit("[blue]▸[/blue]", message)

    def success(self, message: str) -> None:
        logger.info(f"SUCCESS: {message}")
        self._emit("[green]✔[/green]", message)

    def skip(self, message: str) -> None:
        logger.info(f"SKIP: {message}")
        self._emit("[dim]○[/dim]", message)

    def warn(self, message: str) -> None:
        # Warnings are shown even in quiet mode
        logger.info(f"WARN: {message}")
        self._emit("[yellow]⚠[/yellow]", message, always=True)

    def error(self, message: str) -> None:
        logger.info(f"ERROR: {message}")
        self.err_console.print(f"[red]✖[/red]  {message}")

    def verbose(self, message: str) -> None:
        logger.debug(f"VERBOSE: {message}")
        if self.verbose_enabled:
            self.console.print(f"   [dim]{message}[/dim]")

    def print(self, *objects: Any, **kwargs: Any) -> None:
        """Plain console print, suppressed in quiet mode."""
        if not self.quiet:
            self.console.print(*objects, **kwargs)

    def literal(self, text: str) -> str:
        """Escape user text (paths, messages) for rich markup."""
        return escape(text)


def get_output(ctx: typer.Context | None) -> Output:
    """Output object from the root callback, or a default one."""
    if ctx is not None:
        root = ctx.find_root()
        if isinstance(root.obj, dict) and isinstance(root.obj.get("output"), Output):
            return root.obj["output"]
    return Output()
