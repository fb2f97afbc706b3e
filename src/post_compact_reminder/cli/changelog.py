"""
CLI - changelog command.
"""

import typer

from post_compact_reminder.cli.output import get_output
from post_compact_reminder.core.changelog import CHANGELOG


def changelog_command(ctx: typer.Context) -> None:
    """Show the release history."""
    out = get_output(ctx)
    out.console.print("[bold underline]Changelog[/bold underline]\n")
    for entry in CHANGELOG:
        out.console.print(f"[green bold]v{entry.version}[/green bold]")
        out.console.print(f"  {entry.summary}\n")
