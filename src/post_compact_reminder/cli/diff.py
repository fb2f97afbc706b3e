"""
CLI - diff command.

Shows what an upgrade would change in the installed hook script.
"""

import typer
from rich.syntax import Syntax

from post_compact_reminder import __version__
from post_compact_reminder.cli.common import get_config, handle_errors
from post_compact_reminder.cli.output import get_output
from post_compact_reminder.core.status import diff_installed_script


def diff_command(ctx: typer.Context) -> None:
    """
    Compare the installed hook script with this release.

    The installed reminder message is kept when rendering the new script,
    so the diff only shows what an upgrade would change.

    Examples:
        post-compact-reminder diff
    """
    out = get_output(ctx)
    config = get_config(out)

    with handle_errors(out):
        result = diff_installed_script(config, current_version=__version__)

    out.console.print("[bold underline]Version Comparison[/bold underline]\n")
    out.console.print(f"  Installed: [cyan]{result.installed_version or 'unknown'}[/cyan]")
    out.console.print(f"  Available: [green]{result.current_version}[/green]")
    out.console.print()

    if result.up_to_date:
        out.info("Already at latest version")
        return

    out.console.print("[bold]Hook script diff:[/bold]\n")
    out.console.print(Syntax(result.diff, "diff", theme="ansi_dark", word_wrap=True))
