"""
CLI - restore command.

Puts settings.json back to the copy saved before the last modification.
"""

import typer
from rich.syntax import Syntax

from post_compact_reminder.cli.common import get_config, handle_errors, install_lock
from post_compact_reminder.cli.errors import ExitCode
from post_compact_reminder.cli.output import get_output
from post_compact_reminder.core.installer import restore_settings
from post_compact_reminder.core.status import diff_settings_backup


def restore_command(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show what would be restored without changing anything",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """
    Restore settings.json from settings.json.bak.

    A backup is written automatically every time settings.json is modified.

    Examples:
        post-compact-reminder restore --dry-run   # Show the changes
        post-compact-reminder restore --yes       # Restore without asking
    """
    out = get_output(ctx)
    config = get_config(out)
    backup = out.literal(str(config.backup_file))

    if not config.backup_file.is_file():
        out.error(f"No backup file found at {backup}")
        out.print("   [dim]Backups are created automatically when settings.json is modified.[/dim]")
        raise typer.Exit(int(ExitCode.GENERAL_ERROR))

    out.info(f"Found backup: {backup}")

    with handle_errors(out):
        changes = diff_settings_backup(config)
    if changes:
        out.print("\n[bold]Changes to restore:[/bold]\n")
        out.print(Syntax(changes, "diff", theme="ansi_dark", word_wrap=True))
    else:
        out.info("settings.json already matches the backup")

    if dry_run:
        settings_file = out.literal(str(config.settings_file))
        out.step(f"\\[dry-run] Would restore {backup} to {settings_file}")
        return

    if not yes and not typer.confirm("Restore settings.json from backup?", default=False):
        out.info("Restore cancelled")
        raise typer.Exit(int(ExitCode.SUCCESS))

    with install_lock(config, out), handle_errors(out):
        restore_settings(config)

    out.success("Restored settings.json from backup")
    out.print("\n  [yellow]⚡ Restart Claude Code for changes to take effect.[/yellow]")
