"""
CLI - uninstall command.

Removes the hook script and strips every post-compact-reminder entry from
settings.json, leaving all other settings and hooks in place.
"""

import typer

from post_compact_reminder.cli.common import get_config, handle_errors, install_lock
from post_compact_reminder.cli.errors import ExitCode
from post_compact_reminder.cli.output import get_output
from post_compact_reminder.core.installer import uninstall
from post_compact_reminder.core.settings.models import MergeOutcome


def uninstall_command(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Preview changes without modifying anything",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """
    Remove the post-compact reminder hook.

    Deletes the hook script and removes its SessionStart entry from
    settings.json. Empty hook groups are dropped; unrelated hooks are kept.

    Examples:
        post-compact-reminder uninstall             # Remove (asks first)
        post-compact-reminder uninstall --yes       # Remove without asking
        post-compact-reminder uninstall --dry-run   # Preview changes
    """
    out = get_output(ctx)
    config = get_config(out)

    if not yes and not dry_run:
        if not typer.confirm("Remove the post-compact-reminder hook?", default=False):
            out.info("Uninstall cancelled")
            raise typer.Exit(int(ExitCode.SUCCESS))

    with install_lock(config, out), handle_errors(out):
        report = uninstall(config, dry_run=dry_run)

    script = out.literal(report.script_path)
    if not report.script_found:
        out.skip("Script not found (already removed)")
    elif dry_run:
        out.step(f"\\[dry-run] Would remove {script}")
    elif report.script_removed:
        out.success(f"Removed {script}")

    if not report.settings_found:
        out.skip("settings.json not found")
    elif report.settings_outcome == MergeOutcome.ABSENT:
        out.skip("Hook not found in settings.json")
    elif dry_run:
        out.step("\\[dry-run] Would remove hook from settings.json")
    else:
        out.success("Removed hook from settings.json")

    if dry_run:
        out.print()
        out.info("Dry run complete. No changes were made.")
        return

    out.print()
    out.success("Uninstall complete.")
    out.print("  [yellow]⚡ Restart Claude Code for changes to take effect.[/yellow]")
