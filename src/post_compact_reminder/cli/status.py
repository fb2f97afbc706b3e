"""
CLI - status command.

Read-only health check of the hook script and the settings.json entry.
"""

import typer
from rich.table import Table

from post_compact_reminder import __version__
from post_compact_reminder.cli.common import get_config, handle_errors
from post_compact_reminder.cli.output import Output, get_output
from post_compact_reminder.core.hook.version import VersionStatus
from post_compact_reminder.core.status import InstallationStatus, collect_status


def _check(ok: bool) -> str:
    return "[green]✔[/green]" if ok else "[red]✖[/red]"


def _status_table(out: Output, status: InstallationStatus) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Check", style="cyan")
    table.add_column("", justify="center")
    table.add_column("Details")

    script = out.literal(status.script_path)
    if not status.script_exists:
        table.add_row("Hook script", _check(False), f"Not found at {script}")
    elif not status.script_executable:
        table.add_row("Hook script", _check(False), f"Not executable: {script}")
    else:
        table.add_row("Hook script", _check(True), script)

    if status.installed_version is None:
        version = "[dim]unknown[/dim]"
    elif status.version_status == VersionStatus.OUTDATED:
        version = (
            f"[yellow]{status.installed_version}[/yellow] "
            f"(update available: {status.installed_version} → {status.current_version})"
        )
    else:
        version = f"{status.installed_version} (latest)"
    table.add_row(
        "Version", _check(status.version_status == VersionStatus.SAME), version
    )

    settings = out.literal(status.settings_file)
    if not status.settings_exists:
        table.add_row("settings.json", _check(False), f"Not found at {settings}")
    elif status.settings_error:
        table.add_row(
            "settings.json", _check(False), f"Unusable: {out.literal(status.settings_error)}"
        )
    elif status.hook_configured:
        table.add_row("settings.json", _check(True), "SessionStart hook configured")
    else:
        table.add_row("settings.json", _check(False), "Hook not configured")

    if status.hook_test_passed is None:
        table.add_row("Hook test", "[dim]-[/dim]", "[dim]skipped[/dim]")
    else:
        result = "passed" if status.hook_test_passed else "failed"
        table.add_row("Hook test", _check(status.hook_test_passed), result)

    backup = "available" if status.backup_exists else "[dim]none[/dim]"
    table.add_row("Backup", "[dim]-[/dim]", backup)
    return table


def status_command(ctx: typer.Context) -> None:
    """
    Show installation status and diagnostics.

    Reports whether the script is installed and executable, its version,
    whether settings.json references it, and runs the hook self-test.

    Examples:
        post-compact-reminder status
    """
    out = get_output(ctx)
    config = get_config(out)

    with handle_errors(out):
        status = collect_status(config, current_version=__version__)

    out.console.print(f"[bold]post-compact-reminder[/bold] v{__version__}\n")
    out.console.print(_status_table(out, status))
    out.console.print()

    if status.healthy:
        out.success("Hook is installed and working")
        return

    if status.settings_error:
        out.warn("settings.json could not be used; fix it or run 'restore'")
    out.warn("Hook is not fully installed. Run: post-compact-reminder install")
