"""
CLI - install command.

Installs the hook script and registers it under hooks.SessionStart in
settings.json.
"""

import typer
from rich.panel import Panel

from post_compact_reminder import __version__
from post_compact_reminder.cli.common import (
    get_config,
    handle_errors,
    install_lock,
    reminder_panel,
)
from post_compact_reminder.cli.errors import ExitCode
from post_compact_reminder.cli.output import Output, get_output
from post_compact_reminder.core.config.models import ReminderConfig
from post_compact_reminder.core.hook.templates import (
    TEMPLATE_DEFAULT,
    TEMPLATE_DESCRIPTIONS,
    TEMPLATES,
    get_template,
)
from post_compact_reminder.core.installer import InstallReport, install
from post_compact_reminder.core.settings.models import MergeOutcome


def _prompt_for_message(out: Output) -> str | None:
    """
    Interactive template selection.

    Returns:
        The chosen message, or None if the user declined
    """
    out.console.print("[bold underline]Interactive Setup[/bold underline]\n")
    out.console.print("[cyan bold]Step 1:[/cyan bold] Choose a message template\n")

    names = list(TEMPLATES)
    for index, name in enumerate(names, start=1):
        out.console.print(
            f"  [green]{index})[/green] [bold]{name:<9}[/bold] - {TEMPLATE_DESCRIPTIONS[name]}"
        )
    custom_choice = len(names) + 1
    out.console.print(
        f"  [green]{custom_choice})[/green] [bold]custom[/bold]    - Enter your own message"
    )
    out.console.print()

    choice = typer.prompt(
        f"Choose template [1-{custom_choice}]", default="", show_default=False
    ).strip()

    if choice.isdigit() and 1 <= int(choice) <= len(names):
        message = TEMPLATES[names[int(choice) - 1]]
    elif choice == str(custom_choice):
        out.console.print(
            "\n[cyan bold]Step 2:[/cyan bold] Enter your custom message (end with empty line):\n"
        )
        lines: list[str] = []
        while True:
            line = typer.prompt("", default="", show_default=False, prompt_suffix="")
            if not line:
                break
            lines.append(line)
        message = "\n".join(lines) or TEMPLATE_DEFAULT
    else:
        out.warn("Invalid choice, using default")
        message = TEMPLATE_DEFAULT

    out.console.print("\n[bold]Preview:[/bold]\n")
    out.console.print(reminder_panel(message))
    out.console.print()

    if not typer.confirm("Install with this message?", default=True):
        return None
    return message


def _print_report(out: Output, report: InstallReport) -> None:
    if report.nothing_to_do:
        out.info(f"Already installed at version {report.version}")
        out.skip("Hook already configured in settings.json")
        out.print()
        out.success("Nothing to do. Use --force to reinstall.")
        return

    if report.settings_needed_update:
        out.warn("Script exists but settings.json needs updating")
    elif report.upgraded:
        out.info(f"Upgrading: {report.previous_version} → {report.version}")

    script = out.literal(report.script_path)
    if report.dry_run:
        out.step(f"\\[dry-run] Would create {script}")
        if report.settings_outcome == MergeOutcome.ADDED:
            settings_file = out.literal(report.settings_file)
            out.step(f"\\[dry-run] Would add SessionStart hook to {settings_file}")
        else:
            out.skip("\\[dry-run] Hook already present in settings.json")
        return

    out.success(f"Created {script}")
    if report.settings_outcome == MergeOutcome.ADDED:
        out.success("Added SessionStart hook with matcher: compact")
    else:
        out.skip("Hook already present in settings.json")

    out.step("Testing hook...")
    if report.hook_test_passed:
        out.success("Hook test passed")
    else:
        out.error("Hook test failed")


def _print_summary(out: Output, config: ReminderConfig, message: str, dry_run: bool) -> None:
    out.print()
    if dry_run:
        banner = Panel(
            "[blue bold]📋 DRY RUN[/blue bold] [dim]No changes were made[/dim]",
            border_style="blue",
            expand=False,
        )
    else:
        banner = Panel(
            "[green bold]✨ Installation complete![/green bold]",
            border_style="green",
            expand=False,
        )
    out.print(banner)
    out.print()
    out.print("[bold underline]What Claude sees after compaction:[/bold underline]\n")
    out.print(reminder_panel(message))
    out.print()

    if dry_run:
        return

    out.print("  [yellow]⚡ Restart Claude Code for the hook to take effect.[/yellow]\n")
    out.print("[bold underline]Customizing the reminder:[/bold underline]\n")
    display_path = out.literal(config.display_script_path)
    out.print("  Apply a preset:    [green]post-compact-reminder template apply detailed[/green]")
    out.print(f"  Or edit MESSAGE in [green]{display_path}[/green]")
    payload = '{"source":"compact"}'
    out.print(f"  Test it:           [green]echo '{payload}' | {display_path}[/green]")
    out.print()


def install_command(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Preview changes without modifying anything",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Reinstall even if already at latest version",
    ),
    template: str | None = typer.Option(
        None,
        "--template",
        "-t",
        help="Install with a preset message (minimal|detailed|checklist|default)",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Interactive setup with template selection",
    ),
) -> None:
    """
    Install the post-compact reminder hook.

    Writes the hook script and adds a SessionStart entry (matcher: compact)
    to settings.json. Other settings and hooks are preserved, and the
    previous settings.json is kept as settings.json.bak.

    Examples:
        post-compact-reminder install                      # Install or upgrade
        post-compact-reminder install --dry-run            # Preview changes
        post-compact-reminder install --template minimal   # Use a preset message
        post-compact-reminder install --interactive        # Choose a message
    """
    out = get_output(ctx)
    config = get_config(out)

    message = TEMPLATE_DEFAULT
    with handle_errors(out):
        if template:
            message = get_template(template)

    if interactive:
        chosen = _prompt_for_message(out)
        if chosen is None:
            out.info("Installation cancelled")
            raise typer.Exit(int(ExitCode.SUCCESS))
        message = chosen

    with install_lock(config, out), handle_errors(out):
        out.info(f"Hook directory: {out.literal(str(config.hook_dir))}")
        out.info(f"Settings directory: {out.literal(str(config.settings_dir))}")
        out.verbose(f"Dry run: {dry_run}, Force: {force}")
        out.print()

        report = install(
            config,
            version=__version__,
            message=message,
            template_name=template,
            interactive=interactive,
            force=force or interactive or template is not None,
            dry_run=dry_run,
        )

    _print_report(out, report)
    if report.nothing_to_do:
        raise typer.Exit(int(ExitCode.SUCCESS))
    if not dry_run and not report.hook_test_passed:
        raise typer.Exit(int(ExitCode.GENERAL_ERROR))

    _print_summary(out, config, message, dry_run)
