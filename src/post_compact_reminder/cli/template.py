"""
CLI - template subcommands.

Preset reminder messages: list them, show the installed one, or rewrite the
installed script with a preset.
"""

import typer
from rich.table import Table

from post_compact_reminder import __version__
from post_compact_reminder.cli.common import (
    get_config,
    handle_errors,
    install_lock,
    reminder_panel,
)
from post_compact_reminder.cli.errors import ExitCode
from post_compact_reminder.cli.output import get_output
from post_compact_reminder.core.hook.templates import (
    TEMPLATE_DESCRIPTIONS,
    TEMPLATES,
    get_template,
)
from post_compact_reminder.core.installer import apply_template
from post_compact_reminder.core.status import installed_message

app = typer.Typer(
    name="template",
    help="List, show and apply reminder message templates",
    no_args_is_help=True,
)


@app.command(name="list")
def list_templates(ctx: typer.Context) -> None:
    """
    List available message templates.

    Examples:
        post-compact-reminder template list
    """
    out = get_output(ctx)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="green")
    table.add_column("Description")
    for name in TEMPLATES:
        table.add_row(name, TEMPLATE_DESCRIPTIONS[name])
    out.console.print(table)


@app.command(name="show")
def show(ctx: typer.Context) -> None:
    """
    Show the reminder message of the installed hook.

    Examples:
        post-compact-reminder template show
    """
    out = get_output(ctx)
    config = get_config(out)

    with handle_errors(out):
        message = installed_message(config)

    if message is None:
        out.error("Could not find the reminder message in the installed script")
        raise typer.Exit(int(ExitCode.GENERAL_ERROR))

    out.console.print(reminder_panel(message, title="Current reminder"))
    out.console.print(f"\n  [dim]Script: {out.literal(str(config.script_path))}[/dim]")


@app.command(name="apply")
def apply(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Template name (see 'template list')"),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Preview the message without writing the script",
    ),
) -> None:
    """
    Rewrite the installed hook script with a preset message.

    settings.json is not modified. Run 'install' if the hook is not yet
    registered.

    Examples:
        post-compact-reminder template apply minimal
        post-compact-reminder template apply checklist --dry-run
    """
    out = get_output(ctx)
    config = get_config(out)

    with handle_errors(out):
        get_template(name)

    if dry_run:
        with handle_errors(out):
            report = apply_template(config, name, version=__version__, dry_run=True)
        script = out.literal(report.script_path)
        out.step(f"\\[dry-run] Would apply template '{name}' to {script}")
        out.print(reminder_panel(report.message, title=name))
        return

    with install_lock(config, out), handle_errors(out):
        report = apply_template(config, name, version=__version__)

    out.success(f"Applied template: {name}")
    if report.hook_test_passed:
        out.success("Hook test passed")
    else:
        out.error("Hook test failed")
        raise typer.Exit(int(ExitCode.GENERAL_ERROR))
    out.print()
    out.print(reminder_panel(report.message, title=name))
    out.print("\n  [yellow]⚡ Restart Claude Code for the change to take effect.[/yellow]")
