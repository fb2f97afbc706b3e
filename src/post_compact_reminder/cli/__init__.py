"""
post-compact-reminder CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from post_compact_reminder import __version__
from post_compact_reminder.cli import (
    changelog,
    diff,
    install,
    restore,
    status,
    template,
    uninstall,
)
from post_compact_reminder.cli.output import Output
from post_compact_reminder.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_SETUP = "Install and Remove"
PANEL_INSPECT = "Inspect"
PANEL_CUSTOMIZE = "Customize"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

app = typer.Typer(
    name="post-compact-reminder",
    help="Remind Claude to re-read AGENTS.md after context compaction",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def configure_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """
    Configure logging for the CLI.

    Args:
        debug: If True, log DEBUG and above to stderr
        log_file: Optional file that receives every message at DEBUG level
    """
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    handlers: list[logging.Handler] = [stream_handler]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    level = logging.DEBUG if debug or log_file is not None else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


@app.callback()
def main(
    ctx: typer.Context,
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show detailed diagnostic output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    log: Path | None = typer.Option(
        None,
        "--log",
        help="Also write all messages to this file",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    post-compact-reminder - keep Claude on track after compaction.

    Installs a SessionStart hook (matcher: compact) for Claude Code. When the
    context window is compacted, the hook prints a reminder telling Claude to
    re-read AGENTS.md before continuing.

    Quick Start:
        post-compact-reminder install          # Install the hook
        post-compact-reminder status           # Check the installation
        post-compact-reminder uninstall        # Remove it again

    Environment:
        HOOK_DIR        Where to install the script (default: ~/.local/bin)
        SETTINGS_DIR    Where settings.json lives (default: ~/.claude)
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    configure_logging(debug=debug, log_file=log)
    logging.getLogger(__name__).debug(f"post-compact-reminder v{__version__} starting")

    ctx.obj = {
        "debug": debug,
        "output": Output(quiet=quiet, verbose=verbose, no_color=no_color),
    }


# =============================================================================
# Install and Remove
# =============================================================================

app.command(name="install", rich_help_panel=PANEL_SETUP)(install.install_command)
app.command(name="uninstall", rich_help_panel=PANEL_SETUP)(uninstall.uninstall_command)
app.command(name="restore", rich_help_panel=PANEL_SETUP)(restore.restore_command)


# =============================================================================
# Inspect
# =============================================================================

app.command(name="status", rich_help_panel=PANEL_INSPECT)(status.status_command)
app.command(name="diff", rich_help_panel=PANEL_INSPECT)(diff.diff_command)
app.command(name="changelog", rich_help_panel=PANEL_INSPECT)(changelog.changelog_command)


@app.command(rich_help_panel=PANEL_INSPECT)
def version() -> None:
    """Show post-compact-reminder version and exit."""
    console.print(f"post-compact-reminder v{__version__}")
    raise typer.Exit(0)


# =============================================================================
# Customize
# =============================================================================

app.add_typer(template.app, name="template", rich_help_panel=PANEL_CUSTOMIZE)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main", "configure_logging"]
