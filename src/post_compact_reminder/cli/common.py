"""
Helpers shared by CLI commands.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.panel import Panel
from rich.text import Text

from post_compact_reminder.cli.errors import report_error
from post_compact_reminder.cli.output import Output
from post_compact_reminder.core.config.loader import load_config
from post_compact_reminder.core.config.models import ReminderConfig
from post_compact_reminder.core.errors import ReminderError
from post_compact_reminder.core.lock import InstallLock


def get_config(out: Output) -> ReminderConfig:
    config = load_config()
    out.verbose(f"Hook directory: {config.hook_dir}")
    out.verbose(f"Settings directory: {config.settings_dir}")
    return config


@contextmanager
def handle_errors(out: Output) -> Iterator[None]:
    """Turn core errors into a printed message and exit code."""
    try:
        yield
    except ReminderError as e:
        code = report_error(out.err_console, e)
        raise typer.Exit(int(code)) from e


@contextmanager
def install_lock(config: ReminderConfig, out: Output) -> Iterator[InstallLock]:
    """Hold the advisory lock for a mutating command; fail fast if taken."""
    lock = InstallLock(config.lock_file)
    with handle_errors(out):
        lock.acquire()
    out.verbose(f"Acquired lock {config.lock_file}")
    try:
        yield lock
    finally:
        lock.release()


def reminder_panel(message: str, title: str | None = None) -> Panel:
    """What Claude sees after compaction, boxed for display."""
    body = Text()
    body.append("<post-compact-reminder>\n", style="cyan")
    body.append(message.rstrip("\n") + "\n")
    body.append("</post-compact-reminder>", style="cyan")
    return Panel(body, title=title, border_style="magenta", expand=False)
