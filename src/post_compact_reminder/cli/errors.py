"""
Standardized error handling and exit codes for the CLI.

Maps core errors to consistent messages with actionable guidance.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

from post_compact_reminder.core.errors import (
    BackupNotFoundError,
    HookNotInstalledError,
    LockContentionError,
    MalformedConfigError,
    ReadFailedError,
    ReminderError,
    UnknownTemplateError,
    WriteFailedError,
)


class ExitCode(IntEnum):
    """Standard exit codes for CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error or user-triggered error."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    console: Console,
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        console: Console to print on
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]✖[/red]  {problem}")

    if reason:
        console.print(f"   [dim]{reason}[/dim]")

    if solution:
        console.print(f"   [cyan]→ Try:[/cyan] {solution}")


def report_error(console: Console, error: ReminderError) -> ExitCode:
    """
    Print a core error and return the exit code to use.
    """
    if isinstance(error, MalformedConfigError):
        print_error(
            console,
            f"Cannot parse {error.path}",
            reason=f"{escape(error.detail)}. The file was left untouched.",
            solution=f"fix the JSON by hand, or restore it from {error.path.name}.bak",
        )
        return ExitCode.GENERAL_ERROR

    if isinstance(error, WriteFailedError):
        print_error(
            console,
            f"Could not write {error.path}",
            reason=f"{escape(str(error.cause))}. The original file was left untouched.",
            solution="check permissions and free disk space",
        )
        return ExitCode.GENERAL_ERROR

    if isinstance(error, ReadFailedError):
        print_error(
            console,
            f"Could not read {escape(str(error.path))}",
            reason=f"{escape(str(error.cause))}. Nothing was changed.",
            solution="check the file's ownership and permissions",
        )
        return ExitCode.GENERAL_ERROR

    if isinstance(error, BackupNotFoundError):
        print_error(
            console,
            f"No backup file found at {escape(str(error.backup_path))}",
            reason="Backups are created automatically when settings.json is modified.",
        )
        return ExitCode.GENERAL_ERROR

    if isinstance(error, LockContentionError):
        print_error(
            console,
            f"Another instance is running (PID: {error.pid}). Exiting.",
            reason=f"Lock file: {error.lock_file}",
        )
        return ExitCode.GENERAL_ERROR

    if isinstance(error, UnknownTemplateError):
        print_error(
            console,
            f"Unknown template: {escape(error.name)}",
            reason=f"Available templates: {', '.join(error.available)}",
        )
        return ExitCode.USER_ERROR

    if isinstance(error, HookNotInstalledError):
        print_error(
            console,
            str(error),
            solution="post-compact-reminder install",
        )
        return ExitCode.GENERAL_ERROR

    print_error(console, str(error))
    return ExitCode.GENERAL_ERROR
