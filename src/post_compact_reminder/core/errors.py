"""
Error types raised by the installer core.

Every failure surfaces as a distinct subclass of ReminderError so that the CLI
can map it to a message and exit code. "Not installed" and "already installed"
are not errors; they are reported through MergeOutcome.
"""

from __future__ import annotations

from pathlib import Path


class ReminderError(Exception):
    """Base error for post-compact-reminder operations."""

    pass


class MalformedConfigError(ReminderError):
    """Existing settings file is not valid JSON or not the expected shape."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class WriteFailedError(ReminderError):
    """Temp file creation or atomic rename failed; the target is untouched."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class ReadFailedError(ReminderError):
    """A file exists but could not be read (permissions, encoding)."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {path}: {cause}")


class BackupFailedError(ReminderError):
    """Copying the prior settings file to its .bak sibling failed."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to back up {path}: {cause}")


class BackupNotFoundError(ReminderError):
    """There is no settings.json.bak to restore from."""

    def __init__(self, backup_path: Path) -> None:
        self.backup_path = backup_path
        super().__init__(f"No backup file found at {backup_path}")


class LockContentionError(ReminderError):
    """Another installer process holds the advisory lock."""

    def __init__(self, lock_file: Path, pid: int) -> None:
        self.lock_file = lock_file
        self.pid = pid
        super().__init__(f"Another instance is running (PID: {pid})")


class UnknownTemplateError(ReminderError):
    """Requested message template does not exist."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Unknown template: {name}")


class HookNotInstalledError(ReminderError):
    """The hook script is not present at the expected path."""

    def __init__(self, script_path: Path) -> None:
        self.script_path = script_path
        super().__init__(f"Hook not installed at {script_path}")
