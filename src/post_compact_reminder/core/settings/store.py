"""
Settings store for reading/writing Claude Code settings.json.

The store owns three guarantees:
    - A missing file loads as an empty document; a malformed one is refused.
    - Writes go to a temp file in the target directory and are renamed into
      place, so readers see either the old or the new document.
    - The prior file is copied to settings.json.bak before a content-changing
      write. Backup failure is logged and does not abort the write.
"""

from __future__ import annotations

import json
import logging
import math
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Any

from post_compact_reminder.core.errors import (
    BackupFailedError,
    BackupNotFoundError,
    MalformedConfigError,
    ReadFailedError,
    WriteFailedError,
)

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number {text} is out of range")
    return value


def parse_document(content: str) -> Any:
    """
    Strict JSON parse.

    NaN, Infinity and numbers that overflow a float are refused, since they
    cannot be written back as standard JSON.

    Raises:
        ValueError: On any parse failure (JSONDecodeError is a subclass)
    """
    return json.loads(
        content, parse_constant=_reject_constant, parse_float=_parse_finite_float
    )


def serialize_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


def validate_document(document: Any, path: Path, event_name: str) -> dict[str, Any]:
    """
    Check the parts of the document this installer touches.

    Raises:
        MalformedConfigError: If the top level, ``hooks`` or the event list
            has the wrong type
    """
    if not isinstance(document, dict):
        raise MalformedConfigError(path, "top-level value is not a JSON object")

    hooks = document.get("hooks")
    if hooks is None:
        return document
    if not isinstance(hooks, dict):
        raise MalformedConfigError(path, "'hooks' is not a JSON object")

    event_list = hooks.get(event_name)
    if event_list is not None and not isinstance(event_list, list):
        raise MalformedConfigError(path, f"'hooks.{event_name}' is not a JSON array")

    return document


def atomic_write_text(path: Path, content: str, mode: int | None = None) -> None:
    """
    Replace ``path`` with ``content`` via temp file + rename in the same directory.

    Args:
        path: Target file
        content: Full file content
        mode: Permission bits for the new file (defaults to the existing
            file's mode, or 0o644 for a new file)

    Raises:
        WriteFailedError: If the temp file cannot be written or the rename fails.
            The original file is left untouched and the temp file removed.
    """
    try:
        if mode is None:
            mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}_",
            suffix=".tmp",
        )
    except OSError as e:
        raise WriteFailedError(path, e) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(temp_path, mode)
        # Atomic rename (replaces existing file)
        os.replace(temp_path, path)
    except OSError as e:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise WriteFailedError(path, e) from e


class SettingsStore:
    """
    Accessor for a single settings.json file.

    Example:
        >>> store = SettingsStore(Path("~/.claude/settings.json").expanduser())
        >>> document = store.load()
        >>> store.write(document)
    """

    def __init__(self, path: Path, event_name: str = "SessionStart") -> None:
        self.path = Path(path)
        self.event_name = event_name

    @property
    def backup_path(self) -> Path:
        return backup_path_for(self.path)

    def exists(self) -> bool:
        return self.path.is_file()

    def has_backup(self) -> bool:
        return self.backup_path.is_file()

    def read_text(self) -> str | None:
        """Raw file content, or None when the file does not exist."""
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def load(self) -> dict[str, Any]:
        """
        Load the settings document.

        Returns:
            Parsed document, or an empty dict when the file does not exist

        Raises:
            MalformedConfigError: If the file is not valid JSON or not the
                expected shape
            ReadFailedError: If the file exists but cannot be read
        """
        try:
            content = self.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailedError(self.path, e) from e

        if content is None:
            logger.debug(f"No settings file at {self.path}, starting from empty document")
            return {}

        try:
            data = parse_document(content)
        except ValueError as e:
            raise MalformedConfigError(self.path, f"invalid JSON: {e}") from e

        return validate_document(data, self.path, self.event_name)

    def backup(self) -> Path | None:
        """
        Copy the current file to its .bak sibling.

        Returns:
            Backup path, or None when there was nothing to back up

        Raises:
            BackupFailedError: If the copy fails
        """
        if not self.path.exists():
            return None
        try:
            shutil.copyfile(self.path, self.backup_path)
        except OSError as e:
            raise BackupFailedError(self.path, e) from e
        logger.info(f"Backed up {self.path} to {self.backup_path}")
        return self.backup_path

    def write(self, document: dict[str, Any]) -> None:
        """
        Back up the current file, then atomically write ``document``.

        Raises:
            WriteFailedError: If the document cannot be serialized as standard
                JSON or the write fails (original file untouched)
        """
        try:
            content = serialize_document(document)
        except (TypeError, ValueError) as e:
            raise WriteFailedError(self.path, e) from e

        try:
            self.backup()
        except BackupFailedError as e:
            logger.warning(f"{e}; continuing without backup")

        atomic_write_text(self.path, content)
        logger.info(f"Wrote updated settings to {self.path}")

    def read_backup_text(self) -> str:
        """
        Raw backup content.

        Raises:
            BackupNotFoundError: If there is no backup
            ReadFailedError: If the backup cannot be read
        """
        try:
            return self.backup_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise BackupNotFoundError(self.backup_path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailedError(self.backup_path, e) from e

    def restore_backup(self) -> None:
        """
        Replace the settings file with the verbatim backup content.

        Raises:
            BackupNotFoundError: If there is no backup
            ReadFailedError: If the backup cannot be read
            WriteFailedError: If the write fails
        """
        content = self.read_backup_text()
        atomic_write_text(self.path, content)
        logger.info(f"Restored {self.path} from {self.backup_path}")
