"""
Configuration data model for post-compact-reminder.

Holds the locations the installer reads and writes. Values come from
defaults overridden by HOOK_DIR / SETTINGS_DIR (see loader.py).
"""

import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

from post_compact_reminder.core.hook.script import SCRIPT_NAME


def default_hook_dir() -> Path:
    return Path.home() / ".local" / "bin"


def default_settings_dir() -> Path:
    return Path.home() / ".claude"


def default_lock_file() -> Path:
    return Path(tempfile.gettempdir()) / ".post-compact-reminder-install.lock"


class ReminderConfig(BaseModel):
    """
    Installer locations.

    The settings command written to settings.json uses a $HOME-relative form
    when the hook lives in the default directory, so the entry stays valid
    if the home directory moves. A custom hook_dir is written verbatim.
    """

    hook_dir: Path = Field(
        default_factory=default_hook_dir,
        description="Directory the hook script is installed into",
    )
    settings_dir: Path = Field(
        default_factory=default_settings_dir,
        description="Directory containing Claude Code settings.json",
    )
    lock_file: Path = Field(
        default_factory=default_lock_file,
        description="Advisory single-instance lock file",
    )

    @property
    def script_path(self) -> Path:
        return self.hook_dir / SCRIPT_NAME

    @property
    def settings_file(self) -> Path:
        return self.settings_dir / "settings.json"

    @property
    def backup_file(self) -> Path:
        return self.settings_dir / "settings.json.bak"

    @property
    def uses_default_hook_dir(self) -> bool:
        return self.hook_dir == default_hook_dir()

    @property
    def settings_command(self) -> str:
        """Command string registered under hooks.SessionStart."""
        if self.uses_default_hook_dir:
            return f"$HOME/.local/bin/{SCRIPT_NAME}"
        return str(self.script_path)

    @property
    def display_script_path(self) -> str:
        """Script path for human display (~ for the default location)."""
        if self.uses_default_hook_dir:
            return f"~/.local/bin/{SCRIPT_NAME}"
        return str(self.script_path)
