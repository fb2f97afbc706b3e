"""
Read-only diagnostics: installation status and diffs.

Nothing here writes to disk. settings.json is only loaded and matched.
"""

from __future__ import annotations

import difflib
import logging

from pydantic import BaseModel, Field

from post_compact_reminder.core.config.models import ReminderConfig
from post_compact_reminder.core.errors import (
    HookNotInstalledError,
    MalformedConfigError,
    ReadFailedError,
)
from post_compact_reminder.core.hook.script import (
    extract_message,
    extract_template_name,
    is_executable,
    read_script,
    render_hook_script,
    run_hook_test,
)
from post_compact_reminder.core.hook.templates import TEMPLATE_DEFAULT
from post_compact_reminder.core.hook.version import (
    VersionStatus,
    compare_versions,
    extract_version,
)
from post_compact_reminder.core.settings.service import settings_has_hook
from post_compact_reminder.core.settings.store import SettingsStore

logger = logging.getLogger(__name__)


class InstallationStatus(BaseModel):
    """Snapshot of the hook script and settings entry."""

    script_path: str
    settings_file: str
    backup_file: str
    current_version: str

    script_exists: bool = False
    script_executable: bool = False
    installed_version: str | None = None
    version_status: VersionStatus = VersionStatus.UNKNOWN

    settings_exists: bool = False
    hook_configured: bool = False
    settings_error: str | None = Field(
        default=None, description="Parse or read error if settings.json is unusable"
    )
    backup_exists: bool = False

    hook_test_passed: bool | None = Field(
        default=None, description="Self-test result (None when script not executable)"
    )

    @property
    def healthy(self) -> bool:
        return self.script_executable and self.hook_configured and bool(self.hook_test_passed)


def collect_status(config: ReminderConfig, *, current_version: str) -> InstallationStatus:
    """
    Inspect the installation without modifying anything.

    A malformed or unreadable settings.json is reported in ``settings_error``
    rather than raised, so status can still describe the rest of the installation.
    """
    status = InstallationStatus(
        script_path=str(config.script_path),
        settings_file=str(config.settings_file),
        backup_file=str(config.backup_file),
        current_version=current_version,
    )

    script = config.script_path
    status.script_exists = script.is_file()
    status.script_executable = is_executable(script)
    if status.script_executable:
        status.installed_version = extract_version(read_script(script))
        status.version_status = compare_versions(status.installed_version, current_version)

    store = SettingsStore(config.settings_file)
    status.settings_exists = store.exists()
    status.backup_exists = store.has_backup()
    if status.settings_exists:
        try:
            status.hook_configured = settings_has_hook(config.settings_file)
        except MalformedConfigError as e:
            logger.debug(f"Status: {e}")
            status.settings_error = e.detail
        except ReadFailedError as e:
            logger.debug(f"Status: {e}")
            status.settings_error = f"could not read file: {e.cause}"

    if status.script_executable:
        status.hook_test_passed = run_hook_test(script)

    return status


def unified_diff(old: str, new: str, old_label: str, new_label: str) -> str:
    """Unified diff text between two strings (empty when equal)."""
    return "".join(
        difflib.unified_diff(
            old.splitlines(keepends=True),
            new.splitlines(keepends=True),
            fromfile=old_label,
            tofile=new_label,
        )
    )


class ScriptDiff(BaseModel):
    """Installed script vs the script this release would write."""

    script_path: str
    installed_version: str | None
    current_version: str
    diff: str = ""

    @property
    def up_to_date(self) -> bool:
        return self.installed_version == self.current_version


def diff_installed_script(config: ReminderConfig, *, current_version: str) -> ScriptDiff:
    """
    Compare the installed script with a fresh render.

    The fresh render reuses the installed message and template name, so the
    diff shows code changes rather than customisations.

    Raises:
        HookNotInstalledError: If the script does not exist
    """
    contents = read_script(config.script_path)
    if contents is None:
        raise HookNotInstalledError(config.script_path)

    result = ScriptDiff(
        script_path=str(config.script_path),
        installed_version=extract_version(contents),
        current_version=current_version,
    )
    if result.up_to_date:
        return result

    fresh = render_hook_script(
        extract_message(contents) or TEMPLATE_DEFAULT,
        version=current_version,
        template_name=extract_template_name(contents),
    )
    result.diff = unified_diff(
        contents, fresh, str(config.script_path), f"{config.script_path} (v{current_version})"
    )
    return result


def diff_settings_backup(config: ReminderConfig) -> str:
    """
    Diff from the current settings.json to its backup.

    Raises:
        BackupNotFoundError: If there is no backup
        ReadFailedError: If either file cannot be read
    """
    store = SettingsStore(config.settings_file)
    backup = store.read_backup_text()
    try:
        current = store.read_text() or ""
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailedError(store.path, e) from e
    return unified_diff(current, backup, str(store.path), str(store.backup_path))


def installed_message(config: ReminderConfig) -> str | None:
    """
    Reminder text of the installed script.

    Raises:
        HookNotInstalledError: If the script does not exist
    """
    contents = read_script(config.script_path)
    if contents is None:
        raise HookNotInstalledError(config.script_path)
    return extract_message(contents)
