"""
Install, uninstall, template and restore flows.

Each flow combines the hook script artifact with the settings.json merge and
returns a report model; printing is left to the CLI. Callers that mutate files
are expected to hold an InstallLock (see core/lock.py).

Implementation:
    - Reads the installed script version to decide upgrade vs no-op
    - Writes the hook script atomically (mode 0755)
    - Merges or strips the SessionStart entry in settings.json
    - Runs the hook self-test after writing
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from post_compact_reminder.core.config.models import ReminderConfig
from post_compact_reminder.core.hook.script import (
    install_hook_script,
    remove_hook_script,
    render_hook_script,
    run_hook_test,
)
from post_compact_reminder.core.hook.templates import TEMPLATE_DEFAULT, get_template
from post_compact_reminder.core.hook.version import (
    VersionStatus,
    compare_versions,
    get_installed_version,
)
from post_compact_reminder.core.settings.models import MergeOutcome
from post_compact_reminder.core.settings.service import (
    add_hook_to_settings,
    remove_hook_from_settings,
    settings_has_hook,
)
from post_compact_reminder.core.settings.store import SettingsStore

logger = logging.getLogger(__name__)


class InstallReport(BaseModel):
    """Result of an install run."""

    script_path: str = Field(description="Hook script location")
    settings_file: str = Field(description="settings.json location")
    version: str = Field(description="Version being installed")
    previous_version: str | None = Field(
        default=None, description="Version found before install, if any"
    )
    version_status: VersionStatus = Field(
        default=VersionStatus.UNKNOWN, description="Previous version vs current"
    )
    nothing_to_do: bool = Field(
        default=False, description="Already installed at this version and configured"
    )
    settings_needed_update: bool = Field(
        default=False, description="Script was current but settings entry was missing"
    )
    script_written: bool = Field(default=False, description="Hook script was (re)written")
    settings_outcome: MergeOutcome | None = Field(
        default=None, description="ADDED or EXISTS"
    )
    hook_test_passed: bool | None = Field(
        default=None, description="Self-test result (None when not run)"
    )
    dry_run: bool = Field(default=False)

    @property
    def upgraded(self) -> bool:
        return self.version_status == VersionStatus.OUTDATED


class UninstallReport(BaseModel):
    """Result of an uninstall run."""

    script_path: str
    settings_file: str
    script_found: bool = False
    script_removed: bool = False
    settings_found: bool = False
    settings_outcome: MergeOutcome | None = None
    dry_run: bool = False


class TemplateReport(BaseModel):
    """Result of applying a preset template to the hook script."""

    template_name: str
    message: str
    script_path: str
    script_written: bool = False
    hook_test_passed: bool | None = None
    dry_run: bool = False


def install(
    config: ReminderConfig,
    *,
    version: str,
    message: str = TEMPLATE_DEFAULT,
    template_name: str | None = None,
    interactive: bool = False,
    force: bool = False,
    dry_run: bool = False,
) -> InstallReport:
    """
    Install or upgrade the hook script and register it in settings.json.

    Args:
        config: Installer locations
        version: Current release version written into the script header
        message: Reminder text
        template_name: Preset name recorded in the script header
        interactive: Mark the script as produced by interactive setup
        force: Reinstall even if already at this version
        dry_run: Report what would happen without writing anything

    Returns:
        InstallReport

    Raises:
        MalformedConfigError: If settings.json exists but cannot be parsed
        ReadFailedError: If settings.json exists but cannot be read
        WriteFailedError: If writing the script or settings fails
    """
    report = InstallReport(
        script_path=str(config.script_path),
        settings_file=str(config.settings_file),
        version=version,
        dry_run=dry_run,
    )

    installed = get_installed_version(config.script_path)
    report.previous_version = installed
    report.version_status = compare_versions(installed, version)

    if report.version_status == VersionStatus.SAME and not force:
        if settings_has_hook(config.settings_file):
            logger.info(f"Already installed at version {version}")
            report.nothing_to_do = True
            return report
        report.settings_needed_update = True
    elif report.upgraded:
        logger.info(f"Upgrading: {installed} -> {version}")

    # Refuse an unusable settings.json before the script is touched
    SettingsStore(config.settings_file).load()

    contents = render_hook_script(
        message, version=version, template_name=template_name, interactive=interactive
    )
    if not dry_run:
        config.hook_dir.mkdir(parents=True, exist_ok=True)
        install_hook_script(config.script_path, contents)
        report.script_written = True

    result = add_hook_to_settings(
        config.settings_file, config.settings_command, dry_run=dry_run
    )
    report.settings_outcome = result.outcome

    if not dry_run:
        report.hook_test_passed = run_hook_test(config.script_path)

    return report


def uninstall(config: ReminderConfig, *, dry_run: bool = False) -> UninstallReport:
    """
    Remove the hook script and every settings entry pointing at it.

    Raises:
        MalformedConfigError: If settings.json exists but cannot be parsed
        ReadFailedError: If settings.json exists but cannot be read
        WriteFailedError: If writing settings fails
    """
    report = UninstallReport(
        script_path=str(config.script_path),
        settings_file=str(config.settings_file),
        dry_run=dry_run,
    )

    report.settings_found = config.settings_file.exists()
    if report.settings_found:
        result = remove_hook_from_settings(config.settings_file, dry_run=dry_run)
        report.settings_outcome = result.outcome

    report.script_found = config.script_path.exists()
    if report.script_found and not dry_run:
        report.script_removed = remove_hook_script(config.script_path)

    return report


def apply_template(
    config: ReminderConfig,
    template_name: str,
    *,
    version: str,
    dry_run: bool = False,
) -> TemplateReport:
    """
    Rewrite the hook script with a preset message.

    settings.json is not touched; run install to register the hook.

    Raises:
        UnknownTemplateError: If ``template_name`` is not a preset
        WriteFailedError: If writing the script fails
    """
    message = get_template(template_name)
    report = TemplateReport(
        template_name=template_name,
        message=message,
        script_path=str(config.script_path),
        dry_run=dry_run,
    )
    if dry_run:
        return report

    config.hook_dir.mkdir(parents=True, exist_ok=True)
    install_hook_script(
        config.script_path,
        render_hook_script(message, version=version, template_name=template_name),
    )
    report.script_written = True
    report.hook_test_passed = run_hook_test(config.script_path)
    return report


def restore_settings(config: ReminderConfig) -> None:
    """
    Replace settings.json with its .bak copy.

    Raises:
        BackupNotFoundError: If there is no backup
        ReadFailedError: If the backup cannot be read
        WriteFailedError: If the write fails
    """
    SettingsStore(config.settings_file).restore_backup()
