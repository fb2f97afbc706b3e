"""
Load-merge-write flows for settings.json.

Glues the store and the merge engine together: load the document, compute
the next state, and write it only when it changed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from post_compact_reminder.core.settings.matcher import HOOK_MARKER, has_entry
from post_compact_reminder.core.settings.merge import install_entry, uninstall_entry
from post_compact_reminder.core.settings.models import MergeResult
from post_compact_reminder.core.settings.store import SettingsStore

logger = logging.getLogger(__name__)


def add_hook_to_settings(
    settings_file: Path, hook_command: str, *, dry_run: bool = False
) -> MergeResult:
    """
    Register ``hook_command`` under hooks.SessionStart in ``settings_file``.

    Args:
        settings_file: Path to settings.json (created if missing)
        hook_command: Command string to register
        dry_run: Compute the outcome without writing

    Returns:
        MergeResult (ADDED or EXISTS)

    Raises:
        MalformedConfigError: If the existing file cannot be parsed
        WriteFailedError: If the atomic write fails
    """
    store = SettingsStore(settings_file)
    result = install_entry(store.load(), hook_command)

    if result.changed and not dry_run:
        store.write(result.document)
    logger.info(f"Install into {settings_file}: {result.outcome.value}")
    return result


def remove_hook_from_settings(settings_file: Path, *, dry_run: bool = False) -> MergeResult:
    """
    Remove every post-compact-reminder entry from ``settings_file``.

    Returns:
        MergeResult (REMOVED or ABSENT)

    Raises:
        MalformedConfigError: If the existing file cannot be parsed
        WriteFailedError: If the atomic write fails
    """
    store = SettingsStore(settings_file)
    result = uninstall_entry(store.load())

    if result.changed and not dry_run:
        store.write(result.document)
    logger.info(f"Uninstall from {settings_file}: {result.outcome.value}")
    return result


def settings_has_hook(settings_file: Path, marker: str = HOOK_MARKER) -> bool:
    """
    True if settings_file registers our hook. Read-only.

    Raises:
        MalformedConfigError: If the existing file cannot be parsed
    """
    return has_entry(SettingsStore(settings_file).load(), marker=marker)
