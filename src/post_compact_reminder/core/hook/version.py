"""
Installed-version detection.

The hook script carries a ``# Version: X.Y.Z`` header. Scripts without one
(missing, unreadable, or written before the header existed) have an unknown
version, which is never an error.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from post_compact_reminder.core.hook.script import VERSION_PREFIX, is_executable, read_script


class VersionStatus(str, Enum):
    """Installed version relative to the running release."""

    SAME = "same"
    OUTDATED = "outdated"
    UNKNOWN = "unknown"


def extract_version(contents: str | None) -> str | None:
    """
    Version from the first ``# Version:`` line.

    Args:
        contents: Script text, or None for a missing artifact

    Returns:
        Version string, or None when unknown
    """
    if not contents:
        return None
    for line in contents.splitlines():
        if line.startswith(VERSION_PREFIX):
            fields = line[len(VERSION_PREFIX) :].split()
            return fields[0] if fields else None
    return None


def get_installed_version(script_path: Path) -> str | None:
    """
    Version of the installed script.

    A script that exists but is not executable counts as not installed.
    """
    if not is_executable(script_path):
        return None
    return extract_version(read_script(script_path))


def compare_versions(installed: str | None, current: str) -> VersionStatus:
    """
    Plain string comparison; no semantic-version ordering.

    Any difference is OUTDATED, even if ``installed`` is lexically newer.
    """
    if not installed:
        return VersionStatus.UNKNOWN
    if installed == current:
        return VersionStatus.SAME
    return VersionStatus.OUTDATED
