"""
Release history, newest first.
"""

from pydantic import BaseModel


class ChangelogEntry(BaseModel):
    version: str
    summary: str


CHANGELOG: list[ChangelogEntry] = [
    ChangelogEntry(
        version="1.1.0",
        summary=(
            "Added status, verbose, restore, diff, interactive, yes, completions, "
            "template, show-template, changelog and log options. "
            "Enhanced customization support."
        ),
    ),
    ChangelogEntry(
        version="1.0.0",
        summary=(
            "Initial release with basic install/uninstall, dry-run, force reinstall, "
            "quiet mode, and no-color support."
        ),
    ),
]
