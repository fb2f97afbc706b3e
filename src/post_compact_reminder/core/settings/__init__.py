"""
Claude Code settings.json management.

Installs and removes the SessionStart hook entry without clobbering the rest
of the user's settings.

Key Functions:
    add_hook_to_settings: Load, merge in our hook group, write atomically
    remove_hook_from_settings: Load, strip our entries, prune, write atomically
    find_entry: Locate our entry in a parsed document
    install_entry / uninstall_entry: Pure document transitions

Architecture:
    - Non-destructive: keys outside hooks.SessionStart are never touched
    - Idempotent: a second install reports EXISTS with no write
    - Atomic: temp file + rename in the settings directory, .bak before write
"""

from post_compact_reminder.core.settings.matcher import (
    COMPACT_MATCHER,
    HOOK_MARKER,
    SESSION_START_EVENT,
    find_entry,
    has_entry,
)
from post_compact_reminder.core.settings.merge import (
    build_hook_group,
    install_entry,
    uninstall_entry,
)
from post_compact_reminder.core.settings.models import MergeOutcome, MergeResult
from post_compact_reminder.core.settings.service import (
    add_hook_to_settings,
    remove_hook_from_settings,
    settings_has_hook,
)
from post_compact_reminder.core.settings.store import SettingsStore, atomic_write_text

__all__ = [
    # Constants
    "COMPACT_MATCHER",
    "HOOK_MARKER",
    "SESSION_START_EVENT",
    # Matcher / merge
    "build_hook_group",
    "find_entry",
    "has_entry",
    "install_entry",
    "uninstall_entry",
    # Store and flows
    "SettingsStore",
    "add_hook_to_settings",
    "atomic_write_text",
    "remove_hook_from_settings",
    "settings_has_hook",
    # Models
    "MergeOutcome",
    "MergeResult",
]
