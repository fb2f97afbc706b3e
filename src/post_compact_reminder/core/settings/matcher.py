"""
Locate this installer's hook entry inside a settings document.

An entry belongs to us when its ``command`` contains HOOK_MARKER. Substring
matching (not path equality) lets ``$HOME/...`` and absolute variants of the
same hook match each other.
"""

from __future__ import annotations

from typing import Any, Iterator

HOOK_MARKER = "post-compact-reminder"
SESSION_START_EVENT = "SessionStart"
COMPACT_MATCHER = "compact"


def get_event_groups(document: dict[str, Any], event_name: str) -> list[Any]:
    """Hook groups registered for ``event_name`` (empty when absent)."""
    hooks = document.get("hooks")
    if not isinstance(hooks, dict):
        return []
    groups = hooks.get(event_name)
    if not isinstance(groups, list):
        return []
    return groups


def entry_matches(entry: Any, marker: str) -> bool:
    if not isinstance(entry, dict):
        return False
    command = entry.get("command")
    return isinstance(command, str) and marker in command


def iter_matches(
    document: dict[str, Any], event_name: str, marker: str
) -> Iterator[tuple[int, int]]:
    """Yield (group_index, entry_index) for every matching entry, in order."""
    for group_index, group in enumerate(get_event_groups(document, event_name)):
        if not isinstance(group, dict):
            continue
        entries = group.get("hooks")
        if not isinstance(entries, list):
            continue
        for entry_index, entry in enumerate(entries):
            if entry_matches(entry, marker):
                yield group_index, entry_index


def find_entry(
    document: dict[str, Any],
    event_name: str = SESSION_START_EVENT,
    marker: str = HOOK_MARKER,
) -> tuple[int, int] | None:
    """
    Find the first hook entry whose command contains ``marker``.

    Args:
        document: Parsed settings document
        event_name: Event key under ``hooks``
        marker: Substring identifying our entry

    Returns:
        (group_index, entry_index) of the first match, or None
    """
    return next(iter_matches(document, event_name, marker), None)


def has_entry(
    document: dict[str, Any],
    event_name: str = SESSION_START_EVENT,
    marker: str = HOOK_MARKER,
) -> bool:
    return find_entry(document, event_name, marker) is not None
