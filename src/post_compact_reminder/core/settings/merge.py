"""
State transitions for the SessionStart hook entry.

Both functions are pure: they never mutate the input document and return a
MergeResult carrying the next document. Everything outside
``hooks.<event_name>`` is carried over untouched, in its original order.
"""

from __future__ import annotations

import copy
from typing import Any

from post_compact_reminder.core.settings.matcher import (
    COMPACT_MATCHER,
    HOOK_MARKER,
    SESSION_START_EVENT,
    entry_matches,
    find_entry,
    get_event_groups,
)
from post_compact_reminder.core.settings.models import MergeOutcome, MergeResult


def build_hook_group(hook_path: str, matcher: str = COMPACT_MATCHER) -> dict[str, Any]:
    """Hook group registered by install."""
    return {
        "matcher": matcher,
        "hooks": [
            {
                "type": "command",
                "command": hook_path,
            }
        ],
    }


def install_entry(
    document: dict[str, Any],
    hook_path: str,
    *,
    event_name: str = SESSION_START_EVENT,
    matcher: str = COMPACT_MATCHER,
    marker: str = HOOK_MARKER,
) -> MergeResult:
    """
    Register the hook, unless an entry matching ``marker`` already exists.

    Args:
        document: Current settings document
        hook_path: Command string to register
        event_name: Event key under ``hooks``
        matcher: Matcher value for the new hook group
        marker: Substring identifying an existing entry

    Returns:
        MergeResult with outcome ADDED (group appended) or EXISTS (unchanged)

    Example:
        >>> install_entry({}, "$HOME/.local/bin/claude-post-compact-reminder").outcome
        <MergeOutcome.ADDED: 'added'>
    """
    if find_entry(document, event_name, marker) is not None:
        return MergeResult(outcome=MergeOutcome.EXISTS, document=document)

    updated = copy.deepcopy(document)
    hooks = updated.get("hooks")
    if not isinstance(hooks, dict):
        hooks = updated["hooks"] = {}
    groups = hooks.get(event_name)
    if not isinstance(groups, list):
        groups = hooks[event_name] = []
    groups.append(build_hook_group(hook_path, matcher))

    return MergeResult(outcome=MergeOutcome.ADDED, document=updated)


def uninstall_entry(
    document: dict[str, Any],
    *,
    event_name: str = SESSION_START_EVENT,
    marker: str = HOOK_MARKER,
) -> MergeResult:
    """
    Strip every entry matching ``marker`` from the event's hook groups.

    Groups left without entries are dropped, then the event key if its list
    is empty, then ``hooks`` itself if empty.

    Returns:
        MergeResult with outcome REMOVED, or ABSENT with the document unchanged
    """
    groups = get_event_groups(document, event_name)
    if not groups:
        return MergeResult(outcome=MergeOutcome.ABSENT, document=document)

    removed = 0
    kept_groups: list[Any] = []
    for group in groups:
        if not isinstance(group, dict) or not isinstance(group.get("hooks"), list):
            kept_groups.append(group)
            continue

        entries = group["hooks"]
        kept_entries = [e for e in entries if not entry_matches(e, marker)]
        if len(kept_entries) == len(entries):
            kept_groups.append(group)
            continue

        removed += len(entries) - len(kept_entries)
        if kept_entries:
            # New dict so sibling keys (matcher etc.) keep their order
            new_group = dict(group)
            new_group["hooks"] = kept_entries
            kept_groups.append(new_group)

    if not removed:
        return MergeResult(outcome=MergeOutcome.ABSENT, document=document)

    updated = copy.deepcopy(document)
    hooks = updated["hooks"]
    if kept_groups:
        hooks[event_name] = copy.deepcopy(kept_groups)
    else:
        del hooks[event_name]
    if not hooks:
        del updated["hooks"]

    return MergeResult(outcome=MergeOutcome.REMOVED, document=updated)
