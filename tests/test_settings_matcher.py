"""
Tests for locating our hook entry in a settings document.
"""

from post_compact_reminder.core.settings.matcher import (
    HOOK_MARKER,
    entry_matches,
    find_entry,
    get_event_groups,
    has_entry,
    iter_matches,
)


def _group(*commands: str, matcher: str = "compact") -> dict:
    return {"matcher": matcher, "hooks": [{"type": "command", "command": c} for c in commands]}


class TestEntryMatches:
    def test_substring_match(self) -> None:
        entry = {"type": "command", "command": "/opt/custom/bin/claude-post-compact-reminder"}
        assert entry_matches(entry, HOOK_MARKER)

    def test_unrelated_command(self) -> None:
        assert not entry_matches({"type": "command", "command": "/opt/other-tool"}, HOOK_MARKER)

    def test_non_dict_and_missing_command(self) -> None:
        assert not entry_matches("post-compact-reminder", HOOK_MARKER)
        assert not entry_matches({"type": "command"}, HOOK_MARKER)
        assert not entry_matches({"command": ["post-compact-reminder"]}, HOOK_MARKER)


class TestGetEventGroups:
    def test_absent_hooks(self) -> None:
        assert get_event_groups({}, "SessionStart") == []

    def test_absent_event(self) -> None:
        assert get_event_groups({"hooks": {"Stop": []}}, "SessionStart") == []

    def test_null_values(self) -> None:
        assert get_event_groups({"hooks": None}, "SessionStart") == []
        assert get_event_groups({"hooks": {"SessionStart": None}}, "SessionStart") == []


class TestFindEntry:
    def test_not_found(self) -> None:
        document = {"hooks": {"SessionStart": [_group("/bin/a")]}}

        assert find_entry(document) is None
        assert not has_entry(document)

    def test_first_match_wins(self) -> None:
        document = {
            "hooks": {
                "SessionStart": [
                    _group("/bin/a", matcher="startup"),
                    _group("/bin/b", "$HOME/.local/bin/claude-post-compact-reminder"),
                    _group("/usr/local/bin/claude-post-compact-reminder"),
                ]
            }
        }

        assert find_entry(document) == (1, 1)
        assert list(iter_matches(document, "SessionStart", HOOK_MARKER)) == [(1, 1), (2, 0)]
        assert has_entry(document)

    def test_other_event_is_ignored(self) -> None:
        document = {"hooks": {"Stop": [_group("/bin/claude-post-compact-reminder")]}}

        assert find_entry(document) is None
        assert find_entry(document, event_name="Stop") == (0, 0)

    def test_skips_malformed_groups(self) -> None:
        document = {
            "hooks": {
                "SessionStart": [
                    "junk",
                    {"matcher": "compact"},
                    {"matcher": "compact", "hooks": "nope"},
                    _group("/bin/claude-post-compact-reminder"),
                ]
            }
        }

        assert find_entry(document) == (3, 0)
