"""
The hook script itself: rendering, installing, removing and self-testing.

The generated script is a small Python program. Claude Code pipes the
SessionStart payload to it on stdin; when ``source`` is ``compact`` it prints
the reminder wrapped in <post-compact-reminder> tags, which the assistant
sees in its context. It always exits 0 (SessionStart hooks never block).
"""

from __future__ import annotations

import json
import logging
import re
import subprocess
import sys
from pathlib import Path

from post_compact_reminder.core.settings.store import atomic_write_text

logger = logging.getLogger(__name__)

SCRIPT_NAME = "claude-post-compact-reminder"
OPEN_TAG = "<post-compact-reminder>"
CLOSE_TAG = "</post-compact-reminder>"
VERSION_PREFIX = "# Version:"
TEMPLATE_PREFIX = "# Template:"

TEST_PAYLOAD = {"session_id": "test", "source": "compact"}
TEST_TIMEOUT_SECONDS = 10

_SCRIPT_TEMPLATE = '''#!/usr/bin/env python3
{version_line}
# SessionStart hook: Remind Claude to reread AGENTS.md after compaction
{origin_line}# Input: JSON with session_id, source on stdin
#
# Fires when source="compact" (configured via matcher in settings.json)
# and prints a reminder that Claude sees in its context.

import json
import sys

MESSAGE = """{open_tag}
{message}
{close_tag}"""


def main():
    try:
        payload = json.load(sys.stdin)
    except ValueError:
        return 0
    # Double-check source (the matcher already filters on it)
    if isinstance(payload, dict) and payload.get("source") == "compact":
        print(MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
'''


def _escape(message: str) -> str:
    return message.replace("\\", "\\\\").replace('"', '\\"')


def _unescape(text: str) -> str:
    return re.sub(r'\\(["\\])', r"\1", text)


def render_hook_script(
    message: str,
    *,
    version: str,
    template_name: str | None = None,
    interactive: bool = False,
) -> str:
    """
    Render the hook script source.

    Args:
        message: Reminder text shown between the tags
        version: Release version recorded in the ``# Version:`` header
        template_name: Preset name recorded in a ``# Template:`` header
        interactive: Mark the script as produced by interactive setup

    Returns:
        Script source text
    """
    if template_name:
        origin_line = f"{TEMPLATE_PREFIX} {template_name}\n"
    elif interactive:
        origin_line = "# Generated by interactive setup\n"
    else:
        origin_line = ""

    return _SCRIPT_TEMPLATE.format(
        version_line=f"{VERSION_PREFIX} {version}",
        origin_line=origin_line,
        open_tag=OPEN_TAG,
        message=_escape(message.rstrip("\n")),
        close_tag=CLOSE_TAG,
    )


def read_script(script_path: Path) -> str | None:
    """Script contents, or None if missing or unreadable."""
    try:
        return script_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def extract_message(contents: str) -> str | None:
    """
    Reminder text between the open and close tags.

    Returns:
        The message, or None if the tags are not found
    """
    lines: list[str] = []
    in_message = False
    for line in contents.splitlines():
        if in_message:
            if CLOSE_TAG in line:
                return _unescape("\n".join(lines))
            lines.append(line)
        elif OPEN_TAG in line:
            in_message = True
    return None


def extract_template_name(contents: str) -> str | None:
    for line in contents.splitlines():
        if line.startswith(TEMPLATE_PREFIX):
            return line[len(TEMPLATE_PREFIX) :].strip() or None
    return None


def install_hook_script(script_path: Path, contents: str) -> None:
    """
    Write the hook script atomically and make it executable.

    Raises:
        WriteFailedError: If the write fails
    """
    atomic_write_text(script_path, contents, mode=0o755)
    logger.info(f"Wrote hook script to {script_path}")


def remove_hook_script(script_path: Path) -> bool:
    """
    Delete the hook script.

    Returns:
        True if a file was removed, False if none existed
    """
    try:
        script_path.unlink()
    except FileNotFoundError:
        return False
    logger.info(f"Removed hook script {script_path}")
    return True


def is_executable(script_path: Path) -> bool:
    return script_path.is_file() and bool(script_path.stat().st_mode & 0o111)


def _build_command(script_path: Path, contents: str | None) -> list[str]:
    # Run our own Python scripts with the current interpreter so the test
    # does not depend on python3 being on PATH
    first_line = contents.splitlines()[0] if contents else ""
    if first_line.startswith("#!") and "python" in first_line:
        return [sys.executable, str(script_path)]
    return [str(script_path)]


def run_hook_test(script_path: Path) -> bool:
    """
    Feed the script a compact SessionStart payload and check its output.

    Returns:
        True if the script printed the reminder tag
    """
    if not is_executable(script_path):
        logger.debug(f"Hook test skipped, {script_path} is not executable")
        return False

    command = _build_command(script_path, read_script(script_path))
    try:
        result = subprocess.run(
            command,
            input=json.dumps(TEST_PAYLOAD),
            capture_output=True,
            text=True,
            timeout=TEST_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Hook test could not run {script_path}: {e}")
        return False

    logger.debug(f"Hook test exit={result.returncode} stdout={result.stdout!r}")
    return OPEN_TAG in result.stdout
