"""
Pytest configuration and shared fixtures.

Every test runs with HOME, XDG_CONFIG_HOME and the lock file redirected into
tmp_path, so nothing touches the real ~/.claude or ~/.local/bin.
"""

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from post_compact_reminder.core.config.loader import load_config
from post_compact_reminder.core.config.models import ReminderConfig

# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME, XDG config and the lock file at tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("POST_COMPACT_REMINDER_LOCK_FILE", str(tmp_path / "install.lock"))
    monkeypatch.delenv("HOOK_DIR", raising=False)
    monkeypatch.delenv("SETTINGS_DIR", raising=False)
    # No project .env from the real working directory
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop handlers installed by the CLI's logging setup."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


# ==============================================================================
# Config Fixtures
# ==============================================================================


@pytest.fixture
def config(isolated_env: Path) -> ReminderConfig:
    """Default locations under the temporary HOME."""
    return load_config()


@pytest.fixture
def custom_config(tmp_path: Path) -> ReminderConfig:
    """Config with a non-default hook directory."""
    return ReminderConfig(
        hook_dir=tmp_path / "opt" / "bin",
        settings_dir=tmp_path / "claude",
        lock_file=tmp_path / "custom.lock",
    )


# ==============================================================================
# Settings Helpers
# ==============================================================================


@pytest.fixture
def write_settings():
    """Write a settings document the way a user might have."""

    def _write(path: Path, document: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=2) + "\n")
        return path

    return _write


@pytest.fixture
def unrelated_settings() -> dict[str, Any]:
    """Settings with keys and hooks that belong to someone else."""
    return {
        "foo": 1,
        "bar": [1, 2, 3],
        "model": "opus",
        "hooks": {
            "OtherEvent": [
                {"matcher": "*", "hooks": [{"type": "command", "command": "/bin/other"}]}
            ]
        },
    }
