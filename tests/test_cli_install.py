"""
Tests for the install command and global options.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from post_compact_reminder import __version__
from post_compact_reminder.cli import app
from post_compact_reminder.core.config.models import ReminderConfig
from post_compact_reminder.core.hook.script import extract_message, read_script
from post_compact_reminder.core.hook.templates import TEMPLATE_DEFAULT, TEMPLATE_MINIMAL
from post_compact_reminder.core.installer import install
from post_compact_reminder.core.settings.store import SettingsStore

runner = CliRunner()


class TestInstallCommand:
    def test_fresh_install(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0, result.output
        assert "Hook test passed" in result.output
        assert "Installation complete" in result.output
        assert "Restart Claude Code" in result.output
        assert config.script_path.exists()
        assert extract_message(read_script(config.script_path)) == TEMPLATE_DEFAULT
        document = json.loads(config.settings_file.read_text())
        assert document["hooks"]["SessionStart"][0]["matcher"] == "compact"

    def test_second_install_is_nothing_to_do(self, config: ReminderConfig) -> None:
        runner.invoke(app, ["install"])

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0
        assert "Nothing to do" in result.output
        assert "Installation complete" not in result.output

    def test_force(self, config: ReminderConfig) -> None:
        runner.invoke(app, ["install"])

        result = runner.invoke(app, ["install", "--force"])

        assert result.exit_code == 0
        assert "Installation complete" in result.output

    def test_dry_run(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["install", "--dry-run"])

        assert result.exit_code == 0
        assert "[dry-run] Would create" in result.output
        assert "DRY RUN" in result.output
        assert not config.script_path.exists()
        assert not config.settings_file.exists()

    def test_template(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["install", "--template", "minimal"])

        assert result.exit_code == 0
        assert extract_message(read_script(config.script_path)) == TEMPLATE_MINIMAL

    def test_unknown_template(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["install", "-t", "fancy"])

        assert result.exit_code == 2
        assert "Unknown template: fancy" in result.output
        assert not config.script_path.exists()

    def test_upgrade_message(self, config: ReminderConfig) -> None:
        install(config, version="1.0.0")

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0
        assert f"Upgrading: 1.0.0 → {__version__}" in result.output

    def test_custom_dirs_from_env(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("HOOK_DIR", str(tmp_path / "hooks"))
        monkeypatch.setenv("SETTINGS_DIR", str(tmp_path / "settings"))

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0
        script = tmp_path / "hooks" / "claude-post-compact-reminder"
        document = json.loads((tmp_path / "settings" / "settings.json").read_text())
        assert document["hooks"]["SessionStart"][0]["hooks"][0]["command"] == str(script)

    def test_malformed_settings(self, config: ReminderConfig) -> None:
        config.settings_dir.mkdir(parents=True)
        config.settings_file.write_text("{broken")

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "Cannot parse" in result.output
        assert config.settings_file.read_text() == "{broken"
        assert not config.script_path.exists()

    def test_unreadable_settings(self, config: ReminderConfig, write_settings) -> None:
        write_settings(config.settings_file, {})

        with patch.object(SettingsStore, "read_text", side_effect=PermissionError("denied")):
            result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "Could not read" in result.output
        assert "fix the JSON" not in result.output
        assert not config.script_path.exists()

    def test_lock_contention(self, config: ReminderConfig) -> None:
        holder = os.getppid()
        config.lock_file.write_text(f"{holder}\n")

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert f"Another instance is running (PID: {holder})" in result.output
        assert not config.script_path.exists()

    def test_lock_released(self, config: ReminderConfig) -> None:
        runner.invoke(app, ["install"])

        assert not config.lock_file.exists()


class TestInteractiveInstall:
    def test_choose_preset(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["install", "--interactive"], input="1\n\n")

        assert result.exit_code == 0, result.output
        contents = read_script(config.script_path)
        assert extract_message(contents) == TEMPLATE_MINIMAL
        assert "# Generated by interactive setup" in contents

    def test_custom_message(self, config: ReminderConfig) -> None:
        result = runner.invoke(
            app, ["install", "-i"], input="5\nHello there\nSecond line\n\n\n"
        )

        assert result.exit_code == 0, result.output
        assert extract_message(read_script(config.script_path)) == "Hello there\nSecond line"

    def test_invalid_choice_uses_default(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["install", "-i"], input="9\n\n")

        assert result.exit_code == 0
        assert "Invalid choice" in result.output
        assert extract_message(read_script(config.script_path)) == TEMPLATE_DEFAULT

    def test_declined(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["install", "-i"], input="2\nn\n")

        assert result.exit_code == 0
        assert "Installation cancelled" in result.output
        assert not config.script_path.exists()


class TestGlobalOptions:
    def test_quiet(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["--quiet", "install"])

        assert result.exit_code == 0
        assert "Installation complete" not in result.output
        assert "Hook test passed" not in result.output
        assert config.script_path.exists()

    def test_verbose(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["-V", "install"])

        assert result.exit_code == 0
        assert "Dry run: False, Force: False" in result.output

    def test_log_file(self, config: ReminderConfig, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "install.log"

        result = runner.invoke(app, ["--log", str(log_file), "install"])

        assert result.exit_code == 0
        text = log_file.read_text()
        assert "SUCCESS: Hook test passed" in text
        assert "post_compact_reminder.core.settings.service" in text

    def test_no_color(self, config: ReminderConfig) -> None:
        result = runner.invoke(app, ["--no-color", "install"])

        assert result.exit_code == 0
        assert "\x1b[" not in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"post-compact-reminder v{__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("install", "uninstall", "status", "diff", "restore", "template"):
            assert command in result.output
