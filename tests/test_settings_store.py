"""
Tests for SettingsStore: loading, atomic writes and backups.
"""

import json
import logging
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from post_compact_reminder.core.errors import (
    BackupNotFoundError,
    MalformedConfigError,
    ReadFailedError,
    WriteFailedError,
)
from post_compact_reminder.core.settings.store import (
    SettingsStore,
    atomic_write_text,
    backup_path_for,
)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "claude" / "settings.json"


def _temp_files(directory: Path) -> list[Path]:
    return [p for p in directory.iterdir() if p.name.endswith(".tmp")]


class TestLoad:
    """Tests for SettingsStore.load."""

    def test_missing_file_is_empty_document(self, settings_path: Path) -> None:
        assert SettingsStore(settings_path).load() == {}

    def test_valid_file(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {"model": "opus", "hooks": {}})

        assert SettingsStore(settings_path).load() == {"model": "opus", "hooks": {}}

    def test_invalid_json(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("{ not json")

        with pytest.raises(MalformedConfigError) as exc_info:
            SettingsStore(settings_path).load()

        assert exc_info.value.path == settings_path
        assert "invalid JSON" in exc_info.value.detail

    def test_empty_file_is_malformed(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("")

        with pytest.raises(MalformedConfigError):
            SettingsStore(settings_path).load()

    @pytest.mark.parametrize(
        "document",
        [
            [1, 2, 3],
            "settings",
            {"hooks": []},
            {"hooks": "yes"},
            {"hooks": {"SessionStart": {"matcher": "compact"}}},
        ],
    )
    def test_wrong_shape_is_malformed(self, settings_path: Path, write_settings, document) -> None:
        write_settings(settings_path, document)

        with pytest.raises(MalformedConfigError):
            SettingsStore(settings_path).load()

    @pytest.mark.parametrize(
        "content",
        [
            '{"limit": 1e400}',
            '{"limit": -1e400}',
            '{"limit": NaN}',
            '{"limit": Infinity}',
            '{"hooks": {}, "ratio": -Infinity}',
        ],
    )
    def test_non_finite_numbers_are_malformed(self, settings_path: Path, content: str) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(content)

        with pytest.raises(MalformedConfigError):
            SettingsStore(settings_path).load()

    def test_large_finite_numbers_are_kept(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text('{"big": 1e300, "huge_int": 1' + "0" * 400 + "}")

        document = SettingsStore(settings_path).load()

        assert document["big"] == 1e300
        assert document["huge_int"] == 10**400

    def test_unreadable_file(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {})

        with patch.object(SettingsStore, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(ReadFailedError) as exc_info:
                SettingsStore(settings_path).load()

        assert exc_info.value.path == settings_path
        assert isinstance(exc_info.value.cause, PermissionError)

    def test_null_hooks_are_accepted(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {"hooks": None})

        assert SettingsStore(settings_path).load() == {"hooks": None}

    def test_other_events_are_not_validated(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {"hooks": {"Stop": "whatever"}})

        assert SettingsStore(settings_path).load() == {"hooks": {"Stop": "whatever"}}


class TestWrite:
    """Tests for SettingsStore.write."""

    def test_creates_file_and_directory(self, settings_path: Path) -> None:
        SettingsStore(settings_path).write({"hooks": {}})

        assert settings_path.read_text() == '{\n  "hooks": {}\n}\n'

    def test_new_file_gets_default_mode(self, settings_path: Path) -> None:
        SettingsStore(settings_path).write({})

        assert stat.S_IMODE(settings_path.stat().st_mode) == 0o644

    def test_preserves_existing_mode(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {})
        settings_path.chmod(0o600)

        SettingsStore(settings_path).write({"a": 1})

        assert stat.S_IMODE(settings_path.stat().st_mode) == 0o600

    def test_non_ascii_is_kept_readable(self, settings_path: Path) -> None:
        SettingsStore(settings_path).write({"greeting": "héllo ✔"})

        assert "héllo ✔" in settings_path.read_text(encoding="utf-8")

    def test_backup_is_verbatim_copy(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        original = '{"model":"opus",   "hooks": {}}'
        settings_path.write_text(original)

        SettingsStore(settings_path).write({"model": "sonnet"})

        assert backup_path_for(settings_path).read_text() == original
        assert json.loads(settings_path.read_text()) == {"model": "sonnet"}

    def test_no_backup_for_new_file(self, settings_path: Path) -> None:
        store = SettingsStore(settings_path)
        store.write({})

        assert not store.has_backup()

    def test_backup_failure_does_not_abort(
        self, settings_path: Path, write_settings, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_settings(settings_path, {"a": 1})

        with caplog.at_level(logging.WARNING):
            with patch(
                "post_compact_reminder.core.settings.store.shutil.copyfile",
                side_effect=OSError("disk full"),
            ):
                SettingsStore(settings_path).write({"a": 2})

        assert json.loads(settings_path.read_text()) == {"a": 2}
        assert "continuing without backup" in caplog.text

    def test_failed_rename_leaves_original(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {"a": 1})
        before = settings_path.read_text()

        with patch(
            "post_compact_reminder.core.settings.store.os.replace",
            side_effect=OSError("rename failed"),
        ):
            with pytest.raises(WriteFailedError) as exc_info:
                SettingsStore(settings_path).write({"a": 2})

        assert exc_info.value.path == settings_path
        assert settings_path.read_text() == before
        assert _temp_files(settings_path.parent) == []

    def test_non_finite_document_is_refused_before_writing(
        self, settings_path: Path, write_settings
    ) -> None:
        write_settings(settings_path, {"a": 1})
        before = settings_path.read_text()
        store = SettingsStore(settings_path)

        with pytest.raises(WriteFailedError) as exc_info:
            store.write({"a": float("inf")})

        assert isinstance(exc_info.value.cause, ValueError)
        assert settings_path.read_text() == before
        assert not store.has_backup()
        assert _temp_files(settings_path.parent) == []

    def test_failed_mode_lookup(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {"a": 1})
        before = settings_path.read_text()

        with patch(
            "post_compact_reminder.core.settings.store.stat.S_IMODE",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(WriteFailedError):
                atomic_write_text(settings_path, "{}")

        assert settings_path.read_text() == before
        assert _temp_files(settings_path.parent) == []

    def test_failed_temp_creation(self, settings_path: Path, write_settings) -> None:
        write_settings(settings_path, {"a": 1})

        with patch(
            "post_compact_reminder.core.settings.store.tempfile.mkstemp",
            side_effect=PermissionError("read-only"),
        ):
            with pytest.raises(WriteFailedError):
                SettingsStore(settings_path).write({"a": 2})

        assert json.loads(settings_path.read_text()) == {"a": 1}


class TestAtomicWriteText:
    def test_explicit_mode(self, tmp_path: Path) -> None:
        target = tmp_path / "script"

        atomic_write_text(target, "#!/bin/sh\n", mode=0o755)

        assert target.read_text() == "#!/bin/sh\n"
        assert stat.S_IMODE(target.stat().st_mode) == 0o755
        assert _temp_files(tmp_path) == []


class TestRestoreBackup:
    def test_restores_verbatim(self, settings_path: Path) -> None:
        store = SettingsStore(settings_path)
        settings_path.parent.mkdir(parents=True)
        store.backup_path.write_text('{"restored": true}')
        settings_path.write_text("{}")

        store.restore_backup()

        assert settings_path.read_text() == '{"restored": true}'

    def test_missing_backup(self, settings_path: Path) -> None:
        store = SettingsStore(settings_path)

        with pytest.raises(BackupNotFoundError) as exc_info:
            store.restore_backup()

        assert exc_info.value.backup_path == store.backup_path

    def test_unreadable_backup(self, settings_path: Path) -> None:
        store = SettingsStore(settings_path)
        settings_path.parent.mkdir(parents=True)
        store.backup_path.write_text("{}")
        settings_path.write_text('{"current": true}')

        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(ReadFailedError) as exc_info:
                store.restore_backup()

        assert exc_info.value.path == store.backup_path
        assert settings_path.read_text() == '{"current": true}'
