"""
Advisory single-instance lock.

A PID file keeps two installer runs on the same host from mutating files at
the same time. It is best-effort: it does not stop hand edits or other
programs from writing settings.json. Readers are protected by the atomic
rename in the settings store, not by this lock.

A lock held by a live process fails immediately; there is no waiting or
retry. A lock left behind by a dead process is taken over.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import TracebackType

from post_compact_reminder.core.errors import LockContentionError

logger = logging.getLogger(__name__)


def _pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Process exists but belongs to someone else
        return True
    return True


def _read_pid(lock_file: Path) -> int | None:
    try:
        return int(lock_file.read_text().strip())
    except (OSError, ValueError):
        return None


class InstallLock:
    """
    PID-file lock used as a context manager.

    Example:
        >>> with InstallLock(Path("/tmp/.post-compact-reminder-install.lock")):
        ...     add_hook_to_settings(settings_file, command)
    """

    def __init__(self, lock_file: Path) -> None:
        self.lock_file = Path(lock_file)
        self.pid = os.getpid()
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self) -> None:
        """
        Take the lock.

        Raises:
            LockContentionError: If a live process already holds it
        """
        for _ in range(2):
            try:
                fd = os.open(self.lock_file, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                holder = _read_pid(self.lock_file)
                if holder is not None and holder != self.pid and _pid_alive(holder):
                    raise LockContentionError(self.lock_file, holder) from None
                self._remove_stale(holder)
                continue

            with os.fdopen(fd, "w") as f:
                f.write(f"{self.pid}\n")
            self._held = True
            logger.debug(f"Acquired lock {self.lock_file}")
            return

        # Lost the race against another process twice in a row
        holder = _read_pid(self.lock_file) or 0
        raise LockContentionError(self.lock_file, holder)

    def _remove_stale(self, holder: int | None) -> None:
        """
        Move the stale lock aside and drop it.

        Another run may have replaced the stale file with its own lock between
        our read and the move. The moved-aside file is re-read, and if it now
        names a live process the lock is put back and contention is reported.
        """
        aside = self.lock_file.with_name(f"{self.lock_file.name}.{self.pid}.stale")
        try:
            os.rename(self.lock_file, aside)
        except FileNotFoundError:
            return

        current = _read_pid(aside)
        if current is not None and current != holder and _pid_alive(current):
            try:
                os.link(aside, self.lock_file)
            except OSError as e:
                logger.debug(f"Could not put back lock file {self.lock_file}: {e}")
            aside.unlink(missing_ok=True)
            raise LockContentionError(self.lock_file, current)

        logger.debug(f"Removed stale lock file {self.lock_file} (pid={holder})")
        aside.unlink(missing_ok=True)

    def release(self) -> None:
        if not self._held:
            return
        self._held = False
        if _read_pid(self.lock_file) != self.pid:
            return
        try:
            self.lock_file.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove lock file {self.lock_file}: {e}")
        logger.debug(f"Released lock {self.lock_file}")

    def __enter__(self) -> InstallLock:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
