"""
Layered .env loading for installer settings.

Lowest to highest precedence:
    user .env ($XDG_CONFIG_HOME/post-compact-reminder/.env)
    project .env (in the working directory)
    variables already exported in the shell

Values are written into os.environ so that apply_env_overrides() sees them
the same way as exported variables.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values


def get_user_env_path() -> Path:
    """Path to the per-user .env file (XDG aware)."""
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return xdg_home / "post-compact-reminder" / ".env"


def merge_env_files(*paths: Path) -> dict[str, str]:
    """
    Read .env files in order; later files win. Missing files are skipped and
    keys without a value (bare ``KEY``) are ignored.
    """
    merged: dict[str, str] = {}
    for path in paths:
        if not path.is_file():
            continue
        merged.update(
            {key: value for key, value in dotenv_values(path).items() if value is not None}
        )
    return merged


def load_layered_env(user_env: Path | None = None, project_env: Path | None = None) -> None:
    """
    Export .env values that the shell has not already set.

    Args:
        user_env: Per-user file (defaults to get_user_env_path())
        project_env: Project file (defaults to .env in the working directory)
    """
    if user_env is None:
        user_env = get_user_env_path()
    if project_env is None:
        project_env = Path.cwd() / ".env"

    for key, value in merge_env_files(user_env, project_env).items():
        os.environ.setdefault(key, value)
