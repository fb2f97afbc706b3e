"""
Configuration loading.

Implements the configuration precedence chain:
    defaults < user .env < project .env < OS environment

The .env layering happens in env.py (load_layered_env); this module only
turns the resulting process environment into a ReminderConfig.
"""

import logging
import os
from pathlib import Path
from typing import Any

from .models import ReminderConfig

logger = logging.getLogger(__name__)

HOOK_DIR_ENV = "HOOK_DIR"
SETTINGS_DIR_ENV = "SETTINGS_DIR"
LOCK_FILE_ENV = "POST_COMPACT_REMINDER_LOCK_FILE"


def _expand(value: str) -> Path:
    return Path(os.path.expandvars(value)).expanduser()


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        HOOK_DIR - overrides hook_dir
        SETTINGS_DIR - overrides settings_dir
        POST_COMPACT_REMINDER_LOCK_FILE - overrides lock_file

    Empty values are ignored.

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if hook_dir := os.environ.get(HOOK_DIR_ENV):
        result["hook_dir"] = _expand(hook_dir)

    if settings_dir := os.environ.get(SETTINGS_DIR_ENV):
        result["settings_dir"] = _expand(settings_dir)

    if lock_file := os.environ.get(LOCK_FILE_ENV):
        result["lock_file"] = _expand(lock_file)

    return result


def load_config(**overrides: Any) -> ReminderConfig:
    """
    Build the installer configuration.

    Keyword overrides (e.g. from tests) win over the environment.

    Returns:
        Validated ReminderConfig
    """
    config_dict = apply_env_overrides({})
    config_dict.update({k: v for k, v in overrides.items() if v is not None})
    config = ReminderConfig.model_validate(config_dict)
    logger.debug(f"Loaded config: hook_dir={config.hook_dir} settings_dir={config.settings_dir}")
    return config
