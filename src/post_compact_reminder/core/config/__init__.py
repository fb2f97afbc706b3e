"""
Configuration model and loading.

Provides the ReminderConfig Pydantic model with layering:
defaults < user .env < project .env < OS environment.
"""

from .env import get_user_env_path, load_layered_env
from .loader import apply_env_overrides, load_config
from .models import ReminderConfig

__all__ = [
    # Models
    "ReminderConfig",
    # Loader functions
    "apply_env_overrides",
    "get_user_env_path",
    "load_config",
    "load_layered_env",
]
