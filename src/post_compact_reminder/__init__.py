"""
post-compact-reminder - Claude Code hook installer

Installs a SessionStart hook that fires after context compaction and reminds
the assistant to re-read AGENTS.md.
"""

__version__ = "1.1.0"

# Re-export core models for convenience
from post_compact_reminder.core.config.models import ReminderConfig
from post_compact_reminder.core.settings.models import MergeOutcome, MergeResult

__all__ = ["MergeOutcome", "MergeResult", "ReminderConfig", "__version__"]
