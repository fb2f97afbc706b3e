"""
Result models for settings.json mutations.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class MergeOutcome(str, Enum):
    """Outcome of an install or uninstall against settings.json."""

    ADDED = "added"
    EXISTS = "exists"
    REMOVED = "removed"
    ABSENT = "absent"


class MergeResult(BaseModel):
    """Outcome of a merge plus the (possibly unchanged) document."""

    outcome: MergeOutcome = Field(description="What the operation did")
    document: dict[str, Any] = Field(
        default_factory=dict, description="Settings document after the operation"
    )

    @property
    def changed(self) -> bool:
        """True if the document differs from the input."""
        return self.outcome in (MergeOutcome.ADDED, MergeOutcome.REMOVED)
