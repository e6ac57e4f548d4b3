"""
Moderation Models

Value objects produced by the content moderator.
"""

from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class ModerationAction(str, Enum):
    """Decision taken for a piece of text."""

    ALLOW = "allow"  # Forward unchanged
    WARN = "warn"  # Sanitize before forwarding
    BLOCK = "block"  # Reject the request


class ModerationTrigger(str, Enum):
    """Rule that produced the decision."""

    NONE = "none"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    SCORE = "score"
    FLAGGED_WORDS = "flagged_words"


class ModerationResult(BaseModel):
    """
    Result of a single moderation check.

    Immutable; produced once per evaluate() call and discarded by the caller.
    """

    model_config = ConfigDict(frozen=True)

    is_appropriate: bool = Field(
        ..., description="True when no rule fired strongly enough to warn or block"
    )
    reason: str = Field("", description="Triggering condition, empty when allowed")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Risk score (0.0-1.0)")
    flagged_words: Optional[Tuple[str, ...]] = Field(
        None, description="Matched blocklist terms in blocklist order"
    )
    suggested_action: ModerationAction = Field(
        ..., description="Action: allow, warn, or block"
    )
    trigger: ModerationTrigger = Field(
        ModerationTrigger.NONE, description="Rule that produced the decision"
    )

    @property
    def is_blocked(self) -> bool:
        return self.suggested_action == ModerationAction.BLOCK

    @property
    def needs_sanitizing(self) -> bool:
        return self.suggested_action == ModerationAction.WARN
