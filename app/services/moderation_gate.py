"""
Moderation gate shared by the submission and curation pathways.
"""

import logging
from typing import Optional

from app.ai_core.moderation import ContentModerator
from app.models.moderation import ModerationResult

logger = logging.getLogger(__name__)


class ContentBlockedError(Exception):
    """
    Raised when moderation blocks user input.
    This is a validation failure (400), not a system error.
    """

    def __init__(self, message: str, result: Optional[ModerationResult] = None):
        super().__init__(message)
        self.message = message
        self.result = result


def check_text(moderator: ContentModerator, text: str, field: str) -> ModerationResult:
    """
    Evaluate text and log any decision other than allow.

    Args:
        moderator: Moderator to evaluate with
        text: Text to check
        field: Label for log messages (e.g. "message", "title", "tag")

    Returns:
        ModerationResult
    """
    result = moderator.evaluate(text)
    if not result.is_appropriate:
        # Length only; blocked content is not written to logs
        logger.info(
            f"Moderation {result.suggested_action.value} on {field}: "
            f"reason='{result.reason}', confidence={result.confidence:.2f}, "
            f"text_length={len(text)}"
        )
    return result
