"""
Moderation API Routes

- POST /api/moderation/check    - Evaluate text without submitting it
- POST /api/moderation/sanitize - Return the sanitized form of text
"""

import logging
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.ai_core.moderation import ContentModerator
from app.api.dependencies import get_moderator
from app.models.api_responses import SanitizeResponse
from app.models.moderation import ModerationResult

logger = logging.getLogger(__name__)
router = APIRouter()


class ModerationRequest(BaseModel):
    """Request model for moderation endpoints."""

    text: str = Field(..., description="Text to moderate (may be empty)")


@router.post("/check", response_model=ModerationResult)
async def check_text(
    request: ModerationRequest,
    moderator: ContentModerator = Depends(get_moderator),
):
    """
    Evaluate text and return the moderation decision.

    Lets clients warn users before they submit. Never fails for any text.

    Example response:
    ```json
    {
        "is_appropriate": false,
        "reason": "Contains flagged words",
        "confidence": 0.3,
        "flagged_words": ["hate"],
        "suggested_action": "warn",
        "trigger": "flagged_words"
    }
    ```
    """
    return moderator.evaluate(request.text)


@router.post("/sanitize", response_model=SanitizeResponse)
async def sanitize_text(
    request: ModerationRequest,
    moderator: ContentModerator = Depends(get_moderator),
):
    """Mask blocklist terms and tame repeated characters and shouting."""
    return SanitizeResponse(
        original_length=len(request.text),
        sanitized_text=moderator.sanitize(request.text),
    )
