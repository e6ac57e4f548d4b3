"""
API Response Models

Pydantic models for consistent API response structures.
"""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from app.models.moderation import ModerationAction


class ChatResponse(BaseModel):
    """
    Response model for the chat endpoint.
    """

    id: str = Field(..., description="ID of the stored message")
    question: str = Field(..., description="Original question as submitted")
    answer: str = Field(..., description="AI assistant answer")
    created_at: datetime = Field(..., description="When the message was stored")
    moderation_action: ModerationAction = Field(
        ModerationAction.ALLOW,
        description="Moderation decision applied before the AI call",
    )


class SanitizeResponse(BaseModel):
    """Response model for the sanitize endpoint."""

    original_length: int = Field(..., description="Length of the submitted text")
    sanitized_text: str = Field(..., description="Sanitized text")


class DeleteResponse(BaseModel):
    """Response model for delete endpoints."""

    id: str = Field(..., description="ID of the deleted record")
    deleted: bool = Field(True, description="Whether the record was deleted")


class ErrorResponse(BaseModel):
    """Error body as produced by HTTPException."""

    detail: Optional[str] = Field(None, description="Error message")
