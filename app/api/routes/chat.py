"""
Chat API Routes

POST /api/chat - Ask the team assistant a question
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.ai_core.assistant import (
    AssistantError,
    AssistantQuotaError,
    AssistantRateLimitError,
)
from app.api.dependencies import get_chat_service
from app.models.api_responses import ChatResponse, ErrorResponse
from app.services.chat_service import ChatService
from app.services.moderation_gate import ContentBlockedError

logger = logging.getLogger(__name__)
router = APIRouter()


class ChatRequest(BaseModel):
    """Request model for the chat endpoint."""

    message: str = Field(..., description="Question for the assistant")


@router.post(
    "",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """
    Submit a question to the AI assistant.

    Pipeline:
    1. Moderate the message (block -> 400)
    2. Sanitize on warn, forward unchanged on allow
    3. Get the assistant's answer
    4. Store the original question with the answer

    Example request body:
    ```json
    {
        "message": "How do I rotate the staging database credentials?"
    }
    ```
    """
    try:
        return await service.submit(request.message)

    except ContentBlockedError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except AssistantRateLimitError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except AssistantQuotaError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except AssistantError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error in chat endpoint: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to process chat message",
        )
