"""
Messages API Routes

GET /api/messages - Recent chat messages with their knowledge base entries
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.dependencies import get_knowledge_service
from app.config import get_settings
from app.models.knowledge import MessageWithEntry
from app.services.knowledge_service import KnowledgeService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[MessageWithEntry])
async def list_messages(
    limit: Optional[int] = Query(
        None, ge=1, le=100, description="Maximum messages to return"
    ),
    offset: int = Query(0, ge=0, description="Number of messages to skip"),
    service: KnowledgeService = Depends(get_knowledge_service),
):
    """
    List recent messages, newest first.

    Examples:
    - GET /api/messages
    - GET /api/messages?limit=20&offset=20
    """
    try:
        if limit is None:
            limit = get_settings().messages_page_size
        return service.list_messages(limit=limit, offset=offset)

    except Exception as e:
        logger.error(f"Error in messages endpoint: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch messages")
