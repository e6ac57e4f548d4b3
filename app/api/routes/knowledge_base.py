"""
Knowledge Base API Routes

Curated Q&A pairs:
- GET    /api/knowledge-base          - Search / list entries
- POST   /api/knowledge-base          - Save a chat message to the knowledge base
- GET    /api/knowledge-base/stats    - Knowledge base statistics
- GET    /api/knowledge-base/{id}     - Get one entry
- PUT    /api/knowledge-base/{id}     - Update title, tags, category or pin
- DELETE /api/knowledge-base/{id}     - Delete an entry
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.api.dependencies import get_knowledge_service
from app.config import get_settings
from app.models.api_responses import DeleteResponse, ErrorResponse
from app.models.knowledge import KnowledgeBaseEntry, KnowledgeStats
from app.services.knowledge_service import KnowledgeService
from app.services.knowledge_store import (
    UNSET,
    DuplicateEntryError,
    EntryNotFoundError,
    MessageNotFoundError,
)
from app.services.moderation_gate import ContentBlockedError

logger = logging.getLogger(__name__)
router = APIRouter()


# Request models


class SaveEntryRequest(BaseModel):
    """Request model for saving a message to the knowledge base."""

    message_id: str = Field(..., min_length=1, description="Message to save")
    title: Optional[str] = Field(None, description="Optional custom title")
    tags: Optional[List[str]] = Field(None, description="Optional tags")
    category: Optional[str] = Field(None, description="Optional category")


class UpdateEntryRequest(BaseModel):
    """Request model for updating an entry. Omitted fields are left unchanged."""

    title: Optional[str] = Field(None, description="New title (null clears it)")
    tags: Optional[List[str]] = Field(None, description="New tags (null clears them)")
    category: Optional[str] = Field(None, description="New category (null clears it)")
    is_pinned: Optional[bool] = Field(None, description="Pin or unpin the entry")


# API Endpoints


@router.get("", response_model=List[KnowledgeBaseEntry])
async def list_entries(
    search: Optional[str] = Query(
        None, description="Case-insensitive text search over question, answer and title"
    ),
    category: Optional[str] = Query(None, description="Filter by category"),
    pinned: bool = Query(False, description="Only pinned entries"),
    limit: Optional[int] = Query(None, ge=1, le=200, description="Maximum entries"),
    offset: int = Query(0, ge=0, description="Number of entries to skip"),
    service: KnowledgeService = Depends(get_knowledge_service),
):
    """
    List knowledge base entries, pinned first, then newest first.

    Examples:
    - GET /api/knowledge-base?search=timeout
    - GET /api/knowledge-base?category=devops&pinned=true
    """
    try:
        if limit is None:
            limit = get_settings().kb_page_size
        return service.list_entries(
            search=search,
            category=category,
            pinned_only=pinned,
            limit=limit,
            offset=offset,
        )

    except Exception as e:
        logger.error(f"Error in knowledge base list endpoint: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Failed to fetch knowledge base entries"
        )


@router.post(
    "",
    response_model=KnowledgeBaseEntry,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def save_entry(
    request: SaveEntryRequest,
    service: KnowledgeService = Depends(get_knowledge_service),
):
    """
    Save a chat message's Q&A pair to the knowledge base.

    The title and every tag are moderated independently; if any of them is
    blocked nothing is saved.

    Example request body:
    ```json
    {
        "message_id": "3f2a...",
        "title": "Rotating staging credentials",
        "tags": ["database", "staging"],
        "category": "devops"
    }
    ```
    """
    try:
        return service.save_entry(
            message_id=request.message_id,
            title=request.title,
            tags=request.tags,
            category=request.category,
        )

    except ContentBlockedError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except MessageNotFoundError:
        raise HTTPException(status_code=404, detail="Message not found")
    except DuplicateEntryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error in knowledge base save endpoint: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to save to knowledge base")


@router.get("/stats", response_model=KnowledgeStats)
async def knowledge_stats(service: KnowledgeService = Depends(get_knowledge_service)):
    """Knowledge base statistics: totals, pinned count, counts by category and tag."""
    try:
        return service.stats()

    except Exception as e:
        logger.error(f"Error in knowledge base stats endpoint: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Failed to compute knowledge base statistics"
        )


@router.get(
    "/{entry_id}",
    response_model=KnowledgeBaseEntry,
    responses={404: {"model": ErrorResponse}},
)
async def get_entry(
    entry_id: str, service: KnowledgeService = Depends(get_knowledge_service)
):
    try:
        return service.get_entry(entry_id)

    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Knowledge base entry not found")


@router.put(
    "/{entry_id}",
    response_model=KnowledgeBaseEntry,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_entry(
    entry_id: str,
    request: UpdateEntryRequest,
    service: KnowledgeService = Depends(get_knowledge_service),
):
    """
    Update an entry's title, tags, category or pinned flag.

    Only fields present in the request body are changed.

    Example request body:
    ```json
    {
        "is_pinned": true
    }
    ```
    """
    supplied = request.model_fields_set
    try:
        return service.update_entry(
            entry_id,
            title=request.title if "title" in supplied else UNSET,
            tags=request.tags if "tags" in supplied else UNSET,
            category=request.category if "category" in supplied else UNSET,
            is_pinned=(
                request.is_pinned
                if "is_pinned" in supplied and request.is_pinned is not None
                else UNSET
            ),
        )

    except ContentBlockedError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Knowledge base entry not found")
    except Exception as e:
        logger.error(f"Error in knowledge base update endpoint: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Failed to update knowledge base entry"
        )


@router.delete(
    "/{entry_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_entry(
    entry_id: str, service: KnowledgeService = Depends(get_knowledge_service)
):
    try:
        service.delete_entry(entry_id)
        return DeleteResponse(id=entry_id)

    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Knowledge base entry not found")
    except Exception as e:
        logger.error(f"Error in knowledge base delete endpoint: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500, detail="Failed to delete knowledge base entry"
        )
