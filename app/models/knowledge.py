"""
Knowledge Base Models

This module defines the stored records (chat messages and curated knowledge
base entries) and related statistics.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Dict
from pydantic import BaseModel, Field


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """
    A question submitted to the assistant and the answer it returned.

    question always holds the original text the user typed, even when a
    sanitized version was sent to the AI provider.
    """

    id: str = Field(default_factory=_new_id, description="Message ID")
    question: str = Field(..., description="Original user question")
    answer: str = Field(..., description="AI assistant answer")
    created_at: datetime = Field(default_factory=_now, description="When created")
    updated_at: datetime = Field(default_factory=_now, description="When last updated")


class KnowledgeBaseEntry(BaseModel):
    """
    A curated Q&A pair saved to the knowledge base.
    """

    id: str = Field(default_factory=_new_id, description="Entry ID")
    question: str = Field(..., description="Question copied from the message")
    answer: str = Field(..., description="Answer copied from the message")
    title: Optional[str] = Field(None, description="Optional custom title")
    tags: List[str] = Field(default_factory=list, description="Entry tags")
    is_pinned: bool = Field(False, description="Pinned entries sort first")
    category: Optional[str] = Field(None, description="Optional category")
    created_at: datetime = Field(default_factory=_now, description="When created")
    updated_at: datetime = Field(default_factory=_now, description="When last updated")
    message_id: Optional[str] = Field(
        None, description="Source message (at most one entry per message)"
    )


class MessageWithEntry(Message):
    """Message as listed by the API, with its knowledge base entry if saved."""

    knowledge_base_entry: Optional[KnowledgeBaseEntry] = None


class KnowledgeStats(BaseModel):
    """
    Statistics about the knowledge base.
    """

    total_entries: int = Field(0, description="Total number of entries")
    pinned_entries: int = Field(0, description="Number of pinned entries")
    total_messages: int = Field(0, description="Total number of chat messages")
    by_category: Dict[str, int] = Field(
        default_factory=dict, description="Entry count by category"
    )
    by_tag: Dict[str, int] = Field(
        default_factory=dict, description="Entry count by tag"
    )
