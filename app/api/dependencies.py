"""
Shared service instances for the API routes.

Lazy initialization so importing the app does not touch the data file or the
AI provider. Routes receive these through FastAPI ``Depends``; tests replace
them with ``app.dependency_overrides``.
"""

import logging

from app.ai_core.assistant import AssistantClient
from app.ai_core.moderation import ContentModerator, load_rules
from app.config import get_settings
from app.services.chat_service import ChatService
from app.services.knowledge_service import KnowledgeService
from app.services.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)

_moderator = None
_store = None
_chat_service = None
_knowledge_service = None


def get_moderator() -> ContentModerator:
    """Get the ContentModerator built from the configured rules."""
    global _moderator
    if _moderator is None:
        settings = get_settings()
        _moderator = ContentModerator(load_rules(settings.moderation_rules_file))
    return _moderator


def get_store() -> KnowledgeStore:
    """Get the KnowledgeStore instance with lazy initialization."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = KnowledgeStore(data_file=settings.data_file or None)
        logger.info(
            f"Knowledge store ready (persistence: {settings.data_file or 'memory only'})"
        )
    return _store


def get_chat_service() -> ChatService:
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService(
            store=get_store(),
            assistant=AssistantClient(),
            moderator=get_moderator(),
        )
    return _chat_service


def get_knowledge_service() -> KnowledgeService:
    global _knowledge_service
    if _knowledge_service is None:
        _knowledge_service = KnowledgeService(store=get_store(), moderator=get_moderator())
    return _knowledge_service
