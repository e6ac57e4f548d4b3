# Shared data models
from app.models.knowledge import (
    Message,
    MessageWithEntry,
    KnowledgeBaseEntry,
    KnowledgeStats,
)
from app.models.moderation import (
    ModerationAction,
    ModerationResult,
    ModerationTrigger,
)

__all__ = [
    "Message",
    "MessageWithEntry",
    "KnowledgeBaseEntry",
    "KnowledgeStats",
    "ModerationAction",
    "ModerationResult",
    "ModerationTrigger",
]
