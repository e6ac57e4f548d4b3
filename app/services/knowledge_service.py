"""
Knowledge Base Service

Entry-curation pathway: saving chat messages into the knowledge base and
editing curated entries. Titles and tags are moderated before any write.
"""

import logging
from typing import List, Optional

from app.ai_core.moderation import ContentModerator, get_moderator
from app.models.knowledge import KnowledgeBaseEntry, KnowledgeStats, MessageWithEntry
from app.models.moderation import ModerationAction
from app.services.knowledge_store import KnowledgeStore, UNSET
from app.services.moderation_gate import ContentBlockedError, check_text
from app.utils.helpers import normalize_tags

logger = logging.getLogger(__name__)

TITLE_BLOCKED_MESSAGE = "Title contains inappropriate content"
TAGS_BLOCKED_MESSAGE = "Tags contain inappropriate content"


class KnowledgeService:
    """
    Curates Q&A pairs into the knowledge base.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        moderator: Optional[ContentModerator] = None,
    ):
        self.store = store
        self.moderator = moderator or get_moderator()

    def _moderate_curation(
        self, title: Optional[str], tags: Optional[List[str]]
    ) -> None:
        """
        Evaluate the title and every tag independently.

        Raises:
            ContentBlockedError: If any single evaluation blocks
        """
        if title:
            result = check_text(self.moderator, title, "title")
            if result.suggested_action == ModerationAction.BLOCK:
                raise ContentBlockedError(TITLE_BLOCKED_MESSAGE, result=result)

        for tag in tags or []:
            result = check_text(self.moderator, tag, "tag")
            if result.suggested_action == ModerationAction.BLOCK:
                raise ContentBlockedError(TAGS_BLOCKED_MESSAGE, result=result)

    def save_entry(
        self,
        message_id: str,
        title: Optional[str] = None,
        tags: Optional[List[str]] = None,
        category: Optional[str] = None,
    ) -> KnowledgeBaseEntry:
        """
        Save a chat message as a knowledge base entry.

        Args:
            message_id: Message to save
            title: Optional custom title
            tags: Optional tags
            category: Optional category

        Returns:
            Created KnowledgeBaseEntry

        Raises:
            ContentBlockedError: If the title or a tag is blocked (nothing is written)
            MessageNotFoundError: If the message does not exist
            DuplicateEntryError: If the message is already saved
        """
        logger.info(
            f"Save to KB request: message_id={message_id}, "
            f"tags={len(tags) if tags else 0}, category={category}"
        )
        self._moderate_curation(title, tags)

        return self.store.create_entry(
            message_id=message_id,
            title=title,
            tags=normalize_tags(tags),
            category=category,
        )

    def update_entry(
        self,
        entry_id: str,
        title=UNSET,
        tags=UNSET,
        category=UNSET,
        is_pinned=UNSET,
    ) -> KnowledgeBaseEntry:
        """
        Update the supplied fields of an entry.

        Raises:
            ContentBlockedError: If a new title or tag is blocked (nothing is written)
            EntryNotFoundError: If the entry does not exist
        """
        self._moderate_curation(
            title if title is not UNSET else None,
            tags if tags is not UNSET else None,
        )
        if tags is not UNSET:
            tags = normalize_tags(tags)

        return self.store.update_entry(
            entry_id,
            title=title,
            tags=tags,
            category=category,
            is_pinned=is_pinned,
        )

    def delete_entry(self, entry_id: str) -> None:
        self.store.delete_entry(entry_id)

    def get_entry(self, entry_id: str) -> KnowledgeBaseEntry:
        return self.store.get_entry(entry_id)

    def list_entries(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        pinned_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[KnowledgeBaseEntry]:
        return self.store.list_entries(
            search=search,
            category=category,
            pinned_only=pinned_only,
            limit=limit,
            offset=offset,
        )

    def list_messages(self, limit: int = 10, offset: int = 0) -> List[MessageWithEntry]:
        return self.store.list_messages(limit=limit, offset=offset)

    def stats(self) -> KnowledgeStats:
        return self.store.stats()
