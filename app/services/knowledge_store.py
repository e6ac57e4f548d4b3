"""
Knowledge Store

Thread-safe store for chat messages and knowledge base entries.

Records live in memory; when a data file is configured every write also
snapshots the whole store to JSON, and the snapshot is loaded on start.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from app.models.knowledge import (
    KnowledgeBaseEntry,
    KnowledgeStats,
    Message,
    MessageWithEntry,
)

logger = logging.getLogger(__name__)

UNSET = object()


class StoreError(Exception):
    """Base class for knowledge store errors."""

    pass


class MessageNotFoundError(StoreError):
    """Raised when a message ID does not exist (404)."""

    pass


class EntryNotFoundError(StoreError):
    """Raised when a knowledge base entry ID does not exist (404)."""

    pass


class DuplicateEntryError(StoreError):
    """Raised when a message is already saved to the knowledge base (400)."""

    pass


class KnowledgeStore:
    """
    Message and knowledge base entry storage.
    """

    def __init__(self, data_file: Union[str, Path, None] = None):
        """
        Args:
            data_file: Optional JSON snapshot path; None keeps data in memory only
        """
        self._lock = threading.Lock()
        self._messages: Dict[str, Message] = {}
        self._entries: Dict[str, KnowledgeBaseEntry] = {}
        self._data_path = Path(data_file) if data_file else None

        if self._data_path is not None:
            self._load()

    # -- persistence ---------------------------------------------------------

    def _load(self) -> None:
        if not self._data_path.exists():
            logger.info(f"No snapshot at {self._data_path}, starting empty")
            return
        try:
            data = json.loads(self._data_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise StoreError(f"Failed to load snapshot {self._data_path}: {e}") from e

        for raw in data.get("messages", []):
            message = Message.model_validate(raw)
            self._messages[message.id] = message
        for raw in data.get("entries", []):
            entry = KnowledgeBaseEntry.model_validate(raw)
            self._entries[entry.id] = entry

        logger.info(
            f"Loaded {len(self._messages)} messages and {len(self._entries)} "
            f"entries from {self._data_path}"
        )

    def _commit(
        self,
        messages: Dict[str, Message],
        entries: Dict[str, KnowledgeBaseEntry],
    ) -> None:
        # Caller holds the lock; memory only changes once the snapshot is written
        self._save(messages, entries)
        self._messages = messages
        self._entries = entries

    def _save(
        self,
        messages: Dict[str, Message],
        entries: Dict[str, KnowledgeBaseEntry],
    ) -> None:
        if self._data_path is None:
            return
        data = {
            "messages": [m.model_dump(mode="json") for m in messages.values()],
            "entries": [e.model_dump(mode="json") for e in entries.values()],
        }
        tmp_path = self._data_path.with_suffix(self._data_path.suffix + ".tmp")
        try:
            self._data_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self._data_path)
        except OSError as e:
            logger.error(f"Failed to write snapshot {self._data_path}: {e}", exc_info=True)
            raise StoreError(f"Failed to write snapshot {self._data_path}: {e}") from e

    # -- messages ------------------------------------------------------------

    def create_message(self, question: str, answer: str) -> Message:
        message = Message(question=question, answer=answer)
        with self._lock:
            messages = dict(self._messages)
            messages[message.id] = message
            self._commit(messages, self._entries)
        logger.debug(f"Stored message {message.id}")
        return message

    def get_message(self, message_id: str) -> Message:
        with self._lock:
            message = self._messages.get(message_id)
        if message is None:
            raise MessageNotFoundError(f"Message not found: {message_id}")
        return message

    def list_messages(self, limit: int = 10, offset: int = 0) -> List[MessageWithEntry]:
        """
        List messages, newest first, each with its knowledge base entry.

        Args:
            limit: Maximum number of messages
            offset: Number of messages to skip

        Returns:
            List of MessageWithEntry
        """
        with self._lock:
            entries_by_message = {
                e.message_id: e for e in self._entries.values() if e.message_id
            }
            ordered = _newest_first(list(self._messages.values()))
            page = ordered[offset : offset + limit]
            return [
                MessageWithEntry(
                    **m.model_dump(),
                    knowledge_base_entry=entries_by_message.get(m.id),
                )
                for m in page
            ]

    # -- knowledge base entries ----------------------------------------------

    def create_entry(
        self,
        message_id: str,
        title: Optional[str] = None,
        tags: Optional[List[str]] = None,
        category: Optional[str] = None,
    ) -> KnowledgeBaseEntry:
        """
        Save a message's Q&A pair as a knowledge base entry.

        Raises:
            MessageNotFoundError: If the message does not exist
            DuplicateEntryError: If the message is already saved
        """
        with self._lock:
            message = self._messages.get(message_id)
            if message is None:
                raise MessageNotFoundError(f"Message not found: {message_id}")
            if any(e.message_id == message_id for e in self._entries.values()):
                raise DuplicateEntryError(
                    "This message is already saved to the knowledge base"
                )

            entry = KnowledgeBaseEntry(
                question=message.question,
                answer=message.answer,
                title=title or None,
                tags=list(tags or []),
                category=category or None,
                message_id=message_id,
            )
            entries = dict(self._entries)
            entries[entry.id] = entry
            self._commit(self._messages, entries)

        logger.info(f"Saved message {message_id} as knowledge base entry {entry.id}")
        return entry

    def get_entry(self, entry_id: str) -> KnowledgeBaseEntry:
        with self._lock:
            entry = self._entries.get(entry_id)
        if entry is None:
            raise EntryNotFoundError(f"Knowledge base entry not found: {entry_id}")
        return entry

    def list_entries(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        pinned_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[KnowledgeBaseEntry]:
        """
        List entries, pinned first, then newest first.

        Args:
            search: Case-insensitive substring matched against question, answer and title
            category: Exact category filter
            pinned_only: Only return pinned entries
            limit: Maximum number of entries
            offset: Number of entries to skip

        Returns:
            List of KnowledgeBaseEntry
        """
        needle = search.lower() if search else None

        with self._lock:
            entries = list(self._entries.values())

        if needle:
            entries = [
                e
                for e in entries
                if needle in e.question.lower()
                or needle in e.answer.lower()
                or (e.title and needle in e.title.lower())
            ]
        if category:
            entries = [e for e in entries if e.category == category]
        if pinned_only:
            entries = [e for e in entries if e.is_pinned]

        ordered = sorted(
            reversed(entries), key=lambda e: (e.is_pinned, e.created_at), reverse=True
        )
        return ordered[offset : offset + limit]

    def update_entry(
        self,
        entry_id: str,
        title=UNSET,
        tags=UNSET,
        category=UNSET,
        is_pinned=UNSET,
    ) -> KnowledgeBaseEntry:
        """
        Update the given fields of an entry; omitted fields are left unchanged.

        Raises:
            EntryNotFoundError: If the entry does not exist
        """
        changes = {}
        if title is not UNSET:
            changes["title"] = title or None
        if tags is not UNSET:
            changes["tags"] = list(tags or [])
        if category is not UNSET:
            changes["category"] = category or None
        if is_pinned is not UNSET:
            changes["is_pinned"] = bool(is_pinned)

        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                raise EntryNotFoundError(f"Knowledge base entry not found: {entry_id}")
            if changes:
                changes["updated_at"] = datetime.now(timezone.utc)
                entry = entry.model_copy(update=changes)
                entries = dict(self._entries)
                entries[entry_id] = entry
                self._commit(self._messages, entries)

        logger.info(f"Updated knowledge base entry {entry_id}: {sorted(changes)}")
        return entry

    def delete_entry(self, entry_id: str) -> None:
        with self._lock:
            entries = dict(self._entries)
            if entries.pop(entry_id, None) is None:
                raise EntryNotFoundError(f"Knowledge base entry not found: {entry_id}")
            self._commit(self._messages, entries)
        logger.info(f"Deleted knowledge base entry {entry_id}")

    def stats(self) -> KnowledgeStats:
        with self._lock:
            entries = list(self._entries.values())
            total_messages = len(self._messages)

        by_category: Dict[str, int] = {}
        by_tag: Dict[str, int] = {}
        for entry in entries:
            if entry.category:
                by_category[entry.category] = by_category.get(entry.category, 0) + 1
            for tag in entry.tags:
                by_tag[tag] = by_tag.get(tag, 0) + 1

        return KnowledgeStats(
            total_entries=len(entries),
            pinned_entries=sum(1 for e in entries if e.is_pinned),
            total_messages=total_messages,
            by_category=by_category,
            by_tag=by_tag,
        )


def _newest_first(records: list) -> list:
    # Dicts keep insertion order; reversing first keeps later inserts ahead on equal timestamps
    return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)
