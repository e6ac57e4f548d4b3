"""
Unit Tests for KnowledgeService

Tests the entry-curation pathway: titles and tags are moderated one by one
and a single block rejects the whole save before anything is written.
"""

import pytest

from app.services.knowledge_service import (
    TAGS_BLOCKED_MESSAGE,
    TITLE_BLOCKED_MESSAGE,
)
from app.services.knowledge_store import (
    DuplicateEntryError,
    EntryNotFoundError,
    MessageNotFoundError,
)
from app.services.moderation_gate import ContentBlockedError


@pytest.fixture
def message(store):
    return store.create_message(
        question="How do I rotate the staging DB password?",
        answer="Run the rotate-secrets job and redeploy.",
    )


def test_save_entry_copies_message(knowledge_service, message):
    entry = knowledge_service.save_entry(
        message_id=message.id,
        title="Rotating staging credentials",
        tags=["database", " staging ", "Database"],
        category="devops",
    )

    assert entry.question == message.question
    assert entry.answer == message.answer
    assert entry.title == "Rotating staging credentials"
    assert entry.tags == ["database", "staging"]
    assert entry.category == "devops"
    assert entry.is_pinned is False
    assert entry.message_id == message.id


def test_save_entry_without_optional_fields(knowledge_service, message):
    entry = knowledge_service.save_entry(message_id=message.id)
    assert entry.title is None
    assert entry.tags == []
    assert entry.category is None


def test_blocked_title_rejects_save(knowledge_service, store, message):
    with pytest.raises(ContentBlockedError) as exc_info:
        knowledge_service.save_entry(
            message_id=message.id, title="hate hate hate hate", tags=["fine"]
        )

    assert exc_info.value.message == TITLE_BLOCKED_MESSAGE
    assert store.stats().total_entries == 0


def test_any_blocked_tag_rejects_save(knowledge_service, store, message):
    with pytest.raises(ContentBlockedError) as exc_info:
        knowledge_service.save_entry(
            message_id=message.id, title="Credentials", tags=["database", "x"]
        )

    assert exc_info.value.message == TAGS_BLOCKED_MESSAGE
    assert store.stats().total_entries == 0


def test_empty_tag_is_blocked(knowledge_service, message):
    with pytest.raises(ContentBlockedError):
        knowledge_service.save_entry(message_id=message.id, tags=["ok tag", ""])


def test_warned_title_is_still_saved(knowledge_service, message):
    """Only block decisions reject curation; warnings pass through unchanged."""
    entry = knowledge_service.save_entry(message_id=message.id, title="Why I hate flaky tests")
    assert entry.title == "Why I hate flaky tests"


def test_moderation_runs_before_message_lookup(knowledge_service):
    with pytest.raises(ContentBlockedError):
        knowledge_service.save_entry(message_id="missing", tags=["x"])


def test_unknown_message(knowledge_service):
    with pytest.raises(MessageNotFoundError):
        knowledge_service.save_entry(message_id="missing")


def test_message_saved_only_once(knowledge_service, message):
    knowledge_service.save_entry(message_id=message.id)
    with pytest.raises(DuplicateEntryError):
        knowledge_service.save_entry(message_id=message.id)


def test_update_changes_only_supplied_fields(knowledge_service, message):
    entry = knowledge_service.save_entry(
        message_id=message.id, title="Old title", tags=["database"], category="devops"
    )

    updated = knowledge_service.update_entry(entry.id, title="New title", is_pinned=True)

    assert updated.title == "New title"
    assert updated.is_pinned is True
    assert updated.tags == ["database"]
    assert updated.category == "devops"
    assert updated.updated_at >= entry.updated_at


def test_update_with_blocked_tag_leaves_entry_unchanged(knowledge_service, message):
    entry = knowledge_service.save_entry(message_id=message.id, tags=["database"])

    with pytest.raises(ContentBlockedError):
        knowledge_service.update_entry(entry.id, tags=["kill kill kill kill"])

    assert knowledge_service.get_entry(entry.id).tags == ["database"]


def test_update_unknown_entry(knowledge_service):
    with pytest.raises(EntryNotFoundError):
        knowledge_service.update_entry("missing", is_pinned=True)


def test_delete_entry(knowledge_service, message):
    entry = knowledge_service.save_entry(message_id=message.id)
    knowledge_service.delete_entry(entry.id)

    with pytest.raises(EntryNotFoundError):
        knowledge_service.get_entry(entry.id)
    with pytest.raises(EntryNotFoundError):
        knowledge_service.delete_entry(entry.id)
