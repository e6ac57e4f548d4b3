"""
Shared pytest fixtures.

Services get a fresh in-memory store and a fake assistant so no test touches
the AI provider or the data file.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from app.ai_core.assistant import AssistantError
from app.services.chat_service import ChatService
from app.services.knowledge_service import KnowledgeService
from app.services.knowledge_store import KnowledgeStore


class FakeAssistant:
    """Stands in for AssistantClient; records what it was asked."""

    def __init__(self, answer: str = "Here is the answer.", error: AssistantError = None):
        self.answer = answer
        self.error = error
        self.prompts = []

    async def get_response(self, user_message: str, system_prompt=None) -> str:
        self.prompts.append(user_message)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def store():
    return KnowledgeStore()


@pytest.fixture
def assistant():
    return FakeAssistant()


@pytest.fixture
def chat_service(store, assistant):
    return ChatService(store=store, assistant=assistant)


@pytest.fixture
def knowledge_service(store):
    return KnowledgeService(store=store)
