"""
Chat Service

Submission pathway for team questions:
1. Moderate the raw message
2. Reject on block, sanitize on warn, forward unchanged on allow
3. Ask the AI assistant
4. Store the original (unsanitized) question with the answer
"""

import logging
from typing import Optional

from app.ai_core.assistant import AssistantClient
from app.ai_core.moderation import ContentModerator, get_moderator
from app.models.api_responses import ChatResponse
from app.models.moderation import ModerationAction
from app.services.knowledge_store import KnowledgeStore
from app.services.moderation_gate import ContentBlockedError, check_text

logger = logging.getLogger(__name__)

BLOCKED_MESSAGE_TEMPLATE = (
    "Message blocked: {reason}. "
    "Please keep conversations professional and appropriate."
)


class ChatService:
    """
    Runs a user message through moderation, the AI assistant and the store.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        assistant: Optional[AssistantClient] = None,
        moderator: Optional[ContentModerator] = None,
    ):
        self.store = store
        self.assistant = assistant or AssistantClient()
        self.moderator = moderator or get_moderator()

    async def submit(self, message: str) -> ChatResponse:
        """
        Submit a question and store the answered exchange.

        Args:
            message: Raw user message

        Returns:
            ChatResponse for the stored message

        Raises:
            ContentBlockedError: If moderation blocks the message
            AssistantError: If the AI assistant fails
        """
        logger.info(f"Chat request: message_length={len(message)}")

        moderation = check_text(self.moderator, message, "message")

        if moderation.suggested_action == ModerationAction.BLOCK:
            raise ContentBlockedError(
                BLOCKED_MESSAGE_TEMPLATE.format(reason=moderation.reason),
                result=moderation,
            )

        if moderation.suggested_action == ModerationAction.WARN:
            forwarded = self.moderator.sanitize(message)
        else:
            forwarded = message

        answer = await self.assistant.get_response(forwarded)

        saved = self.store.create_message(question=message, answer=answer)

        return ChatResponse(
            id=saved.id,
            question=saved.question,
            answer=saved.answer,
            created_at=saved.created_at,
            moderation_action=moderation.suggested_action,
        )
