"""
AI Assistant Client

Answers team questions through an OpenAI chat model reached via the SAP
GenAI Hub proxy.

Responsibilities:
- Build the system + user prompt for a chat turn
- Call the LLM and return the answer text
- Translate provider failures (rate limit, quota, credentials) into
  AssistantError subclasses the API layer can map to status codes
"""

import logging
from typing import Optional

from app.ai_core.prompts.chat import create_chat_messages
from app.config import get_settings

logger = logging.getLogger(__name__)


class AssistantError(Exception):
    """
    Raised when the AI assistant cannot produce an answer.
    This is a system error (500).
    """

    pass


class AssistantRateLimitError(AssistantError):
    """Raised when the provider rate limit is hit (429)."""

    pass


class AssistantQuotaError(AssistantError):
    """Raised when the provider quota is exhausted (503)."""

    pass


class AssistantAuthError(AssistantError):
    """Raised when the provider rejects the configured credentials (500)."""

    pass


def classify_provider_error(error: Exception) -> AssistantError:
    """
    Map a provider exception to the matching AssistantError.

    Args:
        error: Exception raised by the LLM call

    Returns:
        AssistantError subclass instance with a user-facing message
    """
    message = str(error).lower()

    # Quota errors also arrive as HTTP 429, so they are checked first
    if "insufficient_quota" in message:
        return AssistantQuotaError(
            "API quota exceeded. Please check your AI provider account."
        )
    if "rate limit" in message or "rate_limit" in message or "429" in message:
        return AssistantRateLimitError("Rate limit exceeded. Please try again later.")
    if "invalid_api_key" in message or "401" in message:
        return AssistantAuthError(
            "Invalid API key. Please check your AI provider configuration."
        )
    return AssistantError("Failed to get response from AI assistant")


class AssistantClient:
    """
    Chat completion client for the team assistant.
    """

    def __init__(self, llm=None):
        """
        Args:
            llm: Optional chat model exposing ``ainvoke``; created lazily from
                settings when omitted
        """
        self.settings = get_settings()
        self._llm = llm

    @property
    def llm(self):
        """Lazy initialization of the LLM (credentials are only needed on first call)."""
        if self._llm is None:
            from gen_ai_hub.proxy.langchain.openai import ChatOpenAI
            from gen_ai_hub.proxy.core.proxy_clients import get_proxy_client

            proxy_client = get_proxy_client("gen-ai-hub")
            self._llm = ChatOpenAI(
                proxy_model_name=self.settings.openai_model,
                proxy_client=proxy_client,
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
            logger.info(f"AssistantClient initialized with model {self.settings.openai_model}")
        return self._llm

    async def get_response(
        self, user_message: str, system_prompt: Optional[str] = None
    ) -> str:
        """
        Answer a user question.

        Args:
            user_message: Text to answer (already moderated / sanitized)
            system_prompt: Optional override of the configured system prompt

        Returns:
            Answer text

        Raises:
            AssistantError: If the provider fails or returns no content
        """
        messages = create_chat_messages(
            system_prompt or self.settings.assistant_system_prompt, user_message
        )

        try:
            llm = self.llm
            response = await llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Error getting chat completion: {str(e)}", exc_info=True)
            raise classify_provider_error(e) from e

        content = getattr(response, "content", None)
        content = content.strip() if isinstance(content, str) else ""
        if not content:
            logger.error("AI assistant returned an empty response")
            raise AssistantError("No response from AI assistant")

        logger.debug(f"AI assistant answered: answer_length={len(content)}")
        return content
