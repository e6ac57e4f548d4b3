"""
Test AssistantClient

The LLM is mocked; no provider credentials are needed.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock

from langchain_core.messages import HumanMessage, SystemMessage

from app.ai_core.assistant import (
    AssistantAuthError,
    AssistantClient,
    AssistantError,
    AssistantQuotaError,
    AssistantRateLimitError,
)
from app.ai_core.assistant.assistant_client import classify_provider_error


def _mock_llm(content=None, error=None):
    llm = MagicMock()
    if error is not None:
        llm.ainvoke = AsyncMock(side_effect=error)
    else:
        response = MagicMock()
        response.content = content
        llm.ainvoke = AsyncMock(return_value=response)
    return llm


class TestAssistantClient(unittest.TestCase):
    """Test chat completions and provider error mapping."""

    def test_returns_answer_text(self):
        llm = _mock_llm(content="  Use the rotate-secrets job.  ")
        client = AssistantClient(llm=llm)

        answer = asyncio.run(client.get_response("How do I rotate secrets?"))

        self.assertEqual(answer, "Use the rotate-secrets job.")
        messages = llm.ainvoke.call_args[0][0]
        self.assertIsInstance(messages[0], SystemMessage)
        self.assertIn("internal team dashboard", messages[0].content)
        self.assertIsInstance(messages[1], HumanMessage)
        self.assertEqual(messages[1].content, "How do I rotate secrets?")

    def test_system_prompt_override(self):
        llm = _mock_llm(content="ok")
        client = AssistantClient(llm=llm)

        asyncio.run(client.get_response("hi there", system_prompt="Be brief."))

        messages = llm.ainvoke.call_args[0][0]
        self.assertEqual(messages[0].content, "Be brief.")

    def test_empty_response_raises(self):
        client = AssistantClient(llm=_mock_llm(content=""))

        with self.assertRaises(AssistantError) as ctx:
            asyncio.run(client.get_response("hello"))
        self.assertEqual(str(ctx.exception), "No response from AI assistant")

    def test_rate_limit_error(self):
        client = AssistantClient(
            llm=_mock_llm(error=Exception("Error code: 429 - Rate limit reached"))
        )
        with self.assertRaises(AssistantRateLimitError):
            asyncio.run(client.get_response("hello"))

    def test_quota_error(self):
        error = Exception("Error code: 429 - {'error': {'code': 'insufficient_quota'}}")
        client = AssistantClient(llm=_mock_llm(error=error))
        with self.assertRaises(AssistantQuotaError):
            asyncio.run(client.get_response("hello"))

    def test_auth_error(self):
        client = AssistantClient(
            llm=_mock_llm(error=Exception("Incorrect API key provided: invalid_api_key"))
        )
        with self.assertRaises(AssistantAuthError):
            asyncio.run(client.get_response("hello"))

    def test_unknown_error(self):
        client = AssistantClient(llm=_mock_llm(error=RuntimeError("connection reset")))
        with self.assertRaises(AssistantError) as ctx:
            asyncio.run(client.get_response("hello"))
        self.assertIs(type(ctx.exception), AssistantError)
        self.assertEqual(
            str(ctx.exception), "Failed to get response from AI assistant"
        )
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_classify_provider_error_messages(self):
        self.assertEqual(
            str(classify_provider_error(Exception("rate limit"))),
            "Rate limit exceeded. Please try again later.",
        )
        self.assertIsInstance(
            classify_provider_error(Exception("rate_limit_exceeded")),
            AssistantRateLimitError,
        )


if __name__ == "__main__":
    unittest.main()
