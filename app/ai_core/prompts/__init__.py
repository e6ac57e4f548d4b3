"""Prompts package."""

from app.ai_core.prompts.chat import create_chat_messages

__all__ = [
    "create_chat_messages",
]
