"""
Prompts for the team chat assistant.
"""

from typing import List

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage


def create_chat_messages(system_prompt: str, user_message: str) -> List[BaseMessage]:
    """
    Build the message list for a single chat turn.

    Args:
        system_prompt: Assistant persona / instructions
        user_message: Text to answer (already moderated)

    Returns:
        System and human messages for the LLM
    """
    return [
        SystemMessage(content=system_prompt),
        HumanMessage(content=user_message),
    ]
