# AI assistant module
from app.ai_core.assistant.assistant_client import (
    AssistantClient,
    AssistantError,
    AssistantRateLimitError,
    AssistantQuotaError,
    AssistantAuthError,
)

__all__ = [
    "AssistantClient",
    "AssistantError",
    "AssistantRateLimitError",
    "AssistantQuotaError",
    "AssistantAuthError",
]
