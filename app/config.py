from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "TeamDesk"
    debug: bool = False

    # AI assistant (OpenAI models via gen_ai_hub proxy)
    openai_model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1000
    assistant_system_prompt: str = (
        "You are a helpful AI assistant for an internal team dashboard. "
        "Provide clear, concise, and helpful responses to team members' questions. "
        "Be professional but friendly."
    )

    # Storage
    data_file: str = ""  # JSON snapshot path; empty keeps data in memory only

    # Moderation
    moderation_rules_file: str = ""  # YAML rules; empty uses the built-in rules

    # Pagination defaults
    messages_page_size: int = 10
    kb_page_size: int = 50

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
