# Content moderation module
from app.ai_core.moderation.rules import (
    DEFAULT_RULES,
    ModerationRules,
    RulesError,
    load_rules,
)
from app.ai_core.moderation.content_moderator import (
    ContentModerator,
    contains_profanity,
    evaluate,
    get_moderator,
    is_spam_like,
    sanitize,
)

__all__ = [
    "DEFAULT_RULES",
    "ModerationRules",
    "RulesError",
    "load_rules",
    "ContentModerator",
    "contains_profanity",
    "evaluate",
    "get_moderator",
    "is_spam_like",
    "sanitize",
]
