"""
Moderation Rules

Static, immutable configuration for the content moderator: the blocklist,
the spam pattern rules, and the scoring policy constants.

Rules are injected into ContentModerator at construction. DEFAULT_RULES holds
the built-in tables; load_rules() reads an alternative set from YAML.
"""

import re
import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

# Scoring policy
WORD_WEIGHT = 0.3
PATTERN_WEIGHT = 0.2
WARN_THRESHOLD = 0.5
BLOCK_THRESHOLD = 1.0

# Length gates
MIN_LENGTH = 2
MAX_LENGTH = 2000
TOO_SHORT_CONFIDENCE = 0.9
TOO_LONG_CONFIDENCE = 0.8

MASK_CHAR = "*"

DEFAULT_BLOCKLIST: Tuple[str, ...] = (
    # Profanity
    "fuck",
    "shit",
    "damn",
    "bitch",
    "asshole",
    "bastard",
    # Hate speech indicators
    "hate",
    "kill",
    "die",
    "murder",
    "terrorist",
    # Spam phrases
    "click here",
    "buy now",
    "limited time",
    "act now",
    "free money",
    "make money fast",
    "work from home",
    "get rich quick",
)

DEFAULT_SPAM_PATTERNS: Tuple[str, ...] = (
    r"(.)\1{4,}",  # Repeated characters ("aaaaa")
    r"[A-Z]{10,}",  # Excessive caps
    r"\b\d{10,}\b",  # Long numbers (phone numbers etc.)
    r"https?://\S+",  # URLs
    r"[@#]\w+",  # Social media handles / hashtags
)


class RulesError(Exception):
    """Raised when a moderation rules file cannot be loaded."""

    pass


def compile_term(term: str) -> re.Pattern[str]:
    """Whole-word, case-insensitive matcher for a blocklist term."""
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE | re.ASCII)


class ModerationRules(BaseModel):
    """
    Immutable moderation configuration.

    blocklist order is significant: flagged words are reported in this order.
    Scalar values are strictly typed so a malformed rules file fails at load
    time instead of on the first evaluation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    blocklist: Tuple[str, ...] = Field(
        DEFAULT_BLOCKLIST, description="Whole-word terms, matched case-insensitively"
    )
    spam_patterns: Tuple[str, ...] = Field(
        DEFAULT_SPAM_PATTERNS, description="Regexes matched against the raw text"
    )
    word_weight: float = Field(WORD_WEIGHT, ge=0.0, strict=True)
    pattern_weight: float = Field(PATTERN_WEIGHT, ge=0.0, strict=True)
    warn_threshold: float = Field(WARN_THRESHOLD, ge=0.0, strict=True)
    block_threshold: float = Field(BLOCK_THRESHOLD, ge=0.0, strict=True)
    min_length: int = Field(MIN_LENGTH, ge=0, strict=True)
    max_length: int = Field(MAX_LENGTH, ge=1, strict=True)
    too_short_confidence: float = Field(
        TOO_SHORT_CONFIDENCE, ge=0.0, le=1.0, strict=True
    )
    too_long_confidence: float = Field(
        TOO_LONG_CONFIDENCE, ge=0.0, le=1.0, strict=True
    )
    mask_char: str = Field(MASK_CHAR, min_length=1, max_length=1, strict=True)

    _term_patterns: Tuple[Tuple[str, re.Pattern[str]], ...] = PrivateAttr(default=())
    _compiled_spam_patterns: Tuple[re.Pattern[str], ...] = PrivateAttr(default=())

    @field_validator("blocklist")
    @classmethod
    def normalize_blocklist(cls, terms: Tuple[str, ...]) -> Tuple[str, ...]:
        # Blocklist is matched against lowercased text
        return tuple(t.strip().lower() for t in terms if t.strip())

    @model_validator(mode="after")
    def compile_patterns(self) -> "ModerationRules":
        try:
            compiled = tuple(re.compile(p, re.ASCII) for p in self.spam_patterns)
        except re.error as e:
            raise ValueError(f"Invalid spam pattern: {e}") from e
        self._term_patterns = tuple((t, compile_term(t)) for t in self.blocklist)
        self._compiled_spam_patterns = compiled
        return self

    @property
    def term_patterns(self) -> Tuple[Tuple[str, re.Pattern[str]], ...]:
        return self._term_patterns

    @property
    def compiled_spam_patterns(self) -> Tuple[re.Pattern[str], ...]:
        return self._compiled_spam_patterns

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModerationRules":
        """
        Build rules from a mapping; missing keys keep the defaults.

        Args:
            data: Mapping with optional keys matching the field names

        Returns:
            ModerationRules instance

        Raises:
            RulesError: If a value has the wrong type or a pattern does not compile
        """
        unknown = set(data) - set(cls.model_fields)
        if unknown:
            logger.warning(f"Ignoring unknown moderation rule keys: {sorted(unknown)}")

        try:
            return cls.model_validate({k: v for k, v in data.items() if v is not None})
        except ValidationError as e:
            raise RulesError(f"Invalid moderation rules: {e}") from e


DEFAULT_RULES = ModerationRules()


def load_rules(path: Union[str, Path, None] = None) -> ModerationRules:
    """
    Load moderation rules from a YAML file.

    Args:
        path: YAML file path; None or empty returns DEFAULT_RULES

    Returns:
        ModerationRules instance

    Raises:
        RulesError: If the file is missing or malformed
    """
    if not path:
        return DEFAULT_RULES

    rules_path = Path(path)
    try:
        data = yaml.safe_load(rules_path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise RulesError(f"Cannot read moderation rules file {rules_path}: {e}") from e
    except yaml.YAMLError as e:
        raise RulesError(f"Invalid YAML in moderation rules file {rules_path}: {e}") from e

    if not isinstance(data, dict):
        raise RulesError(f"Moderation rules file {rules_path} must contain a mapping")

    rules = ModerationRules.from_dict(data)
    logger.info(
        f"Loaded moderation rules from {rules_path}: "
        f"{len(rules.blocklist)} terms, {len(rules.spam_patterns)} patterns"
    )
    return rules
