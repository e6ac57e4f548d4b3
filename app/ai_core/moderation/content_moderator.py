"""
Content Moderation Module

Rule-based scoring of free text for profanity and spam-like patterns.

Responsibilities:
- Score text against the blocklist (whole-word) and spam pattern rules
- Decide allow / warn / block from the accumulated score
- Sanitize text on the warn path (mask flagged words, tame repetition and caps)

The moderator is pure: no I/O, no mutable state, safe to share across threads.
"""

import re
from typing import List, Optional

from app.ai_core.moderation.rules import DEFAULT_RULES, ModerationRules
from app.models.moderation import (
    ModerationAction,
    ModerationResult,
    ModerationTrigger,
)

REASON_TOO_SHORT = "Content too short"
REASON_TOO_LONG = "Content too long (potential spam)"
REASON_HIGH_RISK = "High risk content detected"
REASON_POTENTIALLY_INAPPROPRIATE = "Potentially inappropriate content"
REASON_FLAGGED_WORDS = "Contains flagged words"

_UPPERCASE_RUN = re.compile(r"[A-Z]{5,}")


class ContentModerator:
    """
    Deterministic content moderator.

    Rules are injected at construction; the default instance uses the
    built-in blocklist and spam patterns.
    """

    def __init__(self, rules: Optional[ModerationRules] = None):
        self.rules = rules or DEFAULT_RULES
        # Runs of 4+ identical characters; mask characters are left alone so
        # masked words keep their length
        self._repeated_run = re.compile(
            rf"([^\n{re.escape(self.rules.mask_char)}])\1{{3,}}"
        )

    def evaluate(self, text: str) -> ModerationResult:
        """
        Score text and decide what to do with it.

        Args:
            text: Raw user text (any string, including empty)

        Returns:
            ModerationResult with decision, reason, confidence and flagged words
        """
        rules = self.rules
        normalized = text.lower().strip()

        if len(normalized) < rules.min_length:
            return ModerationResult(
                is_appropriate=False,
                reason=REASON_TOO_SHORT,
                confidence=rules.too_short_confidence,
                suggested_action=ModerationAction.BLOCK,
                trigger=ModerationTrigger.TOO_SHORT,
            )

        if len(text) > rules.max_length:
            return ModerationResult(
                is_appropriate=False,
                reason=REASON_TOO_LONG,
                confidence=rules.too_long_confidence,
                suggested_action=ModerationAction.BLOCK,
                trigger=ModerationTrigger.TOO_LONG,
            )

        flagged_words: List[str] = []
        inappropriate_score = 0.0
        for term, pattern in rules.term_patterns:
            matches = len(pattern.findall(normalized))
            if matches:
                if term not in flagged_words:
                    flagged_words.append(term)
                inappropriate_score += matches * rules.word_weight

        spam_score = 0.0
        for pattern in rules.compiled_spam_patterns:
            matches = sum(1 for _ in pattern.finditer(text))
            if matches:
                spam_score += matches * rules.pattern_weight

        total_score = inappropriate_score + spam_score

        if total_score >= rules.block_threshold:
            action = ModerationAction.BLOCK
            reason = REASON_HIGH_RISK
            trigger = ModerationTrigger.SCORE
        elif total_score >= rules.warn_threshold:
            action = ModerationAction.WARN
            reason = REASON_POTENTIALLY_INAPPROPRIATE
            trigger = ModerationTrigger.SCORE
        elif flagged_words:
            action = ModerationAction.WARN
            reason = REASON_FLAGGED_WORDS
            trigger = ModerationTrigger.FLAGGED_WORDS
        else:
            action = ModerationAction.ALLOW
            reason = ""
            trigger = ModerationTrigger.NONE

        return ModerationResult(
            is_appropriate=action == ModerationAction.ALLOW,
            reason=reason,
            confidence=min(total_score, 1.0),
            flagged_words=tuple(flagged_words) or None,
            suggested_action=action,
            trigger=trigger,
        )

    def sanitize(self, text: str) -> str:
        """
        Mask blocklist terms and normalize repetition and capitalization.

        Independent of evaluate(); callers apply it on the warn path.
        Idempotent: sanitize(sanitize(x)) == sanitize(x).

        Args:
            text: Raw user text

        Returns:
            Sanitized text, stripped of surrounding whitespace
        """
        mask_char = self.rules.mask_char
        sanitized = text

        # 1. Mask flagged words, one mask character per matched character
        for _, pattern in self.rules.term_patterns:
            sanitized = pattern.sub(lambda m: mask_char * len(m.group(0)), sanitized)

        # 2. "aaaaaa" -> "aaa"
        sanitized = self._collapse_repeats(sanitized)

        # 3. "HELLOO" -> "Helloo"
        sanitized = _UPPERCASE_RUN.sub(
            lambda m: m.group(0)[0] + m.group(0)[1:].lower(), sanitized
        )

        # Lowercasing can join a run with its neighbours ("ABCDEeee")
        sanitized = self._collapse_repeats(sanitized)

        return sanitized.strip()

    def is_spam_like(self, text: str) -> bool:
        """True when text is blocked by the length gate for oversized content."""
        result = self.evaluate(text)
        return result.is_blocked and result.trigger == ModerationTrigger.TOO_LONG

    def contains_profanity(self, text: str) -> bool:
        """True when any blocklist term appears in text."""
        return bool(self.evaluate(text).flagged_words)

    def _collapse_repeats(self, text: str) -> str:
        return self._repeated_run.sub(lambda m: m.group(1) * 3, text)


_default_moderator = ContentModerator()


def get_moderator() -> ContentModerator:
    """Return the shared moderator built from the built-in rules."""
    return _default_moderator


def evaluate(text: str) -> ModerationResult:
    return _default_moderator.evaluate(text)


def sanitize(text: str) -> str:
    return _default_moderator.sanitize(text)


def is_spam_like(text: str) -> bool:
    return _default_moderator.is_spam_like(text)


def contains_profanity(text: str) -> bool:
    return _default_moderator.contains_profanity(text)
