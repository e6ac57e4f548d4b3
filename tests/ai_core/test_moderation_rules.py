"""
Unit Tests for Moderation Rules

Tests rule injection into the moderator and loading rules from YAML.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from pydantic import ValidationError

from app.ai_core.moderation import (
    DEFAULT_RULES,
    ContentModerator,
    ModerationRules,
    RulesError,
    load_rules,
)
from app.ai_core.moderation.rules import (
    BLOCK_THRESHOLD,
    PATTERN_WEIGHT,
    WARN_THRESHOLD,
    WORD_WEIGHT,
)
from app.models.moderation import ModerationAction


def test_policy_constants():
    assert WORD_WEIGHT == 0.3
    assert PATTERN_WEIGHT == 0.2
    assert WARN_THRESHOLD == 0.5
    assert BLOCK_THRESHOLD == 1.0
    assert DEFAULT_RULES.max_length == 2000
    assert DEFAULT_RULES.min_length == 2


def test_default_blocklist_groups():
    assert DEFAULT_RULES.blocklist[0] == "fuck"
    assert "terrorist" in DEFAULT_RULES.blocklist
    assert DEFAULT_RULES.blocklist[-1] == "get rich quick"
    assert len(DEFAULT_RULES.spam_patterns) == 5


def test_custom_rules_replace_defaults():
    moderator = ContentModerator(ModerationRules(blocklist=("banana",), spam_patterns=()))

    result = moderator.evaluate("I like banana")
    assert result.flagged_words == ("banana",)
    assert result.suggested_action == ModerationAction.WARN

    # Default terms and patterns no longer apply
    assert moderator.evaluate("I hate this https://a.com").suggested_action == ModerationAction.ALLOW
    assert moderator.sanitize("banana split") == "****** split"


def test_blocklist_terms_are_normalized():
    rules = ModerationRules(blocklist=("  Banana ", "", "KIWI"))
    assert rules.blocklist == ("banana", "kiwi")


def test_custom_thresholds():
    rules = ModerationRules(blocklist=("banana",), spam_patterns=(), block_threshold=0.3)
    result = ContentModerator(rules).evaluate("banana")
    assert result.suggested_action == ModerationAction.BLOCK


def test_custom_mask_char():
    moderator = ContentModerator(ModerationRules(mask_char="#"))
    assert moderator.sanitize("damn it") == "#### it"


def test_invalid_mask_char():
    with pytest.raises(ValidationError):
        ModerationRules(mask_char="**")
    with pytest.raises(RulesError):
        ModerationRules.from_dict({"mask_char": "**"})


def test_rules_are_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_RULES.word_weight = 5.0


def test_from_dict_ignores_unknown_keys():
    rules = ModerationRules.from_dict({"word_weight": 0.4, "colour": "blue"})
    assert rules.word_weight == 0.4
    assert not hasattr(rules, "colour")


def test_integer_weights_are_accepted():
    rules = ModerationRules.from_dict({"block_threshold": 2})
    assert rules.block_threshold == 2.0


def test_load_rules_without_path_returns_defaults():
    assert load_rules(None) is DEFAULT_RULES
    assert load_rules("") is DEFAULT_RULES


def test_load_rules_from_yaml(tmp_path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text(
        "blocklist:\n"
        "  - Banana\n"
        "  - kiwi fruit\n"
        "warn_threshold: 0.25\n",
        encoding="utf-8",
    )

    rules = load_rules(rules_file)

    assert rules.blocklist == ("banana", "kiwi fruit")
    assert rules.spam_patterns == DEFAULT_RULES.spam_patterns
    assert rules.warn_threshold == 0.25

    result = ContentModerator(rules).evaluate("banana bread")
    assert result.suggested_action == ModerationAction.WARN
    assert result.reason == "Potentially inappropriate content"


def test_load_rules_missing_file(tmp_path):
    with pytest.raises(RulesError):
        load_rules(tmp_path / "missing.yaml")


def test_load_rules_rejects_bad_pattern(tmp_path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text("spam_patterns:\n  - '([unclosed'\n", encoding="utf-8")
    with pytest.raises(RulesError):
        load_rules(rules_file)


def test_load_rules_rejects_non_list_blocklist(tmp_path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text("blocklist: banana\n", encoding="utf-8")
    with pytest.raises(RulesError):
        load_rules(rules_file)


@pytest.mark.parametrize(
    "line",
    [
        "word_weight: heavy",
        "min_length: '2'",
        "max_length: 2000.5",
        "too_short_confidence: 1.5",
        "blocklist:\n  - 42",
    ],
)
def test_load_rules_rejects_mistyped_values(tmp_path, line):
    """A mistyped rules file fails at load time, never during evaluate()."""
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text(line + "\n", encoding="utf-8")
    with pytest.raises(RulesError):
        load_rules(rules_file)


def test_load_rules_rejects_non_mapping(tmp_path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text("- banana\n", encoding="utf-8")
    with pytest.raises(RulesError):
        load_rules(rules_file)
