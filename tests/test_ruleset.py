"""
Tests for rule sets and their startup checks.
"""

import pytest

from game.board import Board
from game.ruleset import (
    CLASSIC_RULES,
    DEFAULT_RULES,
    RulesError,
    get_rules,
    validate_rules,
)


class TestRulesets:
    def test_default_is_hirn(self):
        assert DEFAULT_RULES["name"] == "hirn"
        assert DEFAULT_RULES["num_colors"] == 4
        assert DEFAULT_RULES["max_attempts"] == 99
        assert DEFAULT_RULES["max_time_ms"] == 90 * 60 * 1000
        assert DEFAULT_RULES["allow_duplicates"] is False

    def test_lookup_by_name(self):
        assert get_rules("classic") is CLASSIC_RULES

    def test_unknown_name_lists_available(self):
        with pytest.raises(KeyError, match="classic, hirn"):
            get_rules("expert")

    def test_shipped_rulesets_are_valid(self):
        assert validate_rules(DEFAULT_RULES) is DEFAULT_RULES
        assert validate_rules(CLASSIC_RULES) is CLASSIC_RULES


class TestValidation:
    """Misconfiguration is caught when a board is created."""

    def test_palette_smaller_than_code_without_repetition(self):
        rules = dict(DEFAULT_RULES, num_colors=3)
        with pytest.raises(RulesError, match="palette"):
            validate_rules(rules)
        with pytest.raises(RulesError):
            Board(rules=rules)

    def test_small_palette_fine_with_repetition(self):
        rules = dict(CLASSIC_RULES, num_colors=2)
        assert validate_rules(rules) is rules

    def test_non_positive_constants(self):
        with pytest.raises(RulesError, match="max_attempts"):
            validate_rules(dict(DEFAULT_RULES, max_attempts=0))
        with pytest.raises(RulesError, match="code_length"):
            validate_rules(dict(DEFAULT_RULES, code_length="4"))

    def test_too_many_colors(self):
        with pytest.raises(RulesError, match="At most 6"):
            validate_rules(dict(CLASSIC_RULES, num_colors=7))
