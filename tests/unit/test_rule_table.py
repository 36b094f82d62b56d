"""
Unit tests for RuleTable and its config loading (jsonschema + pydantic).
"""
import pytest
from pydantic import ValidationError

from lean_validator.models.validation_report import RuleSpec
from lean_validator.rules.builtin import BUILTIN_RULES
from lean_validator.validation.errors import RuleNotFoundError, RuleTableConfigError
from lean_validator.validation.rule_table import RuleTable
from lean_validator.validation.validator import Validator


class TestDefaultTable:
    def test_builtins_and_aliases(self):
        table = RuleTable.default()
        for name in BUILTIN_RULES:
            assert table.knows(name)
        for name in ("alnum", "alpha", "numeric", "alpha_dash"):
            assert table.knows(name)

    def test_lookup_alias(self):
        func, leading = RuleTable.default().lookup("numeric")
        assert func is BUILTIN_RULES["regex"]
        assert leading == [r"^[0-9]+$"]

    def test_lookup_unknown(self):
        with pytest.raises(RuleNotFoundError):
            RuleTable.default().lookup("nope")

    def test_tables_are_independent(self):
        first = RuleTable.default()
        first.register_builtin("even", lambda v: v % 2 == 0)
        assert not RuleTable.default().knows("even")


class TestRegistration:
    def test_alias_needs_known_target(self):
        with pytest.raises(RuleNotFoundError):
            RuleTable.default().register_alias("zip", "nope")

    def test_alias_used_by_validator(self):
        table = RuleTable.default().register_alias("zip", "regex", r"^\d{3}-\d{4}$")
        v = Validator({"zip": "1234567"}, rules=table)
        v.field("zip").rule("zip", "Bad zip")
        assert v.errors.get("zip") == ["Bad zip"]

    def test_copy_does_not_share_aliases(self):
        table = RuleTable.default()
        clone = table.copy().register_alias("zip", "regex", r"^\d{3}-\d{4}$")
        assert clone.knows("zip")
        assert not table.knows("zip")


class TestFromConfig:
    def test_loads_aliases(self):
        table = RuleTable.from_config({"aliases": {"zip": {"target": "regex", "args": [r"^\d{3}-\d{4}$"]}}})
        assert table.aliases["zip"] == RuleSpec(target="regex", args=[r"^\d{3}-\d{4}$"])
        assert table.knows("alnum")

    def test_empty_config(self):
        assert RuleTable.from_config({}).knows("string")

    @pytest.mark.parametrize("config", [
        {"aliases": {"zip": {"args": []}}},
        {"aliases": {"zip": {"target": "regex", "extra": 1}}},
        {"aliases": {"bad name": {"target": "regex"}}},
        {"aliases": []},
        {"unknown": {}},
    ])
    def test_rejects_invalid_config(self, config):
        with pytest.raises(RuleTableConfigError):
            RuleTable.from_config(config)

    def test_rejects_bad_target_name(self):
        with pytest.raises(RuleTableConfigError):
            RuleTable.from_config({"aliases": {"zip": {"target": "re-gex"}}})

    def test_unknown_target(self):
        with pytest.raises(RuleNotFoundError):
            RuleTable.from_config({"aliases": {"zip": {"target": "nope"}}})


class TestRuleSpec:
    def test_defaults(self):
        assert RuleSpec(target="regex").args == []

    def test_empty_target_rejected(self):
        with pytest.raises(ValidationError):
            RuleSpec(target="")
