"""
Unit tests for the Validator facade: whole-value mode, results and reports.
"""
import pytest

from lean_validator.config import settings
from lean_validator.validation.errors import ValidatedDataRequestedWhileInvalid
from lean_validator.validation.validator import Validator


class TestConstruction:
    def test_make(self):
        v = Validator.make({"a": 1})
        assert isinstance(v, Validator)
        assert v.is_valid()

    def test_none_input(self):
        v = Validator()
        v.field("name").required()
        assert v.errors.get("name") == [settings.REQUIRED_MESSAGE]

    def test_spawn_shares_rules(self, rules):
        v = Validator({}, rules=rules)
        child = v.spawn({"x": 1})
        assert child.rules is rules
        assert child.session is not v.session


class TestWholeValueMode:
    def test_scalar_passes(self):
        v = Validator(25)
        assert v.int(18, 99).is_ok()
        assert v.is_current_ok()
        assert v.validated_data() == {"__current_item__": 25}

    def test_scalar_error_on_unkeyed_path(self):
        v = Validator("abc")
        v.int(message="Must be int")
        assert v.is_current_error()
        assert v.errors.to_dict() == {"": ["Must be int"]}

    def test_apply_on_scalar(self):
        v = Validator(40)
        v.apply(lambda x, n: x >= n, 50, "Too low")
        assert v.errors.first("") == "Too low"

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            Validator(1).no_such_operation


class TestResults:
    def test_validity_matches_collector(self):
        v = Validator({"a": 1, "b": "x"})
        v.field("a").int()
        assert v.is_valid() and v.errors.is_empty()
        v.field("b").int()
        assert not v.is_valid() and not v.errors.is_empty()

    def test_validated_data_raises_when_invalid(self):
        v = Validator({"age": 10})
        v.field("age").required().int(18, 99)
        with pytest.raises(ValidatedDataRequestedWhileInvalid):
            v.validated_data()

    def test_only_declared_fields_in_output(self):
        v = Validator({"a": 1, "b": 2})
        v.field("a").int()
        assert v.validated_data() == {"a": 1}

    def test_errors_flat(self):
        v = Validator({})
        v.field("a").required("A first").apply(lambda x: False)
        v.field("a").required("A second")
        assert v.errors_flat() == {"a": "A first"}
        assert v.errors.get("a") == ["A first", "A second"]


class TestReport:
    def test_valid_report(self):
        v = Validator({"name": "Taro"})
        v.field("name").required().string()
        report = v.report()
        assert report.valid
        assert report.data == {"name": "Taro"}
        assert report.errors == {}

    def test_invalid_report(self):
        v = Validator({"tags": ["ok", 1]})
        v.field("tags", "Text only").as_list("string")
        report = v.report()
        assert not report.valid
        assert report.data is None
        assert report.errors == {"tags.1": ["Text only"]}
        assert report.flat == {"tags.1": "Text only"}
        assert report.messages == ["Text only"]
        assert report.first("tags.1") == "Text only"


class TestListInput:
    def test_list_fields_by_index(self):
        v = Validator(["a", "b"])
        v.field("0").required().string()
        v.field("1").required().string()
        assert v.is_valid()
        assert v.validated_data() == {"0": "a", "1": "b"}
