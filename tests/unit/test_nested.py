"""
Unit tests for nested validation (as_object / as_list / as_list_object).
"""
import pytest

from lean_validator.config import settings

ZIP = r"^\d{3}-\d{4}$"


def address_rules(child):
    child.field("post_code").required().regex(ZIP)


class TestAsObject:
    def test_success_writes_child_output(self, make_validator):
        data = {"address": {"post_code": "123-4567", "town": "Shibuya", "city": "Tokyo"}}
        v = make_validator(data)
        v.field("address").required().as_object(
            lambda a: (
                a.field("post_code").required().regex(ZIP),
                a.field("town").required().string(),
                a.field("city").required().string(),
            )
        )
        assert v.validated_data() == data

    def test_undeclared_child_fields_are_dropped(self, make_validator):
        v = make_validator({"address": {"post_code": "123-4567", "extra": 1}})
        v.field("address").as_object(address_rules)
        assert v.validated_data() == {"address": {"post_code": "123-4567"}}

    def test_child_errors_merge_under_parent(self, make_validator):
        v = make_validator({"address": {"post_code": "1231234"}})
        v.field("address").as_object(address_rules)
        assert v.errors.has("address.post_code")
        assert not v.errors.has("address")
        assert "address" not in v.session._validated

    def test_missing_parent_is_empty_object(self, make_validator):
        v = make_validator({})
        v.field("address").as_object(address_rules)
        assert v.errors.paths() == ["address.post_code"]

    def test_missing_parent_with_optional_children(self, make_validator):
        v = make_validator({})
        v.field("address").as_object(lambda a: a.field("post_code").optional().regex(ZIP))
        assert v.is_valid()
        assert v.validated_data() == {"address": {}}

    @pytest.mark.parametrize("value", ["", "tokyo", 123, ["a"]])
    def test_non_mapping_fails_parent_only(self, make_validator, value):
        v = make_validator({"address": value})
        v.field("address", "Address is broken").as_object(address_rules)
        assert v.errors.to_dict() == {"address": ["Address is broken"]}

    def test_optional_parent_skips_children(self, make_validator):
        v = make_validator({})
        v.field("address").optional().as_object(address_rules)
        assert v.is_valid()
        assert v.validated_data() == {}

    def test_required_parent_fails_first(self, make_validator):
        v = make_validator({})
        v.field("address").required().as_object(address_rules)
        assert v.errors.to_dict() == {"address": [settings.REQUIRED_MESSAGE]}

    def test_object_containing_list(self, make_validator):
        data = {"address": {"post_code": "123-4567", "cities": ["Tokyo", "Osaka"]}}
        v = make_validator(data)
        v.field("address").required().as_object(
            lambda a: (
                a.field("post_code").required().regex(ZIP),
                a.field("cities").required().as_list("string"),
            )
        )
        assert v.validated_data() == data

    def test_child_shares_rule_table(self, rules, make_validator):
        rules.register_builtin("even", lambda value: isinstance(value, int) and value % 2 == 0)
        v = make_validator({"box": {"n": 3}})
        v.field("box").as_object(lambda b: b.field("n").rule("even"))
        assert v.errors.has("box.n")


class TestAsList:
    def test_success_preserves_order(self, make_validator):
        v = make_validator({"tags": ["a", "b", "c"]})
        v.field("tags").as_list("string")
        assert v.validated_data() == {"tags": ["a", "b", "c"]}

    def test_tags_scenario(self, make_validator):
        v = make_validator({"tags": ["ok", 123]})
        v.field("tags").as_list("string")
        assert v.errors.has("tags.1")
        assert not v.errors.has("tags.0")
        assert not v.errors.has("tags")

    def test_fail_slow_counts_every_failure(self, make_validator):
        v = make_validator({"nums": [1, "x", 3, "y", None]})
        v.field("nums").as_list("int")
        assert v.errors.paths() == ["nums.1", "nums.3", "nums.4"]
        assert "nums" not in v.session._validated

    def test_rule_args_and_message(self, make_validator):
        v = make_validator({"ages": [20, 10]})
        v.field("ages").as_list("int", 18, 99, message="Adults only")
        assert v.errors.to_dict() == {"ages.1": ["Adults only"]}

    def test_element_message_defaults_to_parent_message(self, make_validator):
        v = make_validator({"tags": [1]})
        v.field("tags", "Tags must be text").as_list("string")
        assert v.errors.first("tags.0") == "Tags must be text"

    def test_missing_is_empty_list(self, make_validator):
        v = make_validator({})
        v.field("tags").as_list("string")
        assert v.validated_data() == {"tags": []}

    def test_non_list_fails_parent_only(self, make_validator):
        v = make_validator({"tags": "a,b"})
        v.field("tags").as_list("string")
        assert v.errors.paths() == ["tags"]

    def test_predicate_rule(self, make_validator):
        v = make_validator({"scores": [10, 60]})
        v.field("scores").as_list(lambda x: x >= 50)
        assert v.errors.paths() == ["scores.0"]

    def test_rewriting_rule_output(self, make_validator):
        from lean_validator.models.rule_reference import RuleOutcome

        v = make_validator({"codes": [" a ", "b "]})
        v.field("codes").as_list(lambda x: RuleOutcome.rewrite(x.strip()))
        assert v.validated_data() == {"codes": ["a", "b"]}

    def test_bound_chain_method_as_rule(self, make_validator):
        v = make_validator({"tags": ["a", 1]})
        v.field("tags").as_list(v.field("tags").string)
        assert v.errors.paths() == ["tags.1"]


    def test_skipped_elements_are_left_out(self, make_validator):
        from lean_validator.models.rule_reference import uses_chain

        @uses_chain
        def optional_string(chain):
            chain.optional().string()

        v = make_validator({"tags": ["a", None, "b"]})
        v.field("tags").as_list(optional_string)
        assert v.is_valid()
        assert v.validated_data() == {"tags": ["a", "b"]}

class TestAsListObject:
    @staticmethod
    def user_rules(u):
        u.field("name").required().string()
        u.field("age").required().int(18)

    def test_success(self, make_validator):
        users = [{"name": "A", "age": 20}, {"name": "B", "age": 30}]
        v = make_validator({"users": users})
        v.field("users").as_list_object(self.user_rules)
        assert v.validated_data() == {"users": users}

    def test_nested_error_paths(self, make_validator):
        users = [{"name": "A", "age": 20}, {"name": "B", "age": 30}, {"name": "C", "age": 5}]
        v = make_validator({"users": users})
        v.field("users").as_list_object(self.user_rules)
        assert v.errors.paths() == ["users.2.age"]

    def test_non_object_element(self, make_validator):
        v = make_validator({"users": [{"name": "A", "age": 20}, "nope", {"name": "", "age": 40}]})
        v.field("users").as_list_object(self.user_rules)
        assert v.errors.to_dict() == {
            "users.1": [settings.NOT_AN_OBJECT_MESSAGE],
            "users.2.name": [settings.REQUIRED_MESSAGE],
        }

    def test_missing_is_empty_list(self, make_validator):
        v = make_validator({})
        v.field("users").as_list_object(self.user_rules)
        assert v.validated_data() == {"users": []}

    def test_non_list_fails_parent_only(self, make_validator):
        v = make_validator({"users": {"name": "A"}})
        v.field("users", "Users must be a list").as_list_object(self.user_rules)
        assert v.errors.to_dict() == {"users": ["Users must be a list"]}

    def test_deep_nesting(self, make_validator):
        data = {"groups": [{"members": [{"name": "A", "age": 20}, {"name": "B", "age": 1}]}]}
        v = make_validator(data)
        v.field("groups").as_list_object(
            lambda g: g.field("members").as_list_object(self.user_rules)
        )
        assert v.errors.paths() == ["groups.0.members.1.age"]

