"""
Shared test fixtures for the validator test suite.
"""
import pytest

from lean_validator.validation.rule_table import RuleTable
from lean_validator.validation.validator import Validator


# ==========================================================================
# Rule tables
# ==========================================================================

@pytest.fixture
def rules():
    return RuleTable.default()


# ==========================================================================
# Inputs
# ==========================================================================

@pytest.fixture
def signup_input():
    return {
        "name": "Taro Yamada",
        "email": "taro@yamada.jp",
        "age": 25,
        "plan": "pro",
        "address": {
            "post_code": "123-4567",
            "city": "Tokyo",
        },
        "tags": ["news", "offers"],
        "users": [
            {"name": "Hanako", "age": 30},
            {"name": "Jiro", "age": 19},
        ],
    }


@pytest.fixture
def broken_signup_input():
    return {
        "name": "",
        "email": "not-an-email",
        "age": 10,
        "plan": "gold",
        "address": {"post_code": "1231234"},
        "tags": ["ok", 123],
        "users": [
            {"name": "Hanako", "age": 30},
            "not-an-object",
            {"name": "Jiro", "age": "old"},
        ],
    }


# ==========================================================================
# Validator factory
# ==========================================================================

@pytest.fixture
def make_validator(rules):
    def _make(data=None):
        return Validator(data, rules=rules)

    return _make


def configure_signup(v):
    """Field declarations shared by the unit and integration suites."""
    v.field("name").required().string()
    v.field("email").required().email()
    v.field("age", "Age must be 18-99").required().int(18, 99)
    v.field("plan").required().in_(["free", "pro"])
    v.field("address").as_object(
        lambda a: a.field("post_code").required().regex(r"^\d{3}-\d{4}$")
    )
    v.field("tags").as_list("string")
    v.field("users").as_list_object(
        lambda u: (
            u.field("name").required().string(),
            u.field("age").required().int(),
        )
    )
    return v


@pytest.fixture
def signup_configure():
    return configure_signup
