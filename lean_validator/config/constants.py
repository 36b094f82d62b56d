"""
Constants used across the validator.
"""
from typing import Dict, List

# =============================================================================
# Session keys
# =============================================================================
# Key under which a scalar value is stored when a session is made from it.
CURRENT_ITEM_KEY: str = "__current_item__"

# Path separator for error keys and sanitizer field names.
PATH_SEPARATOR: str = "."

# =============================================================================
# Regex patterns
# =============================================================================
ALNUM_PATTERN: str = r"^[a-zA-Z0-9]+$"
ALPHA_PATTERN: str = r"^[a-zA-Z]+$"
NUMERIC_PATTERN: str = r"^[0-9]+$"
ALPHA_DASH_PATTERN: str = r"^[a-zA-Z0-9_\-]+$"

# =============================================================================
# Default rule aliases (name -> target rule + leading args)
# =============================================================================
DEFAULT_RULE_ALIASES: Dict[str, dict] = {
    "alnum": {"target": "regex", "args": [ALNUM_PATTERN]},
    "alpha": {"target": "regex", "args": [ALPHA_PATTERN]},
    "numeric": {"target": "regex", "args": [NUMERIC_PATTERN]},
    "alpha_dash": {"target": "regex", "args": [ALPHA_DASH_PATTERN]},
}

# =============================================================================
# Sanitizer
# =============================================================================
SANITIZER_DEFAULT_RULES: List[str] = ["utf8", "trim"]
SANITIZER_WILDCARD: str = "*"
