"""
JSON Schemas for validator configuration and results.

Two schemas:
1. RULE_TABLE_SCHEMA        — caller-supplied rule-table config (aliases)
2. VALIDATION_REPORT_SCHEMA — serialised ValidationReport, for consumers
                              that render errors outside Python
"""

# =============================================================================
# 1. Rule table config
# =============================================================================
RULE_TABLE_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "aliases": {
            "type": "object",
            "description": "Alias name -> built-in rule with leading args",
            "propertyNames": {"pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
            "additionalProperties": {
                "type": "object",
                "additionalProperties": False,
                "required": ["target"],
                "properties": {
                    "target": {
                        "type": "string",
                        "minLength": 1,
                        "description": "Name of a built-in rule",
                    },
                    "args": {
                        "type": "array",
                        "description": "Arguments prepended to the caller's arguments",
                    },
                },
            },
        },
    },
}

# =============================================================================
# 2. Validation report
# =============================================================================
VALIDATION_REPORT_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["valid", "errors", "flat", "messages", "data"],
    "properties": {
        "valid": {"type": "boolean"},
        "errors": {
            "type": "object",
            "additionalProperties": {
                "type": "array",
                "minItems": 1,
                "items": {"type": "string"},
            },
        },
        "flat": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "messages": {
            "type": "array",
            "items": {"type": "string"},
        },
        "data": {"type": ["object", "null"]},
    },
}
