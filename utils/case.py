"""
Key-case normalization: the portal client sends camelCase, while the stores and
rule engine read snake_case.
"""
from typing import Any

from pydantic.alias_generators import to_snake


def dict_keys_to_snake(obj: Any) -> Any:
    """Recursively convert dict keys from camelCase to snake_case. Snake keys pass through unchanged."""
    if isinstance(obj, dict):
        return {to_snake(k): dict_keys_to_snake(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [dict_keys_to_snake(x) for x in obj]
    return obj
