"""Shared utilities for the backend."""
from utils.case import dict_keys_to_snake
from utils.numbers import coerce_int, format_inr, optional_number

__all__ = [
    "coerce_int",
    "dict_keys_to_snake",
    "format_inr",
    "optional_number",
]
