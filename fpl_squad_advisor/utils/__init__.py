"""Shared helpers for parsing feed values and formatting output."""

from .helpers import (
    difficulty_label,
    format_price,
    parse_decimal,
    parse_int,
    parse_optional_int,
)

__all__ = [
    "parse_decimal",
    "parse_int",
    "parse_optional_int",
    "format_price",
    "difficulty_label",
]
