"""
FPL Utilities Module

Lenient parsing and formatting helpers shared across the domain:
- Numeric parsing that never raises (feed values arrive as strings or may be missing)
- Price and difficulty formatting for reasoning text and reports
"""

import math
from typing import Any, Optional


def parse_decimal(value: Any, default: float = 0.0) -> float:
    """
    Parse a decimal value from the feed, defaulting on anything unusable

    Args:
        value: Raw value (e.g. "5.0", 5, None, "", "n/a")
        default: Value returned when parsing fails

    Returns:
        Parsed finite float, or the default
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(parsed):
        return default
    return parsed


def parse_int(value: Any, default: int = 0) -> int:
    """Parse an integer value from the feed, defaulting on anything unusable."""
    parsed = parse_decimal(value, default=float("nan"))
    if math.isnan(parsed):
        return default
    return int(parsed)


def parse_optional_int(value: Any) -> Optional[int]:
    """Parse an integer that may legitimately be absent (None stays None)."""
    if value is None or value == "":
        return None
    parsed = parse_decimal(value, default=float("nan"))
    if math.isnan(parsed):
        return None
    return int(parsed)


def format_price(now_cost: int) -> str:
    """Format a price held in tenths of a million, e.g. 125 -> '£12.5m'."""
    return f"£{now_cost / 10:.1f}m"


def difficulty_label(difficulty: Optional[int]) -> str:
    """Human-readable fixture difficulty rating."""
    return {
        1: "Very Easy",
        2: "Easy",
        3: "Moderate",
        4: "Tough",
        5: "Very Tough",
    }.get(difficulty, "Unknown")
