"""
Utility modules for Pagesift.
"""
from .validators import is_valid_url, clean_and_validate_url, parse_price
from .text_cleaning import (
    normalize_whitespace,
    normalize_label,
    br_to_newlines,
    collapse_lines,
    dedupe_preserving_order,
)

__all__ = [
    "is_valid_url",
    "clean_and_validate_url",
    "parse_price",
    "normalize_whitespace",
    "normalize_label",
    "br_to_newlines",
    "collapse_lines",
    "dedupe_preserving_order",
]
