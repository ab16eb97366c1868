"""Pure text helpers for numeric field input.

This package provides the normalization and display-formatting building blocks
driven by the field controller.
"""

from .formatter import format_display, group_integer_digits
from .normalizer import normalize_numeric_text

__all__ = [
    "format_display",
    "group_integer_digits",
    "normalize_numeric_text",
]
