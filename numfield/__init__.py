"""Top-level package for numfield.

This package mediates a numeric text field that accepts full-width digits and
punctuation while reporting a canonical half-width value, without disturbing an
open IME composition. The main entry point is `NumberFieldController`.
"""

from .controller import NumberFieldController
from .models.datatypes import Constraints, FieldProps, RawEvent, ValidationVerdict
from .text.formatter import format_display
from .text.normalizer import normalize_numeric_text
from .validation import validate_canonical

__all__ = [
    "Constraints",
    "FieldProps",
    "NumberFieldController",
    "RawEvent",
    "ValidationVerdict",
    "format_display",
    "normalize_numeric_text",
    "validate_canonical",
    "__version__",
]

__version__ = "0.1.0"
