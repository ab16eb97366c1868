"""Validation of canonical numeric text against field constraints.

Responsibilities:
- Evaluate required, format, decimal-place, and range rules in a fixed order.
- Recognize in-progress tokens (`-`, `.`, `-.`) as legal partial input.
- Provide the half-up rounding used when a field loses focus.

Validation never raises for user text: every failure is reported as a
`ValidationVerdict` carrying an `ErrorKind` and a user-facing message.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal
import re

from .models.datatypes import (
    VALID_VERDICT,
    Constraints,
    ErrorKind,
    ValidationVerdict,
)

_DECIMAL_PATTERN = re.compile(r"^-?[0-9]*(\.[0-9]*)?$")
_INTEGER_PATTERN = re.compile(r"^-?[0-9]*$")

_REQUIRED_MESSAGE = "Input is required."
_DECIMAL_FORMAT_MESSAGE = (
    "Only half-width digits, a decimal point, and a leading minus sign are allowed."
)
_INTEGER_FORMAT_MESSAGE = "Only half-width integers and a leading minus sign are allowed."
_UNPARSEABLE_MESSAGE = "Enter a valid half-width number."


def is_in_progress(value: str, allow_decimal: bool = True) -> bool:
    """Return whether `value` is an incomplete but legal prefix of a number."""

    if value == "-":
        return True
    return allow_decimal and value in {".", "-."}


def fraction_digit_count(value: str) -> int:
    """Return the number of digits after the decimal point (0 when there is none)."""

    _, separator, fraction = value.partition(".")
    return len(fraction) if separator else 0


def format_bound(bound: float) -> str:
    """Render a range bound for messages without a trailing `.0` on integral floats."""

    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def _error(kind: ErrorKind, message: str) -> ValidationVerdict:
    """Build an error verdict."""

    return ValidationVerdict(has_error=True, message=message, kind=kind)


def validate_canonical(value: str, constraints: Constraints) -> ValidationVerdict:
    """Validate a canonical value.

    Rules are evaluated in this order and the first failure wins, except for the
    range checks, where a maximum violation overrides a minimum violation:

    1. required and empty;
    2. empty and optional (valid);
    3. format (digits, one optional `.` when decimals are allowed, leading `-`);
    4. in-progress tokens (valid, flagged in progress);
    5. numeric conversion;
    6. fraction digit count against `decimal_places`;
    7. `min_value` and `max_value`.

    Args:
        value: Canonical text produced by the normalizer.
        constraints: Constraints for this evaluation.

    Returns:
        The validation verdict.
    """

    if value == "":
        if constraints.required:
            return _error(ErrorKind.REQUIRED, _REQUIRED_MESSAGE)
        return VALID_VERDICT

    pattern = _DECIMAL_PATTERN if constraints.allow_decimal else _INTEGER_PATTERN
    if pattern.fullmatch(value) is None:
        message = (
            _DECIMAL_FORMAT_MESSAGE if constraints.allow_decimal else _INTEGER_FORMAT_MESSAGE
        )
        return _error(ErrorKind.FORMAT, message)

    if is_in_progress(value, constraints.allow_decimal):
        return ValidationVerdict(is_in_progress=True)

    try:
        numeric_value = float(value)
    except ValueError:
        # Unreachable for text that passed the format pattern.
        return _error(ErrorKind.FORMAT, _UNPARSEABLE_MESSAGE)

    places = constraints.decimal_places
    if constraints.allow_decimal and places is not None:
        if fraction_digit_count(value) > places:
            return _error(
                ErrorKind.DECIMAL_PLACES,
                f"At most {places} decimal place(s) are allowed.",
            )

    verdict = VALID_VERDICT
    if constraints.min_value is not None and numeric_value < constraints.min_value:
        verdict = _error(
            ErrorKind.BELOW_MINIMUM,
            f"Enter a value of at least {format_bound(constraints.min_value)}.",
        )
    if constraints.max_value is not None and numeric_value > constraints.max_value:
        verdict = _error(
            ErrorKind.ABOVE_MAXIMUM,
            f"Enter a value of at most {format_bound(constraints.max_value)}.",
        )
    return verdict


def round_half_up(value: str, decimal_places: int) -> str:
    """Round canonical numeric text half-up to exactly `decimal_places` fraction digits.

    Args:
        value: Complete canonical number (not an in-progress token).
        decimal_places: Non-negative number of fraction digits to keep.

    Returns:
        Positional-notation text with exactly `decimal_places` fraction digits.
    """

    context = Context(prec=max(28, len(value) + decimal_places + 2))
    quantum = Decimal(1).scaleb(-decimal_places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=context)
    return f"{rounded:f}"
