"""Display formatting for canonical numeric text.

Responsibilities:
- Insert grouping marks into the integer portion of a canonical value.
- Leave in-progress tokens and fraction digits exactly as typed.
"""

from __future__ import annotations

from ..models.datatypes import IN_PROGRESS_TOKENS

_GROUP_SIZE = 3


def group_integer_digits(digits: str, grouping_mark: str = ",") -> str:
    """Group a run of ASCII digits into 3-digit clusters from the right."""

    head_length = len(digits) % _GROUP_SIZE or _GROUP_SIZE
    clusters = [digits[:head_length]]
    clusters.extend(
        digits[start : start + _GROUP_SIZE]
        for start in range(head_length, len(digits), _GROUP_SIZE)
    )
    return grouping_mark.join(cluster for cluster in clusters if cluster)


def format_display(
    value: str,
    allow_decimal: bool = True,
    decimal_places: int | None = None,
    grouping_mark: str = ",",
) -> str:
    """Format a canonical value for display.

    Args:
        value: Canonical half-width numeric text.
        allow_decimal: Whether the field accepts a fractional part.
        decimal_places: Configured fraction digits. Accepted for parity with the
            blur-time rounding step; it never changes the digit count here.
        grouping_mark: Separator inserted between integer clusters.

    Returns:
        Grouped display text. Values that are not plain canonical numbers are
        returned unchanged.
    """

    if value in IN_PROGRESS_TOKENS:
        return value

    integer_part, separator, fraction_part = value.partition(".")
    if separator and not allow_decimal:
        return value

    sign = ""
    if integer_part.startswith("-"):
        sign, integer_part = "-", integer_part[1:]
    if integer_part and not (integer_part.isascii() and integer_part.isdigit()):
        return value

    return f"{sign}{group_integer_digits(integer_part, grouping_mark)}{separator}{fraction_part}"
