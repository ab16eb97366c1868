"""Numeric text normalization.

Responsibilities:
- Fold full-width digits and punctuation into their half-width equivalents.
- Strip grouping separators so the result is a canonical numeric candidate.

Normalization is deliberately minimal: characters it does not know are kept, so a
field that is mid-edit is never mangled. Rejecting them is the validator's job.
"""

from __future__ import annotations

from ..models.datatypes import RawInput

_FULL_WIDTH_OFFSET = 0xFEE0

_FULL_WIDTH_DIGITS = {
    code_point: code_point - _FULL_WIDTH_OFFSET
    for code_point in range(ord("０"), ord("９") + 1)
}

# U+30FC is what Japanese IMEs commit for the minus key.
_PUNCTUATION = {
    ord("．"): ".",
    ord("－"): "-",
    ord("ー"): "-",
}

_GROUPING_SEPARATORS = {
    ord(","): None,
    ord("，"): None,
}

_TRANSLATION_TABLE = {**_FULL_WIDTH_DIGITS, **_PUNCTUATION, **_GROUPING_SEPARATORS}


def normalize_numeric_text(raw: RawInput) -> str:
    """Return the canonical half-width candidate for raw field input.

    Args:
        raw: Text from the host platform, a number bound by the caller, or `None`.

    Returns:
        Text with full-width digits, period, and minus folded to ASCII and
        grouping separators removed. `None` yields an empty string.
    """

    if raw is None:
        return ""
    return str(raw).translate(_TRANSLATION_TABLE)
