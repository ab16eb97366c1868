"""Shared typed data models for numfield.

This package contains dataclasses and enums used across the text helpers and
the field controller to avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    IN_PROGRESS_TOKENS,
    VALID_VERDICT,
    CompositionState,
    Constraints,
    ErrorKind,
    FieldProps,
    FieldRender,
    RawEvent,
    RawInput,
    ValidationVerdict,
)

__all__ = [
    "IN_PROGRESS_TOKENS",
    "VALID_VERDICT",
    "CompositionState",
    "Constraints",
    "ErrorKind",
    "FieldProps",
    "FieldRender",
    "RawEvent",
    "RawInput",
    "ValidationVerdict",
]
