"""Core datatypes shared across numfield modules.

Responsibilities:
- Represent immutable records exchanged between the normalizer, validator,
  formatter, and the field controller.
- Provide explicit typing for the controller's configuration and rendering contract.

Key types:
- `Constraints`, `ValidationVerdict`, `ErrorKind`, `CompositionState`,
  `RawEvent`, `FieldProps`, and `FieldRender`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping

RawInput = str | int | float | None
"""Text (or a number) delivered by the host platform or by an external value binding."""

IN_PROGRESS_TOKENS = frozenset({"", "-", ".", "-."})
"""Canonical values that are incomplete but legal prefixes of a finished number."""


class CompositionState(str, Enum):
    """Input-method composition state of one field."""

    IDLE = "idle"
    COMPOSING = "composing"


class ErrorKind(str, Enum):
    """Field-level validation failures, in evaluation order."""

    REQUIRED = "required"
    FORMAT = "format"
    DECIMAL_PLACES = "decimal_places"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"


@dataclass(frozen=True, slots=True)
class Constraints:
    """Validation constraints for one evaluation.

    Attributes:
        required: Whether an empty value is an error.
        allow_decimal: Whether a fractional part is accepted.
        decimal_places: Maximum fraction digits, and the blur-time rounding target.
        min_value: Inclusive lower bound.
        max_value: Inclusive upper bound.
    """

    required: bool = False
    allow_decimal: bool = True
    decimal_places: int | None = None
    min_value: float | None = None
    max_value: float | None = None


@dataclass(frozen=True, slots=True)
class ValidationVerdict:
    """Outcome of validating one canonical value.

    Attributes:
        has_error: Whether the value violates a constraint.
        message: User-facing error message, empty when valid.
        is_in_progress: Whether the value is an in-progress token (`-`, `.`, `-.`).
        kind: Active error kind, or `None` when valid.
    """

    has_error: bool = False
    message: str = ""
    is_in_progress: bool = False
    kind: ErrorKind | None = None


VALID_VERDICT = ValidationVerdict()


@dataclass(frozen=True, slots=True)
class RawEvent:
    """Low-level platform edit/blur event.

    Attributes:
        value: Text currently held by the host input element.
        payload: Opaque host-specific event data, forwarded untouched.
    """

    value: str = ""
    payload: Mapping[str, Any] = field(default_factory=dict)


ValueChangeCallback = Callable[[str], None]
RawEventCallback = Callable[[RawEvent], None]


@dataclass(frozen=True, slots=True)
class FieldProps:
    """Configuration accepted by `NumberFieldController`.

    Only the value, callbacks, and constraint fields are inspected; `label`,
    `placeholder`, `helper_text`, and `extra` are passed through to `FieldRender`.
    """

    value: RawInput = None
    on_value_change: ValueChangeCallback | None = None
    on_change: RawEventCallback | None = None
    on_blur: RawEventCallback | None = None
    min_value: float | None = None
    max_value: float | None = None
    required: bool = False
    allow_decimal: bool = True
    decimal_places: int | None = None
    label: str | None = None
    placeholder: str | None = None
    helper_text: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def constraints(self) -> Constraints:
        """Return the validation constraints carried by these props."""

        return Constraints(
            required=self.required,
            allow_decimal=self.allow_decimal,
            decimal_places=self.decimal_places,
            min_value=self.min_value,
            max_value=self.max_value,
        )


@dataclass(frozen=True, slots=True)
class FieldRender:
    """Everything a host widget needs to draw the field once."""

    display_value: str
    error: bool
    helper_text: str
    label: str
    placeholder: str
    extra: Mapping[str, Any] = field(default_factory=dict)
