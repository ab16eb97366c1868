"""Composition-aware value synchronization for a numeric text field.

Responsibilities:
- Own the canonical value, the IME composition state, and the current verdict.
- Normalize, validate, and notify on committed edits while leaving uncommitted
  composition buffers untouched.
- Round to the configured decimal places when the field loses focus.
- Project the displayed text from canonical value, composition state, and verdict.

Key types:
- `NumberFieldController`: one instance per field; instances share no state.
"""

from __future__ import annotations

from dataclasses import replace

from .models.datatypes import (
    IN_PROGRESS_TOKENS,
    VALID_VERDICT,
    CompositionState,
    Constraints,
    FieldProps,
    FieldRender,
    RawEvent,
    RawInput,
    ValidationVerdict,
)
from .telemetry.logger import FieldEventLogger
from .text.formatter import format_display
from .text.normalizer import normalize_numeric_text
from .validation import round_half_up, validate_canonical

DEFAULT_LABEL = "Number"
DEFAULT_PLACEHOLDER = "Full-width digits are accepted"
_DEFAULT_DECIMAL_HELPER_TEXT = "Full-width digits are converted to half-width."
_DEFAULT_INTEGER_HELPER_TEXT = "Full-width integers are converted to half-width."


class NumberFieldController:
    """State machine mediating one numeric field and its host input element.

    Events are delivered one at a time by the host's serialized dispatch:
    `external_value_changed`, `composition_start`, `raw_change`,
    `composition_end`, and `blur`. `display_value` and `render()` are pure
    projections of the current state.
    """

    def __init__(
        self,
        props: FieldProps | None = None,
        event_logger: FieldEventLogger | None = None,
    ) -> None:
        """Seed the canonical value from `props.value` in the idle state."""

        self._props = props if props is not None else FieldProps()
        self._constraints = self._props.constraints()
        self._event_logger = event_logger
        self._canonical = normalize_numeric_text(self._props.value)
        self._composition_state = CompositionState.IDLE
        self._composition_buffer: str | None = None
        self._verdict: ValidationVerdict = VALID_VERDICT

    @property
    def props(self) -> FieldProps:
        """Return the configuration this controller was created with."""

        return self._props

    @property
    def constraints(self) -> Constraints:
        """Return the validation constraints in effect."""

        return self._constraints

    @property
    def canonical(self) -> str:
        """Return the committed half-width value."""

        return self._canonical

    @property
    def composition_state(self) -> CompositionState:
        """Return the current IME composition state."""

        return self._composition_state

    @property
    def is_composing(self) -> bool:
        """Return whether an IME composition is open."""

        return self._composition_state is CompositionState.COMPOSING

    @property
    def verdict(self) -> ValidationVerdict:
        """Return the verdict for the last validated canonical value."""

        return self._verdict

    def external_value_changed(self, value: RawInput) -> None:
        """Resynchronize from an externally bound value without notifying.

        Ignored while composing, since rewriting the element would corrupt the
        input method's buffer.
        """

        if self.is_composing:
            self._log("external_ignored")
            return

        normalized = normalize_numeric_text(value)
        if normalized == self._canonical:
            return
        self._canonical = normalized
        self._validate()
        self._log("external_sync", canonical=normalized)

    def composition_start(self) -> None:
        """Enter the composing state."""

        self._composition_state = CompositionState.COMPOSING
        self._log("composition_start")

    def raw_change(self, event: RawEvent) -> None:
        """Handle a raw edit event from the host element.

        While composing the uncommitted buffer is shown verbatim and forwarded to
        `on_change` as-is; the canonical value and `on_value_change` are left
        alone. While idle the text is normalized, validated, and both callbacks
        fire with the canonical value.
        """

        if self.is_composing:
            self._composition_buffer = event.value
            self._log("composition_buffer", length=len(event.value))
            if self._props.on_change is not None:
                self._props.on_change(event)
            return

        self._commit(event, "edit")

    def composition_end(self, event: RawEvent) -> None:
        """Close the composition and commit its final text immediately."""

        self._composition_state = CompositionState.IDLE
        self._composition_buffer = None
        self._commit(event, "commit")

    def blur(self, event: RawEvent | None = None) -> None:
        """Re-validate and apply decimal-place rounding when the field loses focus.

        Rounding only applies to valid, complete values on fields that allow
        decimals and configure `decimal_places`. Integer-only fields are never
        rounded, so a fractional value there stays a visible error.
        """

        if not self.is_composing:
            self._validate()
            self._round_on_blur()
        self._log("blur")
        if event is not None and self._props.on_blur is not None:
            self._props.on_blur(event)

    @property
    def display_value(self) -> str:
        """Return the text the host element should show."""

        if self.is_composing:
            if self._composition_buffer is not None:
                return self._composition_buffer
            return self._canonical
        if self._verdict.has_error:
            return self._canonical
        return format_display(
            self._canonical,
            allow_decimal=self._constraints.allow_decimal,
            decimal_places=self._constraints.decimal_places,
        )

    def render(self) -> FieldRender:
        """Project the current state into the host rendering contract."""

        if self._verdict.has_error:
            helper_text = self._verdict.message
        elif self._props.helper_text:
            helper_text = self._props.helper_text
        elif self._constraints.allow_decimal:
            helper_text = _DEFAULT_DECIMAL_HELPER_TEXT
        else:
            helper_text = _DEFAULT_INTEGER_HELPER_TEXT

        return FieldRender(
            display_value=self.display_value,
            error=self._verdict.has_error,
            helper_text=helper_text,
            label=self._props.label if self._props.label is not None else DEFAULT_LABEL,
            placeholder=(
                self._props.placeholder
                if self._props.placeholder is not None
                else DEFAULT_PLACEHOLDER
            ),
            extra=self._props.extra,
        )

    def _commit(self, event: RawEvent, transition: str) -> None:
        """Normalize, validate, and notify for an idle-path edit."""

        normalized = normalize_numeric_text(event.value)
        self._canonical = normalized
        self._validate()
        self._log(transition, canonical=normalized, error=self._verdict.has_error)

        if self._props.on_change is not None:
            self._props.on_change(replace(event, value=normalized))
        self._notify_value_change(normalized)

    def _round_on_blur(self) -> None:
        """Round the canonical value to `decimal_places` when eligible."""

        places = self._constraints.decimal_places
        if self._verdict.has_error or not self._constraints.allow_decimal or places is None:
            return
        if self._canonical in IN_PROGRESS_TOKENS:
            return

        rounded = round_half_up(self._canonical, places)
        if rounded == self._canonical:
            return
        self._canonical = rounded
        self._validate()
        self._log("blur_round", canonical=rounded)
        self._notify_value_change(rounded)

    def _validate(self) -> None:
        """Re-run validation on the canonical value."""

        self._verdict = validate_canonical(self._canonical, self._constraints)

    def _notify_value_change(self, value: str) -> None:
        """Invoke `on_value_change` when configured."""

        if self._props.on_value_change is None:
            return
        if self._event_logger is not None:
            self._event_logger.log_notification("on_value_change", value)
        self._props.on_value_change(value)

    def _log(self, event: str, **context: object) -> None:
        """Record a transition when an event logger is attached."""

        if self._event_logger is None:
            return
        self._event_logger.log_transition(event, self._composition_state.value, **context)
