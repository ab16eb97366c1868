"""Unit tests for the composition-aware numeric field controller."""

from __future__ import annotations

from typing import Callable

from numfield.controller import DEFAULT_LABEL, DEFAULT_PLACEHOLDER, NumberFieldController
from numfield.models.datatypes import CompositionState, ErrorKind, FieldProps, RawEvent
from tests.callback_recorder import CallbackRecorder

ControllerFactory = Callable[..., NumberFieldController]


def test_controller_seeds_canonical_value_from_initial_external_value(
    make_controller: ControllerFactory,
) -> None:
    """Initial values should be normalized and start in a pristine idle state."""

    controller = make_controller(value="１２３，４５６")

    assert controller.canonical == "123456"
    assert controller.composition_state is CompositionState.IDLE
    assert controller.verdict.has_error is False
    assert controller.display_value == "123,456"


def test_required_field_starts_without_error_until_edited(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """An empty required field is pristine until the user edits or blurs it."""

    controller = make_controller(required=True)
    assert controller.verdict.has_error is False

    controller.blur(RawEvent(value=""))

    assert controller.verdict.kind is ErrorKind.REQUIRED
    assert controller.render().helper_text == "Input is required."
    assert recorder.value_changes == []


def test_external_value_resync_formats_without_notifying(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """External updates while idle should resync and format, with no callbacks."""

    controller = make_controller()

    controller.external_value_changed("5000")

    assert controller.canonical == "5000"
    assert controller.display_value == "5,000"
    assert recorder.value_changes == []
    assert recorder.changes == []


def test_external_value_resync_revalidates(make_controller: ControllerFactory) -> None:
    """An externally bound out-of-range value should surface an error verbatim."""

    controller = make_controller(max_value=100)

    controller.external_value_changed(1500)

    assert controller.verdict.kind is ErrorKind.ABOVE_MAXIMUM
    assert controller.display_value == "1500"


def test_idle_edit_normalizes_validates_and_notifies(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """Idle edits should fire both callbacks with the canonical value."""

    controller = make_controller()

    controller.raw_change(RawEvent(value="１，２３４．５", payload={"source": "keyboard"}))

    assert controller.canonical == "1234.5"
    assert controller.display_value == "1,234.5"
    assert recorder.value_changes == ["1234.5"]
    assert len(recorder.changes) == 1
    assert recorder.changes[0].value == "1234.5"
    assert recorder.changes[0].payload == {"source": "keyboard"}


def test_composition_buffers_are_shown_verbatim_and_not_normalized(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """While composing, raw buffers reach display and `on_change` untouched."""

    controller = make_controller(value="1")

    controller.composition_start()
    controller.raw_change(RawEvent(value="1１"))
    controller.raw_change(RawEvent(value="1１２"))

    assert controller.is_composing is True
    assert controller.canonical == "1"
    assert controller.display_value == "1１２"
    assert [event.value for event in recorder.changes] == ["1１", "1１２"]
    assert recorder.value_changes == []


def test_composition_end_commits_exactly_once(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """Closing a composition should normalize, validate, and notify once."""

    controller = make_controller()

    controller.composition_start()
    controller.raw_change(RawEvent(value="１２"))
    controller.raw_change(RawEvent(value="１２３４"))
    controller.composition_end(RawEvent(value="１２３４"))

    assert controller.is_composing is False
    assert controller.canonical == "1234"
    assert controller.display_value == "1,234"
    assert recorder.value_changes == ["1234"]
    assert [event.value for event in recorder.changes] == ["１２", "１２３４", "1234"]


def test_composition_start_alone_changes_nothing_else(
    make_controller: ControllerFactory,
) -> None:
    """Entering composition keeps canonical value and verdict; display goes verbatim."""

    controller = make_controller(value="5000")

    controller.composition_start()

    assert controller.canonical == "5000"
    assert controller.verdict.has_error is False
    assert controller.display_value == "5000"


def test_external_value_is_ignored_while_composing(
    make_controller: ControllerFactory,
) -> None:
    """External resync must not disturb an open composition."""

    controller = make_controller(value="1")

    controller.composition_start()
    controller.raw_change(RawEvent(value="１"))
    controller.external_value_changed("999")

    assert controller.canonical == "1"
    assert controller.display_value == "１"


def test_blur_rounds_to_configured_decimal_places(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """Blur should pad and round valid values, notifying with the rounded value."""

    controller = make_controller(decimal_places=2)

    controller.raw_change(RawEvent(value="1.5"))
    controller.blur(RawEvent(value="1.5"))

    assert controller.canonical == "1.50"
    assert controller.verdict.has_error is False
    assert controller.display_value == "1.50"
    assert recorder.value_changes == ["1.5", "1.50"]
    assert [event.value for event in recorder.blurs] == ["1.5"]


def test_blur_pads_trailing_decimal_point(make_controller: ControllerFactory) -> None:
    """A trailing point should be padded to the configured fraction digits."""

    controller = make_controller(decimal_places=2, value="１２．")

    controller.blur()

    assert controller.canonical == "12.00"
    assert controller.display_value == "12.00"


def test_blur_without_rounding_change_does_not_notify(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """Already-rounded values should not fire another value change."""

    controller = make_controller(decimal_places=2)

    controller.raw_change(RawEvent(value="3.14"))
    controller.blur()

    assert recorder.value_changes == ["3.14"]


def test_integer_field_never_rounds_fraction_at_blur(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """Fractions on integer-only fields stay a visible error through blur."""

    controller = make_controller(allow_decimal=False, decimal_places=0)

    controller.raw_change(RawEvent(value="12.3"))
    controller.blur(RawEvent(value="12.3"))

    assert controller.verdict.kind is ErrorKind.FORMAT
    assert controller.canonical == "12.3"
    assert controller.display_value == "12.3"
    assert recorder.value_changes == ["12.3"]


def test_blur_leaves_invalid_decimal_places_unrounded(
    make_controller: ControllerFactory,
) -> None:
    """Values with too many fraction digits keep their error instead of rounding."""

    controller = make_controller(decimal_places=2)

    controller.raw_change(RawEvent(value="1.234"))
    controller.blur()

    assert controller.canonical == "1.234"
    assert controller.verdict.kind is ErrorKind.DECIMAL_PLACES


def test_blur_skips_in_progress_tokens(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """In-progress tokens should survive blur unchanged."""

    for token in ["", "-", ".", "-."]:
        controller = make_controller(decimal_places=2)
        controller.raw_change(RawEvent(value=token))
        controller.blur()

        assert controller.canonical == token
        assert controller.verdict.has_error is False
        assert controller.display_value == token

    assert recorder.value_changes == ["", "-", ".", "-."]


def test_blur_while_composing_only_forwards_event(
    make_controller: ControllerFactory, recorder: CallbackRecorder
) -> None:
    """Blur during composition must not validate or round, but still forwards `on_blur`."""

    controller = make_controller(decimal_places=2, value="1.5")

    controller.composition_start()
    controller.blur(RawEvent(value="1.5"))

    assert controller.canonical == "1.5"
    assert recorder.value_changes == []
    assert len(recorder.blurs) == 1


def test_range_errors_display_verbatim(make_controller: ControllerFactory) -> None:
    """Invalid values are shown unformatted alongside the error message."""

    controller = make_controller(min_value=0, max_value=100)

    controller.raw_change(RawEvent(value="１５０"))
    assert controller.verdict.kind is ErrorKind.ABOVE_MAXIMUM

    controller.raw_change(RawEvent(value="-5"))
    assert controller.verdict.kind is ErrorKind.BELOW_MINIMUM

    controller.raw_change(RawEvent(value="-5000"))
    rendered = controller.render()
    assert rendered.display_value == "-5000"
    assert rendered.error is True
    assert rendered.helper_text == "Enter a value of at least 0."


def test_invalid_text_is_kept_verbatim(make_controller: ControllerFactory) -> None:
    """The controller never discards user text it cannot parse."""

    controller = make_controller()

    controller.raw_change(RawEvent(value="１２abc"))

    assert controller.canonical == "12abc"
    assert controller.display_value == "12abc"
    assert controller.verdict.kind is ErrorKind.FORMAT


def test_render_uses_defaults_and_passes_extra_through(
    make_controller: ControllerFactory,
) -> None:
    """Rendering should fall back to default texts and forward opaque extras."""

    extra = {"variant": "outlined", "size": "small"}
    decimal_field = make_controller(extra=extra)
    integer_field = make_controller(allow_decimal=False)
    custom_field = make_controller(label="Amount", placeholder="0", helper_text="In yen.")

    decimal_render = decimal_field.render()
    assert decimal_render.label == DEFAULT_LABEL
    assert decimal_render.placeholder == DEFAULT_PLACEHOLDER
    assert decimal_render.helper_text == "Full-width digits are converted to half-width."
    assert decimal_render.extra is extra
    assert integer_field.render().helper_text == (
        "Full-width integers are converted to half-width."
    )

    custom_render = custom_field.render()
    assert custom_render.label == "Amount"
    assert custom_render.placeholder == "0"
    assert custom_render.helper_text == "In yen."


def test_controllers_do_not_share_state() -> None:
    """Each controller owns independent canonical and composition state."""

    first = NumberFieldController(FieldProps(value="1"))
    second = NumberFieldController(FieldProps(value="2"))

    first.composition_start()
    first.raw_change(RawEvent(value="９"))
    second.raw_change(RawEvent(value="３"))

    assert first.is_composing is True
    assert second.is_composing is False
    assert first.canonical == "1"
    assert second.canonical == "3"


def test_controller_without_callbacks_handles_all_events() -> None:
    """Callbacks are optional for every event kind."""

    controller = NumberFieldController()

    controller.composition_start()
    controller.raw_change(RawEvent(value="１"))
    controller.composition_end(RawEvent(value="１．２３６"))
    controller.blur(RawEvent(value="1.236"))

    assert controller.canonical == "1.236"
    assert controller.display_value == "1.236"
