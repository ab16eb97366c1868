"""Event-script loading and replay for numeric field controllers.

Responsibilities:
- Parse YAML event scripts into typed `FieldEvent` records.
- Apply events to a `NumberFieldController` in order and capture snapshots.

Script format: a YAML list where each item is either a bare event name
(`composition_start`, `blur`) or a single-key mapping such as
`{external: "5000"}`, `{change: "１２"}`, or `{composition_end: "１２３"}`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator

import yaml

from .controller import NumberFieldController
from .errors import FieldCommandError
from .models.datatypes import RawEvent

EVENT_KINDS = ("external", "composition_start", "change", "composition_end", "blur")
_TEXT_EVENT_KINDS = frozenset({"external", "change", "composition_end"})
_HINT = (
    "Use a YAML list of `composition_start`, `blur`, or single-key mappings "
    "`external`/`change`/`composition_end`."
)


@dataclass(frozen=True, slots=True)
class FieldEvent:
    """One scripted host event."""

    kind: str
    text: str | None = None


@dataclass(frozen=True, slots=True)
class ReplayStep:
    """Controller state captured after one replayed event."""

    index: int
    event: FieldEvent
    canonical: str
    display_value: str
    composing: bool
    error: bool
    message: str


def _script_error(detail: str) -> FieldCommandError:
    """Build a replay-script error with the shared format hint."""

    return FieldCommandError(stage="replay-script", detail=detail, hint=_HINT)


def parse_event(item: Any, position: int) -> FieldEvent:
    """Parse one script item into a `FieldEvent`."""

    if isinstance(item, str):
        kind, raw_text = item.strip(), None
    elif isinstance(item, dict) and len(item) == 1:
        ((kind, raw_text),) = item.items()
        kind = str(kind).strip()
    else:
        raise _script_error(f"Event #{position} must be a name or a single-key mapping.")

    if kind not in EVENT_KINDS:
        supported = ", ".join(EVENT_KINDS)
        raise _script_error(f"Event #{position} has unknown kind `{kind}`; supported: {supported}.")

    if kind in _TEXT_EVENT_KINDS:
        if raw_text is None:
            return FieldEvent(kind=kind, text="")
        if not isinstance(raw_text, str):
            raise FieldCommandError(
                stage="replay-script",
                detail=(
                    f"Event #{position} `{kind}` value must be text, "
                    f"got {type(raw_text).__name__} `{raw_text!r}`."
                ),
                hint=f"Quote the value so it is kept verbatim, e.g. `{kind}: \"1.50\"`.",
            )
        return FieldEvent(kind=kind, text=raw_text)
    return FieldEvent(kind=kind)


def load_event_script(script_path: Path) -> list[FieldEvent]:
    """Load and validate an event script from a YAML file."""

    if not script_path.exists():
        raise FieldCommandError(
            stage="replay-script",
            detail=f"Event script not found: {script_path}",
            hint="Pass an existing YAML event script path.",
        )
    try:
        payload = yaml.safe_load(script_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise _script_error(f"Event script is not valid YAML: {script_path}") from exc
    if not isinstance(payload, list):
        raise _script_error(f"Event script root must be a list: {script_path}")

    return [parse_event(item, position) for position, item in enumerate(payload, start=1)]


def apply_event(controller: NumberFieldController, event: FieldEvent) -> None:
    """Deliver one scripted event to the controller."""

    if event.kind == "external":
        controller.external_value_changed(event.text)
    elif event.kind == "composition_start":
        controller.composition_start()
    elif event.kind == "change":
        controller.raw_change(RawEvent(value=event.text or ""))
    elif event.kind == "composition_end":
        controller.composition_end(RawEvent(value=event.text or ""))
    else:
        controller.blur(RawEvent(value=controller.display_value))


def run_script(
    controller: NumberFieldController, events: Iterable[FieldEvent]
) -> Iterator[ReplayStep]:
    """Apply events in order, yielding one snapshot after each event."""

    for index, event in enumerate(events, start=1):
        apply_event(controller, event)
        yield ReplayStep(
            index=index,
            event=event,
            canonical=controller.canonical,
            display_value=controller.display_value,
            composing=controller.is_composing,
            error=controller.verdict.has_error,
            message=controller.verdict.message,
        )
