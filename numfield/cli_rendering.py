"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
single-value check results, and replay step rows.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import FieldCommandError
from .models.datatypes import ValidationVerdict
from .replay import ReplayStep


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, FieldCommandError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def verdict_status(verdict: ValidationVerdict) -> str:
    """Return a one-word status label for a verdict."""

    if verdict.has_error:
        return verdict.kind.value if verdict.kind is not None else "error"
    if verdict.is_in_progress:
        return "in-progress"
    return "ok"


def echo_check_result(canonical: str, verdict: ValidationVerdict, display_value: str) -> None:
    """Print the canonical value, verdict, and display text for one value."""

    typer.echo(f"Canonical: {canonical}")
    typer.echo(f"Status: {verdict_status(verdict)}")
    if verdict.message:
        typer.secho(f"Message: {verdict.message}", fg=typer.colors.YELLOW)
    typer.echo(f"Display: {display_value}")


def echo_replay_step(step: ReplayStep) -> None:
    """Print one deterministic replay row."""

    event_label = step.event.kind
    if step.event.text is not None:
        event_label = f"{event_label}({step.event.text!r})"
    state = "composing" if step.composing else "idle"
    line = (
        f"{step.index}. {event_label} state={state} "
        f"canonical={step.canonical!r} display={step.display_value!r}"
    )
    if step.error:
        line = f"{line} error={step.message!r}"
    typer.echo(line)
