"""Command-line interface for numfield.

Responsibilities:
- Expose user-facing commands for normalizing, checking, and replaying field input.
- Convert CLI arguments into `FieldConfig` and drive a `NumberFieldController`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
import sys
from typing import Annotated

import typer
from loguru import logger

from .cli_rendering import echo_check_result, echo_replay_step, exit_with_command_error
from .config import ConfigLoader, FieldConfig
from .controller import NumberFieldController
from .errors import FieldCommandError
from .models.datatypes import RawEvent
from .replay import load_event_script, run_script
from .telemetry.logger import FieldEventLogger
from .text.normalizer import normalize_numeric_text

app = typer.Typer(
    name="numfield",
    no_args_is_help=True,
    help="numfield CLI.",
)


def _load_yaml_config(config_path: Path | None) -> FieldConfig | None:
    """Load a YAML config file when requested and map failures to command errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise FieldCommandError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise FieldCommandError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _resolve_field_config(
    config_file: Path | None,
    min_value: float | None = None,
    max_value: float | None = None,
    required: bool | None = None,
    integer_only: bool | None = None,
    decimal_places: int | None = None,
) -> FieldConfig:
    """Resolve effective field config from YAML defaults and explicit CLI overrides."""

    loaded_config = _load_yaml_config(config_file)
    base_config = loaded_config if loaded_config is not None else FieldConfig()

    overrides: dict[str, object] = {}
    if min_value is not None:
        overrides["min_value"] = min_value
    if max_value is not None:
        overrides["max_value"] = max_value
    if required is not None:
        overrides["required"] = required
    if integer_only is not None:
        overrides["allow_decimal"] = not integer_only
    if decimal_places is not None:
        overrides["decimal_places"] = decimal_places

    resolved = replace(base_config, **overrides)
    try:
        resolved.validate()
    except ValueError as exc:
        raise FieldCommandError(
            stage="config",
            detail=str(exc),
            hint="Fix the command-line option values and rerun.",
        ) from exc
    return resolved


@app.command("normalize")
def normalize_command(
    text: Annotated[str, typer.Argument(help="Raw text, full-width digits allowed.")],
) -> None:
    """Print the canonical half-width form of raw input."""

    typer.echo(normalize_numeric_text(text))


@app.command("check")
def check_command(
    value: Annotated[str, typer.Argument(help="Raw field input to check.")],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML field configuration."),
    ] = None,
    min_value: Annotated[
        float | None, typer.Option("--min", help="Inclusive minimum value.")
    ] = None,
    max_value: Annotated[
        float | None, typer.Option("--max", help="Inclusive maximum value.")
    ] = None,
    required: Annotated[
        bool | None,
        typer.Option("--required/--optional", help="Whether an empty value is an error."),
    ] = None,
    integer_only: Annotated[
        bool | None,
        typer.Option("--integer/--decimal", help="Reject fractional values."),
    ] = None,
    decimal_places: Annotated[
        int | None,
        typer.Option("--decimal-places", min=0, help="Maximum fraction digits."),
    ] = None,
    blur: Annotated[
        bool,
        typer.Option("--blur", help="Also apply blur-time rounding."),
    ] = False,
) -> None:
    """Normalize, validate, and format one value as the field would."""

    try:
        config = _resolve_field_config(
            config_file,
            min_value=min_value,
            max_value=max_value,
            required=required,
            integer_only=integer_only,
            decimal_places=decimal_places,
        )
        controller = NumberFieldController(config.to_props())
        controller.raw_change(RawEvent(value=value))
        if blur:
            controller.blur()
    except Exception as exc:
        exit_with_command_error("check", exc)

    echo_check_result(controller.canonical, controller.verdict, controller.display_value)


@app.command("replay")
def replay_command(
    script: Annotated[Path, typer.Argument(help="Path to YAML event script.")],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML field configuration."),
    ] = None,
    trace: Annotated[
        bool,
        typer.Option("--trace", help="Log controller transitions to stderr."),
    ] = False,
) -> None:
    """Replay scripted host events through a field controller."""

    notifications: list[str] = []
    event_logger: FieldEventLogger | None = None

    try:
        config = _resolve_field_config(config_file)
        events = load_event_script(script)
        if trace:
            # The CLI owns the process; drop loguru's default stderr handler.
            logger.remove()
            event_logger = FieldEventLogger(sink=sys.stderr)
        controller = NumberFieldController(
            config.to_props(on_value_change=notifications.append),
            event_logger=event_logger,
        )
        typer.echo(f"0. initial canonical={controller.canonical!r}")
        for step in run_script(controller, events):
            echo_replay_step(step)
            for value in notifications:
                typer.echo(f"   on_value_change({value!r})")
            notifications.clear()
    except Exception as exc:
        exit_with_command_error("replay", exc)
    finally:
        if event_logger is not None:
            event_logger.close()


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
