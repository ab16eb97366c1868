"""Shared pytest fixtures for the full numfield test suite."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from numfield.controller import NumberFieldController
from numfield.models.datatypes import FieldProps
from tests.callback_recorder import CallbackRecorder


@pytest.fixture
def recorder() -> CallbackRecorder:
    """Provide an empty notification recorder."""

    return CallbackRecorder()


@pytest.fixture
def make_controller(
    recorder: CallbackRecorder,
) -> Callable[..., NumberFieldController]:
    """Build controllers whose callbacks feed the shared recorder."""

    def _build(**props: Any) -> NumberFieldController:
        """Create one controller from keyword props."""

        return NumberFieldController(
            FieldProps(
                on_value_change=recorder.value_changes.append,
                on_change=recorder.changes.append,
                on_blur=recorder.blurs.append,
                **props,
            )
        )

    return _build
