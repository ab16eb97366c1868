"""Domain exceptions for configuration and command-line diagnostics.

Field-level validation failures are never raised; they are reported through
`ValidationVerdict`. The exceptions here cover tooling inputs such as config
files and event scripts.
"""

from __future__ import annotations


class FieldCommandError(RuntimeError):
    """Raised when a command cannot load or apply its inputs."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
