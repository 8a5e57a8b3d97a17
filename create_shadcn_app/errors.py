"""Exceptions raised while scaffolding a project."""

from __future__ import annotations

from .utils import STAGE_NAMES


class ScaffoldError(Exception):
    """Base class for failures that abort the scaffolding run."""


class CommandError(ScaffoldError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Command failed with exit code {returncode}: {' '.join(command)}"
        )


class PipelineError(ScaffoldError):
    """Raised when a pipeline stage fails irrecoverably."""

    def __init__(self, stage: int, message: str) -> None:
        self.stage = stage
        super().__init__(f"Stage {stage} ({STAGE_NAMES.get(stage, '?')}): {message}")


class OperationCancelled(Exception):
    """The user declined to continue. Not a failure: the CLI exits with 0."""
