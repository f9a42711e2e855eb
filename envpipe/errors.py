"""Shared error types for envpipe."""

from __future__ import annotations


class PipelineError(ValueError):
    """Base class for every error raised by envpipe."""


class ContractViolation(PipelineError):
    """Raised when a step breaks its kind's return contract."""

    def __init__(self, message: str, *, step_name: str | None = None, kind: str | None = None) -> None:
        super().__init__(message)
        self.step_name = step_name
        self.kind = kind


class ArgumentShapeError(ContractViolation):
    """Raised when run_pipeline receives arguments or steps of the wrong shape."""


class DeclarationSyntaxError(PipelineError):
    """Raised when a step declaration is malformed."""

    def __init__(self, message: str, *, step_name: str | None = None) -> None:
        super().__init__(message)
        self.step_name = step_name


class DeckError(PipelineError):
    """Raised when a pipeline deck is invalid or cannot be resolved."""
