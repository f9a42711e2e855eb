"""Step interfaces shared by the contract layer and the runner."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

Environment = Mapping[str, Any]

InputStep = Callable[..., Environment]
IntermediateStep = Callable[[Environment], Environment]
OutputStep = Callable[[Environment], Any]
Step = Callable[..., Any]


class StepKind(str, Enum):
    """The three step contracts."""

    INPUT = "input"
    INTERMEDIATE = "intermediate"
    OUTPUT = "output"


def step_name(step: Step) -> str:
    """Best-effort display name for any step callable."""
    name = getattr(step, "step_name", None) or getattr(step, "__name__", None)
    return str(name) if name else repr(step)


__all__ = [
    "Environment",
    "InputStep",
    "IntermediateStep",
    "OutputStep",
    "Step",
    "StepKind",
    "step_name",
]
