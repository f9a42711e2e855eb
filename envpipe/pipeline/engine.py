"""Pipeline execution engine."""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping, Sequence
from functools import reduce
from types import MappingProxyType
from typing import Any

from ..errors import ArgumentShapeError
from .step_base import Step, StepKind, step_name

logger = logging.getLogger(__name__)


def _snapshot(env: Any) -> Any:
    # read-only view for mutable mappings; other values pass through untouched
    if isinstance(env, MutableMapping):
        return MappingProxyType(env)
    return env


def _check_steps(steps: Any) -> list[Step]:
    if not isinstance(steps, (list, tuple)):
        raise ArgumentShapeError(f"steps must be a list of step callables, got {type(steps).__name__}.")
    if not steps:
        raise ArgumentShapeError("steps must contain at least an input step.")
    for idx, step in enumerate(steps):
        if not callable(step):
            raise ArgumentShapeError(f"steps[{idx}] must be callable, got {step!r}.")
    return list(steps)


def run_pipeline(args: Sequence[Any], steps: Sequence[Step]) -> Any:
    """Run ``steps`` against the raw positional ``args``.

    The first step is applied to ``args`` and must produce the initial
    environment; every following step is folded over the environment in
    order. Returns whatever the last step returns.
    """
    steps = _check_steps(steps)
    input_step, rest_steps = steps[0], steps[1:]
    if not isinstance(args, (list, tuple)):
        raise ArgumentShapeError(
            f"Input must be a list of arguments, got {type(args).__name__}.",
            step_name=step_name(input_step),
            kind=StepKind.INPUT,
        )

    logger.debug("pipeline input %s with %d argument(s)", step_name(input_step), len(args))
    initial = input_step(*args)

    def apply(env: Any, indexed: tuple[int, Step]) -> Any:
        idx, step = indexed
        logger.debug("pipeline step %d: %s", idx, step_name(step))
        return step(_snapshot(env))

    return reduce(apply, enumerate(rest_steps, start=1), initial)


def compose(*steps: Step) -> Callable[..., Any]:
    """Bundle ``steps`` into one reusable callable taking the raw arguments.

    ``compose(load, bump)`` can be shared by several pipelines and extended
    with ``compose(*base.steps, report)``.
    """
    bundled = tuple(_check_steps(list(steps)))

    def run_composed(*args: Any) -> Any:
        return run_pipeline(list(args), bundled)

    run_composed.steps = bundled  # type: ignore[attr-defined]
    run_composed.__name__ = "+".join(step_name(step) for step in bundled)
    return run_composed


__all__ = ["compose", "run_pipeline"]
