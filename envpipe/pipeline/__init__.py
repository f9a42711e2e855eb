"""Pipeline primitives: step contracts, runner and registry."""

from .engine import compose, run_pipeline
from .registry import StepRegistry, build_default_registry, create_step_registry
from .step_base import Environment, Step, StepKind
from .steps import (
    define_input_step,
    define_intermediate_step,
    define_output_step,
    input_step,
    intermediate_step,
    nop_step,
    output_step,
)

__all__ = [
    "Environment",
    "Step",
    "StepKind",
    "StepRegistry",
    "build_default_registry",
    "compose",
    "create_step_registry",
    "define_input_step",
    "define_intermediate_step",
    "define_output_step",
    "input_step",
    "intermediate_step",
    "nop_step",
    "output_step",
    "run_pipeline",
]
