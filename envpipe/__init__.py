"""envpipe: thread a key-value environment through reusable pipeline steps.

Public surface::

    from envpipe import (
        input_step,
        intermediate_step,
        output_step,
        run_pipeline,
        env_from,
    )
"""

from .env import build_partial_env, env, env_from
from .errors import ArgumentShapeError, ContractViolation, DeclarationSyntaxError, DeckError, PipelineError
from .pipeline import (
    Environment,
    Step,
    StepKind,
    StepRegistry,
    build_default_registry,
    compose,
    create_step_registry,
    define_input_step,
    define_intermediate_step,
    define_output_step,
    input_step,
    intermediate_step,
    nop_step,
    output_step,
    run_pipeline,
)

__version__ = "0.2.0"

__all__ = [
    "ArgumentShapeError",
    "ContractViolation",
    "DeclarationSyntaxError",
    "DeckError",
    "Environment",
    "PipelineError",
    "Step",
    "StepKind",
    "StepRegistry",
    "build_default_registry",
    "build_partial_env",
    "compose",
    "create_step_registry",
    "define_input_step",
    "define_intermediate_step",
    "define_output_step",
    "env",
    "env_from",
    "input_step",
    "intermediate_step",
    "nop_step",
    "output_step",
    "run_pipeline",
]
