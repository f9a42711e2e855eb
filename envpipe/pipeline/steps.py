"""Step contract layer.

Builds callables that honour one of the three step contracts from a short
declaration: a name, the ordered parameter names and a body.

* input steps take raw positional arguments and return a full environment;
* intermediate steps read keys from the environment and return a partial
  environment that is merged on top of it;
* output steps read keys from the environment and return any value.

Each ``define_*`` builder has a decorator twin that reads the declaration
off a plain function::

    @input_step
    def load(val):
        return {"var1": val}

    @intermediate_step
    def bump(var1):
        return {"var2": var1 + 1}

    @output_step
    def product(var1, var2):
        return var1 * var2
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from ..config.validators import as_list, ensure_identifier, ensure_unique
from ..errors import ContractViolation, DeclarationSyntaxError
from .step_base import Environment, InputStep, IntermediateStep, OutputStep, Step, StepKind

_EMPTY = inspect.Parameter.empty
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise DeclarationSyntaxError(f"Failed to conform step name: expected a non-empty string, got {name!r}.")
    return name


def _parse_params(name: str, params: Any, kind: StepKind) -> tuple[tuple[str, ...], str | None]:
    """Split declared params into fixed names and an optional variadic name."""
    context = f"step '{name}' params"
    try:
        raw = as_list(params, context)
        fixed: list[str] = []
        rest: str | None = None
        for idx, item in enumerate(raw):
            if isinstance(item, str) and item.startswith("*"):
                if kind is not StepKind.INPUT:
                    raise ValueError(f"{context}: variadic '{item}' is only allowed on input steps.")
                if idx != len(raw) - 1:
                    raise ValueError(f"{context}: variadic '{item}' must be the last parameter.")
                rest = ensure_identifier(item[1:], f"{context}[{idx}]")
            else:
                fixed.append(ensure_identifier(item, f"{context}[{idx}]"))
        ensure_unique(fixed if rest is None else [*fixed, rest], context)
    except ValueError as exc:
        raise DeclarationSyntaxError(
            f"Failed to conform declaration of {kind.value} step '{name}': {exc}", step_name=name
        ) from exc
    return tuple(fixed), rest


def _body_defaults(name: str, body: Any, n_fixed: int) -> tuple[Any, ...]:
    """Validate that body can take the declared params; return positional defaults."""
    if not callable(body):
        raise DeclarationSyntaxError(f"Step '{name}' body must be callable, got {body!r}.", step_name=name)
    try:
        sig = inspect.signature(body)
    except (TypeError, ValueError):
        return ()
    try:
        sig.bind(*([None] * n_fixed))
    except TypeError as exc:
        raise DeclarationSyntaxError(
            f"Step '{name}' body cannot accept its {n_fixed} declared parameter(s): {exc}", step_name=name
        ) from exc
    positional = [p for p in sig.parameters.values() if p.kind in _POSITIONAL]
    return tuple(p.default for p in positional[:n_fixed])


def _bind(env: Any, name: str, kind: StepKind, params: tuple[str, ...], defaults: tuple[Any, ...]) -> list[Any]:
    if not isinstance(env, Mapping):
        raise ContractViolation(
            f"{kind.value} step {name} expects an environment, got {type(env).__name__}.",
            step_name=name,
            kind=kind,
        )
    values: list[Any] = []
    for idx, key in enumerate(params):
        if key in env:
            values.append(env[key])
            continue
        default = defaults[idx] if idx < len(defaults) else _EMPTY
        values.append(None if default is _EMPTY else default)
    return values


def _finish(
    fn: Callable[..., Any],
    *,
    name: str,
    kind: StepKind,
    params: tuple[str, ...],
    rest: str | None,
    body: Callable[..., Any],
    doc: str | None,
) -> Step:
    fn.__name__ = name
    fn.__qualname__ = name
    fn.__module__ = getattr(body, "__module__", None) or __name__
    fn.__doc__ = doc if doc is not None else getattr(body, "__doc__", None)
    if kind is StepKind.INPUT:
        sig_params = [inspect.Parameter(p, inspect.Parameter.POSITIONAL_ONLY) for p in params]
        if rest is not None:
            sig_params.append(inspect.Parameter(rest, inspect.Parameter.VAR_POSITIONAL))
    else:
        sig_params = [inspect.Parameter("env", inspect.Parameter.POSITIONAL_ONLY)]
    fn.__signature__ = inspect.Signature(sig_params)  # type: ignore[attr-defined]
    fn.step_name = name  # type: ignore[attr-defined]
    fn.step_kind = kind  # type: ignore[attr-defined]
    fn.step_params = params if rest is None else (*params, f"*{rest}")  # type: ignore[attr-defined]
    fn.body = body  # type: ignore[attr-defined]
    fn.__wrapped__ = body  # type: ignore[attr-defined]
    return fn


def define_input_step(name: str, params: Any, body: Callable[..., Any], doc: str | None = None) -> InputStep:
    """Build an input step: ``f(*args) -> Environment``.

    ``params`` is the exact positional parameter list of the produced
    callable; a trailing ``"*rest"`` entry collects any extra arguments.
    The mapping returned by ``body`` becomes the initial environment as is.
    """
    name = _check_name(name)
    fixed, rest = _parse_params(name, params, StepKind.INPUT)
    defaults = _body_defaults(name, body, len(fixed))
    arity = len(fixed)
    min_arity = next((idx for idx, default in enumerate(defaults) if default is not _EMPTY), arity)

    def run_input_step(*args: Any) -> Environment:
        if len(args) < min_arity or (rest is None and len(args) > arity):
            if rest is not None:
                expected = f"at least {min_arity}"
            elif min_arity < arity:
                expected = f"from {min_arity} to {arity}"
            else:
                expected = str(arity)
            raise TypeError(f"{name}() takes {expected} positional argument(s) but {len(args)} were given")
        ret = body(*args)
        if not isinstance(ret, Mapping):
            raise ContractViolation(
                f"input step {name} must return an environment, got {type(ret).__name__}.",
                step_name=name,
                kind=StepKind.INPUT,
            )
        return ret

    return _finish(run_input_step, name=name, kind=StepKind.INPUT, params=fixed, rest=rest, body=body, doc=doc)


def define_intermediate_step(name: str, params: Any, body: Callable[..., Any], doc: str | None = None) -> IntermediateStep:
    """Build an intermediate step: ``f(env) -> env merged with body's result``.

    Each declared name is looked up in the incoming environment; a missing
    key binds to the body's default for that parameter, or ``None``.
    """
    name = _check_name(name)
    fixed, rest = _parse_params(name, params, StepKind.INTERMEDIATE)
    defaults = _body_defaults(name, body, len(fixed))

    def run_intermediate_step(env: Environment) -> Environment:
        ret = body(*_bind(env, name, StepKind.INTERMEDIATE, fixed, defaults))
        if not isinstance(ret, Mapping):
            raise ContractViolation(
                f"intermediate step {name} must return an environment, got {type(ret).__name__}.",
                step_name=name,
                kind=StepKind.INTERMEDIATE,
            )
        return {**env, **ret}

    return _finish(
        run_intermediate_step, name=name, kind=StepKind.INTERMEDIATE, params=fixed, rest=rest, body=body, doc=doc
    )


def define_output_step(name: str, params: Any, body: Callable[..., Any], doc: str | None = None) -> OutputStep:
    """Build an output step: ``f(env) -> body's result``, unvalidated."""
    name = _check_name(name)
    fixed, rest = _parse_params(name, params, StepKind.OUTPUT)
    defaults = _body_defaults(name, body, len(fixed))

    def run_output_step(env: Environment) -> Any:
        return body(*_bind(env, name, StepKind.OUTPUT, fixed, defaults))

    return _finish(run_output_step, name=name, kind=StepKind.OUTPUT, params=fixed, rest=rest, body=body, doc=doc)


def _declare(fn: Any, kind: StepKind) -> tuple[str, list[str]]:
    """Read a step declaration (name, params) off a plain function."""
    if not callable(fn):
        raise DeclarationSyntaxError(f"@{kind.value}_step expects a function, got {fn!r}.")
    name = _check_name(getattr(fn, "__name__", None))
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise DeclarationSyntaxError(f"Cannot read the signature of step '{name}'.", step_name=name) from exc

    params: list[str] = []
    for param in sig.parameters.values():
        if param.kind in _POSITIONAL:
            params.append(param.name)
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            params.append(f"*{param.name}")
        else:
            raise DeclarationSyntaxError(
                f"Failed to conform declaration of {kind.value} step '{name}': "
                f"parameter '{param.name}' must be positional.",
                step_name=name,
            )
    return name, params


def input_step(fn: Callable[..., Any]) -> InputStep:
    """Decorator form of :func:`define_input_step`."""
    name, params = _declare(fn, StepKind.INPUT)
    return define_input_step(name, params, fn)


def intermediate_step(fn: Callable[..., Any]) -> IntermediateStep:
    """Decorator form of :func:`define_intermediate_step`."""
    name, params = _declare(fn, StepKind.INTERMEDIATE)
    return define_intermediate_step(name, params, fn)


def output_step(fn: Callable[..., Any]) -> OutputStep:
    """Decorator form of :func:`define_output_step`."""
    name, params = _declare(fn, StepKind.OUTPUT)
    return define_output_step(name, params, fn)


@intermediate_step
def nop_step() -> dict[str, Any]:
    """Leave the environment unchanged; handy for conditional pipelines."""
    return {}


__all__ = [
    "define_input_step",
    "define_intermediate_step",
    "define_output_step",
    "input_step",
    "intermediate_step",
    "nop_step",
    "output_step",
]
