"""Helpers for writing partial environments without repeating key names."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .config.validators import ensure_identifier
from .errors import DeclarationSyntaxError


def _key(name: Any, context: str) -> str:
    try:
        return ensure_identifier(name, context)
    except ValueError as exc:
        raise DeclarationSyntaxError(str(exc)) from exc


def build_partial_env(bindings: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Build a partial environment from ``(name, value)`` pairs or a mapping.

    Later pairs win when a name repeats.
    """
    if isinstance(bindings, Mapping):
        pairs: Iterable[Any] = bindings.items()
    elif isinstance(bindings, (str, bytes)) or not isinstance(bindings, Iterable):
        raise DeclarationSyntaxError(
            f"bindings must be a mapping or a sequence of (name, value) pairs, got {type(bindings).__name__}."
        )
    else:
        pairs = bindings

    out: dict[str, Any] = {}
    for idx, pair in enumerate(pairs):
        if not isinstance(pair, (tuple, list)) or len(pair) != 2:
            raise DeclarationSyntaxError(f"bindings[{idx}] must be a (name, value) pair, got {pair!r}.")
        name, value = pair
        out[_key(name, f"bindings[{idx}]")] = value
    return out


def env(**bindings: Any) -> dict[str, Any]:
    """``env(x=1, y=2) -> {"x": 1, "y": 2}``"""
    return dict(bindings)


def env_from(scope: Mapping[str, Any], *names: str) -> dict[str, Any]:
    """Pick ``names`` out of a namespace, usually ``locals()``.

    ``env_from(locals(), "x", "y") -> {"x": x, "y": y}``
    """
    out: dict[str, Any] = {}
    for name in names:
        key = _key(name, "env name")
        if key not in scope:
            raise NameError(f"name '{key}' is not defined")
        out[key] = scope[key]
    return out


__all__ = ["build_partial_env", "env", "env_from"]
