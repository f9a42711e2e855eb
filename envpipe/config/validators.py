"""Shared config validation helpers."""

from __future__ import annotations

import keyword
from typing import Any, Mapping, Sequence


def as_mapping(value: Any, context: str) -> Mapping[str, Any]:
    """Require mapping value."""
    if not isinstance(value, Mapping):
        raise ValueError(f"{context} must be a mapping.")
    return value


def required(mapping: Mapping[str, Any], key: str, context: str) -> Any:
    """Require mapping key existence."""
    if not isinstance(mapping, Mapping):
        raise ValueError(f"{context} must be a mapping.")
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context}.")
    return mapping[key]


def as_list(value: Any, context: str, *, allow_empty: bool = True) -> list[Any]:
    """Require an explicit list/tuple (strings and other iterables are rejected)."""
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{context} must be a list, got {type(value).__name__}.")
    if not allow_empty and not value:
        raise ValueError(f"{context} must be a non-empty list.")
    return list(value)


def ensure_identifier(value: Any, context: str) -> str:
    """Validate that value can be bound as a Python local name."""
    if not isinstance(value, str):
        raise ValueError(f"{context} must be a string name, got {value!r}.")
    if not value.isidentifier() or keyword.iskeyword(value):
        raise ValueError(f"{context} must be a valid identifier, got {value!r}.")
    return value


def ensure_unique(names: Sequence[str], context: str) -> None:
    """Reject repeated names."""
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"{context} declares '{name}' more than once.")
        seen.add(name)
