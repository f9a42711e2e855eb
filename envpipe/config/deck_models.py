"""Typed models for deck-level configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PipelineDeck:
    """Parsed pipeline deck: raw input arguments plus ordered step references."""

    steps: tuple[str, ...]
    args: tuple[Any, ...] = field(default_factory=tuple)
