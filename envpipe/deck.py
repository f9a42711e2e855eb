"""YAML pipeline deck loading and execution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import yaml

from .config import PipelineDeck, parse_deck
from .errors import DeckError
from .pipeline.engine import run_pipeline
from .pipeline.registry import StepRegistry, build_default_registry
from .pipeline.step_base import Step

logger = logging.getLogger(__name__)


def load_deck(deck_path: str | Path) -> dict[str, Any]:
    """Load YAML deck from file."""
    path = Path(deck_path)
    if not path.exists():
        raise DeckError(f"Deck file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise DeckError(f"Failed to parse YAML deck: {path}") from exc

    if payload is None:
        raise DeckError(f"Deck is empty: {path}")
    if not isinstance(payload, dict):
        raise DeckError("deck must be a mapping.")
    return payload


def resolve_steps(deck: PipelineDeck, registry: StepRegistry) -> list[Step]:
    """Turn the deck's step references into callables."""
    return [registry.resolve_ref(ref) for ref in deck.steps]


def run_deck_data(
    payload: Any,
    *,
    args: Sequence[Any] | None = None,
    registry: StepRegistry | None = None,
) -> Any:
    """Run a pipeline from an in-memory deck payload.

    ``args`` replaces the deck's own ``args`` when given.
    """
    try:
        deck = parse_deck(payload)
    except (TypeError, ValueError) as exc:
        raise DeckError(str(exc)) from exc

    registry = build_default_registry() if registry is None else registry
    steps = resolve_steps(deck, registry)
    run_args = list(deck.args) if args is None else list(args)
    logger.debug("running deck with %d step(s)", len(steps))
    return run_pipeline(run_args, steps)


def run_deck(
    deck_path: str | Path,
    *,
    args: Sequence[Any] | None = None,
    registry: StepRegistry | None = None,
) -> Any:
    """Load a YAML deck and run its pipeline."""
    return run_deck_data(load_deck(deck_path), args=args, registry=registry)


__all__ = ["load_deck", "resolve_steps", "run_deck", "run_deck_data"]
