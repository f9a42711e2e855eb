"""Deck payload parsing."""

from __future__ import annotations

from typing import Any, Mapping

from .deck_models import PipelineDeck
from .validators import as_list, as_mapping, required


def parse_steps(deck: Mapping[str, Any]) -> tuple[str, ...]:
    """Parse and normalize deck step references."""
    raw_steps = as_list(required(deck, "steps", "deck"), "deck.steps", allow_empty=False)

    steps: list[str] = []
    for idx, raw in enumerate(raw_steps):
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError(f"steps[{idx}] must be a non-empty step reference string, got {raw!r}.")
        steps.append(raw.strip())
    return tuple(steps)


def parse_args(deck: Mapping[str, Any]) -> tuple[Any, ...]:
    """Parse the raw positional arguments handed to the input step."""
    if deck.get("args") is None:
        return ()
    return tuple(as_list(deck["args"], "deck.args"))


def parse_deck(payload: Any) -> PipelineDeck:
    """Validate a deck payload and return its typed form."""
    deck = as_mapping(payload, "deck")
    return PipelineDeck(steps=parse_steps(deck), args=parse_args(deck))
