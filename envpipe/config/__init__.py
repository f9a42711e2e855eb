"""Typed config models and parsers."""

from .deck_models import PipelineDeck
from .parser import parse_args, parse_deck, parse_steps
from .validators import as_list, as_mapping, ensure_identifier, ensure_unique, required

__all__ = [
    "PipelineDeck",
    "as_list",
    "as_mapping",
    "ensure_identifier",
    "ensure_unique",
    "parse_args",
    "parse_deck",
    "parse_steps",
    "required",
]
