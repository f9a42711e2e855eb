"""Unit tests for deck payload parsing."""

from __future__ import annotations

import pytest

from envpipe.config import PipelineDeck, parse_deck


pytestmark = pytest.mark.unit


def test_parse_deck_normalizes_steps_and_args() -> None:
    deck = parse_deck({"args": [25], "steps": [" envpipe.selfcheck:load_value ", "nop"]})

    assert deck == PipelineDeck(steps=("envpipe.selfcheck:load_value", "nop"), args=(25,))


def test_parse_deck_args_default_to_empty() -> None:
    assert parse_deck({"steps": ["nop"]}).args == ()
    assert parse_deck({"steps": ["nop"], "args": None}).args == ()


@pytest.mark.parametrize(
    "payload, match",
    [
        ([], "deck must be a mapping"),
        ({}, "Missing required key 'steps'"),
        ({"steps": []}, "non-empty list"),
        ({"steps": "nop"}, "must be a list"),
        ({"steps": ["nop", 3]}, r"steps\[1\] must be a non-empty step reference"),
        ({"steps": ["nop"], "args": 25}, "deck.args must be a list"),
    ],
)
def test_parse_deck_rejects_invalid_payloads(payload, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        parse_deck(payload)
