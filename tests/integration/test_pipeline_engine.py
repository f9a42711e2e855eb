"""Integration tests for deck execution path."""

from __future__ import annotations

from fractions import Fraction
from pathlib import Path

import pytest
import yaml

from envpipe.deck import load_deck, run_deck, run_deck_data
from envpipe.errors import ContractViolation, DeckError
from envpipe.pipeline import build_default_registry
from envpipe.selfcheck import quotient


pytestmark = pytest.mark.integration


DECK = {
    "args": [25],
    "steps": [
        "envpipe.selfcheck:load_value",
        "envpipe.selfcheck:add_one",
        "nop",
        "envpipe.selfcheck:product",
    ],
}


def _write_deck(tmp_path: Path, deck: object, name: str = "deck.yaml") -> Path:
    deck_path = tmp_path / name
    deck_path.write_text(yaml.safe_dump(deck, sort_keys=False), encoding="utf-8")
    return deck_path


def test_run_deck_from_yaml(tmp_path: Path) -> None:
    deck_path = _write_deck(tmp_path, DECK)

    assert load_deck(deck_path) == DECK
    assert run_deck(deck_path) == 650


def test_args_override_deck_args(tmp_path: Path) -> None:
    deck_path = _write_deck(tmp_path, DECK)

    assert run_deck(deck_path, args=[3]) == 12


def test_custom_registry_forks_pipeline() -> None:
    registry = build_default_registry()
    registry.register("ratio", quotient)
    deck = {**DECK, "steps": [*DECK["steps"][:-1], "ratio"]}

    assert run_deck_data(deck, registry=registry) == Fraction(25, 26)


def test_run_deck_data_wraps_parse_errors() -> None:
    with pytest.raises(DeckError, match="Missing required key 'steps'"):
        run_deck_data({"args": [1]})
    with pytest.raises(DeckError, match="is not registered"):
        run_deck_data({"steps": ["does_not_exist"]})


def test_step_contract_errors_propagate_from_deck() -> None:
    deck = {"args": [{"x": 1}], "steps": ["envpipe.selfcheck:load_value", "envpipe.selfcheck:add_one"]}

    with pytest.raises(TypeError):
        run_deck_data(deck)

    with pytest.raises(ContractViolation, match="output step product expects an environment") as info:
        run_deck_data({"args": [1], "steps": ["envpipe.selfcheck:product", "nop"]})
    assert info.value.step_name == "product"


def test_load_deck_errors(tmp_path: Path) -> None:
    with pytest.raises(DeckError, match="Deck file not found"):
        load_deck(tmp_path / "missing.yaml")

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(DeckError, match="Deck is empty"):
        load_deck(empty)

    broken = tmp_path / "broken.yaml"
    broken.write_text("steps: [nop\n", encoding="utf-8")
    with pytest.raises(DeckError, match="Failed to parse YAML deck"):
        load_deck(broken)

    listed = _write_deck(tmp_path, ["nop"], name="list.yaml")
    with pytest.raises(DeckError, match="deck must be a mapping"):
        load_deck(listed)
