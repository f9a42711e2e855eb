"""Unit tests for config validators."""

from __future__ import annotations

import pytest

from envpipe.config.validators import as_list, as_mapping, ensure_identifier, ensure_unique, required


pytestmark = pytest.mark.unit


def test_as_mapping_and_required() -> None:
    payload = as_mapping({"a": 1}, "ctx")
    assert required(payload, "a", "ctx") == 1


def test_required_raises() -> None:
    with pytest.raises(ValueError, match="Missing required key"):
        required({}, "missing", "ctx")
    with pytest.raises(ValueError, match="ctx must be a mapping"):
        required([], "a", "ctx")


def test_as_list_rejects_strings_and_empty() -> None:
    assert as_list((1, 2), "ctx") == [1, 2]
    with pytest.raises(ValueError, match="ctx must be a list, got str"):
        as_list("ab", "ctx")
    with pytest.raises(ValueError, match="ctx must be a non-empty list"):
        as_list([], "ctx", allow_empty=False)


def test_identifier_and_uniqueness() -> None:
    assert ensure_identifier("var1", "ctx") == "var1"
    with pytest.raises(ValueError, match="ctx must be a valid identifier"):
        ensure_identifier("1var", "ctx")
    with pytest.raises(ValueError, match="ctx must be a valid identifier"):
        ensure_identifier("lambda", "ctx")
    ensure_unique(["a", "b"], "ctx")
    with pytest.raises(ValueError, match="'a' more than once"):
        ensure_unique(["a", "b", "a"], "ctx")
