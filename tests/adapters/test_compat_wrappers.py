"""Compatibility tests for legacy wrapper modules."""

from __future__ import annotations

import pytest

import envpipe.app.cli as app_cli
import envpipe.cli as compat_cli


pytestmark = pytest.mark.adapter


def test_cli_wrapper_exports_app_entrypoints() -> None:
    assert compat_cli.main is app_cli.main
    assert compat_cli.build_parser is app_cli.build_parser
